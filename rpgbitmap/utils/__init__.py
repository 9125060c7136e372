"""Low-level helpers for binary parsing, palettes and file access."""
