"""Format-specific decoders producing PixelCanvas objects."""
