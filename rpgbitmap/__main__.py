from .bitmap_to_png import main

main()
