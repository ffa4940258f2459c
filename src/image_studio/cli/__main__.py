"""CLI entry point for image_studio.cli module.

Enables execution via: python -m image_studio.cli
"""

from image_studio.cli.init_db import main

if __name__ == "__main__":
    main()
