"""Image Studio - compose, generate and keep a shared history of text-to-image renders."""

__version__ = "0.1.0"
