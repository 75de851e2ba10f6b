"""dupfinder: duplicate detection for job lines, categories and products."""

__version__ = "1.0.0"
