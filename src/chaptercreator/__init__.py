"""Chapter Creator — chapter files from classified media segments."""

__version__ = "0.3.0"
