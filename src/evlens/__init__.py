"""evlens: search-result views for imported event indexes."""

__version__ = "0.1.0"
