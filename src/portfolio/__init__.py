"""Portfolio - content service for a bilingual portfolio site."""

__version__ = "0.1.0"
