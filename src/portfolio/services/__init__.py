"""Database-backed operations on portfolio content."""
