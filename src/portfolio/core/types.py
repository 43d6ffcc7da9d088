"""Core type definitions."""

from typing import Literal, NewType

# Opaque identifier of a ProjectPage row
PageId = NewType("PageId", str)

# URL path for client-side routing (e.g., "/projects/demo/setup")
URLPath = NewType("URLPath", str)

Locale = Literal["en", "fr"]
