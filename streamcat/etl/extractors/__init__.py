"""Source loaders and their error types."""

from streamcat.etl.extractors.base import (
    BaseExtractor,
    LoadError,
    MissingColumnsError,
    SourceNotFoundError,
)
from streamcat.etl.extractors.catalog import (
    CatalogExtractor,
    CatalogNormalizer,
    GenreExtractor,
    SourceDescriptor,
)

__all__ = [
    "BaseExtractor",
    "CatalogExtractor",
    "GenreExtractor",
    "CatalogNormalizer",
    "SourceDescriptor",
    "LoadError",
    "SourceNotFoundError",
    "MissingColumnsError",
]
