"""Catalog extractors package.

Loaders for the four service catalogs and the genre lookup table.
"""

from streamcat.etl.extractors.catalog.extractor import CatalogExtractor, GenreExtractor
from streamcat.etl.extractors.catalog.normalizer import CatalogNormalizer
from streamcat.etl.extractors.schemas import SourceDescriptor

__all__ = ["CatalogExtractor", "GenreExtractor", "CatalogNormalizer", "SourceDescriptor"]
