"""Exploratory analytics over streaming-service catalogs."""

__version__ = "1.0.0"
