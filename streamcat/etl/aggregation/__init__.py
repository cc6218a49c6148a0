"""Aggregation module: unified relation of all service catalogs.

Example:
    >>> from streamcat.etl.aggregation import Unifier
    >>> unified = Unifier().unify(catalogs, genres)
"""

from streamcat.etl.aggregation.unifier import (
    GENRE_COLUMN,
    SERVICE_COLUMN,
    Unifier,
    UnifyStats,
)

__all__ = ["Unifier", "UnifyStats", "SERVICE_COLUMN", "GENRE_COLUMN"]
