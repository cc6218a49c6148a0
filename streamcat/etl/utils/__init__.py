"""Pipeline utilities package: logging."""

from streamcat.etl.utils.logger import setup_logger

__all__ = ["setup_logger"]
