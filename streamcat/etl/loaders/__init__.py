"""Result writers."""

from streamcat.etl.loaders.report import ReportWriter

__all__ = ["ReportWriter"]
