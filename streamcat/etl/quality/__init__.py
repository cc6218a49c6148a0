"""Quality audit of the unified relation."""

from streamcat.etl.quality.auditor import MISSING_COLUMNS, QualityAuditor, QualityReport

__all__ = ["QualityAuditor", "QualityReport", "MISSING_COLUMNS"]
