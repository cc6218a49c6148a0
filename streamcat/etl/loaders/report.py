"""Report writer for analytics and quality results.

Writes each result relation as a standalone tabular file so external
reporting or charting tools can pick them up.
"""

import json
from datetime import datetime
from pathlib import Path

import polars as pl

from streamcat.etl.analytics.engine import AnalyticsReport
from streamcat.etl.quality.auditor import QualityReport
from streamcat.etl.utils.logger import setup_logger

CSV_EXT = ".csv"
PARQUET_EXT = ".parquet"
JSON_EXT = ".json"

QUALITY_REPORT_NAME = "quality_report"


class ReportWriter:
    """Persists result relations to an output directory.

    Attributes:
        output_dir: Directory receiving the files.
        fmt: File format for relations (csv, parquet or json).
    """

    def __init__(self, output_dir: Path | None = None, fmt: str | None = None) -> None:
        """Initialize writer from explicit values or settings.

        Args:
            output_dir: Target directory. If None, uses data/processed.
            fmt: Relation format. If None, uses REPORT_FORMAT.
        """
        from streamcat.settings import settings

        self.output_dir = output_dir or settings.paths.processed_dir
        self.fmt = (fmt or settings.analysis.report_format).lower()
        if f".{self.fmt}" not in (CSV_EXT, PARQUET_EXT, JSON_EXT):
            raise ValueError(f"Unsupported report format: {self.fmt}")
        self._logger = setup_logger("etl.report")

    # =========================================================================
    # Relations
    # =========================================================================

    def write_frame(self, df: pl.DataFrame, name: str) -> Path:
        """Write one relation as ``<output_dir>/<name>.<fmt>``.

        Args:
            df: Relation to save.
            name: File stem.

        Returns:
            Path to the saved file.
        """
        path = self.output_dir / f"{name}.{self.fmt}"
        path.parent.mkdir(parents=True, exist_ok=True)

        match path.suffix:
            case ".csv":
                df.write_csv(path)
            case ".parquet":
                df.write_parquet(path, compression="zstd")
            case _:
                df.write_json(path)

        self._logger.info(f"saved: {path.name} ({len(df)} rows)")
        return path

    def write_analytics(self, report: AnalyticsReport) -> dict[str, Path]:
        """Write every analytics relation.

        Returns:
            Mapping query name -> written path.
        """
        return {name: self.write_frame(df, name) for name, df in report.frames().items()}

    # =========================================================================
    # Quality
    # =========================================================================

    def write_quality(
        self,
        report: QualityReport,
        column_profile: pl.DataFrame,
        missing_by_service: pl.DataFrame,
    ) -> Path:
        """Write the quality audit as a single JSON document.

        Args:
            report: Missing-value counts.
            column_profile: Per-column null profile.
            missing_by_service: Missing counts per service.

        Returns:
            Path to the saved file.
        """
        path = self.output_dir / f"{QUALITY_REPORT_NAME}{JSON_EXT}"
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "generated_at": datetime.now().isoformat(),
            "summary": report.to_dict(),
            "column_profile": column_profile.to_dicts(),
            "missing_by_service": missing_by_service.to_dicts(),
        }
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        self._logger.info(f"saved: {path.name}")
        return path
