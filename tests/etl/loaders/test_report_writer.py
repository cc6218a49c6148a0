"""Unit tests for the report writer."""

import json
from pathlib import Path

import polars as pl
import pytest

from streamcat.etl.analytics import AnalyticsEngine
from streamcat.etl.loaders import ReportWriter
from streamcat.etl.quality import QualityAuditor


@pytest.fixture()
def frame() -> pl.DataFrame:
    """Small result relation."""
    return pl.DataFrame({"service": ["hulu", "disney"], "family_pct": [12.5, 40.0]})


class TestWriteFrame:
    @staticmethod
    def test_csv(tmp_path: Path, frame: pl.DataFrame) -> None:
        path = ReportWriter(output_dir=tmp_path, fmt="csv").write_frame(frame, "family_share")
        assert path == tmp_path / "family_share.csv"
        assert pl.read_csv(path).equals(frame)

    @staticmethod
    def test_parquet(tmp_path: Path, frame: pl.DataFrame) -> None:
        path = ReportWriter(output_dir=tmp_path, fmt="parquet").write_frame(frame, "family_share")
        assert pl.read_parquet(path).equals(frame)

    @staticmethod
    def test_json(tmp_path: Path, frame: pl.DataFrame) -> None:
        path = ReportWriter(output_dir=tmp_path, fmt="json").write_frame(frame, "family_share")
        rows = json.loads(path.read_text(encoding="utf-8"))
        assert rows[0] == {"service": "hulu", "family_pct": 12.5}

    @staticmethod
    def test_creates_output_dir(tmp_path: Path, frame: pl.DataFrame) -> None:
        target = tmp_path / "reports" / "2024"
        path = ReportWriter(output_dir=target, fmt="csv").write_frame(frame, "x")
        assert path.exists()

    @staticmethod
    def test_format_case_insensitive(tmp_path: Path) -> None:
        assert ReportWriter(output_dir=tmp_path, fmt="CSV").fmt == "csv"

    @staticmethod
    def test_unsupported_format(tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="xlsx"):
            ReportWriter(output_dir=tmp_path, fmt="xlsx")

    @staticmethod
    def test_defaults_from_settings() -> None:
        from streamcat.settings import settings

        writer = ReportWriter()
        assert writer.output_dir == settings.paths.processed_dir
        assert writer.fmt == settings.analysis.report_format


class TestWriteReports:
    @staticmethod
    def test_write_analytics(tmp_path: Path, unified: pl.DataFrame) -> None:
        report = AnalyticsEngine().run(unified)
        written = ReportWriter(output_dir=tmp_path, fmt="csv").write_analytics(report)
        assert set(written) == {"family_share", "score_by_type", "divergence_by_year", "divisive_titles"}
        assert all(path.exists() for path in written.values())
        divisive = pl.read_csv(written["divisive_titles"])
        assert divisive["title"].to_list() == ["Drama X", "Family Fun", "Movie A"]

    @staticmethod
    def test_write_quality(tmp_path: Path, unified: pl.DataFrame) -> None:
        auditor = QualityAuditor()
        path = ReportWriter(output_dir=tmp_path, fmt="csv").write_quality(
            auditor.audit(unified),
            auditor.column_profile(unified),
            auditor.missing_by_service(unified),
        )
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert path.name == "quality_report.json"
        assert payload["summary"]["total_rows"] == 8
        assert payload["summary"]["rt_malformed"] == 1
        assert payload["missing_by_service"][0]["service"] == "amazon"
        assert "generated_at" in payload
