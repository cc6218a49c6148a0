"""Shared pytest fixtures for the catalog pipeline tests.

The sample catalogs are small enough to compute every expected
aggregate by hand:

    service  title        type  year  age   imdb     rotten_tomatoes  genres
    amazon   Movie A      0     2005  13+   7.5/10   80/100           -
    amazon   Kids Show    1     2010  7+    6.0/10   N/A              Sci-Fi, Kids TV
    amazon   Old Film     0     1995  -     8.0/10   90/100           Drama
    hulu     Drama X      1     2018  18+   -        70/100           Adult Animation
    hulu     Movie A      0     2005  13+   6.0/10   50/100           -
    netflix  Family Fun   0     2012  all   5.0/10   40/100           Comedy, Family
    netflix  Drama X      1     2018  -     9.0/10   60/100           Adult Animation
    disney   Family Fun   0     2012  all   7.0/10   90/100           Comedy, Family
"""

from pathlib import Path
from typing import Any

import polars as pl
import pytest

from streamcat.etl.aggregation import Unifier
from streamcat.etl.extractors import CatalogExtractor, GenreExtractor

RAW_HEADERS = {
    "title": "Title",
    "type": "Type",
    "year": "Year",
    "age": "Age",
    "imdb": "IMDb",
    "rotten_tomatoes": "Rotten Tomatoes",
}


def _row(title: str, type_: int, year: int, age: str | None, imdb: str | None, rt: str | None) -> dict[str, Any]:
    return {
        "title": title,
        "type": type_,
        "year": year,
        "age": age,
        "imdb": imdb,
        "rotten_tomatoes": rt,
    }


@pytest.fixture(autouse=True)
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the caller's environment."""
    for var in [
        "CATALOG_DATABASE_URL",
        "SOURCES_DIR",
        "AMAZON_FILE",
        "HULU_FILE",
        "NETFLIX_FILE",
        "DISNEY_FILE",
        "GENRES_FILE",
        "DIVERGENCE_MIN_YEAR",
        "FAMILY_KEYWORDS",
        "DIVISIVE_MIN_COUNT",
        "DIVISIVE_PRIOR_WEIGHT",
        "DIVISIVE_TOP_N",
        "REPORT_FORMAT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")


@pytest.fixture
def sample_rows() -> dict[str, list[dict[str, Any]]]:
    """Raw catalog rows per service."""
    return {
        "amazon": [
            _row("Movie A", 0, 2005, "13+", "7.5/10", "80/100"),
            _row("Kids Show", 1, 2010, "7+", "6.0/10", "N/A"),
            _row("Old Film", 0, 1995, None, "8.0/10", "90/100"),
        ],
        "hulu": [
            _row("Drama X", 1, 2018, "18+", None, "70/100"),
            _row("Movie A", 0, 2005, "13+", "6.0/10", "50/100"),
        ],
        "netflix": [
            _row("Family Fun", 0, 2012, "all", "5.0/10", "40/100"),
            _row("Drama X", 1, 2018, None, "9.0/10", "60/100"),
        ],
        "disney": [
            _row("Family Fun", 0, 2012, "all", "7.0/10", "90/100"),
        ],
    }


@pytest.fixture
def sample_catalogs(sample_rows: dict[str, list[dict[str, Any]]]) -> dict[str, pl.DataFrame]:
    """Raw catalogs as DataFrames."""
    return {
        service: pl.DataFrame(rows, infer_schema_length=None)
        for service, rows in sample_rows.items()
    }


@pytest.fixture
def sample_genres() -> pl.DataFrame:
    """Raw genre lookup table."""
    return pl.DataFrame(
        {
            "film": ["Kids Show", "Family Fun", "Drama X", "Old Film"],
            "genres": ["Sci-Fi, Kids TV", "Comedy, Family", "Adult Animation", "Drama"],
        }
    )


@pytest.fixture
def unified(sample_catalogs: dict[str, pl.DataFrame], sample_genres: pl.DataFrame) -> pl.DataFrame:
    """Unified relation built from the sample data."""
    catalogs = CatalogExtractor().validate_all(sample_catalogs)
    genres = GenreExtractor().validate(sample_genres)
    return Unifier().unify(catalogs, genres)


@pytest.fixture
def csv_sources(
    tmp_path: Path,
    sample_catalogs: dict[str, pl.DataFrame],
    sample_genres: pl.DataFrame,
) -> Path:
    """Sample data written as export files with raw headers."""
    source_dir = tmp_path / "raw"
    source_dir.mkdir()

    for service, df in sample_catalogs.items():
        export = df.rename(RAW_HEADERS).with_row_index("ID", offset=1)
        export.write_csv(source_dir / f"{service}.csv")

    sample_genres.rename({"film": "Film", "genres": "Genres"}).write_csv(source_dir / "genres.csv")
    return source_dir
