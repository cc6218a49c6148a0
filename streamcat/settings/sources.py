"""Catalog source files configuration.

Four streaming-service catalog exports plus the genre lookup table,
resolved under the raw data directory.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from streamcat.etl.extractors.schemas import SourceDescriptor


class SourcesSettings(BaseSettings):
    """Catalog export files configuration.

    Attributes:
        source_dir: Directory holding the exports (defaults to data/raw).
        amazon_file: Amazon Prime Video catalog export.
        hulu_file: Hulu catalog export.
        netflix_file: Netflix catalog export.
        disney_file: Disney+ catalog export.
        genres_file: Film name to genre lookup table.
    """

    source_dir: str | None = Field(default=None, alias="SOURCES_DIR")
    amazon_file: str = Field(default="amazon.csv", alias="AMAZON_FILE")
    hulu_file: str = Field(default="hulu.csv", alias="HULU_FILE")
    netflix_file: str = Field(default="netflix.csv", alias="NETFLIX_FILE")
    disney_file: str = Field(default="disney.csv", alias="DISNEY_FILE")
    genres_file: str = Field(default="genres.csv", alias="GENRES_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def base_dir(self) -> Path:
        """Directory the source file names are resolved against."""
        if self.source_dir:
            return Path(self.source_dir)

        from streamcat.settings.base import PathsSettings

        return PathsSettings().raw_dir

    @property
    def catalog_files(self) -> dict[str, Path]:
        """Catalog file path per service, in service order."""
        return {
            "amazon": self.base_dir / self.amazon_file,
            "hulu": self.base_dir / self.hulu_file,
            "netflix": self.base_dir / self.netflix_file,
            "disney": self.base_dir / self.disney_file,
        }

    @property
    def genres_path(self) -> Path:
        """Path to the genre lookup table."""
        return self.base_dir / self.genres_file

    @property
    def is_configured(self) -> bool:
        """Check if every source file is present."""
        paths = [*self.catalog_files.values(), self.genres_path]
        return all(path.exists() for path in paths)

    def catalog_descriptors(self) -> list["SourceDescriptor"]:
        """Build file descriptors for the four catalogs."""
        from streamcat.etl.extractors.schemas import SourceDescriptor

        return [
            SourceDescriptor(name=service, path=path)
            for service, path in self.catalog_files.items()
        ]

    def genre_descriptor(self) -> "SourceDescriptor":
        """Build the file descriptor for the genre table."""
        from streamcat.etl.extractors.schemas import SourceDescriptor

        return SourceDescriptor(name="genres", path=self.genres_path)
