"""Database configuration settings.

Optional SQL database holding the catalog tables. When a URL is
configured the loader reads tables instead of export files.
"""

from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from streamcat.etl.extractors.schemas import SourceDescriptor


class DatabaseSettings(BaseSettings):
    """Catalog database configuration.

    Attributes:
        url: SQLAlchemy connection URL (e.g. sqlite:///catalogs.db).
        amazon_table: Amazon catalog table name.
        hulu_table: Hulu catalog table name.
        netflix_table: Netflix catalog table name.
        disney_table: Disney+ catalog table name.
        genres_table: Genre lookup table name.
    """

    url: str | None = Field(default=None, alias="CATALOG_DATABASE_URL")
    amazon_table: str = Field(default="amazon", alias="AMAZON_TABLE")
    hulu_table: str = Field(default="hulu", alias="HULU_TABLE")
    netflix_table: str = Field(default="netflix", alias="NETFLIX_TABLE")
    disney_table: str = Field(default="disney", alias="DISNEY_TABLE")
    genres_table: str = Field(default="genres", alias="GENRES_TABLE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if a database URL is configured."""
        return bool(self.url)

    @property
    def catalog_tables(self) -> dict[str, str]:
        """Table name per service, in service order."""
        return {
            "amazon": self.amazon_table,
            "hulu": self.hulu_table,
            "netflix": self.netflix_table,
            "disney": self.disney_table,
        }

    def catalog_descriptors(self) -> list["SourceDescriptor"]:
        """Build table descriptors for the four catalogs."""
        from streamcat.etl.extractors.schemas import SourceDescriptor

        return [
            SourceDescriptor(name=service, table=table)
            for service, table in self.catalog_tables.items()
        ]

    def genre_descriptor(self) -> "SourceDescriptor":
        """Build the table descriptor for the genre table."""
        from streamcat.etl.extractors.schemas import SourceDescriptor

        return SourceDescriptor(name="genres", table=self.genres_table)
