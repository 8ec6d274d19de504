"""Configuration loader for the Calibre catalog browser."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Calibre Catalog"
    version: str = "1.0.0"


class LibraryConfig(BaseModel):
    """Location of the Calibre library on disk."""

    library_dir: str = "./library"
    database_name: str = "metadata.db"

    @property
    def database_path(self) -> Path:
        return Path(self.library_dir) / self.database_name


class BrowsingConfig(BaseModel):
    """Defaults used by the list views."""

    latest_count: int = Field(default=10, ge=1)
    page_size: int = Field(default=25, ge=1)


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    library: LibraryConfig = Field(default_factory=LibraryConfig)
    browsing: BrowsingConfig = Field(default_factory=BrowsingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Library location can be overridden from the environment
    library_dir = os.getenv("CALIBRE_LIBRARY_DIR")
    if library_dir:
        config.library.library_dir = library_dir

    return config
