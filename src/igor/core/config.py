# src/igor/core/config.py
"""
Configuration schema and loading for igor migrations.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from igor.contracts.version import VersionTag


class AnalyzerSettings(BaseModel):
    """Alpha source analyzer limits."""

    model_config = {"frozen": True}

    max_depth: int = Field(
        default=100,
        gt=0,
        description="Recursion depth after which a closure tree is classified as complex",
    )


class ConcurrencySettings(BaseModel):
    """Worker fan-out for bulk numeric rescales.

    Only flat, element-independent array rewrites use these workers. Graph
    rewrites always run on the calling thread.
    """

    model_config = {"frozen": True}

    max_workers: int = Field(default=4, gt=0, description="Maximum parallel workers")
    chunk_size: int = Field(default=8192, gt=0, description="Elements handed to a worker per task")


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v


class MigrationSettings(BaseModel):
    """Top-level migration configuration.

    Example YAML:
        stamp_version: true
        analyzer:
          max_depth: 100
        concurrency:
          max_workers: 8
        logging:
          level: debug
    """

    model_config = {"frozen": True}

    stamp_version: bool = Field(
        default=True,
        description="Write the target version into each document after migration",
    )
    target_version: tuple[int, int] | None = Field(
        default=None,
        description="Version stamped after migration (default: highest registered guard)",
    )
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    concurrency: ConcurrencySettings = Field(default_factory=ConcurrencySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("target_version")
    @classmethod
    def _validate_target_version(cls, v: tuple[int, int] | None) -> tuple[int, int] | None:
        if v is None:
            return v
        # Reuses VersionTag's own component validation
        VersionTag(*v)
        return v

    @property
    def target_tag(self) -> VersionTag | None:
        if self.target_version is None:
            return None
        return VersionTag(*self.target_version)


def load_settings(config_path: Path) -> MigrationSettings:
    """Read MigrationSettings from a YAML file, letting IGOR_* variables win.

    Precedence, strongest first: environment (``IGOR_ANALYZER__MAX_DEPTH=50``
    style, double underscore for nesting), the YAML file, then the model
    defaults.

    Raises:
        FileNotFoundError: ``config_path`` does not exist
        pydantic.ValidationError: The merged values do not validate
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="IGOR",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return MigrationSettings(**_lowercase_nested(raw_config))


def _lowercase_nested(config: dict[str, object]) -> dict[str, object]:
    """Lowercase nested section keys (Dynaconf upper-cases env-provided keys)."""
    result: dict[str, object] = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key.lower()] = {str(k).lower(): v for k, v in value.items()}
        else:
            result[key.lower()] = value
    return result
