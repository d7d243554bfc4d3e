"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MBTA API configuration
    mbta_api_base_url: str = Field(
        default="https://api-v3.mbta.com", description="Root URL of the MBTA v3 API"
    )
    mbta_api_key: str | None = Field(
        default=None, description="Optional MBTA API key, raises the request quota"
    )
    mbta_api_timeout: float = Field(
        default=10, description="Timeout for each MBTA API request in seconds"
    )
    schedule_page_limit: int = Field(
        default=20,
        description="Number of timetable entries to request per stop (more than shown, to survive filtering)",
    )
    prediction_page_limit: int = Field(
        default=3, description="Number of live predictions to request per stop"
    )

    # Display configuration
    timezone: str = Field(
        default="America/New_York",
        description="Agency timezone for timetable queries and displayed times (IANA name)",
    )

    # TOML config file path
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file listing the stops to report",
    )

    log_level: str = Field(default="WARNING", description="Root log level")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone '{v}' is not a valid IANA timezone") from e
        return v

    @field_validator("mbta_api_timeout", "schedule_page_limit", "prediction_page_limit")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate limits and timeouts are positive."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module knows."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML stops file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load stops configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_stops_config(self) -> list[dict[str, Any]]:
        """Parse and return stops configuration as a list of dicts from TOML file.

        Supports mixing formats:
        - [[groups]] with a title and nested [[groups.stops]]
        - top-level [[stops]], reported without a group title

        Each returned dict carries a "group" key with its section title.
        Configuration order is preserved.
        """
        toml_data = self._load_toml_data()

        result: list[dict[str, Any]] = []

        groups = toml_data.get("groups", [])
        if not isinstance(groups, list):
            raise ValueError("TOML config 'groups' must be a list")
        for group in groups:
            if not isinstance(group, dict):
                continue
            title = str(group.get("title", ""))
            stops = group.get("stops", [])
            if not isinstance(stops, list):
                raise ValueError(f"TOML config 'stops' of group '{title}' must be a list")
            result.extend({**stop, "group": title} for stop in stops if isinstance(stop, dict))

        stops = toml_data.get("stops", [])
        if not isinstance(stops, list):
            raise ValueError("TOML config 'stops' must be a list")
        result.extend({"group": "", **stop} for stop in stops if isinstance(stop, dict))

        return result
