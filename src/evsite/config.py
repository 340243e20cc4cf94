"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_FILE = Path(__file__).resolve().parent / "data" / "campus.json"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EVSITE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Campus EV Site Planner API"
    api_prefix: str = "/api"
    data_file: Path = Field(
        default=PACKAGE_DATA_FILE,
        description="Campus dataset with locations, charging stations and sample routes.",
    )
    osrm_base_url: Optional[str] = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service (route and nearest endpoints).",
    )
    osrm_profile: Literal["driving", "car", "bike", "foot"] = Field(
        default="driving",
        description="OSRM profile used for routing and road snapping.",
    )
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    osrm_max_retries: int = Field(default=2, ge=0)
    osrm_backoff_seconds: float = Field(default=0.5, ge=0.0)
    elevation_api_url: str = Field(
        default="https://api.open-elevation.com/api/v1/lookup",
        description="Open-Elevation compatible lookup endpoint.",
    )
    elevation_timeout_seconds: float = Field(default=10.0, gt=0.0)
    elevation_batch_size: int = Field(default=100, ge=1)
    elevation_sample_points: int = Field(default=50, ge=2)
    default_elevation_m: float = Field(
        default=185.0,
        description="Elevation reported for points whose lookup failed.",
    )
    snap_max_radius_m: float = Field(default=1000.0, gt=0.0)
    acceptable_distance_m: float = Field(
        default=500.0,
        gt=0.0,
        description="A route counts as covered when one of its endpoints is this close to the station.",
    )
    relocation_threshold_m: float = Field(default=100.0, ge=0.0)
    cluster_max_iterations: int = Field(default=10, ge=1)
    cluster_tolerance_m: float = Field(default=0.1, ge=0.0)
    cluster_random_state: Optional[int] = Field(default=42)
    cluster_seeding: Literal["kmeans++", "random"] = Field(default="kmeans++")
    max_parallel_snaps: int = Field(default=8, ge=1)
    min_battery_threshold_pct: float = Field(default=20.0, ge=0.0, le=100.0)
    charge_target_pct: float = Field(default=80.0, ge=0.0, le=100.0)
    charger_power_kw: float = Field(default=7.4, gt=0.0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
