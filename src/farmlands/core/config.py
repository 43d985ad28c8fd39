"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DatasetConfig(BaseSettings):
    """Farm polygon dataset configuration."""

    model_config = {"env_prefix": "FARMLANDS_DATASET_"}

    path: str | None = None


class MapConfig(BaseSettings):
    """Basemap and viewer control configuration."""

    model_config = {"env_prefix": "FARMLANDS_MAP_"}

    center_lat: float = -33.7249
    center_lng: float = 18.7241
    zoom: int = 10
    tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    attribution: str = "© OpenStreetMap contributors"
    fit_padding: tuple[int, int] = (50, 50)
    year_min: int = 1650
    year_max: int = 1780
    default_year: int = 1900
    not_found_message: str = "Region not found!"
    presentation_path: str | None = None


class StyleConfig(BaseSettings):
    """Polygon style palette."""

    model_config = {"env_prefix": "FARMLANDS_STYLE_"}

    stroke_color: str = "#663300"
    stroke_weight: int = 2
    fill_color: str = "#ffcc99"
    fill_opacity: float = 0.4
    highlight_stroke_color: str = "#990000"
    highlight_stroke_weight: int = 3
    highlight_fill_color: str = "#ff6666"
    highlight_fill_opacity: float = 0.7


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "FARMLANDS_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
