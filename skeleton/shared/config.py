"""
Settings for the skeleton tools.

Values come from a YAML file and from ``SKELETON_`` environment variables
(nested keys joined with ``__``, e.g. ``SKELETON_GEOMETRY__LENGTH_TOLERANCE``).
The YAML file is the path given with ``--config``; without one,
``skeleton.local.yaml`` and then ``skeleton.yaml`` in the working directory
are tried. Values from the file win over the environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeometryConfig(BaseModel):
    """Numeric tolerances in model units."""
    
    length_tolerance: float = Field(default=1e-9, ge=0.0)


class TemplateConfig(BaseModel):
    """Template geometry source."""
    
    path: Optional[str] = None
    block_name: Optional[str] = None
    name: str = "polyline3d"


class DXFConfig(BaseModel):
    """DXF output configuration."""
    
    version: str = "R2010"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    
    level: str = "INFO"
    file: Optional[str] = None


class Settings(BaseSettings):
    """
    Main settings class for Skeleton.
    
    Loads configuration from skeleton.yaml and environment variables.
    Init values (the config file) take precedence over environment variables.
    """
    
    model_config = SettingsConfigDict(env_prefix="SKELETON_", env_nested_delimiter="__")
    
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    dxf: DXFConfig = Field(default_factory=DXFConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config_file(config_path: Optional[Path] = None) -> dict[str, Any]:
    """
    Read the first YAML config file found, as a dict (empty when none exists).

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist
    """
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    config_files = [
        config_path,
        Path.cwd() / "skeleton.local.yaml",
        Path.cwd() / "skeleton.yaml",
    ]
    
    for cfg_file in config_files:
        if cfg_file and cfg_file.exists():
            with open(cfg_file) as f:
                return yaml.safe_load(f) or {}
    
    return {}


@lru_cache()
def get_settings(config_path: Optional[str] = None) -> Settings:
    """Settings for ``config_path``, built once per path."""
    config_data = load_config_file(Path(config_path) if config_path else None)
    return Settings(**config_data)


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """Drop cached settings and read them again."""
    get_settings.cache_clear()
    return get_settings(config_path)
