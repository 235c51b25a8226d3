"""Map generation configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class CategoryConfig(BaseModel):
    """Placement parameters for one category of map element."""

    prefab: str = Field(description="Pool prefab kind used to instantiate elements")
    noise_resolution: int = Field(default=32, description="Placement noise grid edge length")
    noise_scale: float = Field(default=5.0, description="Spatial scale of the placement noise")
    threshold: float = Field(
        default=0.35, description="Cells with noise strictly below this get an element"
    )
    min_radius: float = Field(default=2.0, description="Radius at the threshold boundary")
    max_radius: float = Field(default=8.0, description="Radius at noise value zero")
    max_count: int = Field(default=256, description="Maximum elements placed per cycle")


class NoiseTextureConfig(BaseModel):
    """Cosmetic noise texture parameters."""

    resolution: int = Field(default=256, description="Texture edge length in pixels")
    noise_scale: float = Field(default=30.0, description="Spatial scale of the noise")


class RenderConfig(BaseModel):
    """Cosmetic textures handed to the renderer and minimap."""

    island_displacement: NoiseTextureConfig = Field(default_factory=NoiseTextureConfig)
    island_grass_detail: NoiseTextureConfig = Field(default_factory=NoiseTextureConfig)
    rock_displacement: NoiseTextureConfig = Field(
        default_factory=lambda: NoiseTextureConfig(resolution=128, noise_scale=100.0)
    )


class NavigationConfig(BaseModel):
    """Navigation obstacle export parameters."""

    obstacle_prefab: str = Field(
        default="navmesh_obstacle", description="Pool prefab kind for obstacles"
    )
    border_size: float = Field(
        default=10.0, description="Walkable margin around the arena on each side"
    )


class MapConfig(BaseModel):
    """Complete map generation configuration."""

    seed: int | None = Field(
        default=None, description="Random seed (None = fresh entropy per generator)"
    )
    arena_size: float = Field(default=100.0, description="Arena edge length in world units")
    radius_multiplier: float = Field(
        default=0.9, description="Collider radius as a fraction of element radius"
    )

    islands: CategoryConfig = Field(
        default_factory=lambda: CategoryConfig(prefab="island")
    )
    rocks: CategoryConfig = Field(
        default_factory=lambda: CategoryConfig(prefab="rock", min_radius=0.5, max_radius=4.0)
    )
    render: RenderConfig = Field(default_factory=RenderConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)


def load_config(config_path: Path) -> MapConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed MapConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values have the wrong type.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return MapConfig.model_validate(data)
