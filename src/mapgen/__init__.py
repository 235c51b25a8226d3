"""Procedural placement of circular map elements in a square arena.

Turns noise fields into islands and rocks, then republishes the placement to
pooled instantiation, render-data packing and navigation obstacles.
"""

from .collaborators import (
    IDENTITY_ROTATION,
    MapRenderer,
    Minimap,
    NavigationSurface,
    ObjectPool,
    PooledHandle,
    RenderPayload,
)
from .config import (
    CategoryConfig,
    MapConfig,
    NavigationConfig,
    NoiseTextureConfig,
    RenderConfig,
    load_config,
)
from .export import CosmeticTextures, pack_elements
from .generator import MapGenerator, MapState
from .noise import (
    FilterMode,
    NoiseField,
    generate_noise_field,
    perlin_noise_2d,
    sample_noise_field,
)
from .placement import place_category, place_elements
from .preview import ImageMinimap, compose_minimap
from .types import Category, MapElement, PlacementSet, Point2

__all__ = [
    # Types
    "Category",
    "MapElement",
    "PlacementSet",
    "Point2",
    # Noise
    "FilterMode",
    "NoiseField",
    "generate_noise_field",
    "perlin_noise_2d",
    "sample_noise_field",
    # Placement
    "place_category",
    "place_elements",
    # Generation
    "MapGenerator",
    "MapState",
    "CosmeticTextures",
    "pack_elements",
    # Collaborators
    "IDENTITY_ROTATION",
    "MapRenderer",
    "Minimap",
    "NavigationSurface",
    "ObjectPool",
    "PooledHandle",
    "RenderPayload",
    "ImageMinimap",
    "compose_minimap",
    # Config
    "CategoryConfig",
    "MapConfig",
    "NavigationConfig",
    "NoiseTextureConfig",
    "RenderConfig",
    "load_config",
]
