"""Minimap image composition from packed map data."""

import numpy as np
from numpy.typing import NDArray
from PIL import Image
import structlog

from .collaborators import RenderPayload
from .noise import NoiseField

logger = structlog.get_logger()

# Colors (RGB)
WATER_COLOR = (20, 60, 140)       # Dark blue
SAND_COLOR = (230, 210, 140)      # Sandy yellow
GRASS_COLOR = (60, 150, 60)       # Green
ROCK_COLOR = (100, 100, 100)      # Gray

# Fraction of an island's radius that stays grass; the outer ring is beach
_GRASS_FRACTION = 0.75
# How far displacement noise pushes an outline in or out, relative to radius
_DISPLACEMENT_STRENGTH = 0.3


class ImageMinimap:
    """Minimap collaborator that composes an RGB image of the arena.

    Each call to ``update_map_texture`` replaces ``image`` with a fresh
    rendering of the payload.
    """

    def __init__(self, texture_size: int = 256):
        self.texture_size = texture_size
        self.image: Image.Image | None = None

    def update_map_texture(self, payload: RenderPayload) -> None:
        self.image = compose_minimap(payload, self.texture_size)
        logger.debug(
            "minimap_updated",
            islands=payload.island_count,
            rocks=payload.rock_count,
            size=self.texture_size,
        )


def _sample_texture(texture: NoiseField, size: int) -> NDArray[np.float32]:
    """Resample a noise texture to ``size`` pixels, as values in [0, 1]."""
    if texture.resolution == 0:
        return np.full((size, size), 0.5, dtype=np.float32)
    image = texture.to_image(size)
    return np.asarray(image, dtype=np.float32) / 255.0


def _element_masks(
    data: NDArray[np.float32],
    count: int,
    arena_size: float,
    size: int,
    displacement: NDArray[np.float32],
    inner_fraction: float = 1.0,
) -> tuple[NDArray[np.bool_], NDArray[np.bool_]]:
    """Rasterize circles with noise-displaced outlines.

    Returns:
        Tuple of (outer mask, inner mask) where the inner mask covers
        ``inner_fraction`` of each radius.
    """
    centers = (np.arange(size, dtype=np.float32) + 0.5) / size
    vv, uu = np.meshgrid(centers, centers, indexing="ij")
    wobble = 1.0 + (displacement - 0.5) * _DISPLACEMENT_STRENGTH

    outer = np.zeros((size, size), dtype=bool)
    inner = np.zeros((size, size), dtype=bool)
    for x, y, radius, _ in data[:count]:
        normalized = radius / arena_size if arena_size else 0.0
        dist = np.sqrt((uu - x) ** 2 + (vv - y) ** 2)
        outer |= dist < normalized * wobble
        inner |= dist < normalized * wobble * inner_fraction
    return outer, inner


def compose_minimap(payload: RenderPayload, size: int = 256) -> Image.Image:
    """Compose a top-down RGB image of islands and rocks.

    Args:
        payload: Packed element data and cosmetic textures.
        size: Output edge length in pixels.

    Returns:
        PIL Image of shape (size, size).
    """
    pixels = np.empty((size, size, 3), dtype=np.float32)
    pixels[:] = WATER_COLOR

    island_disp = _sample_texture(payload.island_displacement, size)
    grass_detail = _sample_texture(payload.island_grass_detail, size)
    rock_disp = _sample_texture(payload.rock_displacement, size)

    beach, grass = _element_masks(
        payload.island_data,
        payload.island_count,
        payload.arena_size,
        size,
        island_disp,
        inner_fraction=_GRASS_FRACTION,
    )
    pixels[beach] = SAND_COLOR
    shade = (0.8 + 0.4 * grass_detail)[..., np.newaxis]
    pixels[grass] = (np.array(GRASS_COLOR, dtype=np.float32) * shade)[grass]

    rocks, _ = _element_masks(
        payload.rock_data, payload.rock_count, payload.arena_size, size, rock_disp
    )
    rock_shade = (0.7 + 0.6 * rock_disp)[..., np.newaxis]
    pixels[rocks] = (np.array(ROCK_COLOR, dtype=np.float32) * rock_shade)[rocks]

    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8))
