"""Export of placement data to instantiation, rendering and navigation."""

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from .collaborators import (
    IDENTITY_ROTATION,
    ObjectPool,
    PooledHandle,
    RenderPayload,
    Vector3,
)
from .config import NoiseTextureConfig, RenderConfig
from .noise import FilterMode, NoiseField, generate_noise_field
from .types import PlacementSet


@dataclass(frozen=True, eq=False)
class CosmeticTextures:
    """Noise textures used only for shading, unrelated to placement."""

    island_displacement: NoiseField
    island_grass_detail: NoiseField
    rock_displacement: NoiseField


def instantiate_elements(
    placement: PlacementSet,
    pool: ObjectPool,
    prefab: str,
    arena_size: float,
    radius_multiplier: float,
    handles: list[PooledHandle] | None = None,
) -> list[PooledHandle]:
    """Acquire one pooled object per element in the arena plane.

    Each handle is appended to ``handles`` as soon as it is acquired, so the
    caller still holds every acquired object if a later acquire raises.

    Args:
        placement: Elements to instantiate.
        pool: Pool to acquire objects from.
        prefab: Prefab kind for this category.
        arena_size: Arena edge length in world units.
        radius_multiplier: Collider radius as a fraction of element radius.
        handles: List to record handles in. A new list is used when omitted.

    Returns:
        Acquired handles, in placement order.
    """
    if handles is None:
        handles = []
    for element in placement:
        handle = pool.acquire(
            prefab, element.position.scaled(arena_size), IDENTITY_ROTATION
        )
        handles.append(handle)
        handle.set_collider_radius(element.radius * radius_multiplier)
    return handles


def pack_elements(placement: PlacementSet) -> NDArray[np.float32]:
    """Pack elements into ``(x, y, radius, 0)`` rows for shader upload."""
    data = np.zeros((len(placement), 4), dtype=np.float32)
    for i, element in enumerate(placement):
        data[i, 0] = element.position.x
        data[i, 1] = element.position.y
        data[i, 2] = element.radius
    return data


def generate_cosmetic_textures(
    config: RenderConfig,
    rng: np.random.Generator,
) -> CosmeticTextures:
    """Generate fresh bilinear-filtered displacement and detail textures."""

    def _texture(tex: NoiseTextureConfig) -> NoiseField:
        return generate_noise_field(
            tex.resolution, tex.noise_scale, rng, filter_mode=FilterMode.BILINEAR
        )

    return CosmeticTextures(
        island_displacement=_texture(config.island_displacement),
        island_grass_detail=_texture(config.island_grass_detail),
        rock_displacement=_texture(config.rock_displacement),
    )


def build_render_payload(
    islands: PlacementSet,
    rocks: PlacementSet,
    textures: CosmeticTextures,
    arena_size: float,
) -> RenderPayload:
    """Bundle packed element data and textures for renderer and minimap."""
    return RenderPayload(
        island_data=pack_elements(islands),
        island_count=len(islands),
        rock_data=pack_elements(rocks),
        rock_count=len(rocks),
        island_displacement=textures.island_displacement,
        island_grass_detail=textures.island_grass_detail,
        rock_displacement=textures.rock_displacement,
        arena_size=arena_size,
    )


def ground_bounds(arena_size: float, border_size: float) -> tuple[Vector3, Vector3]:
    """Compute navigation ground center and size on the XZ plane.

    The ground extends ``border_size`` past the arena on every side.

    Returns:
        Tuple of (center, size).
    """
    center = (arena_size / 2, 0.0, arena_size / 2)
    extent = arena_size + border_size * 2
    return center, (extent, 0.0, extent)


def place_navigation_obstacles(
    placements: Iterable[PlacementSet],
    pool: ObjectPool,
    prefab: str,
    arena_size: float,
    radius_multiplier: float,
    handles: list[PooledHandle] | None = None,
) -> list[PooledHandle]:
    """Acquire one navigation obstacle per element on the XZ plane.

    Normalized ``(x, y)`` maps to world ``(x * size, 0, y * size)``. Handles
    are appended to ``handles`` as they are acquired.

    Returns:
        Acquired obstacle handles, in placement order.
    """
    if handles is None:
        handles = []
    for placement in placements:
        for element in placement:
            position = (
                element.position.x * arena_size,
                0.0,
                element.position.y * arena_size,
            )
            handle = pool.acquire(prefab, position, IDENTITY_ROTATION)
            handles.append(handle)
            handle.set_collider_radius(element.radius * radius_multiplier)
    return handles
