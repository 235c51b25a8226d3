"""Interfaces the map generator expects from its engine-side collaborators.

Any object providing these methods can be passed to ``MapGenerator``; the
generator never owns or constructs them.
"""

from dataclasses import dataclass
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from .noise import NoiseField

Vector2 = tuple[float, float]
Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]

IDENTITY_ROTATION: Quaternion = (0.0, 0.0, 0.0, 1.0)


class PooledHandle(Protocol):
    """A pooled scene object with a circular collider."""

    def set_collider_radius(self, radius: float) -> None: ...


class ObjectPool(Protocol):
    """Pool that lends scene objects and takes them back."""

    def acquire(
        self,
        prefab: str,
        position: Vector2 | Vector3,
        rotation: Quaternion,
    ) -> PooledHandle: ...

    def release(self, handle: PooledHandle) -> None: ...


@dataclass(frozen=True, eq=False)
class RenderPayload:
    """Packed per-category element data and cosmetic textures for one cycle.

    Row ``i`` of ``island_data`` / ``rock_data`` is ``(x, y, radius, 0)`` for
    element ``i`` of the matching placement set.
    """

    island_data: NDArray[np.float32]
    island_count: int
    rock_data: NDArray[np.float32]
    rock_count: int
    island_displacement: NoiseField
    island_grass_detail: NoiseField
    rock_displacement: NoiseField
    arena_size: float


class MapRenderer(Protocol):
    """Shader/material consumer of the packed map data."""

    def update_map(self, payload: RenderPayload) -> None: ...


class Minimap(Protocol):
    """Minimap texture composer fed with the same data as the renderer."""

    def update_map_texture(self, payload: RenderPayload) -> None: ...


class NavigationSurface(Protocol):
    """Navigation mesh owner; rebuild is synchronous and blocking."""

    def set_ground_bounds(self, center: Vector3, size: Vector3) -> None: ...

    def rebuild(self) -> None: ...
