"""Shared test fixtures and recording collaborators for map generation tests."""

from dataclasses import dataclass, field

import numpy as np
import pytest

from mapgen.collaborators import RenderPayload
from mapgen.config import CategoryConfig, MapConfig, NoiseTextureConfig, RenderConfig
from mapgen.noise import NoiseField


@dataclass(eq=False)
class FakeHandle:
    """Pooled object stand-in that remembers how it was placed."""

    prefab: str
    position: tuple
    rotation: tuple
    collider_radius: float | None = None
    active: bool = True

    def set_collider_radius(self, radius: float) -> None:
        self.collider_radius = radius


@dataclass
class RecordingPool:
    """Object pool that records every acquire and release."""

    acquired: list[FakeHandle] = field(default_factory=list)
    released: list[FakeHandle] = field(default_factory=list)

    def acquire(self, prefab: str, position: tuple, rotation: tuple) -> FakeHandle:
        handle = FakeHandle(prefab=prefab, position=position, rotation=rotation)
        self.acquired.append(handle)
        return handle

    def release(self, handle: FakeHandle) -> None:
        handle.active = False
        self.released.append(handle)

    def active(self, prefab: str | None = None) -> list[FakeHandle]:
        return [
            h for h in self.acquired
            if h.active and (prefab is None or h.prefab == prefab)
        ]


@dataclass
class FailingPool(RecordingPool):
    """Recording pool whose acquire raises once ``fail_at`` objects are out."""

    fail_at: int = 0

    def acquire(self, prefab: str, position: tuple, rotation: tuple) -> FakeHandle:
        if len(self.acquired) >= self.fail_at:
            raise RuntimeError("pool exhausted")
        return super().acquire(prefab, position, rotation)


@dataclass
class RecordingRenderer:
    payloads: list[RenderPayload] = field(default_factory=list)

    def update_map(self, payload: RenderPayload) -> None:
        self.payloads.append(payload)


@dataclass
class RecordingMinimap:
    payloads: list[RenderPayload] = field(default_factory=list)

    def update_map_texture(self, payload: RenderPayload) -> None:
        self.payloads.append(payload)


@dataclass
class RecordingNavigation:
    """Navigation surface that notes how many obstacles existed at rebuild."""

    pool: RecordingPool
    bounds: list[tuple] = field(default_factory=list)
    rebuild_obstacle_counts: list[int] = field(default_factory=list)

    def set_ground_bounds(self, center: tuple, size: tuple) -> None:
        self.bounds.append((center, size))

    def rebuild(self) -> None:
        self.rebuild_obstacle_counts.append(
            len(self.pool.active("navmesh_obstacle"))
        )


def make_field(values) -> NoiseField:
    """Wrap a literal ``values[y][x]`` grid in a NoiseField."""
    return NoiseField(
        values=np.array(values, dtype=np.float32),
        seed_x=0.0,
        seed_y=0.0,
        scale=1.0,
    )


@pytest.fixture
def small_config() -> MapConfig:
    """Seeded config where every cell qualifies and the caps decide counts.

    Islands: 8x8 grid capped at 10. Rocks: 8x8 grid capped at 4.
    """
    return MapConfig(
        seed=7,
        arena_size=100.0,
        radius_multiplier=0.9,
        islands=CategoryConfig(
            prefab="island",
            noise_resolution=8,
            noise_scale=5.0,
            threshold=1.0,
            min_radius=2.0,
            max_radius=8.0,
            max_count=10,
        ),
        rocks=CategoryConfig(
            prefab="rock",
            noise_resolution=8,
            noise_scale=5.0,
            threshold=1.0,
            min_radius=0.5,
            max_radius=4.0,
            max_count=4,
        ),
        render=RenderConfig(
            island_displacement=NoiseTextureConfig(resolution=16, noise_scale=30.0),
            island_grass_detail=NoiseTextureConfig(resolution=16, noise_scale=30.0),
            rock_displacement=NoiseTextureConfig(resolution=8, noise_scale=100.0),
        ),
    )


@pytest.fixture
def pool() -> RecordingPool:
    return RecordingPool()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def minimap() -> RecordingMinimap:
    return RecordingMinimap()


@pytest.fixture
def navigation(pool: RecordingPool) -> RecordingNavigation:
    return RecordingNavigation(pool=pool)
