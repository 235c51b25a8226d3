"""Map generation orchestration: placement cycle, exports and teardown."""

from enum import Enum

import numpy as np
import structlog

from .collaborators import (
    MapRenderer,
    Minimap,
    NavigationSurface,
    ObjectPool,
    PooledHandle,
    RenderPayload,
)
from .config import CategoryConfig, MapConfig
from .export import (
    CosmeticTextures,
    build_render_payload,
    generate_cosmetic_textures,
    ground_bounds,
    instantiate_elements,
    place_navigation_obstacles,
)
from .noise import NoiseField, generate_noise_field
from .placement import place_category
from .types import Category, PlacementSet

logger = structlog.get_logger()


class MapState(str, Enum):
    """Lifecycle state of a MapGenerator."""

    IDLE = "idle"
    POPULATED = "populated"


class MapGenerator:
    """Owns the placement data of the current cycle and republishes it.

    ``generate()`` runs placement for islands then rocks and feeds the result
    to the pool, renderer, minimap and navigation surface. ``clear()`` hands
    every acquired object back to the pool.

    Calling ``generate()`` twice without ``clear()`` in between overwrites the
    placement sets but leaves the earlier pooled objects out of the pool.
    Callers are expected to clear first.

    Not thread-safe; meant to be driven by a single caller.
    """

    def __init__(
        self,
        config: MapConfig,
        pool: ObjectPool,
        renderer: MapRenderer | None = None,
        minimap: Minimap | None = None,
        navigation: NavigationSurface | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize MapGenerator.

        Args:
            config: Map generation configuration.
            pool: Pool lending scene objects for elements and obstacles.
            renderer: Optional shader/material consumer.
            minimap: Optional minimap consumer.
            navigation: Optional navigation surface to bound and rebuild.
            rng: Random number generator. Defaults to one seeded from
                ``config.seed``.
        """
        self.config = config
        self._pool = pool
        self._renderer = renderer
        self._minimap = minimap
        self._navigation = navigation
        self._rng = rng if rng is not None else np.random.default_rng(config.seed)

        self._placements: dict[Category, PlacementSet] = {
            category: PlacementSet.empty(category) for category in Category
        }
        self._noise_fields: dict[Category, NoiseField] = {}
        self._element_handles: dict[Category, list[PooledHandle]] = {
            category: [] for category in Category
        }
        self._obstacle_handles: list[PooledHandle] = []
        self._textures: CosmeticTextures | None = None
        self._render_payload: RenderPayload | None = None
        self._state = MapState.IDLE

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def islands(self) -> PlacementSet:
        return self._placements[Category.ISLANDS]

    @property
    def rocks(self) -> PlacementSet:
        return self._placements[Category.ROCKS]

    @property
    def noise_fields(self) -> dict[Category, NoiseField]:
        """Placement noise fields of the current cycle."""
        return dict(self._noise_fields)

    @property
    def textures(self) -> CosmeticTextures | None:
        """Cosmetic textures from the most recent generate(); kept by clear()."""
        return self._textures

    @property
    def render_payload(self) -> RenderPayload | None:
        return self._render_payload

    @property
    def handle_counts(self) -> dict[str, int]:
        """Number of pooled objects currently held, per kind."""
        counts = {
            category.value: len(handles)
            for category, handles in self._element_handles.items()
        }
        counts["obstacles"] = len(self._obstacle_handles)
        return counts

    def category_config(self, category: Category) -> CategoryConfig:
        if category == Category.ISLANDS:
            return self.config.islands
        return self.config.rocks

    def generate(self) -> None:
        """Run a full placement cycle and publish it downstream.

        If a collaborator raises partway through, the generator is left
        populated with every object acquired so far, and ``clear()`` returns
        them all to the pool.
        """
        if self._state == MapState.POPULATED:
            logger.warning(
                "generate_without_clear",
                leaked_handles=sum(self.handle_counts.values()),
            )

        for category in Category:
            cat_config = self.category_config(category)
            field = generate_noise_field(
                cat_config.noise_resolution, cat_config.noise_scale, self._rng
            )
            self._noise_fields[category] = field
            self._placements[category] = place_category(field, cat_config, category)

        # Placement data exists from here on; a failed export is undone by clear()
        self._state = MapState.POPULATED

        for category in Category:
            self._element_handles[category] = []
            instantiate_elements(
                self._placements[category],
                self._pool,
                self.category_config(category).prefab,
                self.config.arena_size,
                self.config.radius_multiplier,
                handles=self._element_handles[category],
            )

        self._update_render_data()
        self._update_navigation()

        logger.info(
            "map_generated",
            islands=len(self.islands),
            rocks=len(self.rocks),
            arena_size=self.config.arena_size,
        )

    def clear(self) -> int:
        """Return every pooled object and drop the cycle's placement data.

        Placement sets, placement noise fields and the render payload are
        reset. Cosmetic textures are left in place. Safe to call when idle.

        Returns:
            Number of handles released.
        """
        released = 0
        for handles in self._element_handles.values():
            released += self._release_all(handles)
        released += self._release_all(self._obstacle_handles)

        for category in Category:
            self._placements[category] = PlacementSet.empty(category)
        self._noise_fields.clear()
        self._render_payload = None

        if self._state == MapState.POPULATED:
            logger.info("map_cleared", released=released)
        self._state = MapState.IDLE
        return released

    def _release_all(self, handles: list[PooledHandle]) -> int:
        count = len(handles)
        for handle in handles:
            self._pool.release(handle)
        handles.clear()
        return count

    def _update_render_data(self) -> None:
        """Pack element data with fresh cosmetic textures for rendering."""
        self._textures = generate_cosmetic_textures(self.config.render, self._rng)
        payload = build_render_payload(
            self.islands, self.rocks, self._textures, self.config.arena_size
        )
        self._render_payload = payload

        if self._renderer is not None:
            self._renderer.update_map(payload)
        else:
            logger.debug("renderer_skipped")

        if self._minimap is not None:
            self._minimap.update_map_texture(payload)
        else:
            logger.debug("minimap_skipped")

    def _update_navigation(self) -> None:
        """Place navigation obstacles and rebuild the navigation surface."""
        nav_config = self.config.navigation

        if self._navigation is not None:
            center, size = ground_bounds(self.config.arena_size, nav_config.border_size)
            self._navigation.set_ground_bounds(center, size)

        self._obstacle_handles = []
        place_navigation_obstacles(
            [self.islands, self.rocks],
            self._pool,
            nav_config.obstacle_prefab,
            self.config.arena_size,
            self.config.radius_multiplier,
            handles=self._obstacle_handles,
        )

        if self._navigation is not None:
            self._navigation.rebuild()
            logger.info("navigation_rebuilt", obstacles=len(self._obstacle_handles))
        else:
            logger.debug("navigation_skipped", obstacles=len(self._obstacle_handles))
