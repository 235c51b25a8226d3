"""Element placement: threshold scan of a noise field into sized elements."""

import structlog

from .config import CategoryConfig
from .noise import NoiseField
from .types import Category, MapElement, PlacementSet, Point2

logger = structlog.get_logger()


def _lerp_clamped(a: float, b: float, t: float) -> float:
    t = max(0.0, min(1.0, t))
    return a + (b - a) * t


def place_elements(
    field: NoiseField,
    threshold: float,
    min_radius: float,
    max_radius: float,
    max_count: int,
    category: Category = Category.ISLANDS,
) -> PlacementSet:
    """Place elements in the cells of a noise field that fall below a threshold.

    Scans outer axis x, inner axis y. A cell qualifies when its value is
    strictly below ``threshold``, so elements land in noise valleys. Lower
    values get radii closer to ``max_radius``; values approaching the
    threshold get radii closer to ``min_radius``.

    Once ``max_count`` elements exist the inner scan breaks, and the remaining
    outer indices add nothing more. The result favors the scan's starting
    corner when qualifying cells are dense.

    Args:
        field: Noise field to scan.
        threshold: Exclusive upper bound on qualifying noise values.
        min_radius: Radius for values at the threshold boundary.
        max_radius: Radius for a value of zero.
        max_count: Maximum number of elements to place.
        category: Category recorded on the result.

    Returns:
        PlacementSet in scan order.
    """
    resolution = field.resolution
    elements: list[MapElement] = []

    for x in range(resolution):
        for y in range(resolution):
            if len(elements) >= max_count:
                break

            value = field.value_at(x, y)
            if value >= threshold:
                continue

            radius = _lerp_clamped(max_radius, min_radius, value / threshold)
            elements.append(
                MapElement(
                    position=Point2(x=x / resolution, y=y / resolution),
                    radius=radius,
                )
            )

    logger.debug(
        "category_placed",
        category=category.value,
        count=len(elements),
        max_count=max_count,
        threshold=threshold,
    )
    return PlacementSet(category=category, elements=tuple(elements))


def place_category(
    field: NoiseField,
    config: CategoryConfig,
    category: Category,
) -> PlacementSet:
    """Place elements using a category's configured parameters."""
    return place_elements(
        field,
        config.threshold,
        config.min_radius,
        config.max_radius,
        config.max_count,
        category=category,
    )
