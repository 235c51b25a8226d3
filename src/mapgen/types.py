"""Core value types for map element placement."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from pydantic import BaseModel


class Category(str, Enum):
    """Classes of map element, each placed in its own pass."""

    ISLANDS = "islands"
    ROCKS = "rocks"


class Point2(BaseModel, frozen=True):
    """Immutable 2D point in normalized arena coordinates."""

    x: float
    y: float

    def scaled(self, factor: float) -> tuple[float, float]:
        """Return the point scaled into arena units."""
        return (self.x * factor, self.y * factor)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"


class MapElement(BaseModel, frozen=True):
    """A placed circular element: normalized position plus radius in arena units."""

    position: Point2
    radius: float


@dataclass(frozen=True)
class PlacementSet:
    """Ordered placement result for one category.

    Element order is the grid scan order used to produce the set (outer axis x,
    inner axis y). Packed render data is indexed the same way, so consumers may
    correlate the two by index.
    """

    category: Category
    elements: tuple[MapElement, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[MapElement]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> MapElement:
        return self.elements[index]

    @classmethod
    def empty(cls, category: Category) -> "PlacementSet":
        """Return a placement set with no elements."""
        return cls(category=category)
