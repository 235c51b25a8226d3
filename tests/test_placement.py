"""Tests for threshold-based element placement."""

import numpy as np
import pytest
from pydantic import ValidationError

from mapgen.config import CategoryConfig
from mapgen.noise import sample_noise_field
from mapgen.placement import place_category, place_elements
from mapgen.types import Category, MapElement, PlacementSet, Point2

from conftest import make_field


class TestThreshold:
    """Tests for which cells qualify."""

    def test_value_equal_to_threshold_skipped(self) -> None:
        """A value exactly at the threshold does not qualify."""
        field = make_field([[0.5, 0.5], [0.5, 0.5]])
        result = place_elements(field, 0.5, 1.0, 2.0, 10)
        assert len(result) == 0

    def test_zero_value_qualifies(self) -> None:
        """A value of 0 qualifies for any positive threshold."""
        field = make_field([[0.0]])
        result = place_elements(field, 0.01, 1.0, 2.0, 10)
        assert len(result) == 1

    def test_all_above_threshold_is_empty(self) -> None:
        """A field entirely at or above the threshold places nothing."""
        field = make_field(np.full((6, 6), 0.8))
        assert len(place_elements(field, 0.35, 1.0, 2.0, 100)) == 0

    def test_zero_threshold_is_empty(self) -> None:
        """Threshold 0 places nothing, even on a zero field."""
        field = make_field(np.zeros((4, 4)))
        assert len(place_elements(field, 0.0, 1.0, 2.0, 100)) == 0

    def test_mixed_field(self) -> None:
        """Only cells below the threshold are placed, in scan order."""
        # values[y][x]
        field = make_field([[0.5, 0.2], [0.0, 0.7]])
        result = place_elements(field, 0.5, 2.0, 8.0, 10)

        assert [e.position for e in result] == [
            Point2(x=0.0, y=0.5),
            Point2(x=0.5, y=0.0),
        ]
        assert result[0].radius == pytest.approx(8.0)
        assert result[1].radius == pytest.approx(5.6, rel=1e-5)


class TestRadius:
    """Tests for radius interpolation."""

    def test_radius_within_bounds(self) -> None:
        """Every radius lies in [min_radius, max_radius]."""
        field = sample_noise_field(32, scale=5.0, seed_x=17.3, seed_y=42.9)
        result = place_elements(field, 0.5, 0.5, 4.0, 1024)
        assert len(result) > 0
        for element in result:
            assert 0.5 <= element.radius <= 4.0

    def test_lower_values_get_larger_radius(self) -> None:
        """Radius falls as the value approaches the threshold."""
        field = make_field([[0.1, 0.9], [0.3, 0.9]])
        result = place_elements(field, 0.4, 1.0, 5.0, 10)
        assert result[0].radius > result[1].radius
        assert result[0].radius == pytest.approx(4.0, rel=1e-5)
        assert result[1].radius == pytest.approx(2.0, rel=1e-5)

    def test_inverted_bounds_not_rejected(self) -> None:
        """min_radius > max_radius still produces elements."""
        field = make_field([[0.0]])
        result = place_elements(field, 0.5, 4.0, 2.0, 10)
        assert result[0].radius == pytest.approx(2.0)


class TestCountCap:
    """Tests for the maximum element count."""

    def test_cap_respected(self) -> None:
        """Never more than max_count elements."""
        field = make_field(np.zeros((8, 8)))
        for max_count in (1, 5, 10, 63, 64, 100):
            assert len(place_elements(field, 0.5, 1.0, 2.0, max_count)) == min(max_count, 64)

    def test_zero_cap_is_empty(self) -> None:
        """max_count 0 places nothing."""
        field = make_field(np.zeros((8, 8)))
        assert len(place_elements(field, 0.5, 1.0, 2.0, 0)) == 0

    def test_cap_favors_scan_start(self) -> None:
        """Capped placements fill from x = 0 in inner-axis order."""
        field = make_field(np.zeros((8, 8)))
        result = place_elements(field, 0.5, 1.0, 2.0, 10)

        expected = [(0.0, y / 8) for y in range(8)] + [(0.125, 0.0), (0.125, 0.125)]
        assert [(e.position.x, e.position.y) for e in result] == expected


class TestScenario:
    """End-to-end placement on a real noise field."""

    def test_degenerate_threshold_places_every_cell(self) -> None:
        """Threshold 1.0 on a 4x4 field places all 16 cells in scan order."""
        field = sample_noise_field(4, scale=1.0, seed_x=0.0, seed_y=0.0)
        result = place_elements(field, 1.0, 1.0, 2.0, 16)

        assert len(result) == 16
        assert [(e.position.x, e.position.y) for e in result] == [
            (x / 4, y / 4) for x in range(4) for y in range(4)
        ]
        assert result[0].position == Point2(x=0.0, y=0.0)

    def test_deterministic(self) -> None:
        """Same field and parameters give equal placement sets."""
        field = sample_noise_field(16, scale=5.0, seed_x=3.3, seed_y=4.4)
        assert place_elements(field, 0.4, 1.0, 3.0, 50) == place_elements(
            field, 0.4, 1.0, 3.0, 50
        )


class TestPlaceCategory:
    """Tests for config-driven placement."""

    def test_uses_category_config(self) -> None:
        """Threshold, radii and cap come from the config."""
        config = CategoryConfig(
            prefab="rock", threshold=0.5, min_radius=0.5, max_radius=4.0, max_count=3
        )
        field = make_field(np.zeros((4, 4)))
        result = place_category(field, config, Category.ROCKS)

        assert result.category == Category.ROCKS
        assert len(result) == 3
        assert all(e.radius == pytest.approx(4.0) for e in result)


class TestPlacementSet:
    """Tests for the placement value types."""

    def test_structural_equality(self) -> None:
        """Elements with the same data are equal."""
        a = MapElement(position=Point2(x=0.25, y=0.5), radius=3.0)
        b = MapElement(position=Point2(x=0.25, y=0.5), radius=3.0)
        assert a == b

    def test_elements_immutable(self) -> None:
        """Elements cannot be modified."""
        element = MapElement(position=Point2(x=0.1, y=0.2), radius=1.0)
        with pytest.raises(ValidationError):
            element.radius = 2.0

    def test_empty(self) -> None:
        """Empty sets have no elements."""
        empty = PlacementSet.empty(Category.ISLANDS)
        assert len(empty) == 0
        assert list(empty) == []

    def test_scaled_position(self) -> None:
        """Points scale into arena units."""
        assert Point2(x=0.25, y=0.5).scaled(100.0) == (25.0, 50.0)
