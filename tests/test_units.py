"""Tests for pixel to physical unit conversion."""

import pytest

from swipe_analytics.utils.units import PhysicalUnitsConverter


def test_pixels_to_mm():
    units = PhysicalUnitsConverter(254, 254)  # 10 px/mm
    
    assert units.pixels_to_mm(100) == pytest.approx(10)
    assert units.pixels_to_meters(100) == pytest.approx(0.01)
    assert units.velocity_to_mm_per_second(2000) == pytest.approx(200)
    assert units.acceleration_to_meters_per_second_squared(50000) == pytest.approx(5)


def test_axes_use_their_own_density():
    units = PhysicalUnitsConverter(254, 508)
    
    assert units.pixels_to_mm_x(100) == pytest.approx(10)
    assert units.pixels_to_mm_y(100) == pytest.approx(5)
    assert units.pixels_to_mm(150) == pytest.approx(10)


@pytest.mark.parametrize("xdpi, ydpi", [(0, 160), (160, -1)])
def test_invalid_density(xdpi, ydpi):
    with pytest.raises(ValueError):
        PhysicalUnitsConverter(xdpi, ydpi)
