"""Tests for bend and sheet parameter validation."""

import math

import pytest

from pressbrake.core.errors import ConstructionError, ValidationError
from pressbrake.core.material import MaterialDetails
from pressbrake.core.sheet import BendDirection, SheetMetal
from pressbrake.core.validate import (
    BendLimits,
    BendOutcome,
    min_bend_radius,
    parse_direction,
    parse_number,
    validate_bend,
    validate_sheet_dimensions,
)


@pytest.fixture
def sheet() -> SheetMetal:
    """300mm steel sheet, 2mm thick: recommended min radius 3.0mm."""
    steel = MaterialDetails("Steel", 7850, 250, 200, 1.5)
    return SheetMetal("S1", 300.0, 100.0, 2.0, steel)


class TestMinBendRadius:
    @pytest.mark.parametrize("factor,thickness,expected", [
        (1.5, 2.0, 3.0),
        (0.8, 1.0, 0.8),
        (2.0, 3.0, 6.0),
        (0.0, 2.0, 1.0),
        (0.0, 5.0, 2.5),
    ])
    def test_factor_or_fallback(self, factor, thickness, expected):
        mat = MaterialDetails("M", min_bend_radius_factor=factor)
        s = SheetMetal("S", 100.0, 50.0, thickness, mat)
        assert min_bend_radius(s) == pytest.approx(expected)


class TestValidateBend:
    def test_accepted(self, sheet):
        check = validate_bend(sheet, 50.0, 90.0, 3.5)
        assert check.outcome is BendOutcome.ACCEPTED
        assert check.reason == ""

    def test_radius_equal_to_minimum_is_accepted(self, sheet):
        assert validate_bend(sheet, 50.0, 90.0, 3.0).outcome is BendOutcome.ACCEPTED

    def test_small_radius_needs_confirmation(self, sheet):
        check = validate_bend(sheet, 50.0, 90.0, 1.0)
        assert check.outcome is BendOutcome.NEEDS_CONFIRMATION
        assert check.min_recommended_radius == pytest.approx(3.0)
        assert "3.00" in check.reason

    def test_zero_radius_is_sharp_bend_not_warning(self, sheet):
        assert validate_bend(sheet, 50.0, 90.0, 0.0).outcome is BendOutcome.ACCEPTED

    @pytest.mark.parametrize("position", [0.0, -5.0, 300.0, 301.0, math.nan])
    def test_position_outside_sheet(self, sheet, position):
        check = validate_bend(sheet, position, 90.0, 3.5)
        assert check.is_rejected
        assert "position" in check.reason
        if not math.isnan(position):
            assert "300.00" in check.reason

    @pytest.mark.parametrize("radius", [-0.1, 500.1, math.nan])
    def test_radius_out_of_range(self, sheet, radius):
        check = validate_bend(sheet, 50.0, 90.0, radius)
        assert check.is_rejected
        assert "radius" in check.reason
        assert "500.00" in check.reason

    def test_radius_at_max_is_allowed(self, sheet):
        assert not validate_bend(sheet, 50.0, 90.0, 500.0).is_rejected

    @pytest.mark.parametrize("angle", [0.0, 0.99, 179.01, 180.0, math.nan])
    def test_angle_out_of_range(self, sheet, angle):
        check = validate_bend(sheet, 50.0, angle, 3.5)
        assert check.is_rejected
        assert "angle" in check.reason
        assert "179.0" in check.reason

    @pytest.mark.parametrize("angle", [1.0, 179.0])
    def test_angle_bounds_inclusive(self, sheet, angle):
        assert validate_bend(sheet, 50.0, angle, 3.5).outcome is BendOutcome.ACCEPTED

    def test_position_checked_before_radius(self, sheet):
        check = validate_bend(sheet, 0.0, 90.0, 999.0)
        assert "position" in check.reason

    def test_custom_limits(self, sheet):
        limits = BendLimits(max_radius=10.0, min_angle=30.0, max_angle=150.0)
        assert validate_bend(sheet, 50.0, 90.0, 12.0, limits).is_rejected
        assert validate_bend(sheet, 50.0, 20.0, 5.0, limits).is_rejected


class TestSheetDimensions:
    def test_in_range(self):
        validate_sheet_dimensions(0.1, 10000.0, 2.0)

    @pytest.mark.parametrize("dims", [
        (0.05, 100.0, 2.0),
        (300.0, 10000.5, 2.0),
        (300.0, 100.0, 0.0),
    ])
    def test_out_of_range(self, dims):
        with pytest.raises(ConstructionError):
            validate_sheet_dimensions(*dims)


class TestParsing:
    def test_numeric_string(self):
        assert parse_number(" 12.5 ", "bend angle") == 12.5

    def test_number_passthrough(self):
        assert parse_number(3, "bend radius") == 3.0

    @pytest.mark.parametrize("value", ["", "abc", "nan", "inf", None, True])
    def test_bad_input(self, value):
        with pytest.raises(ValidationError, match="bend position"):
            parse_number(value, "bend position")

    @pytest.mark.parametrize("token,expected", [
        ("Up", BendDirection.UP),
        ("down", BendDirection.DOWN),
        (BendDirection.DOWN, BendDirection.DOWN),
    ])
    def test_direction(self, token, expected):
        assert parse_direction(token) is expected

    def test_bad_direction(self):
        with pytest.raises(ValidationError):
            parse_direction("Sideways")
