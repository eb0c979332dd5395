"""Unit tests for location request schemas."""

import math

import pytest
from pydantic import ValidationError

from variant_map.schemas.location import LocationSubmitRequest, LocationUpdateRequest

SHOP = {"name": "Corner Mart", "address": "1 Main St", "latitude": 1.3521, "longitude": 103.8198}


class TestLocationSubmitRequest:
    """Tests for LocationSubmitRequest."""

    def test_variants_default_empty(self) -> None:
        assert LocationSubmitRequest(**SHOP).variants == []

    def test_duplicates_removed_in_order(self) -> None:
        req = LocationSubmitRequest(**SHOP, variants=["B", "A", "B"])
        assert req.variants == ["B", "A"]

    def test_variant_names_not_normalized(self) -> None:
        req = LocationSubmitRequest(**SHOP, variants=["Mango", " Mango", "mango"])
        assert req.variants == ["Mango", " Mango", "mango"]

    def test_blank_variant_rejected(self) -> None:
        with pytest.raises(ValidationError, match="variant names must not be blank"):
            LocationSubmitRequest(**SHOP, variants=["A", "  "])

    @pytest.mark.parametrize("value", [math.nan, math.inf, 90.5, -91])
    def test_bad_latitude_rejected(self, value: float) -> None:
        with pytest.raises(ValidationError):
            LocationSubmitRequest(**{**SHOP, "latitude": value})

    def test_blank_address_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            LocationSubmitRequest(**{**SHOP, "address": " "})


class TestLocationUpdateRequest:
    """Tests for LocationUpdateRequest."""

    def test_everything_optional(self) -> None:
        req = LocationUpdateRequest()
        assert req.name is None
        assert req.coordinates is None
        assert req.variants is None

    def test_empty_variant_list_kept(self) -> None:
        assert LocationUpdateRequest(variants=[]).variants == []

    def test_coordinates_pair(self) -> None:
        assert LocationUpdateRequest(coordinates=[1.5, -70.25]).coordinates == (1.5, -70.25)

    @pytest.mark.parametrize("coords", [[91, 0], [0, -181], [1.0], [1.0, 2.0, 3.0]])
    def test_bad_coordinates_rejected(self, coords: list[float]) -> None:
        with pytest.raises(ValidationError):
            LocationUpdateRequest(coordinates=coords)
