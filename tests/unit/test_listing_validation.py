"""Tests for mp_listing.domain.validation."""

import pytest

from src.mp_common.enums import ListingCategory, ListingCondition
from src.mp_common.errors import ValidationError
from src.mp_listing.domain.validation import (
    check_category,
    check_condition,
    check_description,
    check_images,
    check_location,
    check_price,
    check_tags,
    check_title,
    derive_tags,
)


class TestTitle:
    def test_trims(self) -> None:
        assert check_title("  Winch  ") == "Winch"

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_missing(self, title) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_title(title)
        assert exc_info.value.field == "title"

    def test_max_length(self) -> None:
        assert check_title("x" * 80) == "x" * 80
        with pytest.raises(ValidationError):
            check_title("x" * 81)


class TestTextFields:
    def test_description_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_description(" ")
        assert exc_info.value.field == "description"

    def test_location_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_location("")
        assert exc_info.value.field == "location"


class TestEnums:
    def test_category_from_value(self) -> None:
        assert check_category("parts") is ListingCategory.PARTS

    def test_unknown_category(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_category("boats")
        assert exc_info.value.field == "category"

    def test_condition_from_member(self) -> None:
        assert check_condition(ListingCondition.FAIR) is ListingCondition.FAIR

    def test_unknown_condition(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_condition(None)
        assert exc_info.value.field == "condition"


class TestImages:
    def test_at_least_one(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_images([])
        assert exc_info.value.field == "images"

    def test_at_most_five(self) -> None:
        assert len(check_images([f"file:///{i}.jpg" for i in range(5)])) == 5
        with pytest.raises(ValidationError):
            check_images([f"file:///{i}.jpg" for i in range(6)])

    def test_blank_reference(self) -> None:
        with pytest.raises(ValidationError):
            check_images(["file:///a.jpg", " "])


class TestPrice:
    def test_positive_price_kept(self) -> None:
        assert check_price(850, is_trade_only=False) == 850

    def test_trade_only_forces_zero(self) -> None:
        assert check_price(1200, is_trade_only=True) == 0

    @pytest.mark.parametrize("price", [0, -5, None, "12"])
    def test_priced_listing_needs_positive_number(self, price) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_price(price, is_trade_only=False)
        assert exc_info.value.field == "price"


class TestTags:
    def test_strips_blank(self) -> None:
        assert check_tags([" jeep ", "", "rtt"]) == ["jeep", "rtt"]

    def test_rejects_non_strings(self) -> None:
        with pytest.raises(ValidationError):
            check_tags(["ok", 3])

    def test_derive_from_title(self) -> None:
        assert derive_tags("Warn VR EVO 10 Winch") == ["warn", "evo", "winch"]
