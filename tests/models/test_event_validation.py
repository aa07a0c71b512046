"""
Tests for Event model validation.
"""

import pytest
from decimal import Decimal

from eventful.models.event import Event


class TestEventValidation:
    """Test cases for Event model validation."""

    def test_requires_a_name(self):
        event = Event(name="")

        event.is_valid()

        assert event.errors["name"]

    def test_requires_a_description(self):
        event = Event(description="")

        event.is_valid()

        assert event.errors["description"]

    def test_requires_a_location(self):
        event = Event(location="   ")

        event.is_valid()

        assert event.errors["location"]

    def test_requires_a_description_over_24_characters(self):
        event = Event(description="X" * 24)

        event.is_valid()

        assert event.errors["description"] == ["is too short (minimum is 25 characters)"]

    def test_accepts_a_25_character_description(self):
        event = Event(description="X" * 25)

        event.is_valid()

        assert event.errors["description"] == []

    @pytest.mark.parametrize("price", [0, Decimal("0.00"), 10.00, Decimal("10.00")])
    def test_accepts_a_zero_or_positive_price(self, price):
        event = Event(price=price)

        event.is_valid()

        assert event.errors["price"] == []

    @pytest.mark.parametrize("price", [-10.00, Decimal("-0.01"), -1])
    def test_rejects_a_negative_price(self, price):
        event = Event(price=price)

        event.is_valid()

        assert event.errors["price"] == ["must be greater than or equal to 0"]

    @pytest.mark.parametrize("price", [Decimal("NaN"), Decimal("sNaN"), Decimal("-Infinity"), float("nan"), float("inf")])
    def test_rejects_a_non_finite_price(self, price):
        event = Event(price=price)

        event.is_valid()

        assert event.errors["price"] == ["is not a number"]

    def test_rejects_a_missing_price(self):
        event = Event(price=None)

        event.is_valid()

        assert event.errors["price"] == ["is not a number"]

    @pytest.mark.parametrize("capacity", [1, 5, 10000, Decimal("5"), Decimal("5.00")])
    def test_accepts_a_positive_capacity(self, capacity):
        event = Event(capacity=capacity)

        event.is_valid()

        assert event.errors["capacity"] == []

    @pytest.mark.parametrize("capacity,message", [
        (0, "must be greater than 0"),
        (-5, "must be greater than 0"),
        (3.14159, "must be an integer"),
        (Decimal("2.5"), "must be an integer"),
        (None, "is not a number"),
        ("ten", "is not a number"),
        (Decimal("NaN"), "is not a number"),
        (Decimal("Infinity"), "is not a number"),
        (float("inf"), "is not a number"),
        (Decimal("0"), "must be greater than 0"),
    ])
    def test_rejects_invalid_capacity(self, capacity, message):
        event = Event(capacity=capacity)

        event.is_valid()

        assert event.errors["capacity"] == [message]

    def test_integral_decimal_capacity_is_stored_as_an_integer(self):
        event = Event(capacity=Decimal("5"))

        assert event.capacity == 5
        assert isinstance(event.capacity, int)

    @pytest.mark.parametrize("file_name", ["e.png", "event.png", "event.jpg", "event.gif", "EVENT.GIF"])
    def test_accepts_properly_formatted_image_file_names(self, file_name):
        event = Event(image_file_name=file_name)

        event.is_valid()

        assert event.errors["image_file_name"] == []

    @pytest.mark.parametrize("file_name", ["event", ".jpg", ".png", ".gif", "event.pdf", "event.doc", "event.png.txt"])
    def test_rejects_improperly_formatted_image_file_names(self, file_name):
        event = Event(image_file_name=file_name)

        event.is_valid()

        assert event.errors["image_file_name"] == ["must reference a GIF, JPG, or PNG image"]

    @pytest.mark.parametrize("file_name", [None, ""])
    def test_image_file_name_is_optional(self, file_name):
        event = Event(image_file_name=file_name)

        event.is_valid()

        assert event.errors["image_file_name"] == []

    def test_with_example_attributes_is_valid(self, event_attributes):
        event = Event(**event_attributes())

        assert event.is_valid() is True
        assert not event.errors

    def test_validate_returns_field_message_pairs_without_touching_errors(self):
        event = Event(name="", description="short", location="Denver", price=-1, capacity=0)

        errors = event.validate()

        assert ("name", "can't be blank") in list(errors)
        assert ("price", "must be greater than or equal to 0") in list(errors)
        assert ("capacity", "must be greater than 0") in list(errors)
        assert set(errors.fields) == {"name", "description", "price", "capacity"}
        assert not event.errors

    def test_is_valid_replaces_previous_errors(self, event_attributes):
        event = Event(**event_attributes(name=""))
        assert event.is_valid() is False
        assert event.errors["name"]

        event.name = "BugSmash"

        assert event.is_valid() is True
        assert event.errors["name"] == []
