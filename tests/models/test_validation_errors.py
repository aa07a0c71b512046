"""
Tests for ValidationErrors and RecordInvalid.
"""

from eventful.models import RecordInvalid, ValidationErrors


class TestValidationErrors:
    """Test cases for the field-keyed error collection."""

    def test_empty_collection(self):
        errors = ValidationErrors()

        assert not errors
        assert len(errors) == 0
        assert errors["name"] == []
        assert "name" not in errors
        assert errors.to_dict() == {}

    def test_add_messages(self):
        """Test that messages accumulate per field."""
        errors = ValidationErrors()

        errors.add("name", "can't be blank")
        errors.add("price", "is not a number")
        errors.add("price", "must be greater than or equal to 0")

        assert errors
        assert len(errors) == 3
        assert "price" in errors
        assert errors["price"] == ["is not a number", "must be greater than or equal to 0"]
        assert errors.fields == ["name", "price"]
        assert list(errors)[0] == ("name", "can't be blank")

    def test_lookup_returns_a_copy(self):
        errors = ValidationErrors()
        errors.add("name", "can't be blank")

        errors["name"].append("tampered")

        assert errors["name"] == ["can't be blank"]

    def test_full_messages(self):
        """Test human readable messages."""
        errors = ValidationErrors()
        errors.add("name", "can't be blank")
        errors.add("image_file_name", "must reference a GIF, JPG, or PNG image")

        assert errors.full_messages() == [
            "Name can't be blank",
            "Image file name must reference a GIF, JPG, or PNG image",
        ]


class TestRecordInvalid:
    """Test cases for RecordInvalid."""

    def test_carries_record_and_errors(self):
        errors = ValidationErrors()
        errors.add("name", "can't be blank")
        record = object()

        exc = RecordInvalid(record, errors)

        assert exc.record is record
        assert exc.errors is errors
        assert str(exc) == "Validation failed: Name can't be blank"
