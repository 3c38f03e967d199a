"""Tests for required, required_with and required_without."""

import pytest

from formlogic.rules import FieldKind, validate


class TestRequired:
    """Tests for the required rule."""

    @pytest.mark.parametrize("value", ["John", "0", 0, 1.5, ["a"], {"k": "v"}, True])
    def test_present(self, value) -> None:
        assert validate(value, "required").valid is True

    @pytest.mark.parametrize("value", ["", None, "   ", "\t\n", []])
    def test_missing(self, value) -> None:
        assert validate(value, "required").failed == "required"


class TestRequiredWith:
    """Tests for required_with."""

    def test_required_when_other_present(self, form_subject) -> None:
        subject = form_subject({"other": "data"}, name="target")
        result = validate("", "required_with:other", subject)
        assert result.valid is False
        assert result.failed == "required_with"
        assert result.param == "other"

    def test_satisfied_when_value_present(self, form_subject) -> None:
        subject = form_subject({"other": "data"})
        assert validate("filled", "required_with:other", subject).valid is True

    @pytest.mark.parametrize("other", ["", None, 0, False])
    def test_optional_when_other_empty(self, form_subject, other) -> None:
        subject = form_subject({"other": other})
        assert validate("", "required_with:other", subject).valid is True

    def test_optional_outside_form(self) -> None:
        """Without a field resolver the other field reads as absent."""
        assert validate("", "required_with:other").valid is True

    def test_missing_other_field(self, form_subject) -> None:
        assert validate("", "required_with:ghost", form_subject({})).valid is True

    def test_checkbox_subject(self, form_subject) -> None:
        subject = form_subject({"other": "x"}, kind=FieldKind.CHECKBOX, checked=False)
        assert validate("on", "required_with:other", subject).failed == "required_with"


class TestRequiredWithout:
    """Tests for required_without."""

    def test_required_when_other_empty(self, form_subject) -> None:
        subject = form_subject({"phone": ""})
        assert validate("", "required_without:phone", subject).failed == "required_without"

    def test_required_outside_form(self) -> None:
        assert validate("", "required_without:phone").failed == "required_without"

    def test_optional_when_other_present(self, form_subject) -> None:
        subject = form_subject({"phone": "555-1234"})
        assert validate("", "required_without:phone", subject).valid is True

    def test_present_value_passes(self, form_subject) -> None:
        subject = form_subject({"phone": ""})
        assert validate("a@b.co", "required_without:phone", subject).valid is True
