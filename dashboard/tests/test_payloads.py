"""
Tests for form serialization (dashboard/payloads.py).

Covers checkbox handling, numeric coercion, and the hidden editing-id
and first_author handling for the education and publication forms.
"""

import pytest
from werkzeug.datastructures import MultiDict

from dashboard.payloads import (
    NUMERIC_FIELDS,
    cleanup_payload,
    education_payload,
    form_to_json,
    profile_payload,
    publication_payload,
)


class TestFormToJson:
    """Tests for form_to_json."""

    def test_copies_fields(self):
        form = MultiDict([("university", "MIT"), ("program", "EECS")])
        assert form_to_json(form) == {"university": "MIT", "program": "EECS"}

    def test_repeated_key_keeps_last_value(self):
        form = MultiDict([("term", "Fall 2025"), ("term", "Spring 2026")])
        assert form_to_json(form)["term"] == "Spring 2026"

    def test_checked_checkbox_is_true(self):
        form = MultiDict([("institution", "MIT"), ("currently_enrolled", "on")])
        payload = form_to_json(form, ["currently_enrolled"])
        assert payload["currently_enrolled"] is True

    def test_unchecked_checkbox_is_false(self):
        """Browsers omit unchecked boxes; they must still be sent as False."""
        form = MultiDict([("institution", "MIT")])
        payload = form_to_json(form, ["currently_enrolled"])
        assert payload["currently_enrolled"] is False

    def test_accepts_plain_dict(self):
        assert form_to_json({"title": "Paper"}) == {"title": "Paper"}


class TestCleanupPayload:
    """Tests for numeric coercion."""

    def test_integral_values_become_int(self):
        payload = cleanup_payload({"start_year": "2020", "gre_total": "325"})
        assert payload == {"start_year": 2020, "gre_total": 325}
        assert isinstance(payload["start_year"], int)

    def test_decimal_values_become_float(self):
        assert cleanup_payload({"gpa": "3.85"}) == {"gpa": 3.85}

    def test_whitespace_is_ignored(self):
        assert cleanup_payload({"gpa_scale": " 4 "}) == {"gpa_scale": 4}

    @pytest.mark.parametrize("value", ["", "   ", None, "abc", "nan", "inf", "3.8.1"])
    def test_blank_or_invalid_values_are_removed(self, value):
        payload = cleanup_payload({"gpa": value, "institution": "MIT"})
        assert "gpa" not in payload
        assert payload["institution"] == "MIT"

    def test_non_numeric_fields_untouched(self):
        payload = cleanup_payload({"term": "2025", "program": ""})
        assert payload == {"term": "2025", "program": ""}

    def test_absent_fields_are_not_added(self):
        assert cleanup_payload({}) == {}

    def test_returns_same_dict(self):
        payload = {"year": "2021"}
        assert cleanup_payload(payload) is payload

    def test_all_numeric_fields_coerced(self):
        payload = cleanup_payload({field: "1" for field in NUMERIC_FIELDS})
        assert all(payload[field] == 1 for field in NUMERIC_FIELDS)


class TestResourcePayloads:
    """Tests for the per-form payload builders."""

    def test_education_payload_drops_hidden_id(self):
        form = MultiDict([
            ("education_id", "4"),
            ("institution", "MIT"),
            ("start_year", "2019"),
            ("end_year", ""),
        ])
        payload = education_payload(form)
        assert payload == {
            "institution": "MIT",
            "start_year": 2019,
            "currently_enrolled": False,
        }

    def test_publication_first_author_derived_from_select(self):
        form = MultiDict([
            ("publication_id", ""),
            ("title", "Paper"),
            ("year", "2024"),
            ("author_type", "First Author"),
        ])
        payload = publication_payload(form)
        assert "publication_id" not in payload
        assert payload["first_author"] is True
        assert payload["year"] == 2024

    def test_publication_co_author(self):
        payload = publication_payload(MultiDict([("title", "P"), ("author_type", "Co-author")]))
        assert payload["first_author"] is False

    def test_publication_without_author_type(self):
        assert publication_payload(MultiDict([("title", "P")]))["first_author"] is False

    def test_profile_payload(self):
        form = MultiDict([("full_name", "Ada"), ("toefl_total", "110"), ("gpa", "")])
        payload = profile_payload(form, ["international_student"])
        assert payload == {
            "full_name": "Ada",
            "toefl_total": 110,
            "international_student": False,
        }
