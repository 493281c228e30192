"""Tests for form payload helpers."""
from datetime import datetime, timezone

import pytest

from devtrack.domain.forms import (
    blank_to_none,
    format_form_date,
    join_comma_list,
    join_line_list,
    parse_form_date,
    split_comma_list,
    split_line_list,
)

pytestmark = pytest.mark.unit


def test_split_comma_list_trims_and_drops_empties():
    assert split_comma_list("Next.js, Postgres ,, Redis ") == ["Next.js", "Postgres", "Redis"]


def test_split_comma_list_empty_input():
    assert split_comma_list("") == []
    assert split_comma_list(None) == []


def test_split_line_list_handles_crlf():
    assert split_line_list("Fast\r\n\r\n  Simple  \nCheap") == ["Fast", "Simple", "Cheap"]


def test_join_helpers_are_inverse_of_split():
    assert split_comma_list(join_comma_list(["a", "b"])) == ["a", "b"]
    assert split_line_list(join_line_list(["x", "y"])) == ["x", "y"]
    assert join_comma_list(None) == ""


def test_blank_to_none():
    assert blank_to_none("   ") is None
    assert blank_to_none(None) is None
    assert blank_to_none(" 2h ") == "2h"


class TestParseFormDate:
    def test_date_only_is_utc_midnight(self):
        assert parse_form_date("2026-02-20") == datetime(2026, 2, 20, tzinfo=timezone.utc)

    def test_naive_iso_timestamp_assumed_utc(self):
        assert parse_form_date("2026-02-20T10:30:00") == datetime(2026, 2, 20, 10, 30, tzinfo=timezone.utc)

    def test_blank_is_none(self):
        assert parse_form_date("") is None
        assert parse_form_date(None) is None

    def test_malformed_raises(self):
        with pytest.raises(ValueError):
            parse_form_date("20/02/2026")

    def test_format_round_trip(self):
        assert format_form_date(parse_form_date("2026-02-20")) == "2026-02-20"
        assert format_form_date(None) == ""
