"""Unit tests for the partial update translator."""
import re

import pytest

from laserworks.errors import BadRequestError
from laserworks.sql import positional_params, positional_to_named, sql_for_partial_update, to_columns


class TestSqlForPartialUpdate:
    """Test translating sparse payloads into SET clauses."""

    def test_maps_fields_in_insertion_order(self):
        result = sql_for_partial_update(
            {"firstName": "Aliya", "isActive": False},
            {"firstName": "first_name", "isActive": "is_active"},
        )

        assert result.set_clause == "first_name = $1, is_active = $2"
        assert result.values == ("Aliya", False)
        assert result.columns == ("first_name", "is_active")

    def test_unmapped_key_is_used_verbatim(self):
        result = sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})

        assert result.set_clause == "first_name = $1, age = $2"
        assert result.values == ("Aliya", 32)

    def test_placeholders_follow_value_order(self):
        data = {f"field{i}": i for i in range(12)}
        result = sql_for_partial_update(data, {})

        placeholders = [int(n) for n in re.findall(r"\$(\d+)", result.set_clause)]
        assert placeholders == list(range(1, len(data) + 1))
        assert len(result.values) == len(data)
        assert result.values == tuple(range(12))

    def test_next_index_follows_values(self):
        result = sql_for_partial_update({"a": 1, "b": 2}, {})

        assert result.next_index == 3

    def test_empty_data_is_bad_request(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"firstName": "first_name"})

        assert exc_info.value.status == 400
        assert exc_info.value.message == "No data"


class TestPlaceholderHelpers:
    """Test the helpers that bind positional placeholders through SQLAlchemy."""

    def test_positional_to_named(self):
        sql = "UPDATE users SET first_name = $1, last_name = $2 WHERE username = $10"

        assert positional_to_named(sql) == "UPDATE users SET first_name = :p1, last_name = :p2 WHERE username = :p10"

    def test_positional_params(self):
        assert positional_params(("a", "b")) == {"p1": "a", "p2": "b"}

    def test_to_columns_uses_same_fallback(self):
        assert to_columns({"firstName": "A", "password": "x"}, {"firstName": "first_name"}) == {
            "first_name": "A",
            "password": "x",
        }
