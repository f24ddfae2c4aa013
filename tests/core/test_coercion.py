"""
Tests for parameter coercion.
"""

from datetime import datetime

from storekit.db.coercion import coerce_params, coerce_value, json_dumps


class TestCoerceValue:
    """Tests for coerce_value()."""

    def test_booleans(self):
        assert coerce_value(True) == 1
        assert coerce_value(False) == 0
        assert type(coerce_value(True)) is int

    def test_dict_is_serialized(self):
        assert coerce_value({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_list_and_tuple_are_serialized(self):
        assert coerce_value(["x", True]) == '["x",true]'
        assert coerce_value(("x", None)) == '["x",null]'

    def test_empty_structures_are_serialized(self):
        assert coerce_value([]) == "[]"
        assert coerce_value({}) == "{}"

    def test_scalars_pass_through(self):
        moment = datetime(2024, 1, 1)
        for value in (None, 0, 1, 2.5, "text", b"bytes", moment):
            assert coerce_value(value) is value

    def test_unicode_is_kept(self):
        assert coerce_value({"name": "Zoë"}) == '{"name":"Zoë"}'


class TestCoerceParams:
    """Tests for coerce_params()."""

    def test_scenario_name_and_flag(self):
        """Test ["Alice", True] binds as ["Alice", 1]."""
        assert coerce_params(["Alice", True]) == ["Alice", 1]

    def test_none_means_no_params(self):
        assert coerce_params(None) == []

    def test_order_and_length_are_kept(self):
        values = [False, None, {"k": "v"}, 3]
        assert coerce_params(values) == [0, None, '{"k":"v"}', 3]

    def test_input_is_not_mutated(self):
        values = [True, ["a"]]
        coerce_params(values)
        assert values == [True, ["a"]]


def test_json_dumps_is_compact():
    """Test JSON text uses compact separators and keeps non-ASCII text."""
    assert json_dumps({"tags": ["a", "b"]}) == '{"tags":["a","b"]}'
    assert json_dumps(["caf\u00e9"]) == '["caf\u00e9"]'
