import pytest

from brick import jsonutil
from brick.jsonutil import JSONError


def test_marshal_to_string_is_compact_with_sorted_keys():
    assert jsonutil.marshal_to_string({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'


def test_marshal_escapes_html_characters():
    assert jsonutil.marshal_to_string("<") == '"\\u003c"'


def test_marshal_indent_uses_given_spaces():
    assert jsonutil.marshal_indent({"a": 1}, 2) == b'{\n  "a": 1\n}'


@pytest.mark.parametrize(
    "value",
    [
        {"name": "brick", "items": [1, 2.5, None, True], "nested": {"x": "y"}},
        [1, "two", {"three": 3}],
        "text with <tags> & symbols",
        "unicode: 你好",
    ],
)
def test_round_trip_string_and_bytes(value):
    assert jsonutil.unmarshal_from_string(jsonutil.marshal_to_string(value)) == value
    assert jsonutil.unmarshal(jsonutil.marshal(value)) == value
    assert jsonutil.unmarshal(jsonutil.marshal_indent(value, 4)) == value


def test_marshal_and_marshal_to_string_agree():
    value = {"k": ["v", 1]}
    assert jsonutil.marshal(value).decode("utf-8") == jsonutil.marshal_to_string(value)


def test_marshal_unsupported_value_raises():
    with pytest.raises(JSONError, match="json marshal failed"):
        jsonutil.marshal_to_string({"s": object()})


def test_marshal_nan_raises():
    with pytest.raises(JSONError):
        jsonutil.marshal(float("nan"))


def test_marshal_indent_negative_raises():
    with pytest.raises(ValueError):
        jsonutil.marshal_indent([], -1)


def test_unmarshal_invalid_raises():
    with pytest.raises(JSONError, match="json unmarshal failed"):
        jsonutil.unmarshal_from_string("{not json")
    with pytest.raises(JSONError):
        jsonutil.unmarshal(b"[1,")


def test_get_follows_path():
    doc = jsonutil.marshal({"a": {"b": [10, 20, 30]}})
    assert jsonutil.get(doc, "a", "b", 1) == 20
    assert jsonutil.get(doc, "a", "b") == [10, 20, 30]
    assert jsonutil.get(doc) == {"a": {"b": [10, 20, 30]}}


def test_get_missing_path_returns_none():
    doc = jsonutil.marshal({"a": {"b": [10]}})
    assert jsonutil.get(doc, "a", "c") is None
    assert jsonutil.get(doc, "a", "b", 5) is None
    assert jsonutil.get(doc, "a", 0) is None
    assert jsonutil.get(b"{broken", "a") is None


def test_valid():
    assert jsonutil.valid(jsonutil.marshal({"a": [1]})) is True
    assert jsonutil.valid(b"{broken") is False
    assert jsonutil.valid("") is False