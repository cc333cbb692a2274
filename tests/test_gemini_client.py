"""Tests for the Gemini client helpers."""

from taxpj.clients.gemini import convert_json_schema_to_gemini
from taxpj.domain.extraction import RESPONSE_SCHEMA


def test_convert_response_schema():
    converted = convert_json_schema_to_gemini(RESPONSE_SCHEMA)

    assert converted["type"] == "OBJECT"
    assert converted["required"] == ["isValidLayout", "transactions"]
    assert converted["properties"]["isValidLayout"] == {"type": "BOOLEAN"}

    items = converted["properties"]["transactions"]["items"]
    assert converted["properties"]["transactions"]["type"] == "ARRAY"
    assert items["properties"]["amount"] == {"type": "NUMBER"}
    assert items["required"] == ["date", "amount", "entryType"]


def test_unknown_type_falls_back_to_string():
    assert convert_json_schema_to_gemini({"type": "null"}) == {"type": "STRING"}
