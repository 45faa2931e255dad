"""Tests for reply normalization (utils/normalizer.py)."""

from __future__ import annotations

import json

import pytest

from conftest import file_record
from utils.normalizer import isFileRecord, normalize
from utils.types import ParseError


def test_clean_reply_is_returned_unchanged():
    reply = {
        "rtlCode": file_record("counter.v"),
        "testbench": file_record("counter_tb.sv", "SystemVerilog", "class counter_test extends uvm_test; endclass"),
        "designSpec": file_record("spec.md", "Markdown", "# Counter"),
    }
    assert normalize(json.dumps(reply)) == reply


def test_non_object_values_are_dropped():
    raw = json.dumps(
        {
            "rtlCode": {"filename": "a", "language": "Verilog", "code": "..."},
            "testbench": True,
            "testCases": None,
        }
    )
    assert normalize(raw) == {"rtlCode": {"filename": "a", "language": "Verilog", "code": "..."}}


@pytest.mark.parametrize("value", [None, True, 0, "counter.v", [], ["a"], {}])
def test_every_kind_of_malformed_value_is_dropped(value):
    raw = json.dumps({"rtlCode": file_record("c.v"), "designSpec": value})
    assert list(normalize(raw)) == ["rtlCode"]


def test_records_missing_a_field_are_dropped():
    raw = json.dumps(
        {
            "rtlCode": {"filename": "c.v", "language": "Verilog"},
            "testbench": {"filename": "tb.sv", "language": "SystemVerilog", "code": 42},
            "designSpec": file_record("spec.md", "Markdown", "# spec"),
        }
    )
    assert list(normalize(raw)) == ["designSpec"]


def test_not_json_raises_parse_error():
    with pytest.raises(ParseError):
        normalize("not json")


def test_code_fences_are_not_stripped():
    fenced = "```json\n" + json.dumps({"rtlCode": file_record("c.v")}) + "\n```"
    with pytest.raises(ParseError):
        normalize(fenced)


@pytest.mark.parametrize("raw", ["[]", "42", '"text"', "null"])
def test_json_that_is_not_an_object_raises_parse_error(raw):
    with pytest.raises(ParseError):
        normalize(raw)


def test_surrounding_whitespace_is_trimmed():
    raw = "\n\n   " + json.dumps({"rtlCode": file_record("c.v")}) + "  \n"
    assert list(normalize(raw)) == ["rtlCode"]


def test_key_order_follows_the_reply():
    raw = json.dumps({"designSpec": file_record("s.md"), "rtlCode": file_record("c.v")})
    assert list(normalize(raw)) == ["designSpec", "rtlCode"]


def test_unknown_keys_with_valid_records_are_kept():
    raw = json.dumps({"timingReport": file_record("timing.md", "Markdown", "slack: 0.2ns")})
    assert list(normalize(raw)) == ["timingReport"]


def test_is_file_record():
    assert isFileRecord(file_record("c.v"))
    assert not isFileRecord({})
    assert not isFileRecord(None)
    assert not isFileRecord(["filename", "language", "code"])
