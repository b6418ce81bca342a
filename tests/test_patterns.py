from __future__ import annotations

import dataclasses
import re

import pytest

from rexjson.patterns import NamedPattern


def _pattern(source: str) -> NamedPattern:
    return NamedPattern(pattern=re.compile(source))


def test_group_names_in_declaration_order() -> None:
    p = _pattern(r"(?P<b>\w+)=(?P<a>\w+) (?P<c>\d+)")
    assert p.group_names == ("b", "a", "c")


def test_unnamed_groups_are_ignored() -> None:
    p = _pattern(r"(\w+) (?P<user>\w+) (\d+)")
    assert p.group_names == ("user",)
    assert p.captures("GET frank 200") == [("user", "frank")]


def test_no_match_returns_empty_list() -> None:
    p = _pattern(r"user=(?P<name>\w+)")
    assert p.captures("nothing here") == []


def test_first_match_only() -> None:
    p = _pattern(r"user=(?P<name>\w+)")
    assert p.captures("user=admin, user=root") == [("name", "admin")]


def test_match_anywhere_in_line() -> None:
    p = _pattern(r"status=(?P<status>\d+)")
    assert p.captures("request failed, status=500") == [("status", "500")]


def test_non_participating_group_reads_as_empty_string() -> None:
    p = _pattern(r"(?:user=(?P<user>\w+)|alias=(?P<alias>\w+))")
    assert p.captures("alias=root") == [("user", ""), ("alias", "root")]


def test_explicit_empty_capture() -> None:
    p = _pattern(r"key=(?P<value>\w*);")
    assert p.captures("key=;") == [("value", "")]


def test_source_is_raw_pattern() -> None:
    assert _pattern(r"(?P<x>.)").source == r"(?P<x>.)"


def test_pattern_is_immutable() -> None:
    p = _pattern(r"(?P<x>.)")
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.group_names = ("y",)  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.pattern = re.compile(r"(?P<y>.)")  # type: ignore[misc]
