# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import SimpleNamespace

import pytest

from argbind.bound import (
    BoundContainerRef,
    BoundFlagCallback,
    BoundFlagRef,
    BoundValueCallback,
    BoundValueRef,
    bind,
)
from argbind.result import ErrorCategory, ParserResultType, Result


class Color(StrEnum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Settings:
    count: int = 0
    ratio: float = 1.0
    path: Path | None = None
    color: Color = Color.RED
    name: str = ""
    tags: list[int] = field(default_factory=list)
    limit: int | None = None


def test_bind_shapes() -> None:
    settings = Settings()

    assert isinstance(bind(settings, "count"), BoundValueRef)
    assert isinstance(bind(settings, "count", flag=True), BoundFlagRef)
    assert isinstance(bind(settings, "tags"), BoundContainerRef)
    assert isinstance(bind([]), BoundContainerRef)
    assert isinstance(bind(print, flag=True), BoundFlagCallback)
    assert isinstance(bind(print), BoundValueCallback)

    ref = bind(settings, "name")
    assert bind(ref) is ref


def test_bind_without_attribute() -> None:
    with pytest.raises(TypeError):
        bind(Settings())


@pytest.mark.parametrize(
    "attr,text,expected",
    [
        ("count", "42", 42),
        ("count", "0x10", 16),
        ("count", "08", 8),
        ("count", "-0b11", -3),
        ("ratio", "0.5", 0.5),
        ("path", "/tmp/x", Path("/tmp/x")),
        ("color", "blue", Color.BLUE),
        ("name", "hello world", "hello world"),
    ],
)
def test_value_conversion(attr: str, text: str, expected: object) -> None:
    settings = Settings()
    ref = bind(settings, attr)
    assert isinstance(ref, BoundValueRef)

    assert ref.set_value(text)
    assert getattr(settings, attr) == expected


@pytest.mark.parametrize(
    "attr,text",
    [
        ("count", "many"),
        ("ratio", "half"),
        ("color", "green"),
    ],
)
def test_value_conversion_failure(attr: str, text: str) -> None:
    settings = Settings()
    before = getattr(settings, attr)
    ref = bind(settings, attr)
    assert isinstance(ref, BoundValueRef)

    result = ref.set_value(text)
    assert not result
    assert result.error is not None
    assert result.error.category is ErrorCategory.RUNTIME
    assert result.message == f"Unable to convert '{text}' to destination type"
    assert getattr(settings, attr) == before


@pytest.mark.parametrize("text,expected", [("08", 8), ("0x8", 8), ("12", 12)])
def test_optional_int(text: str, expected: int) -> None:
    settings = Settings()
    ref = bind(settings, "limit")
    assert isinstance(ref, BoundValueRef)

    assert ref.set_value(text)
    assert settings.limit == expected


def test_type_from_current_value() -> None:
    ns = SimpleNamespace(level=3)
    ref = bind(ns, "level")
    assert isinstance(ref, BoundValueRef)
    assert ref.type_ is int

    ref.set_value("7")
    assert ns.level == 7


def test_explicit_type_wins() -> None:
    ns = SimpleNamespace(level="3")
    ref = bind(ns, "level", type_=int)
    assert isinstance(ref, BoundValueRef)

    ref.set_value("7")
    assert ns.level == 7


def test_mapping_target() -> None:
    values: dict[str, object] = {"verbose": False}

    flag = bind(values, "verbose", flag=True)
    assert isinstance(flag, BoundFlagRef)
    flag.set_flag(True)

    value = bind(values, "output")
    assert isinstance(value, BoundValueRef)
    value.set_value("out.txt")

    assert values == {"verbose": True, "output": "out.txt"}


def test_container_collects() -> None:
    settings = Settings()
    ref = bind(settings, "tags")
    assert isinstance(ref, BoundContainerRef)
    assert ref.is_container()
    assert ref.type_ is int

    ref.set_value("1")
    ref.set_value("0x2")
    assert not ref.set_value("three")
    assert settings.tags == [1, 2]


def test_value_callback_uses_annotation() -> None:
    seen: list[int] = []

    def on_value(n: int) -> None:
        seen.append(n)

    ref = bind(on_value)
    assert isinstance(ref, BoundValueCallback)
    assert ref.set_value("5")
    assert not ref.set_value("five")
    assert seen == [5]


def test_flag_callback_short_circuit() -> None:
    calls: list[bool] = []

    def on_flag(flag: bool) -> ParserResultType:
        calls.append(flag)
        return ParserResultType.SHORT_CIRCUIT_ALL

    ref = bind(on_flag, flag=True)
    assert isinstance(ref, BoundFlagCallback)

    result = ref.set_flag(True)
    assert result
    assert result.value is ParserResultType.SHORT_CIRCUIT_ALL
    assert calls == [True]


def test_flag_callback_without_argument() -> None:
    calls: list[str] = []
    ref = bind(lambda: calls.append("called"), flag=True)
    assert isinstance(ref, BoundFlagCallback)

    result = ref.set_flag(True)
    assert result.value is ParserResultType.MATCHED
    assert calls == ["called"]


def test_callback_returning_error() -> None:
    ref = bind(lambda v: Result.runtime_error(f"bad {v}"))
    assert isinstance(ref, BoundValueCallback)

    result = ref.set_value("x")
    assert not result
    assert result.message == "bad x"


def test_container_follows_reassignment() -> None:
    settings = Settings()
    ref = bind(settings, "tags")
    assert isinstance(ref, BoundContainerRef)
    ref.set_value("1")

    old = settings.tags
    settings.tags = []
    ref.set_value("2")

    assert old == [1]
    assert settings.tags == [2]
