# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from types import SimpleNamespace

import pytest

from argbind.arg import Arg
from argbind.bound import BoundFlagRef
from argbind.cardinality import Cardinality
from argbind.parser import HelpEntry
from argbind.result import ErrorCategory, ParserResultType
from argbind.tokens import TokenStream


def test_matches_argument() -> None:
    ns = SimpleNamespace(source="")
    arg = Arg(ns, "source", hint="src").cardinality(1, 1)

    stream = TokenStream.from_args(["x"])
    result = arg.parse(stream)

    assert result
    assert result.type is ParserResultType.MATCHED
    assert ns.source == "x"
    assert result.stream.is_exhausted()
    assert stream.position == 0


def test_exhausted_stream_is_no_match() -> None:
    ns = SimpleNamespace(source="")
    arg = Arg(ns, "source", hint="src").cardinality(1, 1)

    result = arg.parse(TokenStream.from_args([]))

    assert result
    assert result.type is ParserResultType.NO_MATCH
    assert ns.source == ""


@pytest.mark.parametrize("words", [["-v"], ["--verbose", "x"], ["--out=x"]])
def test_option_token_is_no_match(words: list[str]) -> None:
    ns = SimpleNamespace(source="")
    arg = Arg(ns, "source", hint="src")

    stream = TokenStream.from_args(words)
    result = arg.parse(stream)

    assert result.type is ParserResultType.NO_MATCH
    assert result.stream == stream
    assert ns.source == ""


def test_choices_reject() -> None:
    ns = SimpleNamespace(mode="a")
    arg = Arg(ns, "mode", hint="mode").choices("a", "b")

    stream = TokenStream.from_args(["c"])
    result = arg.parse(stream)

    assert result.is_runtime_error
    assert result.stream == stream
    assert ns.mode == "a"

    result = arg.parse(TokenStream.from_args(["b"]))
    assert result.type is ParserResultType.MATCHED
    assert ns.mode == "b"


def test_conversion_error() -> None:
    ns = SimpleNamespace(count=1)
    arg = Arg(ns, "count", hint="n")

    stream = TokenStream.from_args(["lots"])
    result = arg.parse(stream)

    assert result.is_runtime_error
    assert result.message == "Unable to convert 'lots' to destination type"
    assert result.stream == stream
    assert ns.count == 1


def test_invalid_cardinality_is_logic_error() -> None:
    ns = SimpleNamespace(source="")
    arg = Arg(ns, "source", hint="src").cardinality(2, 1)

    stream = TokenStream.from_args(["x"])
    result = arg.parse(stream)

    assert result.error is not None
    assert result.error.category is ErrorCategory.LOGIC
    assert result.stream == stream
    assert ns.source == ""


def test_flag_reference_is_logic_error() -> None:
    ns = SimpleNamespace(on=False)
    arg = Arg(BoundFlagRef(ns, "on"))

    assert not arg.validate()
    assert arg.parse(TokenStream.from_args(["x"])).is_logic_error


def test_container_default_cardinality() -> None:
    files: list[str] = []
    arg = Arg(files, hint="file")
    assert arg.get_cardinality() == Cardinality.zero_or_more()

    stream = TokenStream.from_args(["a", "b"])
    stream = arg.parse(stream).stream
    stream = arg.parse(stream).stream
    assert files == ["a", "b"]
    assert stream.is_exhausted()


@pytest.mark.parametrize(
    "cardinality,usage",
    [
        (Cardinality.exactly(1), "<file>"),
        (Cardinality.exactly(2), "<file> <file>"),
        (Cardinality.one_or_more(), "<file> [<file>...]"),
        (Cardinality.zero_or_more(), "[<file>...]"),
        (Cardinality.optional(), "[<file>...]"),
        (Cardinality(0, 0), ""),
    ],
)
def test_usage_text(cardinality: Cardinality, usage: str) -> None:
    arg = Arg([], hint="file").cardinality(cardinality).help("Input files")
    assert arg.get_usage_text() == usage
    assert arg.get_help_text() == [HelpEntry(usage, "Input files")]


def test_usage_text_without_hint() -> None:
    assert Arg([]).get_usage_text() == ""


def test_clone_shares_storage() -> None:
    ns = SimpleNamespace(source="")
    arg = Arg(ns, "source", hint="src")
    clone = arg.clone().help("cloned")

    clone.parse(TokenStream.from_args(["from-clone"]))

    assert ns.source == "from-clone"
    assert clone.ref is arg.ref
    assert arg.description == ""
