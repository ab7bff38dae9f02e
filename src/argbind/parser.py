# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Common interface of all parsers and the builder shared by the
primitives that write through a bound reference.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, NamedTuple, Self

from argbind.bound import BoundRef
from argbind.cardinality import Cardinality
from argbind.choices import Choices, make_choices
from argbind.customization import DEFAULT_CUSTOMIZATION, ParserCustomization
from argbind.result import ParseResult, Result
from argbind.tokens import TokenStream


class HelpEntry(NamedTuple):
    usage: str
    description: str


class ParserBase(ABC):
    """A parser consumes tokens from the front of a :class:`TokenStream`.

    :meth:`parse` reports ``NO_MATCH`` with the stream untouched when
    the current token is not for this parser, ``MATCHED`` with the
    stream advanced past what it consumed, ``SHORT_CIRCUIT_ALL`` when
    all further parsing should stop, or an error.
    """

    def validate(self, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> Result:
        return Result.ok()

    @abstractmethod
    def parse(
        self,
        stream: TokenStream,
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
        context_name: str = "",
    ) -> ParseResult: ...

    def parse_args(
        self,
        args: Iterable[str],
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
        context_name: str = "",
    ) -> ParseResult:
        return self.parse(TokenStream.from_args(args, customization), customization, context_name)

    def get_usage_text(self) -> str:
        return ""

    def get_help_text(self) -> list[HelpEntry]:
        return []

    def get_cardinality(self) -> Cardinality:
        return Cardinality.optional()

    def clone(self) -> Self:
        return copy.copy(self)


class BoundParser(ParserBase):
    def __init__(self, ref: BoundRef | None, hint: str = "") -> None:
        self._ref = ref
        self._hint = hint
        self._description = ""
        self._choices: Choices | None = None
        if ref is not None and ref.is_container():
            self._cardinality = Cardinality.zero_or_more()
        else:
            self._cardinality = Cardinality.optional()

    @property
    def ref(self) -> BoundRef | None:
        return self._ref

    @property
    def description(self) -> str:
        return self._description

    @property
    def hint_text(self) -> str:
        return self._hint

    def help(self, text: str) -> Self:
        self._description = text
        return self

    def hint(self, text: str) -> Self:
        self._hint = text
        return self

    def required(self, n: int = 1) -> Self:
        maximum = self._cardinality.maximum
        if maximum is not None and maximum < n:
            maximum = n
        self._cardinality = Cardinality(n, maximum)
        return self

    def optional(self) -> Self:
        self._cardinality = Cardinality(0, self._cardinality.maximum)
        return self

    def cardinality(self, minimum: int | Cardinality, maximum: int | None = None) -> Self:
        """Sets how often this parser may match. ``maximum=None`` is
        unbounded.
        """
        if isinstance(minimum, Cardinality):
            self._cardinality = minimum
        else:
            self._cardinality = Cardinality(minimum, maximum)
        return self

    def choices(self, *values: Any) -> Self:
        self._choices = make_choices(*values)
        return self

    def get_cardinality(self) -> Cardinality:
        return self._cardinality

    def validate(self, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> Result:
        if self._ref is None:
            return Result.logic_error("Parser has no bound reference")
        if not self._cardinality.is_valid():
            return Result.logic_error(f"Invalid cardinality {self._cardinality}")
        return Result.ok()

    def _check_choices(self, text: str) -> Result:
        if self._choices is None:
            return Result.ok()
        return self._choices.contains_value(text)
