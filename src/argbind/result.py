# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Outcome types shared by every parser.

Parsing never raises for bad input. Instead each step reports a
:class:`Result` (for validation and value binding) or a
:class:`ParseResult` (for a parse attempt, carrying the advanced
:class:`~argbind.tokens.TokenStream`). ``NO_MATCH`` is not an error:
it is how a parser declines a token so that the caller can try the
next candidate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum, unique
from typing import Self

from argbind.exceptions import ParserLogicError, ParserRuntimeError
from argbind.tokens import TokenStream


@unique
class ParserResultType(Enum):
    MATCHED = "matched"
    NO_MATCH = "no_match"
    #: Stop all further parsing, e.g. after ``--help``.
    SHORT_CIRCUIT_ALL = "short_circuit_all"


@unique
class ErrorCategory(StrEnum):
    LOGIC = "logic_error"
    RUNTIME = "runtime_error"


@dataclass(frozen=True)
class ErrorInfo:
    category: ErrorCategory
    message: str

    def to_exception(self, context_name: str | None = None) -> ParserLogicError | ParserRuntimeError:
        match self.category:
            case ErrorCategory.LOGIC:
                return ParserLogicError(self.message, context_name)
            case ErrorCategory.RUNTIME:
                return ParserRuntimeError(self.message, context_name)


@dataclass(frozen=True)
class Result:
    value: ParserResultType = ParserResultType.MATCHED
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, value: ParserResultType = ParserResultType.MATCHED) -> Self:
        return cls(value)

    @classmethod
    def logic_error(cls, message: str) -> Self:
        return cls(ParserResultType.NO_MATCH, ErrorInfo(ErrorCategory.LOGIC, message))

    @classmethod
    def runtime_error(cls, message: str) -> Self:
        return cls(ParserResultType.NO_MATCH, ErrorInfo(ErrorCategory.RUNTIME, message))

    @property
    def message(self) -> str:
        return self.error.message if self.error is not None else ""

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error.to_exception()

    def __bool__(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ParseResult:
    type: ParserResultType
    stream: TokenStream
    error: ErrorInfo | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.type is ParserResultType.MATCHED:
            raise ValueError("an erroneous parse result cannot be a match")

    @classmethod
    def ok(cls, type_: ParserResultType, stream: TokenStream) -> Self:
        return cls(type_, stream)

    @classmethod
    def from_result(cls, result: Result, stream: TokenStream) -> Self:
        """Wraps a failed :class:`Result` (or a successful one's value)
        together with the stream position it refers to.
        """
        if result.error is not None:
            return cls(ParserResultType.NO_MATCH, stream, result.error)
        return cls(result.value, stream)

    @classmethod
    def runtime_error(cls, stream: TokenStream, message: str) -> Self:
        return cls(
            ParserResultType.NO_MATCH, stream, ErrorInfo(ErrorCategory.RUNTIME, message)
        )

    @property
    def message(self) -> str:
        return self.error.message if self.error is not None else ""

    @property
    def is_logic_error(self) -> bool:
        return self.error is not None and self.error.category is ErrorCategory.LOGIC

    @property
    def is_runtime_error(self) -> bool:
        return self.error is not None and self.error.category is ErrorCategory.RUNTIME

    def raise_for_error(self, context_name: str | None = None) -> None:
        if self.error is not None:
            raise self.error.to_exception(context_name)

    def __bool__(self) -> bool:
        return self.error is None
