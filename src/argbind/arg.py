# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, cast

from argbind.bound import BoundValueRefBase, bind
from argbind.customization import DEFAULT_CUSTOMIZATION, ParserCustomization
from argbind.log import get_logger
from argbind.parser import BoundParser, HelpEntry
from argbind.result import ParseResult, ParserResultType, Result
from argbind.tokens import TokenStream, TokenType

logger = get_logger(__name__)


class Arg(BoundParser):
    """A positional argument, i.e. a word without an option prefix.

    Each call to :meth:`parse` consumes at most one argument token,
    whatever its text, and writes it through the bound reference. How
    often it must match overall is enforced by the enclosing
    :class:`~argbind.cli.Cli`.

    ``target``/``attr`` are passed to :func:`~argbind.bound.bind`:

    .. code-block:: python

        Arg(args, "source", hint="src")
        Arg(files, hint="file")           # a list, collects all values
        Arg(lambda n: ..., hint="count")  # a callback
    """

    def __init__(
        self,
        target: Any,
        attr: str | None = None,
        *,
        hint: str = "",
        type_: Any | None = None,
    ) -> None:
        super().__init__(bind(target, attr, type_=type_), hint)

    def get_usage_text(self) -> str:
        if self._hint == "":
            return ""

        c = self._cardinality
        placeholder = f"<{self._hint}>"
        if c.is_required():
            parts = [placeholder] * c.minimum
            if c.is_unbounded():
                parts.append(f"[{placeholder}...]")
            return " ".join(parts)
        if c.is_unbounded():
            return f"[{placeholder}...]"
        return ""

    def get_help_text(self) -> list[HelpEntry]:
        return [HelpEntry(self.get_usage_text(), self._description)]

    def parse(
        self,
        stream: TokenStream,
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
        context_name: str = "",
    ) -> ParseResult:
        if not (result := self.validate(customization)):
            return ParseResult.from_result(result, stream)

        token = stream.current()
        if token.type is not TokenType.ARGUMENT:
            return ParseResult.ok(ParserResultType.NO_MATCH, stream)

        if not (result := self._check_choices(token.name)):
            logger.debug(f"{self._hint or 'argument'}: {result.message}")
            return ParseResult.from_result(result, stream)

        ref = cast(BoundValueRefBase, self._ref)
        if not (result := ref.set_value(token.name)):
            return ParseResult.from_result(result, stream)

        logger.trace(f"argument <{self._hint}> matched {token.name!r}")
        return ParseResult.ok(ParserResultType.MATCHED, stream.advance())

    def validate(self, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> Result:
        if self._ref is not None and self._ref.is_flag():
            return Result.logic_error("Positional argument cannot be bound to a flag")
        return super().validate(customization)
