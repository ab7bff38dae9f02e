# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self, cast

from argbind.bound import BoundFlagRefBase, BoundValueRefBase, bind
from argbind.customization import DEFAULT_CUSTOMIZATION, ParserCustomization
from argbind.log import get_logger
from argbind.parser import BoundParser, HelpEntry
from argbind.result import ParseResult, ParserResultType, Result
from argbind.tokens import TokenStream, TokenType

logger = get_logger(__name__)


def normalize_name(name: str, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> str:
    """Rewrites the prefix of an option name to POSIX style.

    Two leading prefix characters become ``--``, a single one becomes
    ``-``. With ``option_prefix="-/"`` both ``/v`` and ``-v`` normalize
    to ``-v``, while ``-v`` and ``--verbose`` stay distinct.
    """
    if not customization.is_prefix_char(name[:1]):
        return name
    if customization.is_prefix_char(name[1:2]):
        return "--" + name[2:]
    return "-" + name[1:]


class Opt(BoundParser):
    """A named option with one or more spellings.

    Without ``hint`` the option is a flag: its presence is written as
    ``True``. With ``hint`` it takes the following argument token as
    its value.

    .. code-block:: python

        Opt(args, "verbose").name("-v").name("--verbose")
        Opt(args, "output", hint="file").name("-o").help("Output file")
    """

    def __init__(
        self,
        target: Any,
        attr: str | None = None,
        *,
        hint: str | None = None,
        type_: Any | None = None,
        names: Iterable[str] = (),
    ) -> None:
        is_flag = hint is None
        super().__init__(bind(target, attr, flag=is_flag, type_=type_), hint or "")
        self._names: list[str] = list(names)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def name(self, opt_name: str) -> Self:
        self._names.append(opt_name)
        return self

    def __getitem__(self, opt_name: str) -> Self:
        """``opt["--verbose"]`` is shorthand for ``opt.name("--verbose")``."""
        return self.name(opt_name)

    def is_match(
        self, token_name: str, customization: ParserCustomization = DEFAULT_CUSTOMIZATION
    ) -> bool:
        normalized = normalize_name(token_name, customization)
        return any(normalize_name(n, customization) == normalized for n in self._names)

    def get_usage_text(self) -> str:
        return "|".join(self._names)

    def get_help_text(self) -> list[HelpEntry]:
        usage = ", ".join(self._names)
        if self._hint != "":
            usage += f" <{self._hint}>"
        return [HelpEntry(usage, self._description)]

    def validate(self, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> Result:
        if len(self._names) == 0:
            return Result.logic_error("No options supplied to opt")
        for n in self._names:
            if n == "":
                return Result.logic_error("Option name cannot be empty")
            if not customization.is_prefix_char(n[0]):
                prefix = customization.option_prefix
                if prefix == "-":
                    return Result.logic_error("Option name must begin with '-'")
                return Result.logic_error(f"Option name must begin with one of '{prefix}'")
        return super().validate(customization)

    def parse(
        self,
        stream: TokenStream,
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
        context_name: str = "",
    ) -> ParseResult:
        if not (result := self.validate(customization)):
            return ParseResult.from_result(result, stream)

        token = stream.current()
        if token.type is not TokenType.OPTION or not self.is_match(token.name, customization):
            return ParseResult.ok(ParserResultType.NO_MATCH, stream)

        assert self._ref is not None

        if self._ref.is_flag():
            result = cast(BoundFlagRefBase, self._ref).set_flag(True)
            if not result:
                return ParseResult.from_result(result, stream)
            if result.value is ParserResultType.SHORT_CIRCUIT_ALL:
                logger.trace(f"{token.name} short-circuits parsing")
                return ParseResult.ok(ParserResultType.SHORT_CIRCUIT_ALL, stream.advance())
            logger.trace(f"flag {token.name} matched")
            return ParseResult.ok(ParserResultType.MATCHED, stream.advance())

        value_stream = stream.advance()
        arg_token = value_stream.current()
        if arg_token.type is not TokenType.ARGUMENT:
            logger.debug(f"{token.name} is missing its value")
            return ParseResult.runtime_error(
                value_stream, f"Expected argument following {token.name}"
            )

        if not (result := self._check_choices(arg_token.name)):
            logger.debug(f"{token.name}: {result.message}")
            return ParseResult.from_result(result, value_stream)

        result = cast(BoundValueRefBase, self._ref).set_value(arg_token.name)
        if not result:
            return ParseResult.from_result(result, value_stream)
        if result.value is ParserResultType.SHORT_CIRCUIT_ALL:
            logger.trace(f"{token.name} short-circuits parsing")
            return ParseResult.ok(ParserResultType.SHORT_CIRCUIT_ALL, value_stream)

        logger.trace(f"option {token.name} matched {arg_token.name!r}")
        return ParseResult.ok(ParserResultType.MATCHED, value_stream.advance())

    def clone(self) -> Self:
        clone = super().clone()
        clone._names = list(self._names)
        return clone
