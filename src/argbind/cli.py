# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Composition of parsers into a complete command line.

:class:`Cli` repeatedly offers the remaining tokens to its parsers, in
the order they were added, until every token has been consumed. Each
parser's cardinality bounds how often it may match, and its minimum is
checked once the tokens are exhausted.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import Self

from argbind import exitcodes
from argbind.customization import DEFAULT_CUSTOMIZATION, ParserCustomization
from argbind.log import get_logger
from argbind.opt import Opt
from argbind.parser import HelpEntry, ParserBase
from argbind.result import ErrorCategory, ParseResult, ParserResultType, Result
from argbind.tokens import TokenStream

logger = get_logger(__name__)


class Cli(ParserBase):
    def __init__(self, prog: str = "", description: str = "") -> None:
        self.prog = prog
        self.description = description
        self._parsers: list[ParserBase] = []

    @property
    def parsers(self) -> tuple[ParserBase, ...]:
        return tuple(self._parsers)

    def add(self, parser: ParserBase) -> Self:
        self._parsers.append(parser)
        return self

    def __or__(self, parser: ParserBase) -> Cli:
        return self.clone().add(parser)

    def __ior__(self, parser: ParserBase) -> Self:
        return self.add(parser)

    def validate(self, customization: ParserCustomization = DEFAULT_CUSTOMIZATION) -> Result:
        for p in self._parsers:
            if not (result := p.validate(customization)):
                return result
        return Result.ok()

    def parse(
        self,
        stream: TokenStream,
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
        context_name: str = "",
    ) -> ParseResult:
        if not (result := self.validate(customization)):
            logger.debug(f"invalid parser configuration: {result.message}")
            return ParseResult.from_result(result, stream)

        counts = [0] * len(self._parsers)
        remaining = stream

        while remaining:
            for i, p in enumerate(self._parsers):
                if not p.get_cardinality().allows_more(counts[i]):
                    continue

                parse_result = p.parse(remaining, customization, context_name)
                if parse_result.error is not None:
                    logger.debug(f"parse failed: {parse_result.message}")
                    return parse_result
                if parse_result.type is ParserResultType.SHORT_CIRCUIT_ALL:
                    return parse_result
                if parse_result.type is ParserResultType.MATCHED:
                    remaining = parse_result.stream
                    counts[i] += 1
                    break
            else:
                token = remaining.current()
                logger.debug(f"no parser accepts {token.name!r}")
                return ParseResult.runtime_error(remaining, f"Unrecognized token: {token.name}")

        for p, count in zip(self._parsers, counts):
            if count < p.get_cardinality().minimum:
                return ParseResult.runtime_error(remaining, f"Expected: {p.get_usage_text()}")

        return ParseResult.ok(ParserResultType.MATCHED, remaining)

    def parse_args(
        self,
        args: Iterable[str],
        customization: ParserCustomization | None = None,
        context_name: str = "",
        skip_program_name: bool = False,
    ) -> ParseResult:
        """Tokenizes ``args`` and parses them. With ``skip_program_name``
        the first word (as in ``sys.argv``) is dropped before parsing.
        """
        if customization is None:
            customization = DEFAULT_CUSTOMIZATION

        words = list(args)
        if skip_program_name:
            words = words[1:]

        return self.parse(TokenStream.from_args(words, customization), customization, context_name)

    def get_usage_text(self, prog: str | None = None) -> str:
        """``prog`` overrides the program name given to the constructor."""
        prog = self.prog if prog is None else prog
        parts = [prog] if prog != "" else []
        for p in self._parsers:
            if isinstance(p, Opt):
                text = p.get_usage_text()
                if p.hint_text != "":
                    text += f" <{p.hint_text}>"
                if not p.get_cardinality().is_required():
                    text = f"[{text}]"
            else:
                text = p.get_usage_text()
            if text != "":
                parts.append(text)
        return " ".join(parts)

    def get_help_text(self) -> list[HelpEntry]:
        entries: list[HelpEntry] = []
        for p in self._parsers:
            entries.extend(p.get_help_text())
        return entries

    def format_help(self, prog: str | None = None) -> str:
        out = f"USAGE:\n  {self.get_usage_text(prog)}\n"
        if self.description != "":
            out += f"\n{self.description}\n"

        entries = [e for e in self.get_help_text() if e.usage != ""]
        if len(entries) > 0:
            width = max(len(e.usage) for e in entries)
            out += "\nOPTIONS, ARGUMENTS:\n"
            for e in entries:
                out += f"  {e.usage.ljust(width)}  {e.description}".rstrip() + "\n"
        return out

    def __str__(self) -> str:
        return self.format_help()

    def clone(self) -> Self:
        clone = super().clone()
        clone._parsers = [p.clone() for p in self._parsers]
        return clone


def exit_code(result: ParseResult | Result) -> int:
    """Maps a parse outcome to a ``sys.exit()`` code."""
    if result.error is None:
        return exitcodes.OK
    match result.error.category:
        case ErrorCategory.RUNTIME:
            return exitcodes.USAGE
        case ErrorCategory.LOGIC:
            return exitcodes.SOFTWARE


def parse_or_exit(cli: Cli, args: Sequence[str] | None = None) -> ParseResult:
    """Parses ``args`` (``sys.argv`` by default), printing the message
    and exiting with the matching exit code on error.
    """
    if args is None:
        args = sys.argv

    prog = cli.prog
    if prog == "" and len(args) > 0:
        prog = args[0]

    result = cli.parse_args(args, skip_program_name=True)
    if result.error is not None:
        print(f"{prog}: {result.message}", file=sys.stderr)
        print(cli.format_help(prog), file=sys.stderr, end="")
        sys.exit(exit_code(result))
    return result
