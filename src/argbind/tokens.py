# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Self

from argbind.customization import DEFAULT_CUSTOMIZATION, ParserCustomization


@unique
class TokenType(Enum):
    UNKNOWN = "unknown"
    OPTION = "option"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class Token:
    type: TokenType
    name: str

    def __str__(self) -> str:
        return self.name


#: Returned by :meth:`TokenStream.current` once all tokens are consumed.
EMPTY_TOKEN = Token(TokenType.UNKNOWN, "")


def _split_word(word: str, customization: ParserCustomization) -> Iterator[Token]:
    if not customization.is_prefix_char(word[:1]):
        yield Token(TokenType.ARGUMENT, word)
        return

    # The prefix itself is never a delimiter, so start looking after it.
    for i, c in enumerate(word[1:], start=1):
        if c in customization.token_delimiters:
            yield Token(TokenType.OPTION, word[:i])
            yield Token(TokenType.ARGUMENT, word[i + 1 :])
            return

    yield Token(TokenType.OPTION, word)


def tokenize(
    args: Iterable[str],
    customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
) -> tuple[Token, ...]:
    """Classifies raw command line words into option and argument tokens.

    A word is an option if its first character is one of the configured
    prefix characters. An option word containing a delimiter character
    is split into the option and an argument holding the attached value.
    """
    tokens: list[Token] = []
    for word in args:
        tokens.extend(_split_word(word, customization))
    return tuple(tokens)


@dataclass(frozen=True)
class TokenStream:
    """A forward-only cursor over an immutable token sequence.

    Streams are values: :meth:`advance` returns a new stream and leaves
    the original untouched, so a parser can try a match speculatively
    and simply drop the advanced stream if the attempt fails.
    """

    tokens: tuple[Token, ...] = ()
    position: int = field(default=0)

    @classmethod
    def from_args(
        cls,
        args: Iterable[str],
        customization: ParserCustomization = DEFAULT_CUSTOMIZATION,
    ) -> Self:
        return cls(tokenize(args, customization))

    def current(self) -> Token:
        if self.is_exhausted():
            return EMPTY_TOKEN
        return self.tokens[self.position]

    def advance(self) -> TokenStream:
        if self.is_exhausted():
            return self
        return TokenStream(self.tokens, self.position + 1)

    def is_exhausted(self) -> bool:
        return self.position >= len(self.tokens)

    def remaining(self) -> tuple[Token, ...]:
        return self.tokens[self.position :]

    def __bool__(self) -> bool:
        return not self.is_exhausted()

    def __len__(self) -> int:
        return len(self.tokens) - min(self.position, len(self.tokens))

    def __repr__(self) -> str:
        return f"TokenStream({[t.name for t in self.remaining()]!r}, position={self.position})"
