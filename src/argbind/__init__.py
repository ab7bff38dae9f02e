# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Composable command line parsing.

Positional arguments (:class:`Arg`) and named options (:class:`Opt`)
match tokens of a :class:`TokenStream` and write what they parsed into
storage owned by the caller. :class:`Cli` combines them into a complete
command line.
"""

from argbind.arg import Arg
from argbind.bound import (
    BoundAttrContainerRef,
    BoundContainerRef,
    BoundFlagCallback,
    BoundFlagRef,
    BoundRef,
    BoundValueCallback,
    BoundValueRef,
    bind,
)
from argbind.cardinality import Cardinality
from argbind.choices import Choices, ChoicesCheck, ChoicesSet
from argbind.cli import Cli, exit_code, parse_or_exit
from argbind.customization import ParserCustomization
from argbind.exceptions import ArgbindError, ParserLogicError, ParserRuntimeError
from argbind.help import Help
from argbind.opt import Opt, normalize_name
from argbind.parser import HelpEntry, ParserBase
from argbind.result import ErrorCategory, ErrorInfo, ParseResult, ParserResultType, Result
from argbind.tokens import Token, TokenStream, TokenType, tokenize

__all__ = (
    "ArgbindError",
    "Arg",
    "BoundAttrContainerRef",
    "BoundContainerRef",
    "BoundFlagCallback",
    "BoundFlagRef",
    "BoundRef",
    "BoundValueCallback",
    "BoundValueRef",
    "Cardinality",
    "Choices",
    "ChoicesCheck",
    "ChoicesSet",
    "Cli",
    "ErrorCategory",
    "ErrorInfo",
    "Help",
    "HelpEntry",
    "Opt",
    "ParseResult",
    "ParserBase",
    "ParserCustomization",
    "ParserLogicError",
    "ParserResultType",
    "ParserRuntimeError",
    "Result",
    "Token",
    "TokenStream",
    "TokenType",
    "bind",
    "exit_code",
    "normalize_name",
    "parse_or_exit",
    "tokenize",
)
