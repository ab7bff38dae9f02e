# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations


class ArgbindError(Exception):
    def __init__(self, message: str, context_name: str | None = None):
        self.message = message
        self.context_name = context_name

        super().__init__(message)

    def __str__(self) -> str:
        if self.context_name:
            return f"{self.context_name}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({repr(str(self))})"


class ParserLogicError(ArgbindError):
    """The parser configuration is structurally invalid, e.g. an option
    without any names. Independent of the command line being parsed.
    """


class ParserRuntimeError(ArgbindError):
    """The command line was rejected, e.g. a missing option value or a
    value outside of the allowed choices.
    """


class ConversionError(ValueError):
    def __init__(self, text: str, type_: object, reason: str | None = None):
        self.text = text
        self.type_ = type_
        self.reason = reason

        super().__init__(f"Unable to convert '{text}' to destination type")
