# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import os
from typing import Self

from pydantic import BaseModel, ConfigDict, field_validator


class ParserCustomization(BaseModel):
    """Syntactic knobs shared by the tokenizer and the option parsers.

    ``option_prefix`` lists the characters that mark a word as an
    option (``-`` for POSIX style, ``/`` for DOS style, or both).
    ``token_delimiters`` lists the characters that separate an option
    from an attached value, as in ``--output=file``.
    """

    model_config = ConfigDict(frozen=True)

    option_prefix: str = "-"
    token_delimiters: str = "="

    @field_validator("option_prefix")
    def non_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("option prefix must not be empty")
        return v

    def is_prefix_char(self, c: str) -> bool:
        return c != "" and c in self.option_prefix

    @classmethod
    def from_env(cls) -> Self:
        values = {}
        if (s := os.getenv("ARGBIND_OPTION_PREFIX")) is not None:
            values["option_prefix"] = s
        if (s := os.getenv("ARGBIND_TOKEN_DELIMITERS")) is not None:
            values["token_delimiters"] = s
        return cls.model_validate(values)


DEFAULT_CUSTOMIZATION = ParserCustomization()
