# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Text to typed value conversion.

Command line words are converted through a pydantic ``TypeAdapter`` for
the destination type, so anything pydantic can validate from a string
(numbers, enums, paths, literals, optionals of these) can be bound.
Integers accept plain decimals (leading zeros included) as well as base
prefixes (``0x10``), and booleans the usual yes/no spellings. The same
rules apply to ``int | None`` and ``bool | None``.
"""

import types
from functools import lru_cache
from typing import Any, Union, get_args, get_origin

from pydantic import TypeAdapter

from argbind.exceptions import ConversionError
from argbind.utils import auto_int, strtobool


@lru_cache(maxsize=128)
def _cached_adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _adapter(type_: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(type_)
    except TypeError:
        # unhashable type expressions
        return TypeAdapter(type_)


def _strip_optional(type_: Any) -> Any:
    if get_origin(type_) not in (Union, types.UnionType):
        return type_
    args = [a for a in get_args(type_) if a is not type(None)]
    if len(args) == 1:
        return args[0]
    return type_


def convert(text: str, type_: Any = str) -> Any:
    if type_ is str or type_ is Any:
        return text

    target = _strip_optional(type_)
    try:
        if target is int:
            return auto_int(text)
        if target is bool:
            return strtobool(text)
        return _adapter(type_).validate_python(text)
    except ValueError as e:  # includes pydantic.ValidationError
        raise ConversionError(text, type_, str(e)) from e
