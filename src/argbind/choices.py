# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from argbind.convert import convert
from argbind.exceptions import ConversionError
from argbind.result import Result
from argbind.utils import first_param_type


class Choices(ABC):
    """Restricts the text a parser accepts, checked before anything is
    written through the parser's bound reference.
    """

    @abstractmethod
    def contains_value(self, text: str) -> Result: ...

    @staticmethod
    def _rejected(text: str, detail: str = "") -> Result:
        return Result.runtime_error(f"Value '{text}' not expected.{detail}")


class ChoicesSet(Choices):
    """Allow-list of values. The text is converted to the type of the
    allowed values before comparing, so ``ChoicesSet([1, 2])`` accepts
    ``"2"`` and ``"0x2"``.
    """

    def __init__(self, values: Iterable[Any]) -> None:
        self.values = tuple(values)
        if len(self.values) == 0:
            raise ValueError("choices must not be empty")
        self.type_ = type(self.values[0])

    def contains_value(self, text: str) -> Result:
        try:
            value = convert(text, self.type_)
        except ConversionError:
            value = None
        if value is not None and value in self.values:
            return Result.ok()

        allowed = ", ".join(str(v) for v in self.values)
        return self._rejected(text, f" Allowed values are: {allowed}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.values)!r})"


class ChoicesCheck(Choices):
    """Predicate over the value, converted to the type the predicate's
    first parameter is annotated with.
    """

    def __init__(self, predicate: Callable[[Any], bool]) -> None:
        self.predicate = predicate
        self.type_ = first_param_type(predicate)

    def contains_value(self, text: str) -> Result:
        try:
            value = convert(text, self.type_)
        except ConversionError:
            return self._rejected(text)
        if self.predicate(value):
            return Result.ok()
        return self._rejected(text)


def make_choices(*values: Any) -> Choices:
    """``make_choices(pred)`` for a single callable, otherwise an
    allow-list of ``values``.
    """
    if len(values) == 1 and isinstance(values[0], Choices):
        return values[0]
    if len(values) == 1 and isinstance(values[0], type) and issubclass(values[0], Enum):
        return ChoicesSet(values[0])
    if len(values) == 1 and callable(values[0]):
        return ChoicesCheck(values[0])
    return ChoicesSet(values)
