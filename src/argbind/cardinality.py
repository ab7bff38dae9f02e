# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cardinality:
    """How often a parser may (``maximum``) and must (``minimum``) match
    across one command line. ``maximum=None`` means unbounded.
    """

    minimum: int = 0
    maximum: int | None = 1

    @classmethod
    def exactly(cls, n: int) -> Cardinality:
        return cls(n, n)

    @classmethod
    def optional(cls) -> Cardinality:
        return cls(0, 1)

    @classmethod
    def zero_or_more(cls) -> Cardinality:
        return cls(0, None)

    @classmethod
    def one_or_more(cls) -> Cardinality:
        return cls(1, None)

    def is_valid(self) -> bool:
        if self.minimum < 0:
            return False
        return self.maximum is None or self.minimum <= self.maximum

    def is_required(self) -> bool:
        return self.minimum >= 1

    def is_unbounded(self) -> bool:
        return self.maximum is None or self.maximum > self.minimum

    def allows_more(self, count: int) -> bool:
        return self.maximum is None or count < self.maximum

    def __str__(self) -> str:
        maximum = "*" if self.maximum is None else str(self.maximum)
        return f"{self.minimum}..{maximum}"
