# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any

from argbind.bound import BoundFlagRefBase, bind
from argbind.opt import Opt
from argbind.result import ParserResultType, Result


class Help(Opt):
    """The ``-h``/``-?``/``--help`` flag.

    Sets the caller's flag (or calls the callback) and then stops the
    whole parse with ``SHORT_CIRCUIT_ALL``, so that no required
    argument errors are reported when only help was asked for.
    """

    def __init__(self, target: Any, attr: str | None = None) -> None:
        self._show_help = bind(target, attr, flag=True)
        super().__init__(self._on_help, names=("-?", "-h", "--help"))
        self.help("Display usage information.")

    def _on_help(self, flag: bool) -> Result:
        assert isinstance(self._show_help, BoundFlagRefBase)
        if not (result := self._show_help.set_flag(flag)):
            return result
        return Result.ok(ParserResultType.SHORT_CIRCUIT_ALL)
