# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, get_type_hints


def auto_int(arg: str) -> int:
    """Parses decimal (leading zeros allowed) or base prefixed (``0x``, ``0o``, ``0b``) integers."""
    try:
        return int(arg)
    except ValueError:
        return int(arg, 0)


def strtobool(val: str) -> bool:
    val = val.lower()
    match val:
        case "y" | "yes" | "t" | "true" | "on" | "1":
            return True
        case "n" | "no" | "f" | "false" | "off" | "0":
            return False
        case _:
            raise ValueError(f"invalid truth value {val!r}")


def first_param_type(fn: Callable[..., Any], default: Any = str) -> Any:
    """Returns the annotated type of the first parameter of ``fn``,
    or ``default`` if there is none (or it cannot be resolved).
    """
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return default

    if len(params) == 0:
        return default

    try:
        hints = get_type_hints(fn)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to the raw annotation.
        hints = {}

    annotation = hints.get(params[0].name, params[0].annotation)
    if annotation is inspect.Parameter.empty or isinstance(annotation, str):
        return default
    return annotation


def takes_argument(fn: Callable[..., Any]) -> bool:
    """Checks whether ``fn`` can be called with a single positional argument."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return True

    try:
        sig.bind(None)
    except TypeError:
        return False
    return True
