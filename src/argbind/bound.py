# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Write targets for parsed values.

A bound reference connects a parser to storage owned by the caller: an
attribute of an object (or a key of a mapping), a list that collects
repeated values, or a callback. Parsers share their reference with
their clones, so all clones write to the same place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, MutableMapping, MutableSequence
from typing import Any, get_args, get_origin, get_type_hints

from argbind.convert import convert
from argbind.exceptions import ConversionError
from argbind.log import get_logger
from argbind.result import ParserResultType, Result
from argbind.utils import first_param_type, takes_argument

logger = get_logger(__name__)


class BoundRef(ABC):
    def is_flag(self) -> bool:
        return False

    def is_container(self) -> bool:
        return False


class BoundFlagRefBase(BoundRef):
    def is_flag(self) -> bool:
        return True

    @abstractmethod
    def set_flag(self, flag: bool) -> Result: ...


class BoundValueRefBase(BoundRef):
    type_: Any = str

    @abstractmethod
    def set_value(self, text: str) -> Result: ...

    def _convert(self, text: str) -> Any:
        return convert(text, self.type_)


def _assign(target: Any, attr: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[attr] = value
    else:
        setattr(target, attr, value)


def _current(target: Any, attr: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(attr)
    return getattr(target, attr, None)


def _declared_type(target: Any, attr: str) -> Any | None:
    if isinstance(target, Mapping):
        return None
    try:
        hints = get_type_hints(type(target))
    except (NameError, TypeError):
        return None
    return hints.get(attr)


def _infer_type(target: Any, attr: str) -> Any:
    if (declared := _declared_type(target, attr)) is not None:
        return declared
    if (current := _current(target, attr)) is not None:
        return type(current)
    return str


def _callback_result(ret: Any) -> Result:
    if isinstance(ret, Result):
        return ret
    if isinstance(ret, ParserResultType):
        return Result.ok(ret)
    return Result.ok()


class BoundFlagRef(BoundFlagRefBase):
    def __init__(self, target: Any, attr: str) -> None:
        self.target = target
        self.attr = attr

    def set_flag(self, flag: bool) -> Result:
        logger.trace(f"setting flag {self.attr} to {flag}")
        _assign(self.target, self.attr, flag)
        return Result.ok()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attr!r})"


class BoundValueRef(BoundValueRefBase):
    def __init__(self, target: Any, attr: str, type_: Any | None = None) -> None:
        self.target = target
        self.attr = attr
        self.type_ = type_ if type_ is not None else _infer_type(target, attr)

    def set_value(self, text: str) -> Result:
        try:
            value = self._convert(text)
        except ConversionError as e:
            logger.debug(f"{self.attr}: {e.reason}")
            return Result.runtime_error(str(e))

        logger.trace(f"setting {self.attr} to {value!r}")
        _assign(self.target, self.attr, value)
        return Result.ok()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attr!r}, {self.type_!r})"


class BoundContainerRef(BoundValueRefBase):
    def __init__(self, container: MutableSequence[Any], type_: Any | None = None) -> None:
        self._container = container
        self.type_ = type_ if type_ is not None else str

    @property
    def container(self) -> MutableSequence[Any]:
        return self._container

    def is_container(self) -> bool:
        return True

    def set_value(self, text: str) -> Result:
        try:
            value = self._convert(text)
        except ConversionError as e:
            logger.debug(f"container value: {e.reason}")
            return Result.runtime_error(str(e))

        self.container.append(value)
        return Result.ok()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_!r})"


class BoundAttrContainerRef(BoundContainerRef):
    """Appends to the list held by ``target.attr`` at the time of each
    match, so reassigning the attribute redirects later values.
    """

    def __init__(self, target: Any, attr: str, type_: Any | None = None) -> None:
        self.target = target
        self.attr = attr
        self.type_ = type_ if type_ is not None else str

    @property
    def container(self) -> MutableSequence[Any]:
        current = _current(self.target, self.attr)
        if not isinstance(current, MutableSequence):
            current = []
            _assign(self.target, self.attr, current)
        return current

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attr!r}, {self.type_!r})"


class BoundFlagCallback(BoundFlagRefBase):
    """Calls ``fn(True)`` (or ``fn()``, if it takes no argument) when the
    flag is present. Returning :attr:`ParserResultType.SHORT_CIRCUIT_ALL`
    from ``fn`` stops the whole parse.
    """

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn = fn
        self._with_argument = takes_argument(fn)

    def set_flag(self, flag: bool) -> Result:
        ret = self.fn(flag) if self._with_argument else self.fn()
        return _callback_result(ret)


class BoundValueCallback(BoundValueRefBase):
    """Converts the value to the annotated type of the first parameter
    of ``fn`` (``str`` if unannotated) and calls ``fn`` with it.
    """

    def __init__(self, fn: Callable[[Any], Any], type_: Any | None = None) -> None:
        self.fn = fn
        self.type_ = type_ if type_ is not None else first_param_type(fn)

    def set_value(self, text: str) -> Result:
        try:
            value = self._convert(text)
        except ConversionError as e:
            logger.debug(f"callback value: {e.reason}")
            return Result.runtime_error(str(e))

        return _callback_result(self.fn(value))


def bind(
    target: Any,
    attr: str | None = None,
    *,
    flag: bool = False,
    type_: Any | None = None,
) -> BoundRef:
    """Creates the bound reference matching ``target``.

    * an existing :class:`BoundRef` is returned as is
    * a callable becomes a callback
    * a list (without ``attr``) collects every matched value
    * ``target`` plus ``attr`` writes to that attribute, or to that key
      if ``target`` is a mapping; if the attribute currently holds a
      list, values are appended to whatever list the attribute holds
      when the value is matched

    ``flag`` selects a flag reference (presence only) over a value
    reference (consumes text).
    """
    if isinstance(target, BoundRef):
        return target

    if attr is None:
        if callable(target):
            return BoundFlagCallback(target) if flag else BoundValueCallback(target, type_)
        if isinstance(target, MutableSequence) and not flag:
            return BoundContainerRef(target, type_)
        raise TypeError(f"cannot bind to {target!r} without an attribute name")

    if flag:
        return BoundFlagRef(target, attr)

    current = _current(target, attr)
    if isinstance(current, MutableSequence):
        item_type = type_
        if item_type is None:
            declared = _declared_type(target, attr)
            args = get_args(declared) if get_origin(declared) is not None else ()
            item_type = args[0] if len(args) > 0 else str
        return BoundAttrContainerRef(target, attr, item_type)

    return BoundValueRef(target, attr, type_)
