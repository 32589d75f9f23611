"""Typed path parameters and their converters.

Each parameter kind maps to a regex fragment and a decoder. The matcher
only accepts text the fragment allows, so decoding never fails.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload
from urllib.parse import unquote


def _split_paths(value: str) -> tuple[str, ...]:
    return tuple(part for part in value.split("/") if part)


# kind -> (regex_pattern, decoder)
CONVERTERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "int": (r"[0-9]+", int),
    "str": (r".+", str),
    "paths": (r".+", _split_paths),
}


@dataclass(frozen=True, slots=True)
class ParamInt:
    name: str
    value: int


@dataclass(frozen=True, slots=True)
class ParamStr:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ParamPaths:
    name: str
    value: tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence, store a tuple so equality and hashing hold
        if not isinstance(self.value, tuple):
            object.__setattr__(self, "value", tuple(self.value))


type Param = ParamInt | ParamStr | ParamPaths

_PARAM_TYPES: dict[str, type] = {"int": ParamInt, "str": ParamStr, "paths": ParamPaths}


def make_param(name: str, kind: str, raw: str, *, unquote_values: bool = False) -> Param:
    """Decode *raw* according to *kind* and wrap it in the matching Param.

    With *unquote_values*, string values and tail pieces are
    percent-decoded after splitting, so ``%2F`` never adds a piece.

    Raises ``KeyError`` if *kind* is not a registered converter.
    """
    _, decode = CONVERTERS[kind]
    value = decode(raw)
    if unquote_values:
        if kind == "str":
            value = unquote(value)
        elif kind == "paths":
            value = tuple(unquote(piece) for piece in value)
    return _PARAM_TYPES[kind](name, value)


class Params(Sequence[Param]):
    """Immutable, ordered parameters extracted from one matched path.

    Positional access yields ``Param`` objects in declaration order;
    string keys look values up by parameter name::

        params[0]        # ParamInt("id", 22)
        params["id"]     # 22
        params.get_int("id")
    """

    __slots__ = ("_items",)

    _items: tuple[Param, ...]

    def __init__(self, items: Iterable[Param] = ()) -> None:
        object.__setattr__(self, "_items", tuple(items))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Params is immutable"
        raise AttributeError(msg)

    @overload
    def __getitem__(self, key: int) -> Param: ...
    @overload
    def __getitem__(self, key: slice) -> Params: ...
    @overload
    def __getitem__(self, key: str) -> Any: ...

    def __getitem__(self, key: int | slice | str) -> Any:
        if isinstance(key, str):
            for item in self._items:
                if item.name == key:
                    return item.value
            raise KeyError(key)
        if isinstance(key, slice):
            return Params(self._items[key])
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            return any(item.name == key for item in self._items)
        return key in self._items

    def __iter__(self) -> Iterator[Param]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Params({list(self._items)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self._items)

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of *name*, or *default* if missing."""
        try:
            return self[name]
        except KeyError:
            return default

    def get_int(self, name: str, default: int | None = None) -> int | None:
        """Return the value of an integer parameter, or *default*."""
        return self._typed(name, ParamInt, default)

    def get_str(self, name: str, default: str | None = None) -> str | None:
        """Return the value of a string parameter, or *default*."""
        return self._typed(name, ParamStr, default)

    def get_paths(self, name: str, default: tuple[str, ...] | None = None) -> tuple[str, ...] | None:
        """Return the pieces of a tail parameter, or *default*."""
        return self._typed(name, ParamPaths, default)

    def as_dict(self) -> dict[str, Any]:
        return {item.name: item.value for item in self._items}

    def _typed(self, name: str, param_type: type, default: Any) -> Any:
        for item in self._items:
            if item.name == name and isinstance(item, param_type):
                return item.value
        return default
