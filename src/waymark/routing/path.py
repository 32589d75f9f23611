"""Path DSL — immutable route paths built from typed segments.

A path is declared by dividing from ``root``::

    from waymark.routing.path import integer, param, root, tail

    user = root / "user" / integer("id")          # /user/{id:int}
    show = root / "user" / param("name") / "show" # /user/{name}/show
    files = root / "files" / tail("paths")        # /files/{paths:*}

Every ``/`` returns a new ``Path``; nothing is ever mutated. Mistakes
such as a segment after a tail capture raise ``ConfigurationError``
at the line that declares them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from waymark.errors import ConfigurationError

if TYPE_CHECKING:
    from waymark.routing.compiler import CompiledRoute


@dataclass(frozen=True, slots=True)
class Literal:
    """A static segment, matched verbatim: ``/users``."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            msg = "Literal path segments cannot be empty."
            raise ConfigurationError(msg)
        if "/" in self.text:
            msg = (
                f"Literal segment {self.text!r} contains '/'. "
                "Build multi-segment paths with root / 'a/b' instead."
            )
            raise ConfigurationError(msg)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class IntParam:
    """One or more ASCII digits, decoded to ``int``: ``/{id:int}``."""

    name: str

    def __post_init__(self) -> None:
        _check_name(self.name)

    def __str__(self) -> str:
        return f"{{{self.name}:int}}"


@dataclass(frozen=True, slots=True)
class StrParam:
    """Any non-empty text up to the next literal or the end: ``/{name}``."""

    name: str

    def __post_init__(self) -> None:
        _check_name(self.name)

    def __str__(self) -> str:
        return f"{{{self.name}}}"


@dataclass(frozen=True, slots=True)
class TailParam:
    """The rest of the path, split on ``/``: ``/{paths:*}``. Must be last."""

    name: str

    def __post_init__(self) -> None:
        _check_name(self.name)

    def __str__(self) -> str:
        return f"{{{self.name}:*}}"


type Segment = Literal | IntParam | StrParam | TailParam
type ParamSegment = IntParam | StrParam | TailParam

_SEGMENT_TYPES = (Literal, IntParam, StrParam, TailParam)


def _check_name(name: str) -> None:
    if not name:
        msg = "Path parameter names cannot be empty."
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Path:
    """An ordered, immutable sequence of segments.

    ``Path()`` is the root. Use ``/`` to extend it with a string
    literal, a parameter from ``integer()``/``param()``/``tail()``,
    or another ``Path``.
    """

    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for i, seg in enumerate(self.segments):
            if not isinstance(seg, _SEGMENT_TYPES):
                msg = f"Not a path segment: {seg!r}"
                raise ConfigurationError(msg)
            if isinstance(seg, TailParam) and i != len(self.segments) - 1:
                msg = (
                    f"Tail parameter {seg.name!r} must be the last segment of "
                    f"{_render(self.segments)!r}."
                )
                raise ConfigurationError(msg)
            if isinstance(seg, Literal):
                continue
            if seg.name in seen:
                msg = f"Duplicate path parameter {seg.name!r} in {_render(self.segments)!r}."
                raise ConfigurationError(msg)
            seen.add(seg.name)

    def __truediv__(self, other: str | Segment | Path) -> Path:
        if isinstance(other, Path):
            return Path((*self.segments, *other.segments))
        if isinstance(other, str):
            pieces = tuple(Literal(part) for part in other.split("/") if part)
            if not pieces:
                msg = f"Cannot append {other!r}: no path segments in it."
                raise ConfigurationError(msg)
            return Path((*self.segments, *pieces))
        if isinstance(other, _SEGMENT_TYPES):
            return Path((*self.segments, other))
        return NotImplemented

    def __str__(self) -> str:
        return _render(self.segments)

    @property
    def params(self) -> tuple[ParamSegment, ...]:
        """Parameter segments, in declaration order."""
        return tuple(s for s in self.segments if not isinstance(s, Literal))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def compile(self) -> CompiledRoute:
        """Compile to a matcher. Results are cached per distinct path."""
        from waymark.routing.compiler import compile_path

        return compile_path(self)


def _render(segments: tuple[Segment, ...]) -> str:
    return "/" + "/".join(str(s) for s in segments)


root = Path()


def integer(name: str) -> IntParam:
    """Declare an integer path parameter."""
    return IntParam(name)


def param(name: str) -> StrParam:
    """Declare a string path parameter."""
    return StrParam(name)


def tail(name: str) -> TailParam:
    """Declare a tail capture holding the remaining path pieces."""
    return TailParam(name)
