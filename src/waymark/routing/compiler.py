"""Path compiler — turns a Path into an anchored regex plus extractors.

Each parameter segment becomes exactly one capture group, and the
extractor list records ``(name, kind)`` for each group in declaration
order, so matching is a single ``fullmatch`` followed by a positional zip.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any
from urllib.parse import quote

from waymark.errors import ConfigurationError
from waymark.routing.params import CONVERTERS, Params, make_param
from waymark.routing.path import IntParam, Literal, Path, StrParam, TailParam

logger = logging.getLogger("waymark.routing")

_KINDS: dict[type, str] = {IntParam: "int", StrParam: "str", TailParam: "paths"}


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A Path translated into a matcher and ordered parameter extractors.

    ``pattern`` is the regex source, e.g. ``^/user/([0-9]+)$``.
    ``extractors`` is aligned with the capture groups of ``regex``.
    """

    path: Path
    pattern: str
    regex: re.Pattern[str]
    extractors: tuple[tuple[str, str], ...]

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None

    def match(self, path: str, *, unquote_params: bool = False) -> Params | None:
        """Match *path* and extract typed parameters.

        Returns ``None`` when the path does not match; that is the normal
        "this route does not apply" outcome, not an error.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return Params(
            make_param(name, kind, raw, unquote_values=unquote_params)
            for (name, kind), raw in zip(self.extractors, m.groups(), strict=True)
        )

    def format(self, **values: Any) -> str:
        """Build a concrete path from parameter values (reverse routing).

        Tail values may be a string or a sequence of pieces. Values are
        percent-encoded, tail separators excepted.

        Raises ``ConfigurationError`` if a parameter has no value or an
        integer parameter gets a non-integer.
        """
        parts: list[str] = []
        for seg in self.path.segments:
            if isinstance(seg, Literal):
                parts.append(seg.text)
                continue
            if seg.name not in values:
                msg = f"Missing value for path parameter {seg.name!r} of {self.path}."
                raise ConfigurationError(msg)
            value = values[seg.name]
            if isinstance(seg, IntParam):
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    msg = f"Path parameter {seg.name!r} needs a non-negative int, got {value!r}."
                    raise ConfigurationError(msg)
                parts.append(str(value))
            elif isinstance(seg, TailParam):
                pieces = value.split("/") if isinstance(value, str) else value
                parts.append("/".join(quote(str(p), safe="") for p in pieces if p))
            else:
                parts.append(quote(str(value), safe=""))
        return "/" + "/".join(parts)

    def __str__(self) -> str:
        return str(self.path)


@lru_cache(maxsize=None)
def compile_path(path: Path) -> CompiledRoute:
    """Compile *path* into a ``CompiledRoute``.

    Pure and deterministic: the same Path always compiles to a matcher
    with identical behavior.

    Raises ``ConfigurationError`` if a tail capture is not the last segment.
    """
    parts: list[str] = []
    extractors: list[tuple[str, str]] = []
    last = len(path.segments) - 1

    for i, seg in enumerate(path.segments):
        if isinstance(seg, Literal):
            parts.append(re.escape(seg.text))
            continue
        if isinstance(seg, TailParam) and i != last:
            msg = f"Tail parameter {seg.name!r} must be the last segment of {path}."
            raise ConfigurationError(msg)
        kind = _KINDS[type(seg)]
        fragment, _ = CONVERTERS[kind]
        parts.append(f"({fragment})")
        extractors.append((seg.name, kind))

    pattern = "^/" + "/".join(parts) + "$"
    regex = re.compile(pattern)

    # Invariant: one capture group per extractor, in the same order
    if regex.groups != len(extractors):
        msg = f"Path {path} compiled to {regex.groups} groups for {len(extractors)} parameters."
        raise ConfigurationError(msg)

    logger.debug("compiled %s -> %s", path, pattern)
    return CompiledRoute(path=path, pattern=pattern, regex=regex, extractors=tuple(extractors))


def as_compiled(path: "Path | CompiledRoute") -> CompiledRoute:
    if isinstance(path, CompiledRoute):
        return path
    if isinstance(path, Path):
        return compile_path(path)
    msg = f"Expected a Path or CompiledRoute, got {type(path).__name__}."
    raise ConfigurationError(msg)


def split_target(target: str) -> tuple[str, str]:
    """Split a request target into ``(path, query_string)``."""
    path, _, query = target.partition("?")
    path = path.partition("#")[0]
    return path or "/", query.partition("#")[0]
