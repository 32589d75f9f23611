"""Query string of a dispatched target.

The Router strips ``?...`` from the target before matching, so the
query never influences which route wins. What is left is parsed once
into a ``Query`` and handed to the RequestBuilder on ``RouteInfo.query``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class Query(Mapping[str, str]):
    """Read-only view of ``key=value`` pairs, in the order they appeared.

    Mapping access returns the first value for a key; ``get_list``
    returns every value of a repeated key::

        q = Query("page=2&tag=a&tag=b")
        q["tag"]            # 'a'
        q.get_list("tag")   # ('a', 'b')
    """

    __slots__ = ("_pairs", "_raw")

    _pairs: tuple[tuple[str, str], ...]
    _raw: str

    def __init__(self, query_string: str = "", *, keep_blank_values: bool = True) -> None:
        pairs = parse_qsl(query_string, keep_blank_values=keep_blank_values)
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_pairs", tuple(pairs))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Query is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len({name for name, _ in self._pairs})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Query):
            return self.as_dict(multi=True) == other.as_dict(multi=True)
        return super().__eq__(other)

    def __repr__(self) -> str:
        return f"Query({self.as_dict()!r})"

    @property
    def raw(self) -> str:
        """The query string as received, without the leading ``?``."""
        return self._raw

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        return self._pairs

    def get_list(self, key: str) -> tuple[str, ...]:
        return tuple(value for name, value in self._pairs if name == key)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return the first value of *key* as an int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def as_dict(self, *, multi: bool = False) -> dict[str, str] | dict[str, tuple[str, ...]]:
        """First value per key, or with *multi* every value per key."""
        if multi:
            return {key: self.get_list(key) for key in self}
        return {key: self[key] for key in self}
