"""Parsed query string parameters.

Populated onto ``Request.query`` by the query-parameter parsing
middleware. Repeated keys keep every value.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs, urlsplit


class QueryParams(Mapping[str, str]):
    """Read-only query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: str | bytes = "") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string, keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    @classmethod
    def from_url(cls, url: str) -> "QueryParams":
        """Parse the query component of a path-plus-query URL."""
        return cls(urlsplit(url).query)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return value as int, or *default* if missing or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def to_dict(self) -> dict[str, str | list[str]]:
        """Plain dict: single values as ``str``, repeated keys as ``list``."""
        return {key: values[0] if len(values) == 1 else list(values) for key, values in self._data.items()}

    @property
    def raw(self) -> str:
        """The query string this mapping was parsed from."""
        return self._raw
