"""Case-insensitive HTTP request headers.

Decoded once from the ASGI scope's byte pairs. Names are lower-cased;
when a name repeats, the first value wins.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only request headers keyed by lower-cased name."""

    __slots__ = ("_values",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        values: dict[str, str] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._values = values

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``str -> str`` mapping."""
        return cls(
            tuple((name.encode("latin-1"), value.encode("latin-1")) for name, value in headers.items())
        )

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"
