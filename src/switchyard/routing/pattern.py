"""Route path patterns.

A ``PathPattern`` turns a registration path into an anchored regular
expression and extracts named path parameters from request URLs.

Matching always runs against the full request URL, query string
included. Two anchoring modes exist:

- strict (default): ``^(?:SRC)/?(?:\\?.*)?\\Z`` -- an optional trailing
  slash, then an optional query string, then end of input. ``\\Z`` rather
  than ``$``: a trailing newline never matches.
- legacy: ``^SRC/?\\Z|\\?`` -- the historical construction. The bare
  ``\\?`` alternative matches any URL that carries a query string,
  whatever its path. Kept for compatibility with apps that relied on it.
"""

import re
from dataclasses import dataclass

from switchyard.errors import InvalidPatternError
from switchyard.routing.params import CONVERTERS

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::([A-Za-z_][A-Za-z0-9_]*))?\}")
_ANGLE_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")


def expand_placeholders(source: str) -> str:
    """Expand ``{name}`` / ``{name:type}`` and ``(?<name>`` into Python groups.

    Examples::

        "/users/{id:int}"       -> "/users/(?P<id>\\d+)"
        "/users/(?<id>\\d+)"    -> "/users/(?P<id>\\d+)"
    """

    def _replace(match: re.Match[str]) -> str:
        name, param_type = match.group(1), match.group(2) or "str"
        if param_type not in CONVERTERS:
            raise InvalidPatternError(
                source,
                f"unknown converter {param_type!r} for parameter {name!r}",
            )
        regex = CONVERTERS[param_type]
        return f"(?P<{name}>{regex})"

    expanded = _PLACEHOLDER.sub(_replace, source)
    return _ANGLE_NAMED_GROUP.sub("(?P<", expanded)


def anchor(source: str, *, legacy: bool = False) -> str:
    """Wrap an expanded source in the start/trailing-slash/query anchors."""
    if legacy:
        return "^" + source + r"\/?\Z|\?"
    return "^(?:" + source + r")/?(?:\?.*)?\Z"


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled, anchored route path pattern.

    ``source`` is the final regex source and, together with the method,
    forms the route registration key.
    """

    source: str
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, spec: "str | re.Pattern[str] | PathPattern", *, legacy: bool = False) -> "PathPattern":
        """Build a pattern from a path string, a compiled regex, or a pattern.

        Raises ``InvalidPatternError`` for malformed input, so mistakes
        surface at registration time rather than on the first request.
        """
        if isinstance(spec, PathPattern):
            return spec
        if isinstance(spec, re.Pattern):
            return cls(source=spec.pattern, regex=spec)
        if not isinstance(spec, str):
            raise InvalidPatternError(spec, "expected a str or compiled re.Pattern")
        if not spec:
            raise InvalidPatternError(spec, "path must not be empty")

        source = anchor(expand_placeholders(spec), legacy=legacy)
        try:
            regex = re.compile(source)
        except re.error as exc:
            raise InvalidPatternError(spec, str(exc)) from exc
        return cls(source=source, regex=regex)

    @classmethod
    def literal(cls, path: str, *, legacy: bool = False) -> "PathPattern":
        """Build a pattern that matches *path* literally (regex metacharacters escaped)."""
        if not isinstance(path, str) or not path:
            raise InvalidPatternError(path, "literal path must be a non-empty str")
        source = anchor(re.escape(path), legacy=legacy)
        return cls(source=source, regex=re.compile(source))

    @property
    def param_names(self) -> tuple[str, ...]:
        """Names of the capture groups, in pattern order."""
        return tuple(self.regex.groupindex)

    def matches(self, url: str) -> bool:
        """True if *url* (path plus optional query string) matches."""
        return self.regex.search(url) is not None

    def params(self, url: str) -> dict[str, str]:
        """Extract named path parameters from *url*.

        Groups that did not participate in the match are left out. A URL
        that does not match, or a pattern without named groups, yields
        an empty dict.
        """
        match = self.regex.search(url)
        if match is None:
            return {}
        return {name: value for name, value in match.groupdict().items() if value is not None}

    def __str__(self) -> str:
        return self.source
