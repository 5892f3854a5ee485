"""Placeholder converters for ``{name:type}`` path segments.

A placeholder expands to a named capture group whose body is the
converter's regex. Captured values stay strings on the request; handlers
convert them through their parameter annotations.
"""

# Capture-group body for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/?]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r"[^?]+",
}
