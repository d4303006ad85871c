"""Validation helpers for keys and values."""

# The characters the C locale treats as whitespace.
_WHITESPACE = frozenset(" \t\n\v\f\r")


def blank_string(s: str) -> bool:
    """Return True if every character of ``s`` is whitespace (True for "")."""
    return all(c in _WHITESPACE for c in s)


def valid_string(s: str) -> bool:
    """Return True if ``s`` is non-empty and not made only of whitespace."""
    return bool(s) and not blank_string(s)