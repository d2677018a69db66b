"""
ModWatch Text Helpers.

Small formatting helpers used when presenting mod settings to the host.
Requires Python 3.11+.
"""

from decimal import Decimal


def to_proper_case(value: str | None) -> str:
    """
    Turn an identifier like ``maxStackSize`` into ``Max Stack Size``.

    The first character is upper-cased and a space is inserted before
    every following upper-case character.
    """
    if not value:
        return ""
    if len(value) < 2:
        return value

    chars = [value[0].upper()]
    for char in value[1:]:
        if char.isupper():
            chars.append(" ")
        chars.append(char)
    return "".join(chars)


def append_zero(value: str) -> str:
    """Append ``.0`` to a number string that has no decimal point."""
    return value if "." in value else f"{value}.0"


def append_zero_if_float(value: str, value_type: type) -> str:
    """Apply :func:`append_zero` only for floating point setting types."""
    if value_type in (float, Decimal):
        return append_zero(value)
    return value
