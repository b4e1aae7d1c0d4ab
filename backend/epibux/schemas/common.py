"""Helpers shared by request schemas."""


def is_whole_number(value) -> bool:
    """True for ints and integral floats; bools and strings are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()
