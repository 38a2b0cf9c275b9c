"""Letter arithmetic shared by the Vigenère family (A=0 .. Z=25)."""

import string

ALPHABET = string.ascii_uppercase


def repeat_key(key: str, length: int) -> str:
    """Cycle or truncate ``key`` so that it is exactly ``length`` letters."""
    if not key:
        return ""
    repeats, extra = divmod(length, len(key))
    return key * repeats + key[:extra]


def add_letters(left: str, right: str) -> str:
    """
    Add two letter sequences position by position, modulo 26.

    Raises:
        ValueError: The sequences differ in length
    """
    if len(left) != len(right):
        raise ValueError(
            f"Cannot add sequences of length {len(left)} and {len(right)}"
        )
    return "".join(
        ALPHABET[(ALPHABET.index(l) + ALPHABET.index(r)) % 26]
        for l, r in zip(left, right)
    )


def subtract_letters(left: str, right: str) -> str:
    """
    Subtract ``right`` from ``left`` position by position, modulo 26.

    Raises:
        ValueError: The sequences differ in length
    """
    if len(left) != len(right):
        raise ValueError(
            f"Cannot subtract sequences of length {len(left)} and {len(right)}"
        )
    return "".join(
        ALPHABET[(ALPHABET.index(l) - ALPHABET.index(r)) % 26]
        for l, r in zip(left, right)
    )
