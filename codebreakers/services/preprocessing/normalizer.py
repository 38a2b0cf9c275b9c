import string
from dataclasses import dataclass
from enum import Enum

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class NormalizationMode(str, Enum):
    """Text normalization modes."""

    STRICT = "strict"  # Letters only, uppercase
    PRESERVE_SPACES = "preserve_spaces"  # Letters and spaces


@dataclass
class NormalizedText:
    """Result of text normalization."""

    text: str
    original: str
    alphabet: str
    removed_chars: dict[str, int]
    mode: NormalizationMode


class TextNormalizer:
    """
    Sanitizes raw input before it reaches a cipher.

    Handles:
    - Byte input (decoded as ASCII, undecodable bytes dropped)
    - Non-ASCII character removal
    - ASCII case conversion
    - Non-alphabetic character removal

    STRICT output only ever holds the letters A-Z, which is the
    alphabet every cipher engine assumes.
    """

    ALPHABET = string.ascii_uppercase

    def normalize(
        self,
        text: str | bytes,
        mode: NormalizationMode = NormalizationMode.STRICT,
    ) -> str:
        """
        Normalize text for enciphering or analysis.

        Args:
            text: Input text to normalize
            mode: Normalization mode

        Returns:
            Normalized text string
        """
        result = self.normalize_full(text, mode)
        return result.text

    def normalize_full(
        self,
        text: str | bytes,
        mode: NormalizationMode = NormalizationMode.STRICT,
    ) -> NormalizedText:
        """
        Normalize text and return detailed result.

        Args:
            text: Input text to normalize
            mode: Normalization mode

        Returns:
            NormalizedText with details about the normalization
        """
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="ignore")

        original = text
        removed_chars: dict[str, int] = {}

        # ASCII-only case folding; other characters are filtered out below
        text = text.translate(_ASCII_UPPER)

        if mode == NormalizationMode.PRESERVE_SPACES:
            normalized = self._filter_chars(
                text,
                self.ALPHABET + " ",
                removed_chars,
            )
        else:  # STRICT mode
            normalized = self._filter_chars(
                text,
                self.ALPHABET,
                removed_chars,
            )

        return NormalizedText(
            text=normalized,
            original=original,
            alphabet=self.ALPHABET,
            removed_chars=removed_chars,
            mode=mode,
        )

    def _filter_chars(
        self,
        text: str,
        allowed: str,
        removed_chars: dict[str, int],
    ) -> str:
        """Filter text to only allowed characters, tracking removed ones."""
        result = []
        allowed_set = set(allowed)

        for char in text:
            if char in allowed_set:
                result.append(char)
            else:
                removed_chars[char] = removed_chars.get(char, 0) + 1

        return "".join(result)


def sanitize(text: str | bytes) -> str:
    """Reduce text to uppercase letters A-Z, preserving order."""
    return TextNormalizer().normalize(text)
