import logging
import random
from typing import Any, ClassVar

from codebreakers.models.schemas import CipherFamily, CipherType
from codebreakers.services.engines.base import CipherEngine, DecryptionResult
from codebreakers.services.engines.polyalphabetic.shifts import (
    ALPHABET,
    add_letters,
    repeat_key,
    subtract_letters,
)
from codebreakers.services.engines.registry import EngineRegistry
from codebreakers.services.preprocessing.normalizer import TextNormalizer

logger = logging.getLogger(__name__)


def encipher(key: str, plaintext: str) -> str:
    """C = P + K with the key repeated over the text. An empty key is a no-op."""
    if not key:
        return plaintext
    return add_letters(plaintext, repeat_key(key, len(plaintext)))


def decipher(key: str, ciphertext: str) -> str:
    """P = C - K with the key repeated over the text. An empty key is a no-op."""
    if not key:
        return ciphertext
    return subtract_letters(ciphertext, repeat_key(key, len(ciphertext)))


@EngineRegistry.register
class VigenereEngine(CipherEngine):
    """
    Vigenère cipher engine.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. Each letter of the keyword represents a
    different Caesar shift applied in sequence.
    """

    name = "Vigenère Cipher"
    cipher_type = CipherType.VIGENERE
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )

    ALPHABET: ClassVar[str] = ALPHABET

    def __init__(self) -> None:
        self.normalizer = TextNormalizer()

    def decrypt_with_key(
        self,
        ciphertext: str | bytes,
        key: str | dict[str, Any],
    ) -> DecryptionResult:
        """Decrypt with a known keyword."""
        key_str = self._parse_key(key)
        letters = self.normalizer.normalize(ciphertext)

        logger.debug("Deciphering %d letters with a %d-letter key", len(letters), len(key_str))
        plaintext = decipher(key_str, letters)

        return DecryptionResult(
            plaintext=plaintext,
            key=key_str,
            explanation=self.explain(letters, plaintext, key_str),
        )

    def encrypt(
        self,
        plaintext: str | bytes,
        key: str | dict[str, Any],
    ) -> str:
        """Encrypt using the keyword."""
        key_str = self._parse_key(key)
        letters = self.normalizer.normalize(plaintext)

        logger.debug("Enciphering %d letters with a %d-letter key", len(letters), len(key_str))
        return encipher(key_str, letters)

    def generate_random_key(self) -> str:
        """Generate a random keyword."""
        length = random.randint(4, 10)
        return "".join(random.choice(self.ALPHABET) for _ in range(length))

    def validate_key(self, key: str | dict[str, Any]) -> bool:
        """Validate that key has at least one letter."""
        return len(self._parse_key(key)) > 0

    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: str | dict[str, Any],
    ) -> str:
        """Generate human-readable explanation."""
        key_str = self._parse_key(key)

        if not key_str:
            return "Vigenère cipher with an empty keyword: the text is left unchanged."

        shift_desc = ", ".join(f"{c}={self.ALPHABET.index(c)}" for c in key_str)

        return (
            f"Vigenère cipher with keyword '{key_str}' (length {len(key_str)}). "
            f"Letter shifts: {shift_desc}. "
            f"Each letter of the ciphertext is shifted back by the corresponding "
            f"key letter's position in the alphabet."
        )

    def _parse_key(self, key: str | dict[str, Any]) -> str:
        """Parse key to a sanitized keyword."""
        if isinstance(key, dict):
            key = key.get("key", key.get("keyword", ""))
        return self.normalizer.normalize(str(key))
