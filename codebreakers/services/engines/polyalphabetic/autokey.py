import logging
import random
from typing import Any, ClassVar

from codebreakers.models.schemas import CipherFamily, CipherType
from codebreakers.services.engines.base import CipherEngine, DecryptionResult
from codebreakers.services.engines.polyalphabetic.shifts import ALPHABET, add_letters
from codebreakers.services.engines.registry import EngineRegistry
from codebreakers.services.preprocessing.normalizer import TextNormalizer

logger = logging.getLogger(__name__)


def encipher(primer: str, plaintext: str) -> str:
    """
    Encipher with the key stream ``primer + plaintext``.

    An empty primer leaves the text unchanged.
    """
    if not primer:
        return plaintext
    key_stream = (primer + plaintext)[:len(plaintext)]
    return add_letters(plaintext, key_stream)


def decipher(primer: str, ciphertext: str) -> str:
    """
    Decipher by rebuilding the key stream from recovered plaintext.

    An empty primer leaves the text unchanged.
    """
    if not primer:
        return ciphertext

    key_stream = list(primer)
    result = []

    for idx, char in enumerate(ciphertext):
        shift = ALPHABET.index(key_stream[idx])
        plain_char = ALPHABET[(ALPHABET.index(char) - shift) % 26]
        result.append(plain_char)
        key_stream.append(plain_char)

    return "".join(result)


@EngineRegistry.register
class AutokeyEngine(CipherEngine):
    """
    Autokey cipher engine.

    The Autokey cipher is a variant of Vigenère where the key is extended
    using the plaintext itself. After the initial keyword, subsequent key
    characters come from the plaintext being encrypted.

    This makes the effective key as long as the message, eliminating
    the periodic weakness of standard Vigenère.
    """

    name = "Autokey Cipher"
    cipher_type = CipherType.AUTOKEY
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where the key is extended using the plaintext. "
        "After the initial primer/keyword, the plaintext letters become the key. "
        "Stronger than Vigenère due to non-repeating key."
    )

    ALPHABET: ClassVar[str] = ALPHABET

    def __init__(self) -> None:
        self.normalizer = TextNormalizer()

    def decrypt_with_key(
        self,
        ciphertext: str | bytes,
        key: str | dict[str, Any],
    ) -> DecryptionResult:
        """Decrypt with a known primer."""
        key_str = self._parse_key(key)
        letters = self.normalizer.normalize(ciphertext)

        logger.debug("Deciphering %d letters with a %d-letter primer", len(letters), len(key_str))
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
        """Encrypt using the primer."""
        key_str = self._parse_key(key)
        letters = self.normalizer.normalize(plaintext)

        logger.debug("Enciphering %d letters with a %d-letter primer", len(letters), len(key_str))
        return encipher(key_str, letters)

    def generate_random_key(self) -> str:
        """Generate a random primer."""
        length = random.randint(1, 5)
        return "".join(random.choice(self.ALPHABET) for _ in range(length))

    def validate_key(self, key: str | dict[str, Any]) -> bool:
        """Validate that the primer has at least one letter."""
        return len(self._parse_key(key)) > 0

    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: str | dict[str, Any],
    ) -> str:
        """Generate human-readable explanation."""
        key_str = self._parse_key(key)

        return (
            f"Autokey cipher with primer '{key_str}'. "
            f"The key starts with the primer, then uses plaintext letters. "
            f"Full key: {key_str + plaintext[:10]}... "
            f"This eliminates the periodic weakness of standard Vigenère."
        )

    def _parse_key(self, key: str | dict[str, Any]) -> str:
        """Parse key to a sanitized primer."""
        if isinstance(key, dict):
            key = key.get("key", key.get("primer", ""))
        return self.normalizer.normalize(str(key))
