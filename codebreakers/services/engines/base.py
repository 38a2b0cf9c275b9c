from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from codebreakers.models.schemas import CipherFamily, CipherType


@dataclass
class DecryptionResult:
    """Result of a decryption operation."""

    plaintext: str
    key: str | dict[str, Any]
    explanation: str


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    Each cipher implementation must provide:
    - encrypt(): Encrypt plaintext with a known key
    - decrypt_with_key(): Decrypt with a known key
    - generate_random_key(): Produce a usable key
    - validate_key(): Check a key before use
    - explain(): Generate human-readable explanation

    Engines sanitize their text input and return bare letters; grouping
    the output for display is left to the caller.
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    cipher_family: CipherFamily
    description: str

    @abstractmethod
    def decrypt_with_key(
        self,
        ciphertext: str | bytes,
        key: str | dict[str, Any],
    ) -> DecryptionResult:
        """
        Decrypt with a known key.

        Args:
            ciphertext: The ciphertext to decrypt
            key: The decryption key

        Returns:
            DecryptionResult with plaintext and metadata
        """
        pass

    @abstractmethod
    def encrypt(
        self,
        plaintext: str | bytes,
        key: str | dict[str, Any],
    ) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: The plaintext to encrypt
            key: The encryption key

        Returns:
            Ciphertext
        """
        pass

    @abstractmethod
    def generate_random_key(self) -> str | dict[str, Any]:
        """
        Generate a random valid key for this cipher.

        Returns:
            A randomly generated key
        """
        pass

    @abstractmethod
    def validate_key(self, key: str | dict[str, Any]) -> bool:
        """
        Validate that a key is valid for this cipher.

        Args:
            key: The key to validate

        Returns:
            True if key is valid
        """
        pass

    @abstractmethod
    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: str | dict[str, Any],
    ) -> str:
        """
        Generate human-readable explanation of the decryption.

        Args:
            ciphertext: The original ciphertext
            plaintext: The decrypted plaintext
            key: The key used

        Returns:
            Explanation string
        """
        pass
