"""
Columnar transposition.

The plaintext is written row by row under the letters of a keyphrase,
then the columns are read out top to bottom in the alphabetical order of
their keyphrase letters. Example with keyphrase "ZEBRAS":

    Keyphrase:  Z E B R A S
    Rank:       5 2 1 3 0 4
                -----------
                W E A R E D
                I S C O V E
                R E D F L E
                E A T O N C
                E

    Ciphertext: EVLN ACDT ESEA ROFO DEEC WIREE

No padding is added, so when the message length is not a multiple of the
key length the columns differ in height. Only the columns under the first
``len(message) % len(key)`` keyphrase positions carry the extra letter,
which is what lets decipherment rebuild the grid.
"""

import logging
import random
import string
from collections import Counter, deque
from operator import itemgetter
from typing import Any, ClassVar

from codebreakers.core.exceptions import InvalidKeyError
from codebreakers.models.schemas import CipherFamily, CipherType
from codebreakers.services.engines.base import CipherEngine, DecryptionResult
from codebreakers.services.engines.registry import EngineRegistry
from codebreakers.services.preprocessing.normalizer import TextNormalizer

logger = logging.getLogger(__name__)


def derive_key(keyphrase: str) -> list[int]:
    """
    Convert a keyphrase into a column ranking.

    ``key[p]`` is the rank of the letter at position ``p`` when the letters
    are sorted alphabetically, ties broken by position. "BAACDD" gives
    ``[2, 0, 1, 3, 4, 5]``.

    Args:
        keyphrase: Uppercase letters A-Z, repeats allowed

    Returns:
        A permutation of ``range(len(keyphrase))``
    """
    values = [ord(letter) - ord("A") for letter in keyphrase]
    occurrences = Counter(values)

    # Rank of each value's first occurrence: every smaller letter,
    # duplicates included, sorts ahead of it.
    first_rank = {}
    preceding = 0
    for value in range(len(string.ascii_uppercase)):
        first_rank[value] = preceding
        preceding += occurrences[value]

    assigned: Counter[int] = Counter()
    key = []
    for value in values:
        key.append(first_rank[value] + assigned[value])
        assigned[value] += 1

    if assigned != occurrences:
        raise RuntimeError(
            f"Key derivation for {keyphrase!r} assigned {dict(assigned)}, "
            f"expected {dict(occurrences)}"
        )

    return key


def column_heights(key: list[int], length: int) -> list[int]:
    """
    Height of every column, indexed by rank, for a message of ``length``.

    A column is one letter taller than the rest when its keyphrase
    position falls inside the partial last row.
    """
    if not key:
        return []

    base, remainder = divmod(length, len(key))
    long_ranks = {key[position] for position in range(remainder)}

    return [base + 1 if rank in long_ranks else base for rank in range(len(key))]


def encipher(key: list[int], plaintext: str) -> str:
    """
    Encipher letters with a derived key.

    Raises:
        InvalidKeyError: The key is empty but the text is not
    """
    _check_key(key, plaintext)
    width = len(key)

    # Tag each letter with its column's rank; the sort is stable, so
    # letters sharing a rank stay in row order.
    tagged = [(key[idx % width], letter) for idx, letter in enumerate(plaintext)]
    tagged.sort(key=itemgetter(0))

    return "".join(letter for _, letter in tagged)


def decipher(key: list[int], ciphertext: str) -> str:
    """
    Decipher letters with a derived key.

    Raises:
        InvalidKeyError: The key is empty but the text is not
    """
    _check_key(key, ciphertext)
    if not ciphertext:
        return ""

    width = len(key)

    columns: list[deque[str]] = []
    cursor = 0
    for height in column_heights(key, len(ciphertext)):
        columns.append(deque(ciphertext[cursor:cursor + height]))
        cursor += height

    # Read the grid back row by row; an exhausted column here means the
    # heights were wrong, so the IndexError is left to propagate.
    return "".join(
        columns[key[idx % width]].popleft() for idx in range(len(ciphertext))
    )


def _check_key(key: list[int], text: str) -> None:
    if not key and text:
        raise InvalidKeyError(
            "Key is empty but the text is not",
            {"text_length": len(text)},
        )


@EngineRegistry.register
class ColumnarEngine(CipherEngine):
    """
    Columnar Transposition cipher engine.

    Accepts either a keyword, whose letters are ranked by ``derive_key``,
    or an explicit 1-indexed column order such as ``"3,1,2"``.
    """

    name = "Columnar Transposition Cipher"
    cipher_type = CipherType.COLUMNAR
    cipher_family = CipherFamily.TRANSPOSITION
    description = (
        "A transposition cipher where plaintext is written into a grid "
        "by rows, then read out by columns in an order determined by "
        "a keyword. The keyword's alphabetical order determines column sequence."
    )

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(self) -> None:
        self.normalizer = TextNormalizer()

    def decrypt_with_key(
        self,
        ciphertext: str | bytes,
        key: str | dict[str, Any],
    ) -> DecryptionResult:
        """Decrypt with a known keyword or column ordering."""
        order, key_display = self._parse_key(key)
        letters = self.normalizer.normalize(ciphertext)

        logger.debug("Deciphering %d letters with %d columns", len(letters), len(order))
        plaintext = decipher(order, letters)

        return DecryptionResult(
            plaintext=plaintext,
            key=key_display,
            explanation=self.explain(letters, plaintext, key_display),
        )

    def encrypt(
        self,
        plaintext: str | bytes,
        key: str | dict[str, Any],
    ) -> str:
        """Encrypt using the keyword or column ordering."""
        order, _ = self._parse_key(key)
        letters = self.normalizer.normalize(plaintext)

        logger.debug("Enciphering %d letters with %d columns", len(letters), len(order))
        return encipher(order, letters)

    def generate_random_key(self) -> str:
        """Generate a random keyword."""
        length = random.randint(4, 8)
        return "".join(random.choice(self.ALPHABET) for _ in range(length))

    def validate_key(self, key: str | dict[str, Any]) -> bool:
        """Validate that key yields at least one column."""
        try:
            order, _ = self._parse_key(key)
        except (InvalidKeyError, TypeError, ValueError):
            return False
        return len(order) >= 1

    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: str | dict[str, Any],
    ) -> str:
        """Generate human-readable explanation."""
        order, key_display = self._parse_key(key)
        ranks = ",".join(str(rank + 1) for rank in order)

        if not order:
            return "Columnar transposition with an empty key: only empty text is accepted."

        if key_display.isalpha():
            return (
                f"Columnar transposition with keyword '{key_display}'. "
                f"Column order: {ranks}. "
                f"The plaintext was written in rows, then columns were "
                f"read in the order determined by sorting the keyword alphabetically."
            )
        return (
            f"Columnar transposition with column order {ranks}. "
            f"The ciphertext was written column by column in this order, "
            f"then read row by row to recover the plaintext."
        )

    def _parse_key(self, key: str | dict[str, Any] | list[int]) -> tuple[list[int], str]:
        """
        Parse key to a 0-indexed ranking plus its display form.

        Raises:
            InvalidKeyError: A numeric order is not a permutation of 1..n
        """
        if isinstance(key, dict):
            key = key.get("key", key.get("keyword", key.get("order", "")))

        if isinstance(key, list):
            return self._order_from_numbers(key)

        key_str = str(key).strip()

        # Numeric ordering like "3,1,2"
        if "," in key_str or key_str[:1].isdigit():
            try:
                numbers = [int(x) for x in key_str.replace(" ", "").split(",")]
            except ValueError:
                raise InvalidKeyError(
                    f"Column order '{key_str}' is not a list of integers",
                    {"key": key_str},
                ) from None
            return self._order_from_numbers(numbers)

        keyword = self.normalizer.normalize(key_str)
        return derive_key(keyword), keyword

    def _order_from_numbers(self, numbers: list[Any]) -> tuple[list[int], str]:
        try:
            order = [int(x) - 1 for x in numbers]
        except (TypeError, ValueError):
            raise InvalidKeyError(
                f"Column order {numbers} is not a list of integers",
                {"order": list(numbers)},
            ) from None
        if sorted(order) != list(range(len(order))):
            raise InvalidKeyError(
                f"Column order {numbers} is not a permutation of 1..{len(numbers)}",
                {"order": list(numbers)},
            )
        return order, ",".join(str(rank + 1) for rank in order)
