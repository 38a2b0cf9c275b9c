import string
from collections import Counter
from typing import ClassVar

from codebreakers.services.preprocessing.normalizer import TextNormalizer

Digram = tuple[str, str]


class FrequencyAnalyzer:
    """
    Letter counting for hand cryptanalysis.

    Every method sanitizes its input first, so raw text with spaces,
    punctuation or mixed case can be passed straight in.
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(self) -> None:
        self.normalizer = TextNormalizer()

    def single_letter(self, text: str | bytes) -> Counter[str]:
        """Count each letter that appears in ``text``."""
        return Counter(self.normalizer.normalize(text))

    def digram(self, text: str | bytes) -> Counter[Digram]:
        """Count each adjacent pair of letters in ``text``."""
        letters = self.normalizer.normalize(text)
        return Counter(zip(letters, letters[1:]))

    def render_histogram(self, counts: Counter[str]) -> str:
        """
        Render single-letter counts as one bar per letter.

        Example line: ``"E |||||"``
        """
        return "\n".join(
            f"{letter} {'|' * counts.get(letter, 0)}" for letter in self.ALPHABET
        )

    def render_digram_table(self, counts: Counter[Digram]) -> str:
        """
        Render digram counts as a 26x26 table.

        Each cell reads ``XY(nn)``; absent pairs leave the count blank.
        """
        rows = []
        for left in self.ALPHABET:
            cells = []
            for right in self.ALPHABET:
                count = counts.get((left, right))
                shown = f"{count:2}" if count else "  "
                cells.append(f"{left}{right}({shown})  ")
            rows.append("".join(cells))
        return "\n".join(rows)
