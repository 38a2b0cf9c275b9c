"""Polyalphabetic cipher engines."""

from codebreakers.services.engines.polyalphabetic.vigenere import VigenereEngine
from codebreakers.services.engines.polyalphabetic.autokey import AutokeyEngine

__all__ = [
    "VigenereEngine",
    "AutokeyEngine",
]
