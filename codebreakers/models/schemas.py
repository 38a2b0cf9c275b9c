from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    POLYALPHABETIC = "polyalphabetic"
    TRANSPOSITION = "transposition"


class CipherType(str, Enum):
    """Specific cipher types."""

    VIGENERE = "vigenere"
    AUTOKEY = "autokey"
    COLUMNAR = "columnar"


# ============================================================================
# Frequency Schemas
# ============================================================================


class LetterCount(BaseModel):
    """Occurrences of a single letter."""

    letter: str = Field(min_length=1, max_length=1)
    count: int = Field(ge=1)


class DigramCount(BaseModel):
    """Occurrences of an adjacent letter pair."""

    digram: str = Field(min_length=2, max_length=2)
    count: int = Field(ge=1)


# ============================================================================
# Request Schemas
# ============================================================================


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | dict[str, Any] | None = None


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | dict[str, Any]


class FrequencyRequest(BaseModel):
    """Request schema for /frequency endpoint."""

    text: str = Field(min_length=1, max_length=100_000)
    include_digrams: bool = False


# ============================================================================
# Response Schemas
# ============================================================================


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    formatted: str
    cipher_type: CipherType
    key_used: str | dict[str, Any]


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    formatted: str
    key_used: str | dict[str, Any]
    explanation: str


class FrequencyResponse(BaseModel):
    """Response schema for /frequency endpoint."""

    length: int
    letters: list[LetterCount]
    digrams: list[DigramCount] = Field(default_factory=list)


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
