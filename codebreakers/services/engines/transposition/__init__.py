"""Transposition cipher engines."""

from codebreakers.services.engines.transposition.columnar import ColumnarEngine

__all__ = [
    "ColumnarEngine",
]
