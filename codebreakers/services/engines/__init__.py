"""Cipher engines."""
