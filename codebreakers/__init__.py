"""Historical manual ciphers and simple cryptanalysis aids."""

__version__ = "0.1.0"
