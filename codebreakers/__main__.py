"""Allows running the command-line interface via: python -m codebreakers"""

from codebreakers.cli import main

if __name__ == "__main__":
    main()
