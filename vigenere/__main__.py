"""
Vigenère Module Entry Point
============================

Allows running the Vigenère CLI via: python -m vigenere
"""

from vigenere.cli import main

if __name__ == "__main__":
    main()
