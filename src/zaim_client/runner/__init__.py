"""
CLI runner module.

Provides commands:
- init: Write a default config file
- authorize: OAuth handshake
- verify, money, categories, genres, accounts, currencies: Print API data
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
