"""Accounts Core: user registration, login, and JWT issuance backend."""

__version__ = "0.1.0"
