"""Authentication module for Accounts Core.

This module provides the credential and token lifecycle:
- Password policy and Argon2id hashing (password)
- JWT signing, decoding and introspection (token)
- Login, refresh and JWT confirmation (service.AuthService)
- The @auth_required decorator for protected endpoints
- Pydantic request/response schemas

Auth endpoints (top-level routes):
- POST /auth/login - Exchange email + password for a token pair
- POST /auth/verify - Check a bearer token
- POST /auth/refresh - Exchange a refresh token for a new pair
"""

from . import password, schemas, token

__all__ = ["password", "schemas", "token"]
