"""
auth/models.py -- Domain dataclass for the credential store.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in employees/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or employees/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered identity that can log in and receive tokens.

    Users are created on registration and never mutated or deleted.
    hashed_password is a bcrypt hash; the plaintext is never stored.
    """

    username: str
    hashed_password: str
    id: int | None = None
    created_at: str | None = None  # ISO 8601, set by store on insert
