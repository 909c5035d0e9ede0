"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from chirpy.repositories.base import BaseRepository, parse_sort_tokens
from chirpy.repositories.chirp import ChirpRepository
from chirpy.repositories.refresh_token import RefreshTokenRepository
from chirpy.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "parse_sort_tokens",
    # Domain
    "ChirpRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
