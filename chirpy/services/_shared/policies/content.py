"""Chirp body rules: length limit and profanity masking."""

from __future__ import annotations

from chirpy.models.chirp import MAX_BODY_LENGTH
from chirpy.services._shared.errors import ValidationError, ValidationReason

BANNED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(body: str, *, max_length: int = MAX_BODY_LENGTH) -> str:
    """
    Validate and sanitize a chirp body.

    Length is counted in characters. Words are split on single spaces only,
    so ``"Kerfuffle!"`` stays untouched while ``"KERFUFFLE"`` is masked.

    :param body: Raw body submitted by the author.
    :type body: str
    :returns: Body with banned words replaced by ``****``.
    :rtype: str
    :raises ValidationError: ``TOO_LONG`` if ``body`` exceeds ``max_length``.
    """
    if len(body) > max_length:
        raise ValidationError(ValidationReason.TOO_LONG, "Chirp is too long")
    words = body.split(" ")
    return " ".join(MASK if word.lower() in BANNED_WORDS else word for word in words)
