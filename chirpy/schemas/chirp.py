"""Chirp resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class ChirpCreateSchema(Schema):
    """Payload for posting a chirp. Length is enforced by the content policy."""

    class Meta:
        unknown = EXCLUDE

    body = fields.String(required=True)


class ChirpListQuerySchema(Schema):
    """Supported query parameters for listing chirps."""

    class Meta:
        unknown = EXCLUDE

    author_id = fields.UUID(load_default=None)
    sort = fields.String(load_default="asc", validate=validate.OneOf(["asc", "desc"]))


class ChirpSchema(Schema):
    """Public representation of a chirp."""

    id = fields.UUID(required=True)
    body = fields.String(required=True)
    user_id = fields.UUID(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
