"""Payment provider webhook schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

USER_UPGRADED = "user.upgraded"


class PolkaDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(load_default=None)


class PolkaWebhookSchema(Schema):
    """Event envelope sent by Polka. Only ``user.upgraded`` is acted on."""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(PolkaDataSchema, load_default=dict)
