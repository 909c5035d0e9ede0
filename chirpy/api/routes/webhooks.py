"""Payment provider (Polka) webhook."""

from __future__ import annotations

import hmac
import logging

from flask import Blueprint, current_app, request
from marshmallow import ValidationError

from chirpy.api.deps import auth_guard, identity_service, no_content, timing
from chirpy.core.errors import Unauthorized
from chirpy.core.logger import log_auth_event
from chirpy.schemas import USER_UPGRADED, PolkaWebhookSchema

log = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

webhook_schema = PolkaWebhookSchema()


@bp.post("/webhooks")
@timing
def polka_webhook():
    """Upgrade a user to Chirpy Red when Polka reports a completed payment.

    Events other than ``user.upgraded`` are acknowledged and ignored.
    """

    api_key = auth_guard().extract_api_key(request.headers)
    expected = current_app.config.get("POLKA_KEY") or ""
    if not expected or not hmac.compare_digest(api_key.encode(), expected.encode()):
        log_auth_event(log, "webhook_bad_api_key")
        raise Unauthorized()

    payload = webhook_schema.load(request.get_json(silent=True) or {})
    if payload["event"] != USER_UPGRADED:
        return no_content()

    user_id = payload["data"].get("user_id")
    if user_id is None:
        raise ValidationError({"data": {"user_id": ["Missing data for required field."]}})

    identity_service().upgrade_to_red(user_id)
    return no_content()
