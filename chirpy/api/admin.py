"""Operator surface: hit-count page and development reset."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app

from chirpy.api.deps import identity_service, json_response, timing
from chirpy.core.errors import Forbidden
from chirpy.core.metrics import get_hit_counter

log = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/metrics")
def metrics():
    """Render the file-server hit count as HTML."""

    html = METRICS_TEMPLATE.format(hits=get_hit_counter().value())
    return Response(html, status=200, mimetype="text/html")


@bp.post("/reset")
@timing
def reset():
    """Wipe users, chirps and refresh tokens and zero the hit counter.

    Only available when ``PLATFORM`` is ``"dev"``.
    """

    if current_app.config.get("PLATFORM") != "dev":
        log.warning("reset refused: platform=%s", current_app.config.get("PLATFORM"))
        raise Forbidden("Reset is only allowed in dev environment")

    removed = identity_service().reset()
    get_hit_counter().reset()
    return json_response({"data": {"users_removed": removed, "hits": 0}})
