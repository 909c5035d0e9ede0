"""Static file server; every request bumps the hit counter."""

from __future__ import annotations

import os

from flask import Blueprint, current_app, send_from_directory

from chirpy.core.metrics import get_hit_counter

bp = Blueprint("fileserver", __name__)


@bp.before_request
def _count_hit() -> None:
    get_hit_counter().increment()


@bp.get("/", defaults={"filename": "index.html"})
@bp.get("/<path:filename>")
def serve(filename: str):
    """Serve ``filename`` from ``FILESERVER_ROOT`` (relative to the working directory)."""

    root = os.path.abspath(current_app.config.get("FILESERVER_ROOT", "."))
    return send_from_directory(root, filename)
