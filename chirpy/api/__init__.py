"""Blueprint registration for the JSON API, the operator surface and the file server."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, e.g. ``"/api"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``. Empty relative
        prefixes mount the blueprint at the base itself.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask) -> None:
    """Register every blueprint on the Flask app."""

    from chirpy.api.admin import bp as admin_bp
    from chirpy.api.fileserver import bp as fileserver_bp
    from chirpy.api.routes import REGISTRY

    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=REGISTRY
    )
    register_blueprint_group(
        app,
        base_prefix=app.config.get("ADMIN_PREFIX", "/admin"),
        entries=[(admin_bp, "")],
    )
    register_blueprint_group(
        app,
        base_prefix=app.config.get("FILESERVER_PREFIX", "/app"),
        entries=[(fileserver_bp, "")],
    )


__all__ = ["init_app", "register_blueprint_group"]
