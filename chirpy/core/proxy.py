"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust ``X-Forwarded-*`` headers when ``USE_PROXYFIX`` is enabled.

    ``PROXYFIX_HOPS`` (default ``1``) sets how many proxies sit in front of
    the app. Client addresses only appear in logs; nothing in the auth flow
    depends on them.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXYFIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
