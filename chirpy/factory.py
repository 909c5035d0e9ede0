"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from chirpy.core.config import BaseConfig, check_secrets, get_config
from chirpy.core.logger import configure_logging, init_app as init_logging
from chirpy.core.metrics import HitCounter


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    hit_counter: HitCounter | None = None,
    adapters=None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object, class or import path; defaults to the class
        selected by ``APP_ENV``.
    :param hit_counter: Counter to own; a fresh one is created when omitted.
    :param adapters: Pre-built :class:`chirpy.infra.Adapters` (hasher, token
        codec, refresh token store); built from config when omitted.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)
    check_secrets(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy
    from chirpy.core import proxy

    proxy.init_app(app)

    from chirpy.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from chirpy.core import metrics

    metrics.init_app(app, hit_counter)

    from chirpy import infra

    infra.init_app(app, adapters)

    from chirpy.core import cors

    cors.init_app(app)

    from chirpy.api import init_app as init_api

    init_api(app)

    from chirpy.core import errors

    errors.init_app(app)

    return app
