# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import atexit

from flask import Flask
from flask_cors import CORS

from authserver.infrastructure.container import Container
from authserver.infrastructure.db import init_db
from authserver.interfaces.http.routing import RouteTable, register_routes
from authserver.shared.config import AppConfig, load_config
from authserver.shared.logging import logger, setup_logging
from authserver.shared.middleware.error_handler import configure_error_handling
from authserver.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(config.log_level, debug_mode=config.debug_logging)
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions["authserver.container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {"origins": config.security.allowed_origins}
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    routes = RouteTable(container.auth_controller.routes())
    register_routes(
        app,
        routes,
        container.authenticator,
        default_version=config.api.default_version,
    )
    app.register_blueprint(container.misc_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized with {len(routes)} versioned routes")
    return app


def main() -> None:
    app = create_app()
    atexit.register(app.extensions["authserver.container"].close)
    app.run(host="0.0.0.0", port=3000, debug=False)


if __name__ == "__main__":
    main()
