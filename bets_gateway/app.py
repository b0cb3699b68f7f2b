import logging
import os
import time

from flask import Flask, request, jsonify, g
from werkzeug.exceptions import HTTPException

from .aggregator import BetAggregator
from .config import config
from .logging_config import configure_logging
from .models import HealthStatus
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)


def create_app(config_name: str = None, **overrides) -> Flask:
    """Application factory for the bets gateway."""
    start = time.monotonic()
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])
    static_folder = overrides.get('STATIC_FOLDER', config_class.STATIC_FOLDER)

    app = Flask(__name__,
                static_url_path='/static',
                static_folder=os.path.abspath(static_folder) if static_folder else None)
    app.config.from_object(config_class)
    app.config.update(overrides)
    app.json.sort_keys = False

    configure_logging(app.config['LOG_LEVEL'])

    # Shared for the lifetime of the process
    client = UpstreamClient(
        connect_timeout=app.config['UPSTREAM_CONNECT_TIMEOUT'],
        read_timeout=app.config['UPSTREAM_READ_TIMEOUT'],
    )
    app.upstream = client
    app.aggregator = BetAggregator.from_config(client, app.config)

    register_request_logging(app)
    register_error_handlers(app)
    register_routes(app)

    from .routes import bets
    app.register_blueprint(bets.bp)

    elapsed = time.monotonic() - start
    logger.debug(f"Bets app initialized in {elapsed * 1000:.1f}ms")
    return app


def register_routes(app: Flask):

    @app.route('/health')
    def health_check():
        """Health check endpoint. Does not depend on upstream services."""
        return jsonify(HealthStatus().to_dict())


def register_request_logging(app: Flask):

    @app.before_request
    def log_request():
        g.request_started = time.monotonic()
        logger.debug(
            f">>> {request.method} {request.full_path.rstrip('?')} "
            f"headers={dict(request.headers)}"
        )

    @app.after_request
    def log_response(response):
        started = g.get('request_started', time.monotonic())
        latency_ms = (time.monotonic() - started) * 1000
        logger.debug(
            f"<<< {request.method} {request.full_path.rstrip('?')} "
            f"{response.status_code} in {latency_ms:.1f}ms "
            f"headers={dict(response.headers)}"
        )
        return response


def register_error_handlers(app: Flask):

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code is None or e.code < 400:
            return e
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({'error': 'Internal server error'}), 500
