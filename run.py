#!/usr/bin/env python3
"""
Entry point for the Bets Gateway.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development or production (default: development)
    PORT: Port to listen on (default: 9999)
    MATCH_SVC, PLAYER_SVC, CHAMPIONSHIP_SVC: upstream endpoint URLs
"""
import logging

from bets_gateway.app import create_app

logger = logging.getLogger('bets_gateway.run')


def run_gateway():
    """
    Run the gateway until terminated.

    When the port cannot be bound, werkzeug reports it and exits with status 1.
    """
    app = create_app()
    host = app.config['HOST']
    port = app.config['PORT']

    logger.info(f"Starting Bets Gateway on {host}:{port}...")
    try:
        app.run(host=host, port=port, debug=app.config.get('DEBUG', False),
                use_reloader=False, threaded=True)
    finally:
        app.upstream.close()


if __name__ == '__main__':
    run_gateway()
