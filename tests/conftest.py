"""
Pytest configuration and fixtures for bets gateway tests.
"""
import os
import sys
import json
from http import HTTPStatus

import pytest
import requests

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from bets_gateway.app import create_app
from bets_gateway.config import TestingConfig

MATCH_URL = TestingConfig.MATCH_SVC
PLAYER_URL = TestingConfig.PLAYER_SVC
CHAMPIONSHIP_URL = TestingConfig.CHAMPIONSHIP_SVC


def build_response(request, status=200, body=None):
    """Build a real requests.Response for a prepared request."""
    response = requests.Response()
    response.status_code = status
    response.reason = HTTPStatus(status).phrase
    response.url = request.url
    response.request = request
    response.headers['Content-Type'] = 'application/json'
    response._content_consumed = True
    if body is None:
        response._content = b''
    elif isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
    return response


class UpstreamStub:
    """Stands in for the network below requests' HTTP adapter."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, url, status=200, body=None, exc=None):
        self.routes[url] = (status, body, exc)

    def send(self, request, **kwargs):
        self.requests.append(request)
        if request.url not in self.routes:
            raise requests.exceptions.ConnectionError(f"Connection refused: {request.url}")
        status, body, exc = self.routes[request.url]
        if exc is not None:
            raise exc
        return build_response(request, status, body)

    def requests_to(self, url):
        return [r for r in self.requests if r.url == url]


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')
    yield app
    app.upstream.close()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def upstream(mocker):
    """Patch the HTTP adapter so every outbound call hits the stub."""
    stub = UpstreamStub()
    mocker.patch.object(requests.adapters.HTTPAdapter, 'send', side_effect=stub.send)
    return stub


@pytest.fixture
def healthy_upstreams(upstream):
    """All three dependencies answer 200 with valid bodies."""
    upstream.add(MATCH_URL, 200, {'homeTeam': 'A', 'awayTeam': 'B'})
    upstream.add(PLAYER_URL, 200, {'email': 'x@y.com'})
    upstream.add(CHAMPIONSHIP_URL, 200, {'title': 'League'})
    return upstream
