"""Tests for liveness and health endpoints."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import app


class TestRootAndHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        if hasattr(app.state, 'mongo_client'):
            del app.state.mongo_client

    def test_root_is_live(self):
        response = self.client.get('/')

        assert response.status_code == 200
        assert 'Server is live' in response.json()['message']

    def test_health_ok_when_mongo_answers(self):
        app.state.mongo_client = MagicMock()

        response = self.client.get('/health')

        assert response.status_code == 200
        assert response.json()['services']['mongodb']['status'] == 'healthy'

    def test_health_degraded_when_ping_fails(self):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError('timeout')
        app.state.mongo_client = client

        response = self.client.get('/health')

        assert response.status_code == 503
        assert response.json()['status'] == 'degraded'

    def test_health_degraded_without_client(self):
        response = self.client.get('/health')

        assert response.status_code == 503


if __name__ == '__main__':
    unittest.main()
