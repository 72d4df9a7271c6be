import json
from unittest.mock import MagicMock

import pytest

from powerwall_reserve.config import TeslaConfig
from powerwall_reserve.teslaapi import TESLA_API_URL, TESLA_AUTH_URL

SITE_ID = 429124
PRODUCTS_URL = f"{TESLA_API_URL}/api/1/products"
STATUS_URL = f"{TESLA_API_URL}/api/1/energy_sites/{SITE_ID}/site_status"
BACKUP_URL = f"{TESLA_API_URL}/api/1/energy_sites/{SITE_ID}/backup"

ENV_VARS = ("TESLA_REFRESH_TOKEN", "TESLA_CLIENT_ID", "TESLA_CLIENT_SECRET",
            "TESLA_API_TIMEOUT", "TESLA_VERIFY_RESERVE", "LOG_LEVEL")


def make_response(status_code=200, payload=None, text=None, reason="OK"):
    """Mock requests.Response with the attributes the client reads."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    if payload is not None:
        response.json.return_value = payload
        response.text = json.dumps(payload)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    return response


class FakeTesla:
    """Routes session.get/post calls to canned responses by URL."""

    def __init__(self):
        self.token = make_response(payload={"access_token": "access-123", "refresh_token": "refresh-456"})
        self.products = make_response(payload={
            "response": [
                {"id": 100021, "vin": "5YJ3000000NEXUS01", "display_name": "Owned"},
                {"energy_site_id": SITE_ID, "resource_type": "battery", "site_name": "My Home",
                 "percentage_charged": 90},
            ],
            "count": 2,
        })
        self.status = make_response(payload={
            "response": {"resource_type": "battery", "site_name": "My Home",
                         "percentage_charged": 87.5, "backup_reserve_percent": 100}
        })
        self.backup = None
        self.session = MagicMock()
        self.session.post.side_effect = self._post
        self.session.get.side_effect = self._get

    def _post(self, url, **kwargs):
        if url == TESLA_AUTH_URL:
            return self.token
        if url == BACKUP_URL:
            if self.backup is not None:
                return self.backup
            percent = json.loads(kwargs["data"])["backup_reserve_percent"]
            return make_response(payload={"response": {"backup_reserve_percent": percent}})
        raise AssertionError(f"Unexpected POST {url}")

    def _get(self, url, **kwargs):
        if url == PRODUCTS_URL:
            return self.products
        if url == STATUS_URL:
            return self.status
        raise AssertionError(f"Unexpected GET {url}")

    def posts_to(self, url):
        return [c for c in self.session.post.call_args_list if c.args[0] == url]

    def gets_to(self, url):
        return [c for c in self.session.get.call_args_list if c.args[0] == url]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(name="env")
def fixture_env(monkeypatch):
    monkeypatch.setenv("TESLA_REFRESH_TOKEN", "refresh-456")
    monkeypatch.setenv("TESLA_CLIENT_ID", "ownerapi")
    monkeypatch.setenv("TESLA_CLIENT_SECRET", "secret-789")


@pytest.fixture(name="config")
def fixture_config():
    return TeslaConfig(refresh_token="refresh-456", client_id="ownerapi", client_secret="secret-789")


@pytest.fixture(name="tesla")
def fixture_tesla():
    return FakeTesla()
