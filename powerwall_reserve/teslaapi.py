# powerwall-reserve - Tesla Energy API Client
# -*- coding: utf-8 -*-
"""
 Tesla Energy API Client

 Minimal client for the Tesla owner API calls needed to change the
 Powerwall backup reserve. A fresh access token is requested for every
 client; nothing is cached or written to disk.

 Class:
    TeslaEnergyAPI(config, session) - Tesla energy API client

 Functions:
    get_access_token() - exchange the refresh token for a bearer token
    poll(api, action, data, error) - call the owner API
    get_products() - get raw product list
    get_energy_sites() - get battery energy sites
    get_site_status(site_id) - get charge level and backup reserve
    set_backup_reserve(site_id, percent) - set backup reserve level (percent)

 Tesla API Reference: https://developer.tesla.com/docs/fleet-api
"""
import json
import logging
from typing import Any, List, Optional, Type

import requests

from powerwall_reserve.config import TeslaConfig
from powerwall_reserve.exceptions import (AuthenticationError, MalformedResponse, ReserveUpdateError,
                                          SiteListError, StatusReadError, TeslaAPIError)
from powerwall_reserve.models import AccessToken, BackupUpdate, EnergySite, SiteStatus, battery_sites

# Tesla Energy API endpoints
TESLA_AUTH_URL = "https://auth.tesla.com/oauth2/v3/token"
TESLA_API_URL = "https://owner-api.teslamotors.com"

log = logging.getLogger(__name__)


def is_success(response) -> bool:
    return 200 <= response.status_code < 300


class TeslaEnergyAPI:
    def __init__(self, config: TeslaConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.access_token = ""

    def close(self):
        self.session.close()

    # Exchange refresh token for a bearer token
    def get_access_token(self) -> str:
        data = {
            'grant_type': 'refresh_token',
            'client_id': self.config.client_id.get_secret_value(),
            'refresh_token': self.config.refresh_token.get_secret_value()
        }
        headers = {
            'Content-Type': 'application/json'
        }
        log.debug(f"POST: {TESLA_AUTH_URL} (grant_type=refresh_token)")
        try:
            response = self.session.post(TESLA_AUTH_URL, data=json.dumps(data),
                                         headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as err:
            log.error(f"Auth request to {TESLA_AUTH_URL} failed: {err}")
            raise AuthenticationError(f"Auth failed: {err}") from err
        log.debug(f"  Response Code: {response.status_code}")
        if not is_success(response):
            log.error(f"Auth failed. Response code: {response.status_code} {response.reason}")
            raise AuthenticationError(f"Auth failed: {response.reason}",
                                      status_code=response.status_code,
                                      reason=response.reason, body=response.text)
        token = AccessToken.from_json(self._decode(response))
        self.access_token = token.access_token
        log.info("Access token acquired")
        return self.access_token

    def _decode(self, response) -> Any:
        try:
            return response.json()
        except ValueError as err:
            log.error(f"Invalid JSON response: {response.text!r}")
            raise MalformedResponse(f"Invalid JSON response: {err}",
                                    status_code=response.status_code,
                                    reason=response.reason, body=response.text) from err

    # Call owner API
    def poll(self, api: str, action: str = "GET", data: Optional[dict] = None,
             error: Type[TeslaAPIError] = TeslaAPIError, what: str = "call Tesla API") -> Any:
        if not self.access_token:
            self.get_access_token()
        url = f"{TESLA_API_URL}/{api}"
        headers = {
            "Authorization": "Bearer " + self.access_token
        }
        try:
            if action == "POST":
                headers["Content-Type"] = "application/json"
                headers["Accept"] = "application/json"
                log.debug(f"POST: {url} {json.dumps(data)}")
                response = self.session.post(url, headers=headers,
                                             data=json.dumps(data), timeout=self.timeout)
            else:
                log.debug(f"GET: {url}")
                response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as err:
            log.error(f"Request to {url} failed: {err}")
            raise error(f"Failed to {what}: {err}") from err
        log.debug(f"  Response Code: {response.status_code}")
        if not is_success(response):
            log.error(f"Code {response.status_code} {response.reason}: {response.text}")
            raise error(f"Failed to {what}: {response.reason} - {response.text}",
                        status_code=response.status_code,
                        reason=response.reason, body=response.text)
        return self._decode(response)

    def get_products(self) -> Any:
        # Get list of Tesla products assigned to user
        """
        {
            "response": [
                {"id": 100021, "vin": "5YJ3000000NEXUS01", "display_name": "Owned", ...},
                {
                    "energy_site_id": 429124,
                    "resource_type": "battery",
                    "site_name": "My Home",
                    "percentage_charged": 90,
                    ...
                }
            ],
            "count": 2
        }
        """
        return self.poll("api/1/products", error=SiteListError, what="get products")

    def get_energy_sites(self) -> List[EnergySite]:
        sites = battery_sites(self.get_products())
        log.debug(f"get_energy_sites: found {len(sites)} battery site(s)")
        return sites

    def get_site_status(self, site_id) -> SiteStatus:
        # Get site status
        """
        {
            'response': {
                'resource_type': 'battery',
                'site_name': 'Tesla Energy Gateway',
                'percentage_charged': 46.6731017783813,
                'backup_reserve_percent': 20,
                ...
            }
        }
        """
        payload = self.poll(f"api/1/energy_sites/{site_id}/site_status",
                            error=StatusReadError, what="get site status")
        log.debug(f"get_site_status: {payload}")
        return SiteStatus.from_json(payload)

    def set_backup_reserve(self, site_id, percent: int) -> BackupUpdate:
        """ Set battery reserve level (percent) """
        data = {"backup_reserve_percent": percent}
        payload = self.poll(f"api/1/energy_sites/{site_id}/backup", "POST", data,
                            error=ReserveUpdateError, what="set backup reserve")
        log.info(f"Successfully set backup reserve to {percent}%")
        log.debug(f"set_backup_reserve: {payload}")
        return BackupUpdate.from_json(payload)
