# powerwall-reserve - Tesla API Response Models
# -*- coding: utf-8 -*-
"""
 Typed views of the Tesla energy API responses used by powerwall_reserve.

 Each upstream payload is wrapped in {"response": ...}. The from_json
 constructors unwrap it and validate required fields, raising
 MalformedResponse rather than letting missing values through.
"""
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from powerwall_reserve.exceptions import MalformedResponse

BATTERY_RESOURCE_TYPE = "battery"

log = logging.getLogger(__name__)


def unwrap(payload: Any, endpoint: str) -> Any:
    """Return payload['response'] or raise MalformedResponse."""
    if not isinstance(payload, dict) or "response" not in payload:
        log.error(f"Missing 'response' in {endpoint} payload")
        raise MalformedResponse(f"Missing 'response' in {endpoint} payload: {payload!r}")
    return payload["response"]


def _validate(model, data: Any, endpoint: str):
    try:
        return model.model_validate(data)
    except ValidationError as err:
        log.error(f"Invalid {endpoint} payload: {err}")
        raise MalformedResponse(f"Invalid {endpoint} payload: {err}") from err


class AccessToken(BaseModel):
    """OAuth token endpoint result. Only the access token is kept."""
    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)

    @classmethod
    def from_json(cls, payload: Any) -> "AccessToken":
        # Only the access token is passed on so other tokens never reach the logs
        if isinstance(payload, dict):
            payload = {"access_token": payload.get("access_token")}
        return _validate(cls, payload, "token")


class EnergySite(BaseModel):
    """A battery storage installation from the product list."""
    model_config = ConfigDict(extra="ignore")

    energy_site_id: Union[int, str]
    site_name: Optional[str] = None
    resource_type: Optional[str] = None


def battery_sites(payload: Any) -> List[EnergySite]:
    """Filter a /products payload down to battery energy sites.

    Vehicles and other products are dropped before validation since they
    carry no energy_site_id.
    """
    products = unwrap(payload, "products")
    if not isinstance(products, list):
        log.error(f"Expected a list of products, got {type(products).__name__}")
        raise MalformedResponse(f"Expected a list of products, got {type(products).__name__}")
    return [_validate(EnergySite, product, "products")
            for product in products
            if isinstance(product, dict) and product.get("resource_type") == BATTERY_RESOURCE_TYPE]


class SiteStatus(BaseModel):
    """Charge level and current reserve for one site."""
    model_config = ConfigDict(extra="ignore")

    percentage_charged: float
    backup_reserve_percent: int

    @classmethod
    def from_json(cls, payload: Any) -> "SiteStatus":
        return _validate(cls, unwrap(payload, "site_status"), "site_status")


class BackupUpdate(BaseModel):
    """Result of POST /backup. The reserve is only present if echoed."""
    model_config = ConfigDict(extra="ignore")

    backup_reserve_percent: Optional[int] = None
    code: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "BackupUpdate":
        response = unwrap(payload, "backup")
        if response is None:
            response = {}
        return _validate(cls, response, "backup")


class ReserveResult(BaseModel):
    """Summary returned to the caller after a successful update."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    site: Optional[str]
    previous_reserve: int = Field(alias="previousReserve")
    new_reserve: int = Field(alias="newReserve")
    current_charge: float = Field(alias="currentCharge")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
