# powerwall-reserve - Configuration
# -*- coding: utf-8 -*-
"""
 Tesla credentials and request settings.

 Environment Variables:
    TESLA_REFRESH_TOKEN   - (required) OAuth refresh token for the Tesla account
    TESLA_CLIENT_ID       - (required) Tesla application client id
    TESLA_CLIENT_SECRET   - (required) Tesla application client secret
    TESLA_API_TIMEOUT     - Seconds to wait for each API response (default: 10)
    TESLA_VERIFY_RESERVE  - Check the reserve echoed back by the API (default: yes)

 The settings are read once, when TeslaConfig is created. Nothing else in the
 package looks at the environment.
"""
import logging
from typing import List, Optional

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings

from powerwall_reserve.exceptions import ConfigurationError

log = logging.getLogger(__name__)

API_TIMEOUT = 10  # Time in seconds to wait for Tesla API response


class TeslaConfig(BaseSettings):
    """Credentials and settings for one backup reserve update."""

    refresh_token: Optional[SecretStr] = Field(default=None, alias="TESLA_REFRESH_TOKEN")
    client_id: Optional[SecretStr] = Field(default=None, alias="TESLA_CLIENT_ID")
    client_secret: Optional[SecretStr] = Field(default=None, alias="TESLA_CLIENT_SECRET")
    timeout: float = Field(default=API_TIMEOUT, alias="TESLA_API_TIMEOUT")
    verify: bool = Field(default=True, alias="TESLA_VERIFY_RESERVE")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @classmethod
    def from_env(cls, **overrides) -> "TeslaConfig":
        """Build from environment variables and check the credentials."""
        try:
            config = cls(**overrides)
        except ValidationError as err:
            fields = ", ".join(str(e["loc"][0]) for e in err.errors() if e.get("loc"))
            log.error(f"Invalid Tesla settings: {err}")
            raise ConfigurationError(f"Invalid Tesla settings: {fields or err}") from err
        config.validate_credentials()
        return config

    def missing(self) -> List[str]:
        """Return the environment names of any empty credential."""
        missing = []
        for name in ("refresh_token", "client_id", "client_secret"):
            value = getattr(self, name)
            if value is None or not value.get_secret_value():
                missing.append(type(self).model_fields[name].alias)
        return missing

    def validate_credentials(self):
        missing = self.missing()
        if missing:
            log.error(f"Missing Tesla credentials: {', '.join(missing)}")
            raise ConfigurationError(
                f"Missing Tesla credentials in environment variables: {', '.join(missing)}")
        log.debug("Tesla credentials loaded")
