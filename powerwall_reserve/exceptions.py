# powerwall-reserve - Exceptions
# -*- coding: utf-8 -*-
"""
 Exceptions raised while setting the Powerwall backup reserve.

 Every exception is terminal for the current invocation. Nothing in this
 package catches and retries them.
"""
from typing import Optional


class PowerwallReserveError(Exception):
    """Base class for all powerwall_reserve errors"""


class InvalidInput(PowerwallReserveError, ValueError):
    """Requested reserve percentage is missing or out of range"""


class ConfigurationError(PowerwallReserveError):
    """Required Tesla credentials are missing"""


class NoSiteFound(PowerwallReserveError):
    """Account has no battery energy site"""


class TeslaAPIError(PowerwallReserveError):
    def __init__(self, message: str, status_code: Optional[int] = None,
                 reason: Optional[str] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class AuthenticationError(TeslaAPIError):
    pass


class SiteListError(TeslaAPIError):
    pass


class StatusReadError(TeslaAPIError):
    pass


class ReserveUpdateError(TeslaAPIError):
    pass


class ReserveVerificationError(ReserveUpdateError):
    """API echoed a reserve that does not match the requested one"""


class MalformedResponse(TeslaAPIError):
    """Response is missing a required field or has the wrong type"""
