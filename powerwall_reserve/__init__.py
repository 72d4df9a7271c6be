# powerwall-reserve Module
# -*- coding: utf-8 -*-
"""
 Python module to set the Tesla Powerwall backup reserve from a scheduled job

 For more information see README.md

 Features
    * Authenticates with a Tesla refresh token on every run (no token cache)
    * Finds the first battery energy site on the account
    * Logs the current charge level and reserve before the change
    * Sets the backup reserve and checks the value echoed by the API

 Functions
    update_backup_reserve(target_percent, config)  # Set reserve, return ReserveResult
    select_site(sites)                             # Pick the site to update (first battery site)
    validate_reserve(value)                        # Check a reserve percentage (0-100)
    set_debug(toggle, color)                       # Enable verbose logging

 Classes
    TeslaConfig            # Credentials and settings (TESLA_* environment variables)
    TeslaEnergyAPI         # Tesla energy API client
    BackupReserveUpdater   # Runs the update against a TeslaConfig

 Requirements
    This module requires the following modules: requests, pydantic, pydantic-settings, python-dotenv
    pip install requests pydantic pydantic-settings python-dotenv
"""
import logging
import sys

version_tuple = (0, 1, 0)
version = __version__ = '%d.%d.%d' % version_tuple

from powerwall_reserve.config import TeslaConfig
from powerwall_reserve.exceptions import *  # pylint: disable=unused-wildcard-import
from powerwall_reserve.reserve import BackupReserveUpdater, select_site, update_backup_reserve, validate_reserve
from powerwall_reserve.teslaapi import TeslaEnergyAPI

log = logging.getLogger(__name__)
log.debug('%s version %s', __name__, __version__)
log.debug('Python %s on %s', sys.version, sys.platform)


def set_debug(toggle=True, color=True):
    """Enable verbose logging"""
    if toggle:
        if color:
            logging.basicConfig(format='\x1b[31;1m%(levelname)s:%(message)s\x1b[0m', level=logging.DEBUG)
        else:
            logging.basicConfig(format='%(levelname)s:%(message)s', level=logging.DEBUG)
        log.setLevel(logging.DEBUG)
        log.debug("%s [%s]\n" % (__name__, __version__))
    else:
        log.setLevel(logging.NOTSET)
