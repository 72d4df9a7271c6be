# powerwall-reserve - Backup Reserve Update
# -*- coding: utf-8 -*-
"""
 Set the Powerwall backup reserve in one sequential pass:

    authenticate -> list sites -> read status -> set reserve -> report

 Functions:
    validate_reserve(value) - check and normalize a reserve percentage
    select_site(sites) - pick the energy site to update
    update_backup_reserve(target_percent, config) - run the whole update

 Nothing is retried. Any failure ends the update and is raised to the caller.
"""
import logging
import re
from typing import List, Optional

from powerwall_reserve.config import TeslaConfig
from powerwall_reserve.exceptions import InvalidInput, NoSiteFound, ReserveVerificationError
from powerwall_reserve.models import BackupUpdate, EnergySite, ReserveResult
from powerwall_reserve.teslaapi import TeslaEnergyAPI

log = logging.getLogger(__name__)

INTEGER_REGEX = re.compile(r"\s*-?[0-9]+\s*")
MIN_RESERVE = 0
MAX_RESERVE = 100


def validate_reserve(value) -> int:
    """
    Return value as an int percentage or raise InvalidInput.

    Only a missing value (None) counts as absent; 0 is a valid reserve.
    Integer strings such as "20" are accepted.
    """
    if value is None:
        log.error("reservePercent not provided")
        raise InvalidInput("reservePercent not provided")
    if isinstance(value, bool):
        log.error(f"Invalid reserve level: {value!r}")
        raise InvalidInput(f"Invalid reserve level {value!r}, must be an integer")
    if isinstance(value, str) and INTEGER_REGEX.fullmatch(value):
        value = int(value)
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        log.error(f"Invalid reserve level: {value!r}")
        raise InvalidInput(f"Invalid reserve level {value!r}, must be an integer")
    if value < MIN_RESERVE or value > MAX_RESERVE:
        log.error(f"Invalid reserve level: {value}")
        raise InvalidInput(f"Invalid reserve level {value}, must be {MIN_RESERVE}-{MAX_RESERVE}")
    return value


def select_site(sites: List[EnergySite]) -> EnergySite:
    """
    Pick the site to update: always the first battery site returned.

    Accounts with several installations get the first one in the API's
    order. There is no sorting and no way to choose another site.
    """
    if not sites:
        log.error("No Powerwall systems found in account")
        raise NoSiteFound("No Powerwall systems found in account")
    if len(sites) > 1:
        log.warning(f"Found {len(sites)} battery sites, using the first one")
    return sites[0]


def verify_reserve(update: BackupUpdate, requested: int):
    """Check the reserve echoed by the API, when there is one."""
    if update.backup_reserve_percent is None:
        log.debug("API did not echo backup_reserve_percent - not verified")
        return
    log.info(f"New backup reserve: {update.backup_reserve_percent}")
    if update.backup_reserve_percent != requested:
        log.error(f"Backup reserve mismatch: requested {requested}%, "
                  f"API reports {update.backup_reserve_percent}%")
        raise ReserveVerificationError(
            f"Backup reserve not applied: requested {requested}%, "
            f"API reports {update.backup_reserve_percent}%")


class BackupReserveUpdater:
    def __init__(self, config: TeslaConfig, api: Optional[TeslaEnergyAPI] = None):
        config.validate_credentials()
        self.config = config
        self.api = api

    def update_backup_reserve(self, target_percent) -> ReserveResult:
        percent = validate_reserve(target_percent)
        log.info("Starting Powerwall backup reserve update...")
        log.debug(f"Reserve percent requested: {percent}")
        api = self.api or TeslaEnergyAPI(self.config)
        try:
            api.get_access_token()
            site = select_site(api.get_energy_sites())
            log.info(f"Using Powerwall site: {site.site_name} (ID: {site.energy_site_id})")

            status = api.get_site_status(site.energy_site_id)
            log.info(f"Current battery level: {status.percentage_charged}")
            log.info(f"Current backup reserve: {status.backup_reserve_percent}")

            update = api.set_backup_reserve(site.energy_site_id, percent)
            if self.config.verify:
                verify_reserve(update, percent)
        finally:
            if self.api is None:
                api.close()

        result = ReserveResult(
            message=f"Backup reserve set to {percent}%",
            site=site.site_name,
            previous_reserve=status.backup_reserve_percent,
            new_reserve=percent,
            current_charge=status.percentage_charged,
        )
        log.info(f"{result.message} on {site.site_name} (was {status.backup_reserve_percent}%)")
        return result


def update_backup_reserve(target_percent, config: Optional[TeslaConfig] = None) -> ReserveResult:
    """
    Set the backup reserve of the first battery site to target_percent.

    The percentage is checked before credentials so a bad request never
    needs a valid environment. When config is None it is read from the
    environment.
    """
    percent = validate_reserve(target_percent)
    if config is None:
        config = TeslaConfig.from_env()
    return BackupReserveUpdater(config).update_backup_reserve(percent)
