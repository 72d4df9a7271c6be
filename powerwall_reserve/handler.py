# powerwall-reserve - Scheduled Trigger Handler
# -*- coding: utf-8 -*-
"""
 Scheduled trigger entry point.

 Invoke with an event such as {"reservePercent": 100} (e.g. at midnight)
 and {"reservePercent": 20} (e.g. at 6am). Credentials come from the
 TESLA_* environment variables, see powerwall_reserve.config.

 Environment Variables:
    LOG_LEVEL   - Log level for the powerwall_reserve loggers (default: INFO)
"""
import json
import logging
import os
from typing import Any, Dict

from powerwall_reserve.exceptions import InvalidInput
from powerwall_reserve.reserve import update_backup_reserve

LOG_LEVEL = "INFO"

log = logging.getLogger(__name__)


def set_log_level():
    """Apply LOG_LEVEL to the package logger so step lines reach the runtime log."""
    level = os.getenv("LOG_LEVEL", LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        log.warning(f"Unknown LOG_LEVEL {level}, using {LOG_LEVEL}")
        level = LOG_LEVEL
    logging.getLogger("powerwall_reserve").setLevel(level)


def lambda_handler(event: Dict[str, Any], _context: Any = None) -> Dict[str, Any]:
    """Set the backup reserve requested by the event.

    Errors are not wrapped: they are raised to the hosting runtime as-is.
    """
    set_log_level()
    if event is None:
        event = {}
    if not isinstance(event, dict):
        log.error(f"Event must be an object, got {type(event).__name__}")
        raise InvalidInput("reservePercent not provided: event is not an object")
    log.info(f"Event received: {json.dumps(event, default=str)}")
    log.debug(f"Reserve percent from event: {event.get('reservePercent')}")
    result = update_backup_reserve(event.get("reservePercent"))
    return {
        "statusCode": 200,
        "body": json.dumps(result.to_dict()),
    }
