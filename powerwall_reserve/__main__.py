# powerwall-reserve Module - Command Line Interface
# -*- coding: utf-8 -*-
"""
 Command Line Interface to set the Powerwall backup reserve.

 Usage:
    python3 -m powerwall_reserve 20
    python3 -m powerwall_reserve 100 --json

 Credentials are read from TESLA_REFRESH_TOKEN, TESLA_CLIENT_ID and
 TESLA_CLIENT_SECRET, or from a .env file in the current directory.
"""

# Import Libraries
import argparse
import json
import logging
import sys

import dotenv

from powerwall_reserve import version, set_debug
from powerwall_reserve.config import TeslaConfig
from powerwall_reserve.exceptions import PowerwallReserveError
from powerwall_reserve.reserve import update_backup_reserve, validate_reserve


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="powerwall_reserve",
                                description=f"Set Powerwall backup reserve v{version}")
    p.add_argument("reserve", nargs="?", default=None, help="Backup reserve level (0-100)")
    p.add_argument("--debug", action="store_true", help="Enable debug mode")
    p.add_argument("--json", action="store_true", help="Output in JSON format")
    p.add_argument("--no-verify", action="store_true",
                   help="Do not check the reserve echoed back by the API")
    p.add_argument("--timeout", type=float, default=None,
                   help="Seconds to wait for each API response")
    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if args.reserve is None:
        p.print_help(sys.stderr)
        return 1

    if args.debug:
        set_debug(True)
    else:
        logging.basicConfig(format='%(levelname)s: %(message)s', level=logging.INFO)

    # Load environment variables from .env file if present
    dotenv.load_dotenv()

    overrides = {}
    if args.no_verify:
        overrides["verify"] = False
    if args.timeout is not None:
        overrides["timeout"] = args.timeout

    try:
        percent = validate_reserve(args.reserve)
        config = TeslaConfig.from_env(**overrides)
        result = update_backup_reserve(percent, config)
    except PowerwallReserveError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=4))
    else:
        print(f"{result.message}")
        print(f"  Site: {result.site}")
        print(f"  Previous reserve: {result.previous_reserve}%")
        print(f"  Current charge: {result.current_charge:.1f}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())
