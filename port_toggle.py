import argparse
import logging
import sys

from config import ConfigError, load_settings
from unifi.exceptions import UniFiApiError
from unifi.unifi import Unifi
from utils import setup_logging

logger = logging.getLogger(__name__)

PROFILE_UP = "up"
PROFILE_DOWN = "down"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Switch a UniFi switch port between its 'up' and 'down' port profiles.")

    parser.add_argument(
        "-c", "--config-file-path",
        required=True,
        help="Settings file (JSON object, YAML mapping or 'key = value' lines)."
    )
    parser.add_argument(
        "-p", "--port-number",
        type=int,
        required=True,
        help="Port number to change profile. Values below 1 leave the port untouched."
    )
    parser.add_argument(
        "profile",
        choices=[PROFILE_UP, PROFILE_DOWN],
        help="Port profile to apply."
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (debug level logging)"
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write one log file per level into this directory."
    )
    return parser.parse_args(argv)


def toggle_port(unifi, device_id: str, port_number: int, profile: str) -> bool:
    """
    Applies the requested profile to a single port.

    :return: False when the port number is not positive and nothing was sent, True otherwise.
    """
    if port_number <= 0:
        logger.info(f"Port number {port_number} is not positive, nothing to do.")
        return False

    logger.info(f"Setting port {port_number} of device {device_id} to '{profile}'.")
    if profile == PROFILE_UP:
        unifi.enable_port(device_id, port_number)
    else:
        unifi.disable_port(device_id, port_number)
    return True


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        if args.verbose:
            setup_logging(logging.DEBUG, args.log_dir)
        else:
            setup_logging(logging.INFO, args.log_dir)
    except OSError as e:
        print(f"Cannot set up logging in {args.log_dir}: {e}", file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.config_file_path)
        unifi = Unifi.from_settings(settings)
        toggle_port(unifi, settings.device_id, args.port_number, args.profile)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except UniFiApiError as e:
        logger.error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
