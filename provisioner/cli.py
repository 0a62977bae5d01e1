#!/usr/bin/env python3
"""
shared-ssh - Shared SSH identities for Git hosting providers

Generates an SSH key and config alias inside a fixed shared directory
(D:\\klarion6.0\\ws\\shared_ssh on Windows, /nfs/ws/shared_ssh elsewhere),
independent of the invoking user's ~/.ssh.
"""

import argparse
import logging
import sys
from pathlib import Path

from provisioner.config import KEYGEN_BACKENDS, Config, default_config_file
from provisioner.provision import Provisioner
from provisioner.providers import PROVIDER_HOSTS
from shared.errors import ProvisionError
from shared.logging_config import get_default_log_file, setup_logging
from shared.version import __version__

logger = logging.getLogger("provisioner")

USAGE_LINES = [
    "ERROR: Usage: shared-ssh <alias> <provider>",
    "Example: shared-ssh procify_github github",
    f"Providers: {' | '.join(PROVIDER_HOSTS)}",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shared-ssh",
        description="Provision a shared SSH key and host alias for GitHub or Bitbucket",
    )
    parser.add_argument("alias", nargs="?", help="Short name for this identity (e.g. 'ci')")
    parser.add_argument("provider", nargs="?", help="Hosting provider: github | bitbucket")
    parser.add_argument("-c", "--config", type=Path, help="Path to config file")
    parser.add_argument("--base-dir", help="Shared base directory (overrides config)")
    parser.add_argument(
        "--backend", choices=KEYGEN_BACKENDS, help="Key generation backend (overrides config)"
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        help="Also log to a rotating file (default location if no path given)",
    )
    parser.add_argument(
        "--init", action="store_true", help="Write the effective config file and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.init and (not args.alias or not args.provider):
        for line in USAGE_LINES:
            print(line, file=sys.stderr)
        return 1

    config_path = args.config or default_config_file()

    try:
        config = Config.load(config_path)
        if args.base_dir:
            config.base_dir = args.base_dir
        if args.backend:
            config.keygen_backend = args.backend
        if args.log_file is not None:
            config.log_file = args.log_file or str(get_default_log_file(config_path.parent))
        if args.verbose:
            config.log_level = "DEBUG"
    except ProvisionError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    if args.init:
        try:
            saved = config.save(config_path)
        except OSError as e:
            print(f"ERROR: Cannot write config file: {e}", file=sys.stderr)
            return 1
        print(f"Wrote config file: {saved}")
        print(f"Shared SSH folder: {config.shared_ssh_dir}")
        return 0

    # JSON output owns stdout; progress goes to stderr
    try:
        setup_logging(
            "provisioner",
            level=config.log_level,
            log_file=config.log_file,
            stream=sys.stderr if args.json else sys.stdout,
        )
    except OSError as e:
        print(f"ERROR: Cannot open log file: {e}", file=sys.stderr)
        return 1

    try:
        summary = Provisioner(config).provision(args.alias, args.provider)
    except ProvisionError as e:
        logger.debug(f"Provisioning failed: {e.to_dict()}")
        print(f"ERROR: SSH setup failed: {e.message}", file=sys.stderr)
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}", file=sys.stderr)
        return 1

    if args.json:
        print(summary.to_json())
    else:
        print()
        print(summary.format_report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
