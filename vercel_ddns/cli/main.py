#!/usr/bin/env python3
"""
Vercel DDNS - Command Line Interface

Main entry point for the Vercel DDNS CLI. Options can come from flags,
environment variables or a YAML file, in that order of precedence.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from ..core.ddns_manager import STAGE_RESOLUTION, DDNSManager
from ..core.errors import ConfigurationError, DDNSError
from ..core.models import AddressFamily, DDNSConfig
from ..utils.validators import validate_fqdn, validate_subdomain, validate_ttl

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600
PROVIDERS = ("vercel", "mock")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vercel DDNS - Point Vercel DNS records at your public IP"
    )

    parser.add_argument("--domain", "-d", help="Domain to manage (env: VDDNS_DOMAIN)")

    parser.add_argument(
        "--subdomain",
        "-s",
        action="append",
        help="Subdomain to update, repeatable; '@' for the apex (env: VDDNS_SUBDOMAIN)",
    )

    parser.add_argument(
        "--ip-type",
        "-i",
        action="append",
        type=str.lower,
        choices=["ipv4", "ipv6"],
        help="Address family to update, repeatable (default: ipv4, env: VDDNS_IP_TYPE)",
    )

    parser.add_argument(
        "--ttl", type=int, help=f"Record TTL in seconds (default: {DEFAULT_TTL}, env: VDDNS_TTL)"
    )

    parser.add_argument("--token", "-t", help="Vercel API token (env: VERCEL_TOKEN)")

    parser.add_argument("--team-id", help="Vercel team id (env: VERCEL_TEAM_ID)")

    parser.add_argument(
        "--config", "-c", help="Optional YAML configuration file (env: VDDNS_CONFIG)"
    )

    parser.add_argument(
        "--provider", choices=PROVIDERS, help="DNS provider backend (default: vercel)"
    )

    parser.add_argument(
        "--oracle-timeout", type=float, help="Timeout in seconds for each IP oracle query"
    )

    parser.add_argument(
        "--api-timeout", type=float, help="Timeout in seconds for each provider API call"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without making changes",
    )

    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Attempt every record even after a failure and report a summary",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config_path = args.config or os.environ.get("VDDNS_CONFIG")
    try:
        file_config = load_config(config_path) if config_path else {}
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    config_logger(file_config, verbose=args.verbose)

    try:
        config = build_config(args, os.environ, file_config)
        report = DDNSManager(config).run()
    except DDNSError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    if report.success:
        print("DNS records synchronized successfully")
        sys.exit(0)

    if report.aborted_stage == STAGE_RESOLUTION:
        for error in report.resolution_errors:
            print(f"Unable to get public IP: {error}")
    else:
        for failure in report.failures:
            print(f"Unable to add / update the record: {failure.error}")
    sys.exit(1)


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    if not Path(config_path).exists():
        raise ConfigurationError(f"Configuration file '{config_path}' not found")

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration file '{config_path}' must contain a mapping")

    logger.info(f"Configuration loaded from {config_path}")
    return config


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging") or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = logging_config.get("file")
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def _split(value) -> Optional[List[str]]:
    """Turn a comma separated string or a YAML list into a list of strings."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    return [str(part).strip() for part in value]


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def build_config(
    args: argparse.Namespace,
    env: Optional[Mapping[str, str]] = None,
    file_config: Optional[Dict] = None,
) -> DDNSConfig:
    """
    Merge flags, environment and file settings into a validated DDNSConfig.

    Raises:
        ConfigurationError: if a required setting is missing or invalid
    """
    env = env or {}
    file_config = file_config or {}
    timeouts = file_config.get("timeouts") or {}

    domain = _first(args.domain, env.get("VDDNS_DOMAIN"), file_config.get("domain"))
    if not domain or not validate_fqdn(str(domain).strip()):
        raise ConfigurationError(f"A valid domain is required, got {domain!r}")
    domain = str(domain).strip().lower()

    subdomains = _first(
        args.subdomain,
        _split(env.get("VDDNS_SUBDOMAIN")),
        _split(file_config.get("subdomains", file_config.get("subdomain"))),
    )
    if not subdomains:
        raise ConfigurationError("At least one subdomain is required")
    subdomains = ["" if s.strip() == "@" else s.strip().lower() for s in subdomains]
    for subdomain in subdomains:
        if not validate_subdomain(subdomain):
            raise ConfigurationError(f"Invalid subdomain '{subdomain}'")

    ip_types = _first(
        args.ip_type,
        _split(env.get("VDDNS_IP_TYPE")),
        _split(file_config.get("ip_types", file_config.get("ip_type"))),
        ["ipv4"],
    )
    try:
        families = [AddressFamily.from_text(ip_type) for ip_type in ip_types]
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    ttl = _first(args.ttl, env.get("VDDNS_TTL"), file_config.get("ttl"), DEFAULT_TTL)
    try:
        ttl = int(ttl)
    except (TypeError, ValueError):
        raise ConfigurationError(f"TTL must be an integer, got {ttl!r}") from None
    if not validate_ttl(ttl):
        raise ConfigurationError(f"TTL must not be negative, got {ttl}")

    provider = _first(args.provider, file_config.get("provider"), "vercel")
    if provider not in PROVIDERS:
        raise ConfigurationError(f"Unknown provider '{provider}'")

    token = _first(args.token, env.get("VERCEL_TOKEN"), file_config.get("token"), "")
    if provider == "vercel" and not token:
        raise ConfigurationError("A Vercel API token is required (--token or VERCEL_TOKEN)")

    try:
        oracle_timeout = float(_first(args.oracle_timeout, timeouts.get("oracle"), 5.0))
        api_timeout = float(_first(args.api_timeout, timeouts.get("api"), 10.0))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid timeout: {e}") from e

    return DDNSConfig(
        domain=domain,
        subdomains=tuple(dict.fromkeys(subdomains)),
        token=str(token),
        families=tuple(dict.fromkeys(families)),
        ttl=ttl,
        provider=provider,
        team_id=_first(args.team_id, env.get("VERCEL_TEAM_ID"), file_config.get("team_id")),
        oracle_timeout=oracle_timeout,
        api_timeout=api_timeout,
        dry_run=args.dry_run or bool(file_config.get("dry_run", False)),
        keep_going=args.keep_going or bool(file_config.get("keep_going", False)),
    )


if __name__ == "__main__":
    main()
