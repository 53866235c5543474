"""
Command-line interface for the domain probe system.

This module provides the main CLI entry point with commands for:
- check: Check one or more domains for availability
- check-list: Check domains from a file (one per line)
- serve: Run the HTTP request boundary
- config: Configuration management
- self-test: Verify configuration and connectivity
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from . import __version__
from .api import create_app
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    SystemConfig,
    apply_env_overrides,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
)
from .exceptions import ConfigurationError
from .models import DomainResult
from .normalizer import prepare_domains, split_lines
from .prober import AvailabilityProber
from .self_test import run_self_test, validate_config


def resolve_config(
    config_path: Optional[str],
    dry_run: bool = False,
) -> Optional[SystemConfig]:
    """
    Build the effective configuration for a command.

    Order: file (or defaults), then ``DOMAIN_PROBE_*`` environment
    variables, then command-line flags.

    Returns:
        SystemConfig, or None if the given file could not be loaded or the
        result is unusable
    """
    if config_path:
        config = load_config_from_file(Path(config_path))
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return None
    else:
        config = load_config_from_file(DEFAULT_CONFIG_PATH) or create_default_config()

    apply_env_overrides(config)

    if dry_run:
        config.simulation_mode = True

    try:
        validate_config(config)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return None

    return config


def create_logger(config: SystemConfig, verbose: bool = False) -> AuditLogger:
    """Create the logger for a command; verbose mode lowers the level to debug."""
    level = "debug" if verbose else config.logging.level
    return AuditLogger.from_config(level, config.logging.output_format)


def format_result(result: DomainResult, verbose: bool = False) -> str:
    """Render one result as a human-readable line."""
    if result.error:
        status = "UNKNOWN"
    elif result.available:
        status = "AVAILABLE"
    else:
        status = "NOT AVAILABLE"

    votes = " ".join(
        f"{method}={'yes' if vote else 'no'}" for method, vote in result.methods.items()
    )
    line = f"{result.domain:<40} {status:<14} [{votes}]"

    if result.error:
        line += f"  ({result.error})"

    if verbose:
        for outcome in result.outcomes:
            line += (
                f"\n    {outcome.method.value:<6} {outcome.state.value:<10} "
                f"{outcome.duration_ms:7.1f}ms  {outcome.detail or ''}"
            )

    return line


async def check_domains(
    raw_domains: list[str],
    config: SystemConfig,
    output_file: Optional[Path] = None,
    as_json: bool = False,
    verbose: bool = False,
) -> int:
    """
    Probe a batch of raw domain entries and print the results.

    Args:
        raw_domains: Raw entries (trimmed, filtered and normalized here)
        config: System configuration
        output_file: Optional path to write results as JSON
        as_json: Print results as JSON instead of text
        verbose: Enable verbose output

    Returns:
        Exit code (0 if any domain is available, 1 otherwise)
    """
    hostnames = prepare_domains(raw_domains)
    if not hostnames:
        print("Error: No domains given", file=sys.stderr)
        return 1

    if config.startup_self_test:
        self_test_result = await run_self_test(config=config, print_output=verbose)
        if not self_test_result.success:
            print("Self-test failed", file=sys.stderr)
            return 1

    if config.simulation_mode:
        print("Simulation mode: no network requests are made", file=sys.stderr)

    logger = create_logger(config, verbose)
    prober = AvailabilityProber(config=config, logger=logger)
    results = await prober.probe_all(hostnames)

    if as_json:
        print(json.dumps([r.to_dict(include_outcomes=verbose) for r in results], indent=2))
    else:
        for result in results:
            print(format_result(result, verbose))

    if output_file:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump([r.to_dict() for r in results], f, indent=2, ensure_ascii=False)
        except OSError as e:
            print(f"Error writing results: {e}", file=sys.stderr)
            return 1

    return 0 if any(r.available for r in results) else 1


def read_domains_file(domains_file: Path) -> Optional[list[str]]:
    """Read domain entries from a file, skipping '#' comment lines."""
    try:
        with open(domains_file, "r", encoding="utf-8") as f:
            lines = split_lines(f.read())
        return [line for line in lines if not line.lstrip().startswith("#")]
    except FileNotFoundError:
        print(f"Error: File not found: {domains_file}", file=sys.stderr)
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
    return None


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    config = resolve_config(args.config, args.dry_run)
    if config is None:
        return 1

    return asyncio.run(check_domains(
        raw_domains=args.domains,
        config=config,
        as_json=args.json,
        verbose=args.verbose,
    ))


def cmd_check_list(args: argparse.Namespace) -> int:
    """Handle the 'check-list' command."""
    config = resolve_config(args.config, args.dry_run)
    if config is None:
        return 1

    raw_domains = read_domains_file(Path(args.file))
    if raw_domains is None:
        return 1

    return asyncio.run(check_domains(
        raw_domains=raw_domains,
        config=config,
        output_file=Path(args.output) if args.output else None,
        as_json=args.json,
        verbose=args.verbose,
    ))


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command."""
    config = resolve_config(args.config, args.dry_run)
    if config is None:
        return 1

    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    if config.startup_self_test:
        result = asyncio.run(run_self_test(config=config, print_output=True))
        if not result.success:
            return 1

    app = create_app(config)
    app.run(host=config.server.host, port=config.server.port)
    return 0


def cmd_self_test(args: argparse.Namespace) -> int:
    """Handle the 'self-test' command."""
    config = resolve_config(args.config, args.dry_run)
    if config is None:
        return 1

    result = asyncio.run(run_self_test(config=config, print_output=True))
    return 0 if result.success else 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  WHOIS timeout: {config.probes.whois_timeout_seconds}s")
        print(f"  HTTP timeout: {config.probes.http_timeout_seconds}s")
        dns_timeout = config.probes.dns_timeout_seconds
        print(f"  DNS timeout: {'resolver default' if dns_timeout is None else f'{dns_timeout}s'}")
        print(f"  Server: {config.server.host}:{config.server.port}")
        print(f"  Log level: {config.logging.level} ({config.logging.output_format})")
        print(f"  Simulation mode: {config.simulation_mode}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        if save_config_to_file(create_default_config(), config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        try:
            validate_config(config)
        except ConfigurationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulation mode - no real network requests",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show per-probe details and debug logs",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="domain-probe",
        description="Heuristic domain availability checker (DNS, WHOIS reachability, HTTPS)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command
    check_parser = subparsers.add_parser(
        "check",
        help="Check domains for availability",
    )
    check_parser.add_argument(
        "domains",
        nargs="+",
        help="Domains to check (URLs are accepted, e.g. https://www.example.com/path)",
    )
    _add_common_arguments(check_parser)
    _add_output_arguments(check_parser)
    check_parser.set_defaults(func=cmd_check)

    # 'check-list' command
    check_list_parser = subparsers.add_parser(
        "check-list",
        help="Check domains from a file",
    )
    check_list_parser.add_argument(
        "file",
        help="Path to file containing domains (one per line)",
    )
    check_list_parser.add_argument(
        "--output", "-o",
        help="Path to write results as JSON",
    )
    _add_common_arguments(check_list_parser)
    _add_output_arguments(check_list_parser)
    check_list_parser.set_defaults(func=cmd_check_list)

    # 'serve' command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve POST /api/check-domains",
    )
    serve_parser.add_argument("--host", help="Bind address (default: from config)")
    serve_parser.add_argument("--port", "-p", type=int, help="Bind port (default: from config)")
    _add_common_arguments(serve_parser)
    serve_parser.set_defaults(func=cmd_serve)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    # 'self-test' command
    self_test_parser = subparsers.add_parser(
        "self-test",
        help="Verify configuration and probe connectivity",
    )
    _add_common_arguments(self_test_parser)
    self_test_parser.set_defaults(func=cmd_self_test)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
