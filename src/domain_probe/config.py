"""
Configuration for the domain probe system.

This module defines the configuration dataclasses together with the helpers
that build a default configuration, read and write it as JSON, and apply
overrides from the process environment (``.env`` files are loaded by the CLI
through python-dotenv).
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


# Fixed WHOIS endpoint used by the reachability probe
WHOIS_HOST = "whois.internic.net"
WHOIS_PORT = 43

DEFAULT_WHOIS_TIMEOUT_SECONDS = 2.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 3.0

DEFAULT_CONFIG_PATH = Path.home() / ".domain_probe" / "config.json"

LOG_LEVELS = ("debug", "info", "warn", "error")
LOG_FORMATS = ("json", "text", "both")

ENV_PREFIX = "DOMAIN_PROBE_"


@dataclass
class ProbeConfig:
    """Timeouts of the three probes."""

    whois_timeout_seconds: float = DEFAULT_WHOIS_TIMEOUT_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    dns_timeout_seconds: Optional[float] = None  # None keeps the resolver default


@dataclass
class ServerConfig:
    """Bind address of the HTTP request boundary."""

    host: str = "127.0.0.1"
    port: int = 5000


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SystemConfig:
    """Main system configuration combining all sub-configurations."""

    probes: ProbeConfig = field(default_factory=ProbeConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    simulation_mode: bool = False
    startup_self_test: bool = False


def create_default_config(simulation_mode: bool = False) -> SystemConfig:
    """
    Create a default system configuration.

    Args:
        simulation_mode: Enable simulation mode (no real network requests)

    Returns:
        SystemConfig with default settings
    """
    return SystemConfig(simulation_mode=simulation_mode)


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Missing sections fall back to their defaults.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        probes_data = data.get("probes", {})
        probes = ProbeConfig(
            whois_timeout_seconds=float(
                probes_data.get("whois_timeout_seconds", DEFAULT_WHOIS_TIMEOUT_SECONDS)
            ),
            http_timeout_seconds=float(
                probes_data.get("http_timeout_seconds", DEFAULT_HTTP_TIMEOUT_SECONDS)
            ),
            dns_timeout_seconds=_optional_float(probes_data.get("dns_timeout_seconds")),
        )

        server_data = data.get("server", {})
        server = ServerConfig(
            host=server_data.get("host", "127.0.0.1"),
            port=int(server_data.get("port", 5000)),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "info"),
            output_format=logging_data.get("output_format", "text"),
        )

        return SystemConfig(
            probes=probes,
            server=server,
            logging=logging_config,
            simulation_mode=bool(data.get("simulation_mode", False)),
            startup_self_test=bool(data.get("startup_self_test", False)),
        )

    except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: SystemConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: SystemConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "probes": {
                "whois_timeout_seconds": config.probes.whois_timeout_seconds,
                "http_timeout_seconds": config.probes.http_timeout_seconds,
                "dns_timeout_seconds": config.probes.dns_timeout_seconds,
            },
            "server": {
                "host": config.server.host,
                "port": config.server.port,
            },
            "logging": {
                "level": config.logging.level,
                "output_format": config.logging.output_format,
            },
            "simulation_mode": config.simulation_mode,
            "startup_self_test": config.startup_self_test,
        }

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def apply_env_overrides(
    config: SystemConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> SystemConfig:
    """
    Apply ``DOMAIN_PROBE_*`` environment variables on top of a configuration.

    Values that cannot be parsed leave the existing setting untouched.

    Args:
        config: Configuration to update in place
        environ: Variables to read (defaults to os.environ)

    Returns:
        The updated configuration
    """
    env = os.environ if environ is None else environ

    config.probes.whois_timeout_seconds = _float_env(
        env, "WHOIS_TIMEOUT", config.probes.whois_timeout_seconds
    )
    config.probes.http_timeout_seconds = _float_env(
        env, "HTTP_TIMEOUT", config.probes.http_timeout_seconds
    )
    config.probes.dns_timeout_seconds = _float_env(
        env, "DNS_TIMEOUT", config.probes.dns_timeout_seconds
    )
    config.server.host = env.get(ENV_PREFIX + "HOST", config.server.host).strip() or config.server.host
    config.server.port = _int_env(env, "PORT", config.server.port)

    level = env.get(ENV_PREFIX + "LOG_LEVEL", "").strip().lower()
    if level in LOG_LEVELS:
        config.logging.level = level

    output_format = env.get(ENV_PREFIX + "LOG_FORMAT", "").strip().lower()
    if output_format in LOG_FORMATS:
        config.logging.output_format = output_format

    simulation = env.get(ENV_PREFIX + "SIMULATION")
    if simulation is not None:
        config.simulation_mode = simulation.strip().lower() in ("1", "true", "yes", "on")

    return config


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


def _float_env(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default
