"""
Domain Probe - heuristic multi-signal domain availability checker.

This package decides whether candidate domain names look unregistered by
combining three independent network probes (DNS resolution, WHOIS endpoint
reachability and HTTPS reachability) with a majority vote.
"""

__version__ = "0.1.0"
__author__ = "Domain Probe Team"

from domain_probe.exceptions import (
    DomainProbeError,
    ValidationError,
    ConfigurationError,
)
from domain_probe.enums import (
    ProbeMethod,
    ProbeState,
    LogLevel,
    RequestErrorCode,
    ConfigErrorCode,
)
from domain_probe.config import (
    WHOIS_HOST,
    WHOIS_PORT,
    ProbeConfig,
    ServerConfig,
    LoggingConfig,
    SystemConfig,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
    apply_env_overrides,
)
from domain_probe.models import (
    DOMAIN_CHECK_FAILED,
    ProbeOutcome,
    DomainResult,
)
from domain_probe.normalizer import (
    normalize,
    prepare_domains,
    split_lines,
)
from domain_probe.probe import Probe
from domain_probe.dns_probe import DNSProbe
from domain_probe.whois_probe import WHOISProbe
from domain_probe.http_probe import HTTPProbe
from domain_probe.voting import (
    VotingEngine,
    MAJORITY_THRESHOLD,
)
from domain_probe.prober import AvailabilityProber
from domain_probe.audit_logger import (
    AuditLogger,
    LogEntry,
)
from domain_probe.api import (
    create_app,
    parse_check_request,
)
from domain_probe.self_test import (
    SelfTest,
    SelfTestResult,
    EndpointTestResult,
    ConfigValidationResult,
    run_self_test,
    validate_config,
)
from domain_probe.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "DomainProbeError",
    "ValidationError",
    "ConfigurationError",
    # Enums
    "ProbeMethod",
    "ProbeState",
    "LogLevel",
    "RequestErrorCode",
    "ConfigErrorCode",
    # Configuration
    "WHOIS_HOST",
    "WHOIS_PORT",
    "ProbeConfig",
    "ServerConfig",
    "LoggingConfig",
    "SystemConfig",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
    "apply_env_overrides",
    # Models
    "DOMAIN_CHECK_FAILED",
    "ProbeOutcome",
    "DomainResult",
    # Normalizer
    "normalize",
    "prepare_domains",
    "split_lines",
    # Probes
    "Probe",
    "DNSProbe",
    "WHOISProbe",
    "HTTPProbe",
    # Voting
    "VotingEngine",
    "MAJORITY_THRESHOLD",
    # Prober
    "AvailabilityProber",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # API
    "create_app",
    "parse_check_request",
    # Self-Test
    "SelfTest",
    "SelfTestResult",
    "EndpointTestResult",
    "ConfigValidationResult",
    "run_self_test",
    "validate_config",
    # CLI
    "cli_main",
    "create_parser",
]
