"""
HTTP request boundary for the domain probe system.

Exposes ``POST /api/check-domains`` taking ``{"domains": [str, ...]}`` and
returning the ordered list of domain results. Raw entries are trimmed,
empty entries dropped and the rest normalized before probing.

Status codes:
- 200: list of results
- 400: malformed body (no result list)
- 405: any verb other than POST (empty body)
- 500: unexpected failure (empty list)
"""

import asyncio
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from .audit_logger import AuditLogger
from .config import SystemConfig
from .enums import RequestErrorCode
from .exceptions import ValidationError
from .normalizer import prepare_domains
from .prober import AvailabilityProber
from .self_test import validate_config


CHECK_DOMAINS_PATH = "/api/check-domains"

bp = Blueprint("check_domains", __name__)


def parse_check_request(body: Any) -> list[str]:
    """
    Extract the raw domain entries from a request body.

    Args:
        body: Decoded JSON body (None if the body was not JSON)

    Returns:
        The raw ``domains`` entries

    Raises:
        ValidationError: If the body is not an object with a list of strings
    """
    if not isinstance(body, dict):
        raise ValidationError(
            code=RequestErrorCode.INVALID_BODY.value,
            message="Request body must be a JSON object",
            details={"body_type": type(body).__name__},
        )

    if "domains" not in body:
        raise ValidationError(
            code=RequestErrorCode.MISSING_DOMAINS.value,
            message="Missing 'domains' field",
        )

    domains = body["domains"]
    if not isinstance(domains, list) or not all(isinstance(d, str) for d in domains):
        raise ValidationError(
            code=RequestErrorCode.INVALID_DOMAINS.value,
            message="'domains' must be a list of strings",
            details={"domains_type": type(domains).__name__},
        )

    return domains


@bp.route(CHECK_DOMAINS_PATH, methods=["POST"], provide_automatic_options=False)
def check_domains():
    prober: AvailabilityProber = current_app.extensions["domain_probe.prober"]
    logger: Optional[AuditLogger] = current_app.extensions.get("domain_probe.logger")

    try:
        raw_domains = parse_check_request(request.get_json(silent=True))
    except ValidationError as e:
        if logger:
            logger.warn("API", f"Rejected check request: {e.message}", e.to_dict())
        return jsonify({"error": e.message}), 400

    try:
        hostnames = prepare_domains(raw_domains)
        results = asyncio.run(prober.probe_all(hostnames))
        return jsonify([result.to_dict() for result in results]), 200
    except Exception as e:
        if logger:
            logger.log_error("API", "Domain check request failed", error=e)
        return jsonify([]), 500


def _method_not_allowed(error):
    return "", 405


def create_app(
    config: Optional[SystemConfig] = None,
    prober: Optional[AvailabilityProber] = None,
    logger: Optional[AuditLogger] = None,
) -> Flask:
    """
    Create the Flask application.

    Args:
        config: System configuration (defaults are used if omitted)
        prober: Optional prober; built from config if omitted
        logger: Optional audit logger; built from config if omitted

    Returns:
        Configured Flask application

    Raises:
        ConfigurationError: If the configuration is unusable
    """
    config = config or SystemConfig()
    validate_config(config)

    if logger is None:
        logger = AuditLogger.from_config(config.logging.level, config.logging.output_format)

    app = Flask(__name__)
    app.extensions["domain_probe.config"] = config
    app.extensions["domain_probe.logger"] = logger
    app.extensions["domain_probe.prober"] = prober or AvailabilityProber(config=config, logger=logger)

    app.register_blueprint(bp)
    app.register_error_handler(405, _method_not_allowed)

    return app
