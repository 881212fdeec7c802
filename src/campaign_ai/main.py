# src/campaign_ai/main.py
"""
Cloud Function entry points for the Campaign AI gateway.

Each HTTP-triggered function validates the JSON body, runs one gateway
operation and wraps the outcome in a ``{"ok": ..., ...}`` envelope. Errors
raised by the gateway keep their status code.
"""

import json
import logging

import functions_framework
from flask import Request
from pydantic import ValidationError

from .core.config import GatewayConfig
from .core.errors import GatewayError
from .core.gateway import AIGateway
from .core.schemas import CampaignRequest, ErrorDetail, Failure, RefineRequest, Success

# --- Global Initialization ---
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
_log = logging.getLogger(__name__)

# Read at import so a missing key is reported when the function instance starts.
_config = GatewayConfig.from_env()
_gateway = None


def _get_gateway() -> AIGateway:
    """Lazy loader for the process-wide gateway."""
    global _gateway
    if _gateway is None:
        _gateway = AIGateway(_config)
    return _gateway


def _failure(kind: str, message: str, status: int):
    body = Failure(error=ErrorDetail(kind=kind, message=message))
    return body.model_dump(), status


def _read_body(request: Request, model):
    if request.method != "POST":
        return None, _failure("method_not_allowed", "Only POST is supported", 405)
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None, _failure("bad_request", "Request body must be a JSON object", 400)
    try:
        return model.model_validate(payload), None
    except ValidationError as e:
        return None, _failure("bad_request", str(e), 400)


def _run(operation, params):
    try:
        data = operation(params)
    except GatewayError as e:
        _log.warning("Gateway error (%s, status=%d): %s", e.kind, e.status, e.message)
        return _failure(e.kind, e.message, e.status)
    except json.JSONDecodeError as e:
        _log.error("Model returned malformed JSON: %s", e)
        return _failure("malformed_json", f"Model returned malformed JSON: {e}", 502)
    return Success(data=data).model_dump(), 200


# --- Cloud Function Entry Points ---


@functions_framework.http
def generate_campaign(request: Request):
    """
    HTTP-triggered function that generates a social media campaign.

    Args:
        request: The Flask request; its JSON body is a CampaignRequest.

    Returns:
        A tuple of the response envelope and an HTTP status code.
    """
    params, error = _read_body(request, CampaignRequest)
    if error:
        return error
    return _run(lambda p: _get_gateway().generate_campaign(p).as_dict(), params)


@functions_framework.http
def refine_content(request: Request):
    """
    HTTP-triggered function that rewrites existing content.

    Args:
        request: The Flask request; its JSON body is a RefineRequest.

    Returns:
        A tuple of the response envelope and an HTTP status code.
    """
    params, error = _read_body(request, RefineRequest)
    if error:
        return error
    return _run(lambda p: _get_gateway().refine_content(p), params)
