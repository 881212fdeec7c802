# src/campaign_ai/core/config.py
"""
Central configuration for the Campaign AI gateway.

Values are read from the environment once, into an immutable
``GatewayConfig`` that is handed to the gateway at construction time.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_log = logging.getLogger(__name__)

# --- Gemini ---
DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.4
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
MODEL_ENV_VAR = "NEXT_PUBLIC_AI_MODEL"

# --- Runtime environment ---
ENVIRONMENT_ENV_VAR = "NODE_ENV"
TEST_ENVIRONMENT = "test"

_TRUTHY = {"1", "true", "yes", "on"}


def _resolve_api_key(environ: Mapping[str, str]) -> str:
    for name in API_KEY_ENV_VARS:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return ""


def _optional_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r; using the client default.", name, raw)
        return None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r; using %s.", name, raw, default)
        return default


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class GatewayConfig:
    api_key: str = ""
    model_name: str = DEFAULT_MODEL_NAME
    temperature: float = DEFAULT_TEMPERATURE
    timeout_ms: Optional[int] = None
    strict_campaign_schema: bool = True
    environment: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def is_test(self) -> bool:
        return self.environment == TEST_ENVIRONMENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        """Builds a config from environment variables.

        A missing API key is only warned about (outside of test runs); the
        gateway refuses to call the model later instead.
        """
        env = os.environ if environ is None else environ

        cfg = cls(
            api_key=_resolve_api_key(env),
            model_name=env.get(MODEL_ENV_VAR) or DEFAULT_MODEL_NAME,
            temperature=_float(env, "AI_TEMPERATURE", DEFAULT_TEMPERATURE),
            timeout_ms=_optional_int(env, "AI_TIMEOUT_MS"),
            strict_campaign_schema=_flag(env, "STRICT_CAMPAIGN_SCHEMA", True),
            environment=env.get(ENVIRONMENT_ENV_VAR, ""),
        )

        if not cfg.has_api_key and not cfg.is_test:
            _log.warning("Missing GEMINI_API_KEY environment variable. AI features will fail.")
        return cfg
