# src/campaign_ai/core/clients/gemini.py
import logging

# No tenacity here: every call is a single attempt and failures go straight back to the caller.
from google import genai
from google.genai import types

from ..config import GatewayConfig

_log = logging.getLogger(__name__)


def init_client(cfg: GatewayConfig) -> genai.Client:
    """Initializes the Gemini Developer API client from a gateway config."""
    http_options = None
    if cfg.timeout_ms is not None:
        http_options = types.HttpOptions(timeout=cfg.timeout_ms)

    _log.info("Initializing GenAI client (model=%s, timeout_ms=%s)...", cfg.model_name, cfg.timeout_ms)
    client = genai.Client(api_key=cfg.api_key, http_options=http_options)
    _log.info("GenAI client initialized successfully.")
    return client


def generate(
    client: genai.Client,
    model: str,
    prompt: str,
    *,
    system_instruction: str,
    temperature: float,
    response_mime_type: str | None = None,
) -> str | None:
    """Runs one generate_content call and returns the raw response text."""
    _log.info("Generating content (model=%s, prompt_words=%d)...", model, len(prompt.split()))
    cfg = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
        response_mime_type=response_mime_type,
    )
    response = client.models.generate_content(model=model, contents=prompt, config=cfg)
    _log.info("Received response from model %s.", model)
    return response.text
