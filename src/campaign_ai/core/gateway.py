# src/campaign_ai/core/gateway.py
"""
The AI gateway: prompt assembly, one remote call, and normalization of the
reply for campaign generation and content refinement.
"""
import json
import logging
from typing import Any, Mapping, Union

from google import genai
from pydantic import ValidationError

from . import parsing, prompts
from .clients import gemini
from .config import GatewayConfig
from .errors import CampaignSchemaError, EmptyResponseError, MissingApiKeyError
from .schemas import Campaign, CampaignRequest, CampaignResult, RefineRequest

_log = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


class AIGateway:
    def __init__(self, cfg: GatewayConfig, client: genai.Client | None = None):
        self.config = cfg
        self._client = client

    def _get_client(self) -> genai.Client:
        """Checks the credential, then lazily builds the client."""
        if not self.config.has_api_key:
            raise MissingApiKeyError()
        if self._client is None:
            self._client = gemini.init_client(self.config)
        return self._client

    def generate_campaign(self, params: Union[CampaignRequest, Mapping[str, Any]]) -> CampaignResult:
        """
        Generates a full social media campaign for a topic.

        Args:
            params: A CampaignRequest, or a mapping with topic, platform,
                targetAudience and tone.

        Returns:
            A CampaignResult holding the parsed JSON and the original text.

        Raises:
            MissingApiKeyError: No API key is configured. No call is made.
            EmptyResponseError: The model returned no text.
            json.JSONDecodeError: The model did not return valid JSON.
            CampaignSchemaError: The JSON does not match the campaign schema
                (strict mode only).
        """
        client = self._get_client()
        request = params if isinstance(params, CampaignRequest) else CampaignRequest.model_validate(params)

        response_text = gemini.generate(
            client,
            self.config.model_name,
            prompts.build_campaign_prompt(request),
            system_instruction=prompts.CAMPAIGN_SYSTEM_INSTRUCTION,
            temperature=self.config.temperature,
            response_mime_type=JSON_MIME_TYPE,
        )
        if not response_text:
            raise EmptyResponseError()

        raw_data = json.loads(parsing.strip_code_fences(response_text))
        return CampaignResult(
            raw_data=raw_data,
            response_text=response_text,
            campaign=self._validate_campaign(raw_data),
        )

    def _validate_campaign(self, raw_data: Any) -> Campaign | None:
        try:
            return Campaign.model_validate(raw_data)
        except ValidationError as e:
            if self.config.strict_campaign_schema:
                raise CampaignSchemaError(
                    f"Campaign JSON does not match the expected schema ({e.error_count()} errors)",
                    errors=e.errors(include_url=False),
                ) from e
            _log.warning("Campaign JSON does not match the expected schema: %s", e)
            return None

    def refine_content(self, params: Union[RefineRequest, Mapping[str, Any]]) -> Union[str, list]:
        """Rewrites existing content according to an instruction.

        Returns the parsed list when the reply is a JSON array, otherwise the
        trimmed reply text.
        """
        client = self._get_client()
        request = params if isinstance(params, RefineRequest) else RefineRequest.model_validate(params)

        response_text = gemini.generate(
            client,
            self.config.model_name,
            prompts.build_refine_prompt(request),
            system_instruction=prompts.build_refine_system_instruction(request.type),
            temperature=self.config.temperature,
        )
        text = parsing.strip_code_fences(response_text or "")

        if parsing.looks_like_json_array(text):
            try:
                return json.loads(text)
            except json.JSONDecodeError as e:
                _log.error("Failed to parse JSON array from Gemini: %s", e)

        return text
