"""
LLM Provider Abstraction Layer

Provides a unified interface for the optional external extraction source
(Anthropic Claude, OpenAI GPT) used ahead of the deterministic parser.
Every provider returns a plain dict in the StructuredRider JSON schema;
coercion into the model happens in the orchestrator.
"""

import re
import json
import logging
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List

from .config import LLMConfig

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a provider reply cannot be turned into a rider payload."""


# ============================================================================
# Extraction Prompt (shared across providers)
# ============================================================================

SYSTEM_PROMPT = """You are a tour rider parser. Extract and structure information from tour riders.
Return JSON with this exact structure:
{
  "artists": ["artist names"],
  "rooms": [{
    "id": "1",
    "name": "Dressing Room 1",
    "description": "Artist room",
    "items": []
  }],
  "categories": {
    "Beverages": [],
    "Food": [],
    "Equipment": []
  },
  "items": [{
    "name": "item name",
    "quantity": 1,
    "unit": "bottle",
    "brand": "specific brand if mentioned",
    "room": "1",
    "category": "Beverages",
    "notes": "special requirements",
    "mustHave": false
  }],
  "allergies": ["list of allergies"],
  "contacts": [{
    "name": "name",
    "role": "Tour Manager",
    "email": "email",
    "phone": "phone"
  }],
  "specialRequirements": ["temperature requirements", "timing requirements"]
}

Return ONLY the JSON object, no other text."""

USER_PROMPT = "Parse this tour rider document and extract all information according to the JSON structure specified:\n\n{text}"


# ============================================================================
# Abstract Base Class
# ============================================================================

class ExtractionProvider(ABC):
    """
    Abstract base class for external extraction providers.

    Defines the single capability the orchestrator depends on:
    extract(text) returns a rider payload or raises.
    """

    PROVIDER_NAME: str = "unknown"
    DEFAULT_MODEL: str = ""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.3
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key for the provider
            model: Model to use (defaults to provider's default)
            max_tokens: Response token limit
            temperature: Sampling temperature
        """
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.temperature = temperature

    @abstractmethod
    def extract(self, text: str) -> Dict[str, Any]:
        """
        Extract a structured rider from document text.

        Args:
            text: Normalized rider text

        Returns:
            Dict in the StructuredRider JSON schema

        Raises:
            ExtractionError: If the reply holds no JSON object
            Exception: Any SDK error (network, auth, rate limit)
        """
        pass

    def _parse_json_response(self, raw_response: str) -> Dict[str, Any]:
        """
        Parse JSON from the model's response.

        Handles cases where the model returns extra text around the JSON.
        """
        try:
            data = json.loads(raw_response)
        except json.JSONDecodeError:
            json_match = re.search(r'\{[\s\S]*\}', raw_response)
            if not json_match:
                raise ExtractionError(f"{self.PROVIDER_NAME}: no JSON object in response")
            try:
                data = json.loads(json_match.group())
            except json.JSONDecodeError as e:
                raise ExtractionError(f"{self.PROVIDER_NAME}: invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise ExtractionError(f"{self.PROVIDER_NAME}: expected a JSON object, got {type(data).__name__}")
        return data


# ============================================================================
# Anthropic Provider
# ============================================================================

class AnthropicProvider(ExtractionProvider):
    """Extraction provider using Anthropic's Claude API."""

    PROVIDER_NAME = "anthropic"
    DEFAULT_MODEL = "claude-3-5-haiku-20241022"

    def __init__(self, api_key: str, model: Optional[str] = None, max_tokens: int = 4096,
                 temperature: float = 0.3):
        super().__init__(api_key, model, max_tokens, temperature)

        try:
            import anthropic
            self.client = anthropic.Anthropic(api_key=api_key)
        except ImportError:
            raise ImportError("anthropic package not installed. Run: pip install anthropic")

    def extract(self, text: str) -> Dict[str, Any]:
        """Extract a rider using the Messages API."""
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": USER_PROMPT.format(text=text)}]
        )

        raw_response = response.content[0].text if response.content else ""
        if response.usage:
            logger.debug(
                f"Anthropic tokens: {(response.usage.input_tokens or 0) + (response.usage.output_tokens or 0)}"
            )
        return self._parse_json_response(raw_response)


# ============================================================================
# OpenAI Provider
# ============================================================================

class OpenAIProvider(ExtractionProvider):
    """Extraction provider using OpenAI's chat completions API."""

    PROVIDER_NAME = "openai"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str, model: Optional[str] = None, max_tokens: int = 4096,
                 temperature: float = 0.3):
        super().__init__(api_key, model, max_tokens, temperature)

        try:
            from openai import OpenAI
            self.client = OpenAI(api_key=api_key)
        except ImportError:
            raise ImportError("openai package not installed. Run: pip install openai")

    def extract(self, text: str) -> Dict[str, Any]:
        """Extract a rider using chat completions in JSON mode."""
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(text=text)},
            ]
        )

        raw_response = ""
        if response.choices and response.choices[0].message:
            raw_response = response.choices[0].message.content or ""
        if response.usage:
            logger.debug(f"OpenAI tokens: {response.usage.total_tokens}")
        return self._parse_json_response(raw_response)


# ============================================================================
# Factory Functions
# ============================================================================

PROVIDERS = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(
    provider_name: str,
    api_key: str,
    model: Optional[str] = None,
    **kwargs
) -> ExtractionProvider:
    """
    Factory function to create an extraction provider.

    Args:
        provider_name: Provider name ('anthropic' or 'openai')
        api_key: API key for the provider
        model: Optional model override
        **kwargs: max_tokens / temperature

    Returns:
        ExtractionProvider instance

    Raises:
        ValueError: If provider name is unknown
        ImportError: If the provider's SDK is not installed
    """
    provider_class = PROVIDERS.get(provider_name.lower())
    if provider_class is None:
        raise ValueError(f"Unknown provider: {provider_name}. Supported: {list(PROVIDERS.keys())}")

    return provider_class(api_key=api_key, model=model, **kwargs)


def get_available_providers() -> List[str]:
    """Get list of available provider names."""
    return list(PROVIDERS.keys())


def provider_from_config(llm: LLMConfig) -> Optional[ExtractionProvider]:
    """Build the configured provider, or None when no API key is set."""
    if not llm.enabled:
        logger.info("No LLM API key configured, using deterministic parsing only")
        return None

    return get_provider(
        llm.provider,
        api_key=llm.api_key,
        model=llm.model or None,
        max_tokens=llm.max_tokens,
        temperature=llm.temperature,
    )
