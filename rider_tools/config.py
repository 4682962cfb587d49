"""Configuration loader for rider parsing."""

import os
import logging
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsingConfig:
    min_artist_name_length: int = 3
    min_item_length: int = 3
    max_category_length: int = 40
    contact_window_before: int = 100
    contact_window_after: int = 200
    allergy_max_length: int = 100
    allergy_verbatim_max_length: int = 50
    must_have_context_length: int = 100


@dataclass(frozen=True)
class LLMConfig:
    provider: str = "anthropic"
    api_key: str = ""
    model: str = ""
    max_tokens: int = 4096
    temperature: float = 0.3

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class RiderConfig:
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)


DEFAULT_PARSING_CONFIG = ParsingConfig()

DEFAULT_SEARCH_PATHS = [
    Path('config') / 'rider_config.yaml',
    Path.home() / '.rideragent' / 'config.yaml',
    Path('/etc/rideragent/config.yaml'),
]

API_KEY_ENV_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(config_path: Optional[str] = None) -> RiderConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, looks in default locations
            and falls back to built-in defaults when none exists.

    Returns:
        RiderConfig object

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    if config_path is None:
        for path in DEFAULT_SEARCH_PATHS:
            if path.exists():
                config_path = str(path)
                break
        else:
            logger.debug("No config file found, using defaults")
            return RiderConfig()
    elif not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info(f"Loaded config from {config_path}")

    return RiderConfig(
        parsing=ParsingConfig(**(raw.get('parsing') or {})),
        llm=LLMConfig(**(raw.get('llm') or {})),
    )


def apply_env_overrides(llm: LLMConfig) -> LLMConfig:
    """
    Overlay LLM settings from environment variables.

    RIDER_LLM_PROVIDER and RIDER_LLM_MODEL override the file settings; the
    API key comes from the provider's own variable when the file has none.
    """
    provider = os.getenv("RIDER_LLM_PROVIDER", llm.provider).lower()
    model = os.getenv("RIDER_LLM_MODEL", llm.model)
    api_key = llm.api_key if provider == llm.provider else ""
    if not api_key:
        env_var = API_KEY_ENV_VARS.get(provider)
        api_key = os.getenv(env_var, "") if env_var else ""
    return replace(llm, provider=provider, model=model, api_key=api_key)
