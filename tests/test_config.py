"""
Tests for Configuration Loading

Tests YAML loading, default search paths and environment overrides.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rider_tools import config as config_module
from rider_tools.config import (
    LLMConfig, ParsingConfig, RiderConfig, load_config, apply_env_overrides
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("RIDER_LLM_PROVIDER", "RIDER_LLM_MODEL", "ANTHROPIC_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config."""

    def test_reads_sections(self, tmp_path):
        path = tmp_path / "rider.yaml"
        path.write_text(
            "parsing:\n"
            "  min_item_length: 4\n"
            "  max_category_length: 30\n"
            "llm:\n"
            "  provider: openai\n"
            "  temperature: 0.1\n"
        )
        config = load_config(str(path))
        assert config.parsing.min_item_length == 4
        assert config.parsing.max_category_length == 30
        assert config.parsing.contact_window_after == 200
        assert config.llm.provider == "openai"
        assert config.llm.temperature == 0.1

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == RiderConfig()

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("parsing:\n  not_a_setting: 1\n")
        with pytest.raises(TypeError):
            load_config(str(path))

    def test_no_file_found_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "DEFAULT_SEARCH_PATHS", [tmp_path / "missing.yaml"])
        assert load_config() == RiderConfig()

    def test_first_search_path_wins(self, tmp_path, monkeypatch):
        first = tmp_path / "first.yaml"
        second = tmp_path / "second.yaml"
        first.write_text("parsing:\n  min_item_length: 5\n")
        second.write_text("parsing:\n  min_item_length: 6\n")
        monkeypatch.setattr(config_module, "DEFAULT_SEARCH_PATHS", [tmp_path / "missing.yaml", first, second])
        assert load_config().parsing.min_item_length == 5

    def test_shipped_example_loads(self):
        example = Path(__file__).parent.parent / "config" / "rider_config.yaml"
        config = load_config(str(example))
        assert config.parsing == ParsingConfig()


class TestEnvOverrides:
    """Tests for apply_env_overrides."""

    def test_key_from_provider_env_var(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        llm = apply_env_overrides(LLMConfig())
        assert llm.api_key == "sk-ant-test"
        assert llm.enabled

    def test_file_key_kept(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-env")
        llm = apply_env_overrides(LLMConfig(api_key="sk-ant-file"))
        assert llm.api_key == "sk-ant-file"

    def test_provider_override_switches_key(self, clean_env):
        clean_env.setenv("RIDER_LLM_PROVIDER", "OpenAI")
        clean_env.setenv("OPENAI_API_KEY", "sk-openai")
        llm = apply_env_overrides(LLMConfig(provider="anthropic", api_key="sk-ant-file"))
        assert llm.provider == "openai"
        assert llm.api_key == "sk-openai"

    def test_model_override(self, clean_env):
        clean_env.setenv("RIDER_LLM_MODEL", "gpt-4o")
        assert apply_env_overrides(LLMConfig()).model == "gpt-4o"

    def test_no_key_disabled(self, clean_env):
        assert not apply_env_overrides(LLMConfig()).enabled
