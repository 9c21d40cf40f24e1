"""Unit tests for configuration system."""
import pytest
import os
from pathlib import Path
from unittest.mock import patch
import yaml
from pydantic import ValidationError

from zhixia.config import Settings, get_settings, constants


class TestSettings:
    """Test Settings configuration."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.storage_key == "zhixia_projects"
        assert settings.default_model == constants.DEFAULT_MODEL
        assert settings.assist_delay == constants.DEFAULT_ASSIST_DELAY
        assert settings.log_level == "INFO"
        assert settings.data_file == constants.DEFAULT_DATA_FILE

    def test_environment_overrides(self, temp_dir):
        env = {
            'ZHIXIA_DATA_FILE': str(temp_dir / "data.json"),
            'ZHIXIA_STORAGE_KEY': "other_key",
            'ZHIXIA_ASSIST_DELAY': "0",
            'ZHIXIA_LOG_LEVEL': "debug",
        }
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)

        assert settings.data_file == temp_dir / "data.json"
        assert settings.storage_key == "other_key"
        assert settings.assist_delay == 0
        assert settings.log_level == "DEBUG"

    def test_data_file_expands_home(self):
        settings = Settings(data_file="~/zhixia.json")
        assert settings.data_file == Path.home() / "zhixia.json"

    def test_unknown_model_rejected(self):
        with pytest.raises(ValueError, match="Unknown model"):
            Settings(default_model="gpt-5")

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Settings(assist_delay=-1)

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError, match="Log level must be one of"):
            Settings(log_level="LOUD")

    def test_blank_storage_key_rejected(self):
        with pytest.raises(ValueError, match="Storage key"):
            Settings(storage_key="  ")

    def test_load_config_file(self, temp_dir):
        config_file = temp_dir / "config.yaml"
        config_file.write_text(
            "default_model: gpt-3.5\n"
            "assist_delay: 0.25\n"
            f"data_file: {temp_dir / 'store.json'}\n",
            encoding='utf-8'
        )

        settings = Settings()
        settings.load_config_file(config_file)

        assert settings.default_model == "gpt-3.5"
        assert settings.assist_delay == 0.25
        assert settings.data_file == temp_dir / "store.json"

    def test_load_config_file_validates_values(self, temp_dir):
        config_file = temp_dir / "config.yaml"
        config_file.write_text("log_level: verbose\n", encoding='utf-8')

        settings = Settings()
        with pytest.raises(ValidationError, match="Log level must be one of"):
            settings.load_config_file(config_file)

    @pytest.mark.parametrize("content", [
        "assist_delay: -5\n",
        "default_model: gpt-5\n",
    ])
    def test_load_config_file_rejects_invalid(self, temp_dir, content):
        config_file = temp_dir / "config.yaml"
        config_file.write_text(content, encoding='utf-8')

        with pytest.raises(ValidationError):
            Settings().load_config_file(config_file)

    def test_load_missing_config_file(self, temp_dir):
        settings = Settings()
        settings.load_config_file(temp_dir / "missing.yaml")
        assert settings.default_model == constants.DEFAULT_MODEL

    def test_save_config_file(self, temp_dir):
        config_file = temp_dir / "sub" / "config.yaml"

        settings = Settings()
        settings.default_model = "gpt-3.5"
        settings.assist_delay = 1.5
        settings.save_config_file(config_file)

        with open(config_file, encoding='utf-8') as f:
            saved = yaml.safe_load(f)

        assert saved['default_model'] == "gpt-3.5"
        assert saved['assist_delay'] == 1.5
        assert saved['storage_key'] == "zhixia_projects"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


class TestConstants:

    def test_storage_key(self):
        assert constants.STORAGE_KEY == "zhixia_projects"

    def test_default_chapter_title(self):
        assert constants.DEFAULT_CHAPTER_TITLE.format(n=3) == "第3章"

    def test_separator_is_blank_line(self):
        assert constants.GENERATED_TEXT_SEPARATOR == "\n\n"
