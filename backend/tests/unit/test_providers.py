"""
Unit tests for model provider selection

Tests:
- Production and mock model sets
- Unknown model names
- Selection from settings
"""

import pytest

from app.core.config import LLMSettings, Settings
from app.core.constants import LLMConstants
from app.core.exceptions import ModelNotFoundError
from app.services.llm import build_provider_selector, mock_selector, production_selector


@pytest.mark.unit
class TestProviderSelector:
    """ProviderSelector"""

    def test_production_models(self):
        selector = production_selector()

        chat = selector.language_model(LLMConstants.CHAT_MODEL)
        reasoning = selector.language_model(LLMConstants.CHAT_MODEL_REASONING)
        image = selector.image_model(LLMConstants.SMALL_IMAGE_MODEL)

        assert chat.provider == LLMConstants.PROVIDER_OPENROUTER
        assert reasoning.provider == LLMConstants.PROVIDER_XAI
        assert reasoning.reasoning_tag == "think"
        assert chat.reasoning_tag is None
        assert image.qualified_name == f"xai/{LLMConstants.XAI_IMAGE_MODEL}"
        assert selector.test_mode is False

    def test_mock_models_cover_every_language_model(self):
        assert mock_selector().language_model_names == production_selector().language_model_names

    def test_mock_models_are_mock(self):
        selector = mock_selector()

        assert selector.test_mode is True
        assert all(
            selector.language_model(name).provider == LLMConstants.PROVIDER_MOCK
            for name in selector.language_model_names
        )

    def test_unknown_language_model(self):
        with pytest.raises(ModelNotFoundError) as exc_info:
            production_selector().language_model("no-such-model")

        assert exc_info.value.status_code == 404
        assert LLMConstants.CHAT_MODEL in exc_info.value.details["available_models"]

    def test_mock_has_no_image_models(self):
        with pytest.raises(ModelNotFoundError):
            mock_selector().image_model(LLMConstants.SMALL_IMAGE_MODEL)


@pytest.mark.unit
class TestBuildFromSettings:
    """build_provider_selector"""

    def test_test_models(self):
        settings = Settings(llm=LLMSettings(use_test_models=True))

        assert build_provider_selector(settings).test_mode is True

    def test_production(self):
        settings = Settings(
            llm=LLMSettings(
                use_test_models=False,
                openrouter_api_key="or-key",
                xai_api_key="xai-key",
            )
        )

        selector = build_provider_selector(settings)

        assert selector.test_mode is False
        assert selector.language_model(LLMConstants.TITLE_MODEL).provider == (
            LLMConstants.PROVIDER_OPENROUTER
        )
