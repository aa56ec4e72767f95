"""
Provider selection for language and image models.

Request handlers ask for models by logical name (`chat-model`,
`title-model`, ...). The mapping from logical name to concrete backend is
decided once at startup from settings and injected, so nothing downstream
branches on the environment.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from app.core.config import Settings
from app.core.constants import LLMConstants
from app.core.exceptions import ModelNotFoundError
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModelSpec:
    """A concrete model behind a logical name."""

    provider: str
    model_id: str

    # Tag wrapping reasoning tokens, stripped from visible output
    reasoning_tag: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.provider}/{self.model_id}"


class ProviderSelector:
    """Resolves logical model names to concrete models."""

    def __init__(
        self,
        language_models: Dict[str, ModelSpec],
        image_models: Optional[Dict[str, ModelSpec]] = None,
        test_mode: bool = False,
    ):
        self._language_models = dict(language_models)
        self._image_models = dict(image_models or {})
        self.test_mode = test_mode

    def language_model(self, name: str) -> ModelSpec:
        """
        Get the language model for a logical name.

        Raises:
            ModelNotFoundError: If the name is not configured
        """
        try:
            return self._language_models[name]
        except KeyError:
            raise ModelNotFoundError(name, self.language_model_names) from None

    def image_model(self, name: str) -> ModelSpec:
        try:
            return self._image_models[name]
        except KeyError:
            raise ModelNotFoundError(name, sorted(self._image_models)) from None

    @property
    def language_model_names(self) -> List[str]:
        return sorted(self._language_models)


def production_selector() -> ProviderSelector:
    chat = ModelSpec(LLMConstants.PROVIDER_OPENROUTER, LLMConstants.OPENROUTER_CHAT_MODEL)
    return ProviderSelector(
        language_models={
            LLMConstants.CHAT_MODEL: chat,
            LLMConstants.CHAT_MODEL_REASONING: ModelSpec(
                LLMConstants.PROVIDER_XAI,
                LLMConstants.XAI_REASONING_MODEL,
                reasoning_tag=LLMConstants.REASONING_TAG,
            ),
            LLMConstants.TITLE_MODEL: chat,
            LLMConstants.ARTIFACT_MODEL: ModelSpec(
                LLMConstants.PROVIDER_XAI, LLMConstants.XAI_ARTIFACT_MODEL
            ),
        },
        image_models={
            LLMConstants.SMALL_IMAGE_MODEL: ModelSpec(
                LLMConstants.PROVIDER_XAI, LLMConstants.XAI_IMAGE_MODEL
            ),
        },
    )


def mock_selector() -> ProviderSelector:
    """Deterministic mock models, one per logical name."""
    names = [
        LLMConstants.CHAT_MODEL,
        LLMConstants.CHAT_MODEL_REASONING,
        LLMConstants.TITLE_MODEL,
        LLMConstants.ARTIFACT_MODEL,
    ]
    return ProviderSelector(
        language_models={
            name: ModelSpec(LLMConstants.PROVIDER_MOCK, name) for name in names
        },
        test_mode=True,
    )


def build_provider_selector(settings: Settings) -> ProviderSelector:
    """Build the selector once, from settings, at process start."""
    if settings.llm.use_test_models:
        logger.info("Using mock language models")
        return mock_selector()

    if not settings.llm.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY is not set")
    if not settings.llm.xai_api_key:
        logger.warning("XAI_API_KEY is not set")

    return production_selector()
