"""
Services module providing business logic layer.
"""

from app.services.llm import (
    ModelSpec,
    ProviderSelector,
    build_provider_selector,
    mock_selector,
    production_selector,
)

__all__ = [
    # LLM
    "ModelSpec",
    "ProviderSelector",
    "build_provider_selector",
    "mock_selector",
    "production_selector",
]
