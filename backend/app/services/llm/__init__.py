"""
Language model provider selection.
"""

from app.services.llm.providers import (
    ModelSpec,
    ProviderSelector,
    build_provider_selector,
    production_selector,
    mock_selector,
)

__all__ = [
    "ModelSpec",
    "ProviderSelector",
    "build_provider_selector",
    "production_selector",
    "mock_selector",
]
