# src/enhance/enhancer_factory.py — v1
"""Factory: instantiate the AI enhancer named by AI_PROVIDER."""

from __future__ import annotations

import importlib
import logging

from codexindex.config.settings import Settings
from codexindex.enhance.base_enhancer import BaseEnhancer

logger = logging.getLogger(__name__)

# Registry of provider name → enhancer class path (lazy import).
_ENHANCER_REGISTRY: dict[str, str] = {
    "disabled": "codexindex.enhance.base_enhancer.NullEnhancer",
}


class UnsupportedEnhancerError(ValueError):
    """Raised when an enhancer provider is not registered."""


def create_enhancer(settings: Settings | None = None, **kwargs: object) -> BaseEnhancer:
    """Instantiate the configured enhancer.

    Args:
        settings: Application settings. Defaults to the disabled enhancer.
        **kwargs: Constructor arguments for the enhancer class.

    Raises:
        UnsupportedEnhancerError: If the provider is not registered.
    """
    provider = "disabled" if settings is None else settings.ai_provider
    if provider not in _ENHANCER_REGISTRY:
        raise UnsupportedEnhancerError(
            f"Unsupported AI provider: {provider!r}. "
            f"Available: {', '.join(sorted(_ENHANCER_REGISTRY))}"
        )

    module_path, class_name = _ENHANCER_REGISTRY[provider].rsplit(".", 1)
    enhancer_cls = getattr(importlib.import_module(module_path), class_name)
    logger.debug("Creating enhancer: provider=%s", provider)
    return enhancer_cls(**kwargs)


def register_enhancer(name: str, class_path: str) -> None:
    """Register a custom enhancer implementing BaseEnhancer."""
    _ENHANCER_REGISTRY[name] = class_path
    logger.info("Registered enhancer: %s -> %s", name, class_path)
