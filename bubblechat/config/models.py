"""Known Gemini models for the BubbleChat application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    """Configuration metadata for a Gemini model."""

    id: str
    display_name: str
    description: str
    deprecated: bool = False
    replacement: Optional[str] = None


class ModelRegistry:
    """Registry of Gemini models BubbleChat knows how to talk to."""

    FLASH_20 = ModelConfig(
        id="gemini-2.0-flash",
        display_name="Gemini 2.0 Flash",
        description="Fast, low-cost model with function calling.",
    )

    FLASH_LATEST = ModelConfig(
        id="gemini-flash-latest",
        display_name="Gemini Flash (Latest)",
        description="Latest Flash model.",
    )

    FLASH_25 = ModelConfig(
        id="gemini-2.5-flash",
        display_name="Gemini 2.5 Flash",
        description="Flash model with thinking support.",
    )

    PRO_25 = ModelConfig(
        id="gemini-2.5-pro",
        display_name="Gemini 2.5 Pro",
        description="Reasoning model for complex multi-step investigations.",
    )

    _ALL_MODELS: Tuple[ModelConfig, ...] = (FLASH_20, FLASH_LATEST, FLASH_25, PRO_25)

    DEFAULT = FLASH_20

    @classmethod
    def all_models(cls) -> Tuple[ModelConfig, ...]:
        return cls._ALL_MODELS

    @classmethod
    def _indexed_models(cls) -> Dict[str, ModelConfig]:
        return {model.id: model for model in cls._ALL_MODELS}

    @classmethod
    def get_by_id(cls, model_id: Optional[str]) -> Optional[ModelConfig]:
        """Return configuration for ``model_id`` if it is a known model."""
        if not model_id:
            return None
        return cls._indexed_models().get(model_id.removeprefix("models/"))

    @classmethod
    def resolve(cls, model_id: Optional[str]) -> str:
        """Return the id to send to the API for ``model_id``.

        Empty ids resolve to the default model. Unknown ids are passed through
        unchanged so newly released models work, but a warning is logged.
        """
        if not model_id:
            return cls.DEFAULT.id

        model = cls.get_by_id(model_id)
        if model is None:
            LOGGER.warning("Unknown model '%s'; sending it to the API as-is", model_id)
            return model_id
        if model.deprecated:
            LOGGER.warning(
                "Model %s is deprecated%s",
                model.id,
                f"; use {model.replacement} instead" if model.replacement else "",
            )
        return model.id
