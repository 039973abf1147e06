"""Tests for the model registry."""

import logging

from bubblechat.config.models import ModelConfig, ModelRegistry


def test_default_model_is_flash_20():
    assert ModelRegistry.DEFAULT.id == "gemini-2.0-flash"
    assert ModelRegistry.DEFAULT in ModelRegistry.all_models()


def test_get_by_id():
    assert ModelRegistry.get_by_id("gemini-2.5-pro") is ModelRegistry.PRO_25
    assert ModelRegistry.get_by_id("models/gemini-2.5-flash") is ModelRegistry.FLASH_25
    assert ModelRegistry.get_by_id("gemini-99") is None
    assert ModelRegistry.get_by_id(None) is None


def test_resolve_empty_uses_default():
    assert ModelRegistry.resolve(None) == "gemini-2.0-flash"
    assert ModelRegistry.resolve("") == "gemini-2.0-flash"


def test_resolve_strips_models_prefix():
    assert ModelRegistry.resolve("models/gemini-2.5-pro") == "gemini-2.5-pro"


def test_resolve_unknown_passes_through(caplog):
    with caplog.at_level(logging.WARNING):
        assert ModelRegistry.resolve("gemini-next") == "gemini-next"
    assert "Unknown model" in caplog.text


def test_resolve_deprecated_warns(monkeypatch, caplog):
    old = ModelConfig(
        id="gemini-old",
        display_name="Old",
        description="",
        deprecated=True,
        replacement="gemini-2.0-flash",
    )
    monkeypatch.setattr(ModelRegistry, "_ALL_MODELS", ModelRegistry._ALL_MODELS + (old,))

    with caplog.at_level(logging.WARNING):
        assert ModelRegistry.resolve("gemini-old") == "gemini-old"
    assert "deprecated" in caplog.text
    assert "gemini-2.0-flash" in caplog.text
