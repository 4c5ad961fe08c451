import uuid
from types import SimpleNamespace

import pytest

from swiftlog.encoder import (
    EncoderError,
    EncoderRegistry,
    NoEncoderNameError,
    new_encoder,
    register_encoder,
)


def nil_encoder(_config):
    return None


def echo_encoder(config):
    return ("encoder", config)


def test_register_encoder():
    registry = EncoderRegistry()
    registry.register("foo", nil_encoder)
    assert registry.names() == ["foo"]
    assert "foo" in registry


def test_duplicate_register():
    registry = EncoderRegistry()
    registry.register("foo", nil_encoder)
    with pytest.raises(EncoderError, match='already registered for name "foo"'):
        registry.register("foo", nil_encoder)
    assert registry.names() == ["foo"]


def test_register_no_name():
    registry = EncoderRegistry()
    with pytest.raises(NoEncoderNameError, match="no encoder name specified"):
        registry.register("", nil_encoder)
    assert registry.names() == []


def test_register_non_callable():
    with pytest.raises(TypeError):
        EncoderRegistry().register("foo", 42)


def test_new_encoder():
    registry = EncoderRegistry()
    registry.register("foo", nil_encoder)
    assert registry.new("foo", SimpleNamespace()) is None


def test_new_passes_config():
    registry = EncoderRegistry()
    registry.register("echo", echo_encoder)
    config = SimpleNamespace(time_key="ts", encode_time=lambda t, enc: None)
    assert registry.new("echo", config) == ("encoder", config)


def test_new_not_registered():
    with pytest.raises(EncoderError, match='no encoder registered for name "foo"'):
        EncoderRegistry().new("foo", SimpleNamespace())


def test_new_no_name():
    with pytest.raises(NoEncoderNameError):
        EncoderRegistry().new("", SimpleNamespace())


def test_missing_encode_time():
    registry = EncoderRegistry()
    registry.register("foo", nil_encoder)
    config = SimpleNamespace(time_key="ts", encode_time=None)
    with pytest.raises(EncoderError, match="missing encode_time"):
        registry.new("foo", config)


def test_names_sorted():
    registry = EncoderRegistry()
    for name in ("json", "console", "b"):
        registry.register(name, nil_encoder)
    assert registry.names() == ["b", "console", "json"]


def test_module_level_registry():
    name = f"test-{uuid.uuid4().hex}"
    register_encoder(name, echo_encoder)
    config = SimpleNamespace(time_key="")
    assert new_encoder(name, config) == ("encoder", config)
    with pytest.raises(EncoderError):
        register_encoder(name, echo_encoder)
    with pytest.raises(NoEncoderNameError):
        new_encoder("", config)