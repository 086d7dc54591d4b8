from __future__ import annotations

import logging

import pytest

import assume
from assume import AssumeConfig, InvalidHandler, default_handler


class TestAssumeConfig:
    """Test the gate and handler registry on isolated configs."""

    def test_disabled_by_default(self):
        cfg = AssumeConfig()
        assert cfg.is_enabled() is False
        assert cfg.enabled is False
        assert cfg.get_handler() is default_handler

    def test_set_enabled_coerces_to_bool(self):
        cfg = AssumeConfig()
        cfg.set_enabled("yes")
        assert cfg.is_enabled() is True
        cfg.set_enabled(None)
        assert cfg.is_enabled() is False

    def test_enable_disable(self):
        cfg = AssumeConfig()
        cfg.enable()
        assert cfg.is_enabled()
        cfg.disable()
        assert not cfg.is_enabled()

    def test_set_handler_last_write_wins(self):
        cfg = AssumeConfig()
        first = lambda result, thunk: None  # noqa: E731
        second = lambda result, thunk: None  # noqa: E731
        cfg.set_handler(first)
        cfg.set_handler(second)
        assert cfg.get_handler() is second

    @pytest.mark.parametrize("value", [None, 42, "handler", object()])
    def test_non_callable_handler_rejected(self, value):
        cfg = AssumeConfig()
        with pytest.raises(InvalidHandler, match="must be callable") as exc_info:
            cfg.set_handler(value)
        assert exc_info.value.handler is value
        assert cfg.get_handler() is default_handler

    def test_invalid_handler_keeps_previous(self):
        cfg = AssumeConfig()
        handler = lambda result, thunk: None  # noqa: E731
        cfg.set_handler(handler)

        with pytest.raises(InvalidHandler):
            cfg.set_handler(3)
        assert cfg.get_handler() is handler

    def test_handler_with_wrong_arity_rejected(self):
        cfg = AssumeConfig()
        with pytest.raises(InvalidHandler, match="handler\\(result, thunk\\)") as exc_info:
            cfg.set_handler(lambda: None)
        assert "must be callable" not in str(exc_info.value)
        with pytest.raises(InvalidHandler):
            cfg.set_handler(lambda a, b, c: None)
        assert cfg.get_handler() is default_handler

    def test_flexible_handlers_accepted(self):
        cfg = AssumeConfig()
        cfg.set_handler(lambda *args: None)
        cfg.set_handler(lambda result, thunk, extra=None: None)
        cfg.set_handler(print)

    def test_invalid_handler_is_type_error(self):
        with pytest.raises(TypeError):
            AssumeConfig(handler=1)  # type: ignore[arg-type]

    def test_reset(self):
        cfg = AssumeConfig(enabled=True, handler=lambda result, thunk: None)
        cfg.reset()
        assert not cfg.is_enabled()
        assert cfg.get_handler() is default_handler

    def test_reset_handler_keeps_gate(self):
        cfg = AssumeConfig(enabled=True, handler=lambda result, thunk: None)
        cfg.reset_handler()
        assert cfg.is_enabled()
        assert cfg.get_handler() is default_handler


class TestOverride:
    def test_override_enabled(self):
        cfg = AssumeConfig()
        with cfg.override(enabled=True) as inner:
            assert inner is cfg
            assert cfg.is_enabled()
        assert not cfg.is_enabled()

    def test_override_nested(self):
        cfg = AssumeConfig()
        with cfg.override(enabled=True):
            with cfg.override(enabled=False):
                assert not cfg.is_enabled()
            assert cfg.is_enabled()
        assert not cfg.is_enabled()

    def test_override_handler(self):
        handler = lambda result, thunk: None  # noqa: E731
        other = lambda result, thunk: None  # noqa: E731
        cfg = AssumeConfig(handler=handler)

        with cfg.override(handler=other):
            assert cfg.get_handler() is other
        assert cfg.get_handler() is handler

        with cfg.override(handler=None):
            assert cfg.get_handler() is default_handler
        assert cfg.get_handler() is handler

    def test_override_restores_on_error(self):
        cfg = AssumeConfig()
        with pytest.raises(RuntimeError):
            with cfg.override(enabled=True, handler=lambda result, thunk: None):
                raise RuntimeError("boom")
        assert not cfg.is_enabled()
        assert cfg.get_handler() is default_handler

    def test_override_invalid_handler_leaves_state(self):
        cfg = AssumeConfig()
        with pytest.raises(InvalidHandler):
            with cfg.override(enabled=True, handler=5):
                pass
        assert not cfg.is_enabled()
        assert cfg.get_handler() is default_handler


class TestFromEnv:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy_values_enable(self, raw):
        cfg = AssumeConfig.from_env({"ASSUME_ENABLED": raw})
        assert cfg.is_enabled()

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_falsy_values_disable(self, raw):
        cfg = AssumeConfig.from_env({"ASSUME_ENABLED": raw})
        assert not cfg.is_enabled()

    def test_unset_is_disabled(self):
        assert not AssumeConfig.from_env({}).is_enabled()

    def test_unrecognized_value_is_ignored_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="assume._config"):
            cfg = AssumeConfig.from_env({"ASSUME_ENABLED": "maybe"})
        assert not cfg.is_enabled()
        assert "ASSUME_ENABLED" in caplog.text

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("ASSUME_ENABLED", "1")
        assert AssumeConfig.from_env().is_enabled()
        monkeypatch.delenv("ASSUME_ENABLED")
        assert not AssumeConfig.from_env().is_enabled()


class TestDefaultConfig:
    def setup_method(self):
        self.original = (assume.is_enabled(), assume.get_handler())

    def teardown_method(self):
        enabled, handler = self.original
        assume.reset()
        assume.set_enabled(enabled)
        if handler is not default_handler:
            assume.set_handler(handler)

    def test_module_functions_use_default_config(self):
        cfg = assume.config()
        assert cfg is assume.config()

        assume.enable()
        assert cfg.is_enabled()
        assume.disable()
        assert not cfg.is_enabled()

        handler = lambda result, thunk: None  # noqa: E731
        assume.set_handler(handler)
        assert cfg.get_handler() is handler
        assume.reset_handler()
        assert cfg.get_handler() is default_handler

    def test_module_override(self):
        assume.reset()
        with assume.override(enabled=True):
            assert assume.is_enabled()
        assert not assume.is_enabled()

    def test_enabled_changes_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="assume._config"):
            assume.set_enabled(True)
        assert "Assumptions enabled" in caplog.text
