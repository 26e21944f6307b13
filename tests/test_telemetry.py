from __future__ import annotations

import pytest

from tedit.runtime import telemetry


def test_configure_rejects_unknown_preset_and_mixed_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_span_stringifies_metadata_and_reraises() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", component=True, metadata={"keys": [1, 2]}) as handle:
            assert handle.metadata == {"keys": "[1, 2]"}
            assert handle.component_name == "test::span"
            raise RuntimeError("boom")


def test_env_reads_prefixed_variables(monkeypatch) -> None:
    monkeypatch.setenv("TEDIT_PAGE_SIZE", "12")

    assert telemetry.env("PAGE_SIZE") == "12"
    assert telemetry.env("MISSING", "fallback") == "fallback"
