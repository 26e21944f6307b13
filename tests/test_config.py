from __future__ import annotations

from tedit.config import DEFAULT_PAGE_SIZE, DEFAULT_TAB_WIDTH, EditorConfig


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("TEDIT_PAGE_SIZE", "TEDIT_TAB_WIDTH", "TEDIT_LOG_PRESET"):
        monkeypatch.delenv(name, raising=False)

    config = EditorConfig.from_env()

    assert config.page_size == DEFAULT_PAGE_SIZE
    assert config.tab_width == DEFAULT_TAB_WIDTH == 8
    assert config.log_preset is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TEDIT_PAGE_SIZE", "5")
    monkeypatch.setenv("TEDIT_TAB_WIDTH", "8")
    monkeypatch.setenv("TEDIT_LOG_PRESET", "Development")

    config = EditorConfig.from_env()

    assert (config.page_size, config.tab_width) == (5, 8)
    assert config.log_preset == "development"


def test_invalid_values_fall_back(monkeypatch) -> None:
    monkeypatch.setenv("TEDIT_PAGE_SIZE", "lots")
    monkeypatch.setenv("TEDIT_TAB_WIDTH", "-2")
    monkeypatch.setenv("TEDIT_LOG_PRESET", "verbose")

    config = EditorConfig.from_env()

    assert config.page_size == DEFAULT_PAGE_SIZE
    assert config.tab_width == DEFAULT_TAB_WIDTH
    assert config.log_preset is None
