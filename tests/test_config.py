import pytest

from insight_core.config import (
    DEFAULT_WINDOWS,
    ChartConfig,
    LookbackWindow,
    get_api_key,
    load_api_keys,
    load_settings,
    parse_settings,
    validate_api_keys,
)


def test_packaged_settings():
    settings = load_settings()
    assert settings.chart == ChartConfig()
    assert settings.chart.plot_height == 18
    assert settings.chart.plot_width == 70
    assert settings.windows == DEFAULT_WINDOWS
    assert settings.providers.history_days == 30
    assert settings.llm.groq_model == "llama-3.3-70b-versatile"
    assert settings.auth0.default_expiry_secs == 86400
    assert not settings.auth0.configured


def test_load_settings_is_cached():
    assert load_settings() is load_settings()


def test_empty_mapping_gives_defaults():
    settings = parse_settings({}, env={})
    assert settings.chart == ChartConfig()
    assert settings.windows == DEFAULT_WINDOWS
    assert settings.auth0.domain is None


def test_overrides_and_unknown_keys():
    settings = parse_settings(
        {
            "chart": {"width": 60, "label_count": 4, "colour": "blue"},
            "lookback_windows": [["2 days", 48], {"label": "1 year", "hours_ago": 8760}],
        },
        env={"AUTH0_DOMAIN": "t.auth0.com", "AUTH0_CLIENT_ID": "id", "AUTH0_CLIENT_SECRET": "s"},
    )
    assert settings.chart.width == 60
    assert settings.chart.label_count == 4
    assert settings.chart.height == 20
    assert settings.windows == (LookbackWindow("2 days", 48), LookbackWindow("1 year", 8760))
    assert settings.auth0.configured


def test_invalid_chart_override_rejected():
    with pytest.raises(ValueError):
        parse_settings({"chart": {"width": 5}}, env={})


def test_negative_window_rejected():
    with pytest.raises(ValueError):
        LookbackWindow("future", -1)


def test_settings_path_override(tmp_path, monkeypatch):
    path = tmp_path / "settings.yml"
    path.write_text("chart:\n  height: 12\nproviders:\n  history_days: 10\n", encoding="utf-8")
    monkeypatch.setenv("INSIGHT_SETTINGS", str(path))
    load_settings.cache_clear()
    settings = load_settings()
    assert settings.chart.height == 12
    assert settings.providers.history_days == 10
    assert settings.windows == DEFAULT_WINDOWS


def test_missing_settings_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("INSIGHT_SETTINGS", str(tmp_path / "absent.yml"))
    load_settings.cache_clear()
    assert load_settings().chart == ChartConfig()


def test_api_keys(monkeypatch):
    monkeypatch.setenv("FMP_API_KEY", "fmp-key")
    monkeypatch.setenv("GROQ_API_KEY", "  ")
    assert get_api_key("fmp") == "fmp-key"
    assert get_api_key("marketstack") is None
    assert load_api_keys()["FMP_API_KEY"] == "fmp-key"
    status = validate_api_keys()
    assert status["FMP"] is True
    assert status["GROQ"] is False
    assert status["OPENAI"] is False
