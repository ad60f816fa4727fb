from core.config import Settings, get_settings


def test_defaults():
    s = Settings()
    assert s.SUBMISSION_DELAY_SECONDS == 2.0
    assert s.LOG_LEVEL == "INFO"


def test_env_override(monkeypatch):
    monkeypatch.setenv("BROKERSITE_SUBMISSION_DELAY_SECONDS", "0")
    monkeypatch.setenv("BROKERSITE_BROKER_NAME", "Prairie Mortgages")
    get_settings.cache_clear()
    try:
        s = get_settings()
        assert s.SUBMISSION_DELAY_SECONDS == 0
        assert s.BROKER_NAME == "Prairie Mortgages"
    finally:
        get_settings.cache_clear()
