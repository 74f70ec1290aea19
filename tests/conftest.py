import pytest
from gsheet_append.config import logger as log_mod


@pytest.fixture(autouse=True)
def no_admin_alerts(monkeypatch):
    """Keep log_and_raise from posting alerts during tests."""
    monkeypatch.delenv("ALERT_TELEGRAM_TOKEN", raising=False)
    monkeypatch.delenv("ALERT_CHAT_ID", raising=False)
    monkeypatch.setattr(log_mod, "_async_alerts", True)
