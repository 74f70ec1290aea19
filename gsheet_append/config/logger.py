"""
Package logger plus optional Telegram admin alerts.

Importing gsheet_append never touches the host's logging setup: the
package logger only carries a NullHandler. Applications configure logging
themselves; the gsheet-append console script calls configure_logging().
"""
import logging
import os
import random
import sys
import threading
import time

import requests

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("gsheet_append")
logger.addHandler(logging.NullHandler())

TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"
TELEGRAM_MAX_MESSAGE_LENGTH = 4096
TELEGRAM_TIMEOUT = 5  # seconds
TELEGRAM_MAX_RETRIES = 3
TELEGRAM_BACKOFF_BASE = 1  # seconds

# Default for alert_admin(async_send=None); short-lived processes turn it off
# so the alert is delivered before exit.
_async_alerts = True


def configure_logging(level: str = None, async_alerts: bool = True):
    """
    Process-level setup for scripts: stdout handler on the root logger at
    level (or LOG_LEVEL, default INFO), and the alert delivery mode.
    """
    global _async_alerts
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    _async_alerts = async_alerts


# ===== Admin alerts =====

def _alert_target():
    """(token, chat_id) for admin alerts, read at call time."""
    return os.getenv("ALERT_TELEGRAM_TOKEN"), os.getenv("ALERT_CHAT_ID")


def _send_alert(token: str, chat_id: str, message: str, parse_mode: str = None):
    """Post one alert, retrying with exponential backoff and jitter."""
    if len(message) > TELEGRAM_MAX_MESSAGE_LENGTH:
        message = message[:TELEGRAM_MAX_MESSAGE_LENGTH - 50] + "\n...[truncated]"

    payload = {"chat_id": chat_id, "text": message}
    if parse_mode:
        payload["parse_mode"] = parse_mode

    for attempt in range(1, TELEGRAM_MAX_RETRIES + 1):
        try:
            resp = requests.post(TELEGRAM_API.format(token=token), json=payload, timeout=TELEGRAM_TIMEOUT)
            if resp.status_code == 200:
                return
            logger.error(f"[Alert] Telegram API returned {resp.status_code}: {resp.text}")
        except requests.RequestException as e:
            logger.error(f"[Alert] Failed to send admin alert (attempt {attempt}): {e}")

        if attempt < TELEGRAM_MAX_RETRIES:
            delay = TELEGRAM_BACKOFF_BASE * (2 ** (attempt - 1)) + random.uniform(0, 0.5)
            logger.info(f"[Alert] Retrying in {delay:.1f}s...")
            time.sleep(delay)

    logger.error("[Alert] Giving up after max retries.")


def alert_admin(message: str, parse_mode: str = None, async_send: bool = None):
    """
    Send a Telegram message to the admin chat.
    No-op unless ALERT_TELEGRAM_TOKEN and ALERT_CHAT_ID are both set.
    async_send=None follows configure_logging(async_alerts=...).
    """
    token, chat_id = _alert_target()
    if not token or not chat_id:
        return
    if async_send is None:
        async_send = _async_alerts
    if async_send:
        threading.Thread(target=_send_alert, args=(token, chat_id, message, parse_mode), daemon=True).start()
    else:
        _send_alert(token, chat_id, message, parse_mode)


# ===== Log helpers =====

def log_and_raise(module: str, action: str, error: Exception):
    """
    Log an error with traceback, alert admin, and re-raise the same exception.
    Call it from exactly one layer per failure.
    """
    msg = f"[{module}] Failed while {action}: {error}"
    logger.error(msg, exc_info=error)
    alert_admin(msg)
    raise error


def log_and_alert(module: str, action: str, warning: str):
    """Log a warning and alert admin without raising."""
    msg = f"[{module}] {action}: {warning}"
    logger.warning(msg)
    alert_admin(msg)
