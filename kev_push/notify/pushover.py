"""Pushover push notifications."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from kev_push import NotifyError
from kev_push.notify import NotificationSink

logger = logging.getLogger(__name__)

PUSHOVER_API = "https://api.pushover.net/1/messages.json"


@dataclass
class PushoverConfig:
    app_token: Optional[str] = None
    user_key: Optional[str] = None


class PushoverSink(NotificationSink):
    """Sends one Pushover message per update.

    Missing credentials are not an error: the sink logs which one is absent
    and returns without making a request.
    """

    name = "pushover"

    def __init__(self, config: PushoverConfig, session: Optional[requests.Session] = None,
                 timeout: float = 15.0):
        self.config = config
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, title: str, message: str, url: str) -> None:
        if not self.config.app_token:
            logger.warning("PUSHOVER_APP is not set; skipping push notification")
            return
        if not self.config.user_key:
            logger.warning("PUSHOVER_USER is not set; skipping push notification")
            return

        payload = {
            "token": self.config.app_token,
            "user": self.config.user_key,
            "title": title,
            "message": message,
            "url": url,
            "url_title": "KEV Catalog",
        }
        try:
            resp = self.session.post(PUSHOVER_API, data=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NotifyError(f"Pushover request failed: {exc}") from exc

        if resp.status_code != 200:
            raise NotifyError(f"Pushover API error {resp.status_code}: {resp.text[:200]}")
        try:
            body = resp.json()
        except ValueError as exc:
            raise NotifyError("Pushover returned a non-JSON response") from exc
        if not isinstance(body, dict) or body.get("status") != 1:
            raise NotifyError(f"Pushover rejected the message: {body}")

        logger.info("Pushover notification sent")
