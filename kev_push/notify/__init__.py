"""Fan-out of "catalog updated" notifications to one or more sinks."""

import logging
from typing import Iterable

from kev_push import KEV_CATALOG_URL, CatalogDocument, NotifyError

logger = logging.getLogger(__name__)

NOTIFY_TITLE = "New KEV Release!"


class NotificationSink:
    """Something that can deliver a short message to the user."""

    name = "sink"

    def send(self, title: str, message: str, url: str) -> None:
        raise NotImplementedError


class Notifier:
    def __init__(self, sinks: Iterable[NotificationSink]):
        self.sinks = list(sinks)

    def notify(self, doc: CatalogDocument) -> None:
        """Tell every sink about ``doc``. Delivery failures are logged, never raised."""
        message = f"{NOTIFY_TITLE} {KEV_CATALOG_URL} (released {doc.release_date})"
        for sink in self.sinks:
            try:
                sink.send(NOTIFY_TITLE, message, KEV_CATALOG_URL)
            except NotifyError as exc:
                logger.warning("%s notification failed: %s", sink.name, exc)
            except Exception:
                logger.exception("%s notification failed unexpectedly", sink.name)
