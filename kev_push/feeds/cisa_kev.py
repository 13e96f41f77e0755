"""CISA Known Exploited Vulnerabilities feed retrieval."""

import logging
from typing import Optional

import requests

from kev_push import KEV_FEED_URL, CatalogDocument, FetchError, ParseError, __version__, parse_document

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class CatalogFetcher:
    """Fetches the current catalog with a single bounded GET, no retries."""

    def __init__(self, url: str = KEV_FEED_URL, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self) -> CatalogDocument:
        logger.debug("GET %s (timeout %ss)", self.url, self.timeout)
        try:
            resp = self.session.get(self.url, timeout=self.timeout,
                                    headers={"User-Agent": f"kev-push/{__version__}"})
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"failed to fetch {self.url}: {exc}") from exc

        try:
            doc = parse_document(resp.content)
        except ParseError as exc:
            raise FetchError(f"unexpected response from {self.url}: {exc}") from exc

        logger.info("Fetched KEV catalog released %s", doc.release_date)
        return doc
