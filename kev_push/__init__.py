"""kev-push: notify when CISA's Known Exploited Vulnerabilities catalog changes."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

__version__ = "1.0.0"

KEV_FEED_URL = "https://www.cisa.gov/sites/default/files/feeds/known_exploited_vulnerabilities.json"
KEV_CATALOG_URL = "https://www.cisa.gov/known-exploited-vulnerabilities-catalog"


class KevPushError(Exception):
    """Base class for every error raised by kev-push."""


class ParseError(KevPushError):
    """The payload is not a well-formed catalog document."""


class CacheError(KevPushError):
    pass


class CacheReadError(CacheError):
    """The snapshot is missing, unreadable, or does not parse."""


class CacheWriteError(CacheError):
    """The snapshot could not be written."""


class FetchError(KevPushError):
    """The remote catalog could not be retrieved or parsed."""


class NotifyError(KevPushError):
    """A notification could not be delivered."""


# (attribute, wire key) in the order CISA publishes them
ENTRY_FIELDS = [
    ("cve_id", "cveID"),
    ("vendor", "vendorProject"),
    ("product", "product"),
    ("name", "vulnerabilityName"),
    ("date_added", "dateAdded"),
    ("short_description", "shortDescription"),
    ("required_action", "requiredAction"),
    ("due_date", "dueDate"),
    ("notes", "notes"),
]


@dataclass
class VulnerabilityEntry:
    cve_id: str
    vendor: str
    product: str
    name: str
    date_added: str
    short_description: str
    required_action: str
    due_date: str
    notes: str

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> "VulnerabilityEntry":
        if not isinstance(data, dict):
            raise ParseError(f"vulnerabilities[{index}] is not an object")
        values = {}
        for attr, key in ENTRY_FIELDS:
            value = data.get(key)
            if not isinstance(value, str):
                raise ParseError(f"vulnerabilities[{index}] is missing string field '{key}'")
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for attr, key in ENTRY_FIELDS}


@dataclass
class CatalogDocument:
    """One release of the KEV catalog.

    ``release_date`` is the only field used to decide whether the catalog
    changed; it is compared as an opaque string. Optional fields are ``None``
    when the feed omits them (or sends ``null``), which keeps "absent"
    distinct from an empty string or empty list.
    """

    title: str
    release_date: str
    catalog_version: Optional[str] = None
    count: Optional[int] = None
    entries: Optional[List[VulnerabilityEntry]] = field(default=None)

    @classmethod
    def from_dict(cls, data: Any) -> "CatalogDocument":
        if not isinstance(data, dict):
            raise ParseError("catalog document is not a JSON object")

        title = data.get("title")
        if not isinstance(title, str):
            raise ParseError("catalog document is missing string field 'title'")
        release_date = data.get("dateReleased")
        if not isinstance(release_date, str):
            raise ParseError("catalog document is missing string field 'dateReleased'")

        catalog_version = data.get("catalogVersion")
        if catalog_version is not None and not isinstance(catalog_version, str):
            raise ParseError("'catalogVersion' must be a string")

        count = data.get("count")
        # bool is an int subclass; a JSON true is not a count
        if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
            raise ParseError("'count' must be an integer")

        raw_entries = data.get("vulnerabilities")
        entries = None
        if raw_entries is not None:
            if not isinstance(raw_entries, list):
                raise ParseError("'vulnerabilities' must be a list")
            entries = [VulnerabilityEntry.from_dict(e, i) for i, e in enumerate(raw_entries)]

        return cls(
            title=title,
            release_date=release_date,
            catalog_version=catalog_version,
            count=count,
            entries=entries,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "catalogVersion": self.catalog_version,
            "dateReleased": self.release_date,
            "count": self.count,
            "vulnerabilities": (
                None if self.entries is None else [e.to_dict() for e in self.entries]
            ),
        }

    def newest_entries(self, limit: int = 10) -> List[VulnerabilityEntry]:
        """Entries sorted by ``date_added``, most recent first."""
        if not self.entries:
            return []
        ordered = sorted(self.entries, key=lambda e: e.date_added, reverse=True)
        return ordered[:max(limit, 0)]


def parse_document(payload: Union[bytes, str]) -> CatalogDocument:
    """Parse a JSON payload into a CatalogDocument, raising ParseError."""
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise ParseError(f"invalid JSON: {exc}") from exc
    doc = CatalogDocument.from_dict(data)
    # JSON allows lone surrogate escapes, which UTF-8 cannot hold
    try:
        serialize_document(doc)
    except UnicodeEncodeError as exc:
        raise ParseError(f"document contains text that is not valid Unicode: {exc}") from exc
    return doc


def serialize_document(doc: CatalogDocument) -> bytes:
    """Pretty-printed UTF-8 JSON, the inverse of parse_document."""
    return json.dumps(doc.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")
