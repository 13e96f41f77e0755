import json

import pytest
import requests


def make_catalog(release_date="2024-01-01", **overrides):
    data = {
        "title": "CISA Catalog of Known Exploited Vulnerabilities",
        "catalogVersion": release_date.replace("-", ".") if release_date else None,
        "dateReleased": release_date,
        "count": 2,
        "vulnerabilities": [
            {
                "cveID": "CVE-2021-44228",
                "vendorProject": "Apache",
                "product": "Log4j2",
                "vulnerabilityName": "Apache Log4j2 Remote Code Execution Vulnerability",
                "dateAdded": "2021-12-10",
                "shortDescription": "JNDI features do not protect against attacker-controlled LDAP.",
                "requiredAction": "Apply updates per vendor instructions.",
                "dueDate": "2021-12-24",
                "notes": "",
            },
            {
                "cveID": "CVE-2023-4966",
                "vendorProject": "Citrix",
                "product": "NetScaler ADC and NetScaler Gateway",
                "vulnerabilityName": "Citrix Bleed",
                "dateAdded": "2023-10-18",
                "shortDescription": "Sensitive information disclosure.",
                "requiredAction": "Apply mitigations per vendor instructions.",
                "dueDate": "2023-11-08",
                "notes": "https://support.citrix.com/article/CTX579459",
            },
        ],
    }
    data.update(overrides)
    return data


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        if content is None:
            content = json.dumps(body if body is not None else {}).encode("utf-8")
        self.content = content
        self.text = content.decode("utf-8", errors="replace")

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; replays queued responses or errors."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


@pytest.fixture
def catalog_data():
    return make_catalog()


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "kev-cache"
