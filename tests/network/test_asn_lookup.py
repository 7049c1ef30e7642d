from __future__ import annotations

import pytest
import requests

from src.office_gate.office_gate.core.exceptions import ConfigurationError
from src.office_gate.office_gate.network.asn_lookup import IpinfoAsnLookup


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_lookup_parses_prefixed_asn():
    session = FakeSession(FakeResponse(payload={"ip": "8.8.8.8", "asn": "AS15169", "as_name": "Google LLC", "country_code": "US"}))
    lookup = IpinfoAsnLookup("tok", base_url="http://ipinfo.test/lite/", timeout=2.5, session=session)

    info = lookup.lookup("8.8.8.8")

    assert info.asn == 15169
    assert info.as_name == "Google LLC"
    url, kwargs = session.calls[0]
    assert url == "http://ipinfo.test/lite/8.8.8.8"
    assert kwargs["params"] == {"token": "tok"}
    assert kwargs["timeout"] == 2.5


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(FakeResponse(status_code=429, payload={})),
        FakeSession(FakeResponse(invalid_json=True)),
        FakeSession(FakeResponse(payload={"ip": "8.8.8.8"})),
        FakeSession(FakeResponse(payload={"asn": "ASxyz"})),
        FakeSession(FakeResponse(payload=["AS15169"])),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(error=requests.ConnectionError("down")),
    ],
)
def test_lookup_failures_mean_unknown(session):
    assert IpinfoAsnLookup("tok", session=session).lookup("8.8.8.8") is None


def test_missing_token_is_a_configuration_error():
    session = FakeSession(FakeResponse(payload={"asn": "AS15169"}))

    with pytest.raises(ConfigurationError):
        IpinfoAsnLookup(None, session=session).lookup("8.8.8.8")
    assert session.calls == []
