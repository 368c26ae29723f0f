import pytest
import requests

from roach.client import IRRExplorerClient
from roach.models import PrefixRecord


def route_json(asn, status="NOT_FOUND", max_length=None, pk=None):
    return {
        "rpslPk": pk or f"192.0.2.0/24AS{asn}",
        "asn": asn,
        "rpslText": f"route: 192.0.2.0/24\norigin: AS{asn}",
        "rpkiStatus": status,
        "rpkiMaxLength": max_length,
    }


def prefix_json(prefix="192.0.2.0/24", bgp=(), rpki=(), irr=None, category="info", messages=()):
    return {
        "prefixSortKeyReverseNetworklenIp": "",
        "prefixSortKeyIpPrefix": "",
        "prefix": prefix,
        "rir": "RIPE NCC",
        "bgpOrigins": list(bgp),
        "rpkiRoutes": list(rpki),
        "irrRoutes": irr or {},
        "categoryOverall": category,
        "goodnessOverall": 3,
        "messages": list(messages),
    }


def make_record(**kwargs) -> PrefixRecord:
    return PrefixRecord.from_json(prefix_json(**kwargs))


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Stands in for requests.Session: maps URL -> FakeResponse or exception."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.routes.get(url)
        if outcome is None:
            return FakeResponse(status_code=404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


BASE = "https://irr.test/api/prefixes"


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return IRRExplorerClient(base_url=BASE, timeout=2, session=session)


@pytest.fixture
def timeout_error():
    return requests.exceptions.ReadTimeout("read timed out")


@pytest.fixture(autouse=True)
def _reset_roach_logger():
    """Drop the package's stderr handler after each test so it does not keep a
    reference to a capture stream pytest has already closed."""
    import logging

    from roach.logger import ROOT_LOGGER, BatchHandler

    yield
    log = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in log.handlers if isinstance(h, BatchHandler)]:
        log.removeHandler(h)
