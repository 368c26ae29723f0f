# roach/client.py
#
# Thin client for the IRRexplorer prefixes API. One HTTP GET per call, a hard
# timeout, no retries and no caching.

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from roach import config
from roach.models import AsnResponse, PrefixRecord
from roach.validation import InputType, detect_input_type, normalize_asn

logger = logging.getLogger(__name__)


class IRRExplorerError(RuntimeError):
    """Transport, HTTP status or payload failure talking to IRRexplorer."""


class QueryTimeoutError(IRRExplorerError):
    pass


class IRRExplorerClient:
    def __init__(self, base_url: str = config.API_BASE, timeout: float = config.REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": config.USER_AGENT})
        self.session = session

    def _get_json(self, url: str) -> Any:
        logger.debug(f"GET {url} (timeout={self.timeout:g}s)")
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.Timeout:
            raise QueryTimeoutError(
                f"Query timed out after {self.timeout:g} seconds. "
                "The query might return too many results."
            )
        except requests.RequestException as e:
            raise IRRExplorerError(f"HTTP error: {e}")

        if not r.ok:
            raise IRRExplorerError(f"HTTP error! status: {r.status_code}")
        try:
            return r.json()
        except ValueError as e:
            raise IRRExplorerError(f"Invalid JSON from {url}: {e}")

    def get_asn_data(self, asn: str) -> AsnResponse:
        js = self._get_json(f"{self.base_url}/asn/{normalize_asn(asn)}")
        if not isinstance(js, dict):
            raise IRRExplorerError("Unexpected ASN response shape")
        try:
            return AsnResponse.from_json(js)
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
            raise IRRExplorerError(f"Malformed ASN response: {e!r}")

    def get_prefix_data(self, prefix: str) -> List[PrefixRecord]:
        js = self._get_json(f"{self.base_url}/prefix/{quote(prefix, safe='')}")
        if not isinstance(js, list):
            raise IRRExplorerError("Unexpected prefix response shape")
        try:
            return [PrefixRecord.from_json(p) for p in js]
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
            raise IRRExplorerError(f"Malformed prefix response: {e!r}")

    def lookup(self, resource: str) -> List[PrefixRecord]:
        """
        Fetch every prefix record relevant to an ASN, address or prefix.
        ASN lookups return direct origins followed by overlaps.
        """
        resource = resource.strip()
        kind = detect_input_type(resource)
        if kind is InputType.INVALID:
            raise ValueError(
                "Invalid input. Please enter a valid ASN (AS12345), IPv4 (1.1.1.1), "
                "IPv6 (2001:db8::1), or CIDR (1.1.1.0/24)"
            )
        if kind is InputType.ASN:
            return self.get_asn_data(resource).all_records()
        return self.get_prefix_data(resource)
