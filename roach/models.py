# roach/models.py
#
# Records returned by the IRRexplorer prefixes API. They are parsed once from
# the camelCase JSON payload and treated as read-only afterwards.

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

RPKI_VALID = "VALID"
RPKI_INVALID = "INVALID"
RPKI_NOT_FOUND = "NOT_FOUND"


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class Message:
    category: str      # success | warning | danger | info
    text: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Message":
        return cls(category=str(data.get("category") or "info"), text=str(data.get("text") or ""))


@dataclass(frozen=True)
class RouteRecord:
    """
    One route object seen for a prefix, either an IRR route or an RPKI ROA.
    RPKI routes always carry a max-length, IRR routes may not.
    """
    asn: int
    rpsl_pk: str
    rpsl_text: str
    rpki_status: str                # VALID | INVALID | NOT_FOUND
    rpki_max_length: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RouteRecord":
        return cls(
            asn=int(data["asn"]),
            rpsl_pk=str(data.get("rpslPk") or ""),
            rpsl_text=str(data.get("rpslText") or ""),
            rpki_status=str(data.get("rpkiStatus") or RPKI_NOT_FOUND).upper(),
            rpki_max_length=_opt_int(data.get("rpkiMaxLength")),
        )


@dataclass(frozen=True)
class PrefixRecord:
    prefix: str
    rir: str
    bgp_origins: Tuple[int, ...]
    rpki_routes: Tuple[RouteRecord, ...]
    irr_routes: Dict[str, Tuple[RouteRecord, ...]]   # registry -> routes, API order kept
    category_overall: str
    goodness_overall: int
    messages: Tuple[Message, ...] = ()
    sort_key_ip_prefix: str = ""
    sort_key_reverse_networklen_ip: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PrefixRecord":
        irr_raw = data.get("irrRoutes") or {}
        irr_routes: Dict[str, Tuple[RouteRecord, ...]] = {}
        if isinstance(irr_raw, dict):
            for registry, routes in irr_raw.items():
                irr_routes[str(registry)] = tuple(RouteRecord.from_json(r) for r in _as_list(routes))
        return cls(
            prefix=str(data.get("prefix") or ""),
            rir=str(data.get("rir") or ""),
            bgp_origins=tuple(int(a) for a in _as_list(data.get("bgpOrigins"))),
            rpki_routes=tuple(RouteRecord.from_json(r) for r in _as_list(data.get("rpkiRoutes"))),
            irr_routes=irr_routes,
            category_overall=str(data.get("categoryOverall") or "info"),
            goodness_overall=int(data.get("goodnessOverall") or 0),
            messages=tuple(Message.from_json(m) for m in _as_list(data.get("messages"))),
            sort_key_ip_prefix=str(data.get("prefixSortKeyIpPrefix") or ""),
            sort_key_reverse_networklen_ip=str(data.get("prefixSortKeyReverseNetworklenIp") or ""),
        )

    def rpki_route_for(self, asn: int) -> Optional[RouteRecord]:
        return next((r for r in self.rpki_routes if r.asn == asn), None)


@dataclass(frozen=True)
class AsnResponse:
    direct_origin: Tuple[PrefixRecord, ...]
    overlaps: Tuple[PrefixRecord, ...]

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AsnResponse":
        return cls(
            direct_origin=tuple(PrefixRecord.from_json(p) for p in _as_list(data.get("directOrigin"))),
            overlaps=tuple(PrefixRecord.from_json(p) for p in _as_list(data.get("overlaps"))),
        )

    def all_records(self) -> List[PrefixRecord]:
        return [*self.direct_origin, *self.overlaps]


@dataclass(frozen=True)
class BatchResult:
    subnet: str
    origin: int
    rpki: str       # valid | invalid | unknown
