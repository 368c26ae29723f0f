# roach/origins.py
#
# Reconcile BGP origins, RPKI routes and per-registry IRR routes of one
# prefix into a single view keyed by origin ASN.

from dataclasses import dataclass, field
from typing import Dict, List

from roach.models import RPKI_INVALID, RPKI_VALID, PrefixRecord

STATUS_UNKNOWN = "unknown"
STATUS_NOT_FOUND = "not_found"
DECISIVE_STATUSES = ("valid", "invalid")


@dataclass
class OriginEntry:
    asn: int
    registries: List[str] = field(default_factory=list)
    rpki_status: str = STATUS_UNKNOWN     # valid | invalid | not_found | unknown
    is_bgp_origin: bool = False
    has_rpki: bool = False                # named by an explicit RPKI route

    @property
    def sources(self) -> List[str]:
        """Display labels: registries, then RPKI, then BGP for BGP-only sightings."""
        labels = list(self.registries)
        if self.has_rpki:
            labels.append("RPKI")
        if not labels and self.is_bgp_origin:
            labels.append("BGP")
        return labels


def _backfill(entry: OriginEntry, status: str) -> None:
    # An explicit RPKI route always wins over an IRR annotation.
    if entry.has_rpki or entry.rpki_status in DECISIVE_STATUSES:
        return
    if status in DECISIVE_STATUSES or entry.rpki_status == STATUS_UNKNOWN:
        entry.rpki_status = status


def reconcile_origins(record: PrefixRecord) -> Dict[int, OriginEntry]:
    """
    Build one OriginEntry per ASN seen in any source.

    Passes run BGP, then RPKI, then IRR registries in API order; dict order is
    first-seen order. A decided status is never reset to unknown, and
    NOT_FOUND only fills an entry that has nothing better.
    """
    entries: Dict[int, OriginEntry] = {}

    for asn in record.bgp_origins:
        if asn not in entries:
            entries[asn] = OriginEntry(asn=asn, is_bgp_origin=True)

    for route in record.rpki_routes:
        entry = entries.setdefault(route.asn, OriginEntry(asn=route.asn))
        entry.rpki_status = route.rpki_status.lower()
        entry.has_rpki = True

    for registry, routes in record.irr_routes.items():
        for route in routes:
            status = route.rpki_status.lower()
            entry = entries.get(route.asn)
            if entry is None:
                entries[route.asn] = OriginEntry(asn=route.asn, registries=[registry], rpki_status=status)
                continue
            if registry not in entry.registries:
                entry.registries.append(registry)
            _backfill(entry, status)

    return entries


def resolve_rpki_status(record: PrefixRecord, asn: int) -> str:
    """
    Collapse everything known about (prefix, asn) to valid | invalid | unknown.

    An RPKI route for the ASN decides outright (anything but VALID counts as
    invalid). Otherwise the first IRR route for the ASN carrying VALID or
    INVALID decides, scanning registries in order.
    """
    rpki_route = record.rpki_route_for(asn)
    if rpki_route is not None:
        return "valid" if rpki_route.rpki_status == RPKI_VALID else "invalid"

    for routes in record.irr_routes.values():
        for route in routes:
            if route.asn != asn:
                continue
            if route.rpki_status == RPKI_VALID:
                return "valid"
            if route.rpki_status == RPKI_INVALID:
                return "invalid"

    return STATUS_UNKNOWN
