# roach/export.py

import json
from dataclasses import asdict
from typing import Iterable, List, Sequence

from roach.models import BatchResult, PrefixRecord
from roach.origins import resolve_rpki_status

CSV_HEADER = "subnet,origin,rpki"


def filter_exact_matches(records: Iterable[PrefixRecord], subnet: str) -> List[PrefixRecord]:
    # Batch mode reports exact matches only, covering/overlapping prefixes are dropped.
    return [r for r in records if r.prefix == subnet]


def _origin_set(record: PrefixRecord) -> List[int]:
    """IRR-named origins in first-seen order, or the BGP origins when no registry names one."""
    origins: List[int] = []
    for routes in record.irr_routes.values():
        for route in routes:
            if route.asn not in origins:
                origins.append(route.asn)
    if not origins:
        for asn in record.bgp_origins:
            if asn not in origins:
                origins.append(asn)
    return origins


def extract_batch_results(records: Sequence[PrefixRecord]) -> List[BatchResult]:
    results: List[BatchResult] = []
    for record in records:
        for asn in _origin_set(record):
            results.append(BatchResult(
                subnet=record.prefix,
                origin=asn,
                rpki=resolve_rpki_status(record, asn),
            ))
    return results


def generate_csv(results: Sequence[BatchResult]) -> str:
    rows = [f'"{r.subnet}",AS{r.origin},{r.rpki.lower()}' for r in results]
    return "\n".join([CSV_HEADER, *rows])


def results_to_json(results: Sequence[BatchResult]) -> str:
    return json.dumps([asdict(r) for r in results], indent=2)
