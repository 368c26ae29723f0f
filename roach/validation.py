# roach/validation.py
#
# Input classification (ASN / IPv4 / IPv6 / CIDR subnet) and batch input
# validation. Everything here is pure: classification never raises, it
# answers INVALID instead.

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

# ---------------------------------
# Patterns / limits
# ---------------------------------
ASN_REGEX = re.compile(r"(AS)?([0-9]{1,10})", re.IGNORECASE)
ASN_MIN = 1
ASN_MAX = 4294967295

IPV4_REGEX = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
IPV4_OCTET_MAX = 255
IPV4_PREFIX_MAX = 32

IPV6_REGEX = re.compile(r"([0-9a-fA-F]{0,4}:){1,7}[0-9a-fA-F]{0,4}")
IPV6_COMPRESSED_REGEX = re.compile(r"([0-9a-fA-F]{0,4}:)*::([0-9a-fA-F]{0,4}:)*[0-9a-fA-F]{0,4}")
IPV6_PREFIX_MAX = 128

REASON_ASN = "ASNs are not supported in batch mode"
REASON_BARE_IP = "IP addresses without prefix length are not supported (use CIDR notation like /24)"
REASON_INVALID = "Invalid format - expected IPv4 or IPv6 subnet in CIDR notation"


class InputType(str, Enum):
    ASN = "asn"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    INVALID = "invalid"


class SubnetType(str, Enum):
    IPV4_SUBNET = "ipv4_subnet"
    IPV6_SUBNET = "ipv6_subnet"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationError:
    line: int       # 1-based, counted over non-blank lines only
    content: str
    reason: str


# ---------------------------------
# Single-value predicates
# ---------------------------------
def is_valid_asn(value: str) -> bool:
    m = ASN_REGEX.fullmatch(value)
    if not m:
        return False
    return ASN_MIN <= int(m.group(2)) <= ASN_MAX


def _valid_prefix_length(parts: List[str], maximum: int) -> bool:
    if len(parts) == 1:
        return True
    if len(parts) > 2:
        return False
    length = parts[1]
    if not length.isascii() or not length.isdigit():
        return False
    return 0 <= int(length) <= maximum


def is_valid_ipv4(value: str) -> bool:
    """Dotted quad with an optional /0-32 suffix."""
    parts = value.split("/")
    m = IPV4_REGEX.fullmatch(parts[0])
    if not m:
        return False
    if any(int(octet) > IPV4_OCTET_MAX for octet in m.groups()):
        return False
    return _valid_prefix_length(parts, IPV4_PREFIX_MAX)


def is_valid_ipv6(value: str) -> bool:
    """Full or ::-compressed IPv6 with an optional /0-128 suffix."""
    parts = value.split("/")
    ip = parts[0]
    if not IPV6_REGEX.fullmatch(ip) and not IPV6_COMPRESSED_REGEX.fullmatch(ip):
        return False
    return _valid_prefix_length(parts, IPV6_PREFIX_MAX)


def is_valid_ipv4_subnet(value: str) -> bool:
    return value.count("/") == 1 and is_valid_ipv4(value)


def is_valid_ipv6_subnet(value: str) -> bool:
    return value.count("/") == 1 and is_valid_ipv6(value)


# ---------------------------------
# Classifiers (ordered rule tables, first match wins)
# ---------------------------------
INPUT_RULES: Tuple[Tuple[Callable[[str], bool], InputType], ...] = (
    (is_valid_asn, InputType.ASN),
    (is_valid_ipv4, InputType.IPV4),
    (is_valid_ipv6, InputType.IPV6),
)

SUBNET_RULES: Tuple[Tuple[Callable[[str], bool], SubnetType], ...] = (
    (is_valid_ipv4_subnet, SubnetType.IPV4_SUBNET),
    (is_valid_ipv6_subnet, SubnetType.IPV6_SUBNET),
)


def detect_input_type(value: str) -> InputType:
    for predicate, kind in INPUT_RULES:
        if predicate(value):
            return kind
    return InputType.INVALID


def detect_subnet_type(value: str) -> SubnetType:
    """
    Stricter than detect_input_type: exactly one '/' is required, so a bare
    address is INVALID here.
    """
    for predicate, kind in SUBNET_RULES:
        if predicate(value):
            return kind
    return SubnetType.INVALID


def normalize_asn(value: str) -> str:
    m = re.fullmatch(r"(?:AS)?([0-9]+)", value.strip(), re.IGNORECASE)
    if not m:
        raise ValueError(f"Invalid ASN format: {value!r}")
    return f"AS{m.group(1)}"


# ---------------------------------
# Batch validation
# ---------------------------------
def _rejection_reason(line: str) -> str:
    kind = detect_input_type(line)
    if kind is InputType.ASN:
        return REASON_ASN
    if kind in (InputType.IPV4, InputType.IPV6):
        return REASON_BARE_IP
    return REASON_INVALID


def validate_batch_input(content: str) -> Tuple[List[str], List[ValidationError]]:
    """
    Split batch input into accepted subnets and line-addressed errors.

    Blank lines are dropped before numbering, so line numbers refer to the
    sequence of non-blank lines. A non-empty error list means the whole batch
    must be rejected.
    """
    lines = [ln.strip() for ln in content.split("\n")]
    lines = [ln for ln in lines if ln]

    valid_lines: List[str] = []
    errors: List[ValidationError] = []
    for number, line in enumerate(lines, start=1):
        if detect_subnet_type(line) is SubnetType.INVALID:
            errors.append(ValidationError(line=number, content=line, reason=_rejection_reason(line)))
        else:
            valid_lines.append(line)
    return valid_lines, errors


def format_validation_errors(errors: List[ValidationError]) -> str:
    error_lines = [f'  Line {e.line}: "{e.content}" - {e.reason}' for e in errors]
    return "\n".join([
        "Validation failed with the following errors:",
        "",
        *error_lines,
        "",
        "Please fix these issues and try again.",
        "Batch mode only accepts IPv4 and IPv6 subnets in CIDR notation "
        "(e.g., 192.168.1.0/24, 2001:db8::/32)",
    ])
