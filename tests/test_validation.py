"""
Tests for identifier classification and batch input validation.
"""

import pytest

from roach.validation import (
    REASON_ASN,
    REASON_BARE_IP,
    REASON_INVALID,
    InputType,
    SubnetType,
    ValidationError,
    detect_input_type,
    detect_subnet_type,
    format_validation_errors,
    normalize_asn,
    validate_batch_input,
)


class TestDetectInputType:
    @pytest.mark.parametrize("value", ["AS1", "1", "as15169", "AS4294967295", "4294967295"])
    def test_asn(self, value):
        assert detect_input_type(value) is InputType.ASN

    @pytest.mark.parametrize("value", ["AS0", "0", "AS4294967296", "AS", "AS12345678901", "ASN1"])
    def test_asn_out_of_range_or_malformed(self, value):
        assert detect_input_type(value) is InputType.INVALID

    @pytest.mark.parametrize("value", ["1.1.1.1", "1.1.1.0/24", "0.0.0.0/0", "255.255.255.255/32"])
    def test_ipv4(self, value):
        assert detect_input_type(value) is InputType.IPV4

    @pytest.mark.parametrize("value", ["256.1.1.1", "1.1.1", "1.1.1.0/33", "1.1.1.0/", "1.1.1.0/24/1", "1.1.1.0/x"])
    def test_ipv4_invalid(self, value):
        assert detect_input_type(value) is InputType.INVALID

    @pytest.mark.parametrize("value", [
        "2001:db8::1",
        "2001:db8::/32",
        "::",
        "::/0",
        "2001:0db8:0000:0000:0000:0000:0000:0001",
        "2001:db8:0:0:0:0:0:1/128",
    ])
    def test_ipv6(self, value):
        assert detect_input_type(value) is InputType.IPV6

    @pytest.mark.parametrize("value", ["2001:db8::/129", "2001:db8::g", "2001:db8::/32/1", "", " ", "hello"])
    def test_ipv6_and_garbage_invalid(self, value):
        assert detect_input_type(value) is InputType.INVALID

    def test_asn_rule_wins_over_addresses(self):
        # bare digits are an ASN even though the later rules are tried too
        assert detect_input_type("64512") is InputType.ASN

    def test_deterministic(self):
        for value in ["AS1", "1.1.1.1", "2001:db8::/32", "nope", ""]:
            assert detect_input_type(value) is detect_input_type(value)


class TestDetectSubnetType:
    def test_bare_address_is_not_a_subnet(self):
        assert detect_input_type("1.1.1.1") is InputType.IPV4
        assert detect_subnet_type("1.1.1.1") is SubnetType.INVALID
        assert detect_subnet_type("2001:db8::1") is SubnetType.INVALID

    def test_subnets(self):
        assert detect_subnet_type("1.1.1.0/24") is SubnetType.IPV4_SUBNET
        assert detect_subnet_type("2001:db8::/32") is SubnetType.IPV6_SUBNET

    @pytest.mark.parametrize("value", ["1.1.1.0/33", "AS1", "1.1.1.0/24/24", "", "2001:db8::/200"])
    def test_invalid(self, value):
        assert detect_subnet_type(value) is SubnetType.INVALID


class TestNormalizeAsn:
    def test_adds_prefix(self):
        assert normalize_asn("13335") == "AS13335"
        assert normalize_asn("as13335") == "AS13335"

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            normalize_asn("1.1.1.1")


class TestValidateBatchInput:
    def test_mixed_input(self):
        valid, errors = validate_batch_input("1.1.1.0/24\nAS15169\n\n2001:db8::/32")

        assert valid == ["1.1.1.0/24", "2001:db8::/32"]
        assert errors == [ValidationError(line=2, content="AS15169", reason=REASON_ASN)]
        assert "ASNs" in errors[0].reason

    def test_blank_lines_do_not_count(self):
        valid, errors = validate_batch_input("\n\n   \n1.1.1.1\n\n8.8.8.0/24\r\nbogus\n")

        assert valid == ["8.8.8.0/24"]
        assert [(e.line, e.content, e.reason) for e in errors] == [
            (1, "1.1.1.1", REASON_BARE_IP),
            (3, "bogus", REASON_INVALID),
        ]

    def test_bare_ipv6_address(self):
        valid, errors = validate_batch_input("2001:db8::/32\n2001:db8::1")

        assert valid == ["2001:db8::/32"]
        assert errors == [ValidationError(line=2, content="2001:db8::1", reason=REASON_BARE_IP)]

    def test_order_is_preserved(self):
        valid, errors = validate_batch_input("10.0.0.0/8\n2001:db8::/48\n192.0.2.0/24")
        assert valid == ["10.0.0.0/8", "2001:db8::/48", "192.0.2.0/24"]
        assert errors == []

    def test_format_report(self):
        _, errors = validate_batch_input("AS1\n1.1.1.0/24")
        report = format_validation_errors(errors)

        assert report.startswith("Validation failed with the following errors:")
        assert '  Line 1: "AS1" - ASNs are not supported in batch mode' in report
        assert "CIDR notation" in report.splitlines()[-1]
