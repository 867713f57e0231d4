"""Tests for the MCP tool payloads and HTTP middleware."""

import json

import pytest

from partmatch_mcp.server import (
    RateLimitMiddleware,
    _parse_specs,
    match_for_handler_payload,
    profiles_payload,
    resolve_payload,
    score_payload,
    type_metadata_payload,
)

MOSFET = {"voltage_rating": 30, "current_rating": 10, "channel": "N", "package": "TO-220"}


class TestParseSpecs:
    """Spec maps arrive as objects or JSON strings."""

    def test_dict_passthrough(self):
        assert _parse_specs(MOSFET) is MOSFET

    def test_json_string(self):
        assert _parse_specs(json.dumps(MOSFET)) == MOSFET

    @pytest.mark.parametrize("value", ["not json", "[1, 2]", "42", 42])
    def test_rejects_non_objects(self, value):
        assert _parse_specs(value) is None

    def test_none(self):
        assert _parse_specs(None) is None


class TestResolvePayload:

    def test_known(self):
        data = resolve_payload("IRF540N")
        assert data["type"] == "MOSFET_INFINEON"
        assert data["handler"] == "infineon"

    def test_unknown(self):
        data = resolve_payload("XYZ")
        assert data["type"] == "UNKNOWN"
        assert data["candidates"] == []


class TestMatchForHandlerPayload:

    def test_match(self):
        data = match_for_handler_payload("IRF540N", "mosfet_infineon", "infineon")
        assert data["matches"] is True
        assert data["type"] == "MOSFET_INFINEON"

    def test_scoped_to_handler(self):
        data = match_for_handler_payload("IRF540N", "MOSFET", "st")
        assert data["matches"] is False

    def test_unknown_type(self):
        assert "error" in match_for_handler_payload("IRF540N", "FLUX_CAPACITOR", "infineon")

    def test_handler_without_patterns(self):
        data = match_for_handler_payload("IRF540N", "MOSFET_INFINEON", "murata")
        assert "error" in data
        assert data["handlers"] == ["infineon"]


class TestScorePayload:

    def test_by_type(self):
        data = score_payload(MOSFET, MOSFET, component_type="MOSFET")
        assert data["score"] == 1.0
        assert data["meets_threshold"] is True
        assert data["profile"] == "REPLACEMENT"

    def test_json_specs_and_profile(self):
        data = score_payload(
            json.dumps(MOSFET), json.dumps(dict(MOSFET, channel="P")),
            component_type="MOSFET", profile="emergency-sourcing",
        )
        assert data["score"] == 0.0
        assert data["critical_mismatch"] == "channel"
        assert data["profile"] == "EMERGENCY_SOURCING"

    def test_by_mpn(self):
        data = score_payload(MOSFET, MOSFET, original_mpn="IRF540N", candidate_mpn="IRL540N")
        assert data["component_type"] == "MOSFET_INFINEON"
        assert data["score"] == 1.0

    def test_unscorable_type(self):
        data = score_payload({}, {}, component_type="CRYSTAL")
        assert data["scorable"] is False

    @pytest.mark.parametrize("kwargs", [
        {"component_type": "FLUX_CAPACITOR"},
        {"component_type": "MOSFET", "profile": "cheapest"},
        {},
        {"original_mpn": "IRF540N"},
    ])
    def test_errors(self, kwargs):
        assert "error" in score_payload(MOSFET, MOSFET, **kwargs)

    def test_bad_specs(self):
        assert "error" in score_payload("not json", MOSFET, component_type="MOSFET")
        assert "error" in score_payload(MOSFET, "[]", component_type="MOSFET")


class TestMetadataPayloads:

    def test_type_metadata(self):
        data = type_metadata_payload("resistor_chip_yageo")
        assert data["component_type"] == "RESISTOR"
        assert data["specs"][0]["name"] == "resistance"

    def test_no_metadata(self):
        data = type_metadata_payload("CRYSTAL")
        assert "error" in data

    def test_unknown_type(self):
        assert "error" in type_metadata_payload("nope")

    def test_list_profiles(self):
        data = profiles_payload()
        assert data["default"] == "REPLACEMENT"
        assert len(data["profiles"]) == 5


class TestRateLimit:
    """Sliding window per client IP."""

    def test_window(self):
        limiter = RateLimitMiddleware(app=None, requests_per_minute=2)
        assert not limiter.is_limited("1.2.3.4", now=1000.0)
        assert not limiter.is_limited("1.2.3.4", now=1001.0)
        assert limiter.is_limited("1.2.3.4", now=1002.0)
        assert not limiter.is_limited("5.6.7.8", now=1002.0)
        assert not limiter.is_limited("1.2.3.4", now=1061.0)

    def test_tracked_ip_cap(self):
        limiter = RateLimitMiddleware(app=None, requests_per_minute=2)
        limiter.MAX_TRACKED_IPS = 2
        assert not limiter.is_limited("a", now=1000.0)
        assert not limiter.is_limited("b", now=1000.0)
        assert limiter.is_limited("c", now=1010.0)
        # Stale windows are evicted once they fall out of the minute
        assert not limiter.is_limited("c", now=1100.0)
