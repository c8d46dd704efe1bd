"""Tests for the stored-state envelope codec."""

import json
import logging

import pytest

from hubstate.envelope import DecodeResult, Envelope, decode, encode


class TestDecodeFirstRun:
    def test_none_is_first_run(self):
        result = decode(None)
        assert result == DecodeResult(data={}, version=0)
        assert result.success
        assert not result.legacy


class TestDecodeCorrupt:
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "",
            "[1, 2, 3]",
            '"just a string"',
            "42",
            "null",
        ],
    )
    def test_unusable_text_degrades_to_first_run(self, raw):
        result = decode(raw)
        assert result.data == {}
        assert result.version == 0
        assert result.error
        assert not result.success

    def test_corruption_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hubstate.envelope"):
            decode("{oops")
        assert "unreadable" in caplog.text

    @pytest.mark.parametrize(
        "payload",
        [
            {"version": -1, "data": {}},
            {"version": "abc", "data": {}},
            {"version": 2, "data": [1, 2]},
            {"version": 2, "data": "events"},
            {"version": 1.5, "data": {}},
        ],
    )
    def test_malformed_envelope_is_corrupt(self, payload):
        result = decode(json.dumps(payload))
        assert result.data == {}
        assert result.version == 0
        assert result.error


class TestDecodeLegacy:
    def test_bare_tree_is_version_zero(self):
        tree = {"services": [{"id": "s-1"}], "events": []}
        result = decode(json.dumps(tree))
        assert result.data == tree
        assert result.version == 0
        assert result.legacy
        assert result.success

    def test_version_mixed_into_data(self):
        raw = json.dumps({"version": 4, "services": [], "currentUserId": "u1"})
        result = decode(raw)
        assert result.version == 4
        assert result.data == {"services": [], "currentUserId": "u1"}
        assert result.legacy

    def test_null_version_counts_as_zero(self):
        result = decode(json.dumps({"version": None, "data": {"a": 1}}))
        assert result.version == 0
        assert result.data == {"a": 1}


class TestDecodeEnvelope:
    def test_modern_shape(self):
        result = decode(json.dumps({"version": 7, "data": {"clients": [{"id": "c1"}]}}))
        assert result.version == 7
        assert result.data == {"clients": [{"id": "c1"}]}
        assert not result.legacy

    def test_future_version_is_read_verbatim(self):
        result = decode(json.dumps({"version": 99, "data": {}}))
        assert result.version == 99
        assert result.success


class TestEncode:
    def test_always_modern_shape(self):
        stored = json.loads(encode({"users": []}, 13))
        assert stored == {"version": 13, "data": {"users": []}}
        assert set(stored) == {"version", "data"}

    def test_round_trip(self):
        tree = {
            "settings": {"themeMode": "light", "layout": {"borderRadius": 8}},
            "services": [{"id": "s-1", "basePrice": 0, "displayPrice": False}],
            "currentUserId": "u_paul",
            "notes": "Café – 100 guests",
        }
        result = decode(encode(tree, 13))
        assert (result.data, result.version) == (tree, 13)

    def test_legacy_decode_then_encode_upgrades(self):
        legacy = decode(json.dumps({"services": []}))
        stored = json.loads(encode(legacy.data, 13))
        assert stored == {"version": 13, "data": {"services": []}}

    def test_negative_version_rejected(self):
        with pytest.raises(ValueError):
            encode({}, -1)

    def test_unserializable_value_rejected(self):
        with pytest.raises(ValueError, match="Cannot encode"):
            encode({"when": object()}, 1)

    def test_non_object_data_rejected(self):
        with pytest.raises(ValueError):
            encode(["not", "a", "tree"], 1)


class TestEnvelopeModel:
    def test_data_defaults_to_empty(self):
        assert Envelope(version=3).data == {}
