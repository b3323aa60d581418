from datetime import datetime, timedelta, timezone

import pytest

from capacity_artifacts.documents.stamper import (
    compute_integrity_hash,
    format_utc_timestamp,
    stamp,
)
from capacity_artifacts.reference.golden import reference_single_document
from capacity_artifacts.utils.config import config as env_config

FROZEN_NOW = datetime(2026, 1, 10, 14, 2, 41, tzinfo=timezone.utc)


def builder(metadata):
    return f"<p>{metadata.generated_at}|{metadata.protocol}|{metadata.integrity_hash}</p>"


class TestTimestamp:

    def test_format(self):
        assert format_utc_timestamp(FROZEN_NOW) == "2026-01-10 14:02:41 UTC"

    def test_converts_to_utc(self):
        eastern = datetime(2026, 1, 10, 9, 0, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert format_utc_timestamp(eastern) == "2026-01-10 14:00:00 UTC"

    def test_naive_is_utc(self):
        assert format_utc_timestamp(datetime(2026, 1, 10, 14, 2, 41)) == "2026-01-10 14:02:41 UTC"


class TestStamp:

    def test_hash_covers_unsigned_document(self):
        result = stamp(builder, {"protocol": "P"}, now=lambda: FROZEN_NOW)
        unsigned = "<p>2026-01-10 14:02:41 UTC|P|</p>"
        assert result.metadata.integrity_hash == compute_integrity_hash(unsigned)
        assert result.document == f"<p>2026-01-10 14:02:41 UTC|P|{result.metadata.integrity_hash}</p>"

    def test_hash_format(self):
        digest = compute_integrity_hash("abc")
        assert digest == "sha256:ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_overrides_are_verbatim(self):
        calls = []

        def counting_builder(metadata):
            calls.append(metadata)
            return builder(metadata)

        overrides = {
            "generated_at": "2026-01-10 14:02:41 UTC",
            "protocol": "Structured EMA v4.2",
            "integrity_hash": "sha256:frozen",
        }
        result = stamp(counting_builder, overrides, now=lambda: pytest.fail("clock read"))
        assert len(calls) == 1
        assert result.document == "<p>2026-01-10 14:02:41 UTC|Structured EMA v4.2|sha256:frozen</p>"

    def test_default_observation_window(self):
        result = stamp(builder, {"integrity_hash": "x"}, now=lambda: FROZEN_NOW)
        assert result.metadata.observation_start == "2025-10-01"
        assert result.metadata.observation_end == "2025-12-31"

    def test_unknown_override(self):
        with pytest.raises(ValueError):
            stamp(builder, {"generated": "now"})

    def test_repeatable_with_frozen_clock(self):
        first = stamp(builder, None, now=lambda: FROZEN_NOW)
        second = stamp(builder, None, now=lambda: FROZEN_NOW)
        assert first == second


class TestProtocolSource:

    def test_fresh_artifact_takes_environment_protocol(self, monkeypatch):
        monkeypatch.setattr(env_config, "DEFAULT_PROTOCOL", "Structured EMA v9.0")
        result = stamp(builder, now=lambda: FROZEN_NOW)
        assert result.metadata.protocol == "Structured EMA v9.0"
        assert "|Structured EMA v9.0|" in result.document

    def test_reference_document_ignores_environment_protocol(self, monkeypatch):
        before = reference_single_document()
        monkeypatch.setattr(env_config, "DEFAULT_PROTOCOL", "Structured EMA v9.0")
        after = reference_single_document()
        assert after == before
        assert "Structured EMA v9.0" not in after
