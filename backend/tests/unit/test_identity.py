"""Unit tests for pass and device id generation."""

import uuid
from datetime import datetime, timezone

from yardpass.domain import identity
from yardpass.domain.identity import FAN_ID_PATTERN, generate_anon_id, generate_fan_id


def test_fan_id_matches_format():
    assert FAN_ID_PATTERN.match(generate_fan_id())


def test_fan_id_uses_two_digit_year():
    fan_id = generate_fan_id(datetime(2031, 5, 1, tzinfo=timezone.utc))
    assert fan_id.startswith("YARD-31-")


def test_successive_fan_ids_differ():
    ids = {generate_fan_id() for _ in range(50)}
    assert len(ids) == 50


def test_fan_id_falls_back_when_secure_source_missing(monkeypatch):
    def unavailable(count: int) -> bytes:
        raise NotImplementedError

    monkeypatch.setattr(identity.secrets, "token_bytes", unavailable)
    assert FAN_ID_PATTERN.match(generate_fan_id())


def test_anon_id_is_uuid4():
    anon_id = generate_anon_id()
    assert uuid.UUID(anon_id).version == 4
    assert anon_id != generate_anon_id()
