import pytest
import json

from event_logger import MAX_RAW_TEXT_CHARS, log_event, log_extraction, log_ocr_text
from db_utils import get_db_connection, fetch_recent_events


def test_log_ocr_text_creates_correct_record():
    """
    Tests that log_ocr_text keeps the raw text in the payload.
    """
    log_ocr_text("GBPUSD SELL 1.1")

    conn = get_db_connection()
    try:
        log_entry = conn.execute("SELECT * FROM event_log WHERE event_type = 'OCR_TEXT_RECOGNIZED'").fetchone()
    finally:
        conn.close()

    assert log_entry is not None
    payload = json.loads(log_entry['payload_json'])
    assert payload['raw_text'] == "GBPUSD SELL 1.1"
    assert payload['chars'] == '15'


def test_log_ocr_text_truncates_long_text():
    log_ocr_text("X" * (MAX_RAW_TEXT_CHARS + 100))

    entry = fetch_recent_events(event_type='OCR_TEXT_RECOGNIZED')[0]
    payload = json.loads(entry['payload_json'])
    assert len(payload['raw_text']) == MAX_RAW_TEXT_CHARS


def test_log_extraction_with_fields():
    log_extraction({'symbol': 'GBPUSD', 'lot_size': 1.1})

    entry = fetch_recent_events(event_type='EXTRACTION_PARSED')[0]
    payload = json.loads(entry['payload_json'])
    assert payload == {'symbol': 'GBPUSD', 'lot_size': '1.1'}


def test_log_extraction_empty():
    log_extraction({})
    assert len(fetch_recent_events(event_type='EXTRACTION_EMPTY')) == 1
    assert fetch_recent_events(event_type='EXTRACTION_PARSED') == []


def test_log_event_generic():
    """Tests the generic log_event function."""
    event_type = "CUSTOM_TEST_EVENT"
    payload_data = {"key": "value"}
    log_event(event_type, payload_data)

    conn = get_db_connection()
    try:
        log_entry = conn.execute("SELECT * FROM event_log WHERE event_type = ?", (event_type,)).fetchone()
    finally:
        conn.close()

    assert log_entry is not None
    payload = json.loads(log_entry['payload_json'])
    assert payload['key'] == "value"


def test_fetch_recent_events_newest_first():
    log_event("FIRST", {})
    log_event("SECOND", {})
    events = fetch_recent_events(limit=2)
    assert [e['event_type'] for e in events] == ["SECOND", "FIRST"]


def test_log_event_never_raises(mocker, capsys):
    mocker.patch('event_logger.get_db_connection', side_effect=RuntimeError("disk full"))

    log_event("ANY_EVENT", {"k": "v"})

    assert "[LOGGING_ERROR]" in capsys.readouterr().out
