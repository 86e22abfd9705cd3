# file: event_logger.py
import json
from datetime import datetime, timezone

from db_utils import get_db_connection

# Raw OCR text is kept for diagnostics but capped so one noisy screenshot
# cannot bloat the log.
MAX_RAW_TEXT_CHARS = 4000


def log_event(event_type: str, payload: dict):
    """
    Writes any system event into the 'event_log' table.

    Args:
        event_type (str): Event kind, e.g. 'SCREENSHOT_RECEIVED', 'OCR_FAILED'.
        payload (dict): Extra event data.
    """
    try:
        conn = get_db_connection()

        # Stringify values so floats, enums and exceptions serialize the same way.
        serializable_payload = {k: str(v) for k, v in payload.items()}
        payload_str = json.dumps(serializable_payload)

        record = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(timespec='microseconds'),
            "event_type": event_type,
            "payload_json": payload_str
        }

        with conn:
            conn.execute(
                "INSERT INTO event_log (timestamp_utc, event_type, payload_json) VALUES (:timestamp_utc, :event_type, :payload_json)",
                record
            )

        print(f"[LOG] Event: {event_type} | Payload: {payload}")

    except Exception as e:
        # Logging must never take the request down with it.
        print(f"[LOGGING_ERROR] Failed to log event '{event_type}'. Error: {e}")
    finally:
        if 'conn' in locals() and conn:
            conn.close()


def log_ocr_text(raw_text: str, source: str = "upload"):
    """Keeps the unmodified OCR output around for diagnosing bad extractions."""
    log_event("OCR_TEXT_RECOGNIZED", payload={
        "source": source,
        "chars": len(raw_text),
        "raw_text": raw_text[:MAX_RAW_TEXT_CHARS],
    })


def log_extraction(present_fields: dict):
    """
    Logs the outcome of a parse. An empty result is logged as EXTRACTION_EMPTY
    so screenshots with nothing matchable are easy to find.
    """
    if present_fields:
        event_type = "EXTRACTION_PARSED"
    else:
        event_type = "EXTRACTION_EMPTY"

    log_event(event_type, payload=dict(present_fields))
