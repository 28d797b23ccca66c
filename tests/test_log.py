from shared.log import _normalize_log_event, _redact_credentials, redact


def test_redact_masks_uri_password():
    assert redact("cannot reach http://elastic:secret@es:9200: refused") == (
        "cannot reach http://elastic:***@es:9200: refused"
    )


def test_redact_leaves_uris_without_password():
    assert redact("http://es:9200/_cat/indices") == "http://es:9200/_cat/indices"
    assert redact("http://elastic:***@es:9200") == "http://elastic:***@es:9200"


def test_redact_processor_only_touches_strings():
    event = {"event": "x", "url": "https://u:p@es:9200", "attempt": 2}
    assert _redact_credentials(None, "info", event) == {
        "event": "x", "url": "https://u:***@es:9200", "attempt": 2,
    }


def test_normalize_moves_extras_under_context():
    event = {"event": "gauge_updated", "level": "info", "service": "x", "index": "logs-2025.01.15"}
    assert _normalize_log_event(None, "info", event) == {
        "msg": "gauge_updated",
        "level": "info",
        "service": "x",
        "context": {"index": "logs-2025.01.15"},
    }
