import logging

from services.redaction import redact_dict, redact_text


def test_redact_text_masks_stripe_keys():
    text = "auth failed for sk_test_51AbCdEfGhIjKlMn and whsec_Zyxwvut9876"
    redacted = redact_text(text)
    assert "sk_test_51AbCdEfGhIjKlMn" not in redacted
    assert "whsec_Zyxwvut9876" not in redacted
    assert "sk_test_***KlMn" in redacted
    assert "whsec_***9876" in redacted


def test_redact_text_masks_bearer():
    assert redact_text("Authorization: Bearer abcdef") == "[REDACTED]"


def test_redact_text_leaves_plain_text():
    assert redact_text("No signatures found matching the expected signature") == (
        "No signatures found matching the expected signature"
    )


def test_redact_dict_masks_sensitive_headers():
    headers = {
        "authorization": "Bearer abc",
        "cookie": "session=1",
        "stripe-signature": "t=1,v1=deadbeef",
        "x-api-key": "k",
        "content-type": "application/json",
        "x-debug": "key=sk_live_abcdefgh12345678",
    }
    redacted = redact_dict(headers)
    assert redacted["authorization"] == "[REDACTED]"
    assert redacted["cookie"] == "[REDACTED]"
    assert redacted["stripe-signature"] == "[REDACTED]"
    assert redacted["x-api-key"] == "[REDACTED]"
    assert redacted["content-type"] == "application/json"
    assert redacted["x-debug"] == "key=sk_live_***5678"


def test_request_headers_logged_redacted(client, caplog):
    caplog.set_level(logging.DEBUG, logger="payouts.http")
    resp = client.get("/health", headers={"Authorization": "Bearer secret-token"})
    assert resp.status_code == 200, resp.text
    assert "secret-token" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_log_line_uses_redaction_helper(caplog):
    logger = logging.getLogger("redaction-test")
    caplog.set_level(logging.INFO)
    msg = redact_text("Invalid API Key provided: sk_live_abcdefgh12345678")
    logger.info("err=%s", msg)
    assert "sk_live_abcdefgh12345678" not in caplog.text
