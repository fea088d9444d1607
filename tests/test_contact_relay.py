"""Tests for twins/services/relay.py — method, field and delivery handling."""

from __future__ import annotations

import json
import logging

import pytest

from twins.services.mailer import EmailDeliveryError

VALID = {"name": "Jo", "email": "jo@example.com", "message": "Hi"}


class TestMethodGuard:
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "OPTIONS"])
    def test_non_post_is_rejected(self, contact_relay, recording_mailer, method):
        result = contact_relay.handle(method, VALID)
        assert result.status_code == 405
        assert result.body == {"error": "Method not allowed"}
        assert result.headers == {"Allow": "POST"}
        assert recording_mailer.sent == []

    def test_method_is_case_insensitive(self, contact_relay):
        assert contact_relay.handle("post", VALID).status_code == 200


class TestFieldValidation:
    def test_empty_name_is_400_without_send(self, contact_relay, recording_mailer):
        result = contact_relay.handle(
            "POST", {"name": "", "email": "a@b.com", "message": "hi"}
        )
        assert result.status_code == 400
        assert result.body == {"error": "Missing required fields."}
        assert result.outcome == "invalid"
        assert recording_mailer.sent == []

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_whitespace_only_field_is_missing(self, contact_relay, field):
        payload = {**VALID, field: "   \n\t"}
        assert contact_relay.handle("POST", payload).status_code == 400

    def test_absent_field_is_missing(self, contact_relay):
        payload = {"name": "Jo", "email": "jo@example.com"}
        assert contact_relay.handle("POST", payload).status_code == 400

    def test_unparseable_string_body_fails_validation(self, contact_relay):
        result = contact_relay.handle("POST", "name=Jo&email=jo@example.com")
        assert result.status_code == 400

    def test_non_object_json_fails_validation(self, contact_relay):
        assert contact_relay.handle("POST", "[1, 2, 3]").status_code == 400
        assert contact_relay.handle("POST", None).status_code == 400

    def test_email_shape_is_not_checked_server_side(
        self, contact_relay, recording_mailer
    ):
        result = contact_relay.handle("POST", {**VALID, "email": "not-an-email"})
        assert result.status_code == 200
        assert recording_mailer.sent[0].reply_to == "not-an-email"


class TestRelay:
    def test_valid_dict_body_is_sent(self, contact_relay, recording_mailer):
        result = contact_relay.handle("POST", VALID)
        assert result.status_code == 200
        assert result.body == {"ok": True}
        assert result.headers == {}
        assert len(recording_mailer.sent) == 1

    def test_raw_string_and_bytes_bodies_are_parsed(
        self, contact_relay, recording_mailer
    ):
        assert contact_relay.handle("POST", json.dumps(VALID)).status_code == 200
        raw = json.dumps(VALID)
        assert contact_relay.handle("POST", raw.encode()).status_code == 200
        assert len(recording_mailer.sent) == 2

    def test_email_is_built_from_trimmed_fields(self, contact_relay, recording_mailer):
        contact_relay.handle(
            "POST",
            {
                "name": "  Kamar ",
                "email": " fan@example.com ",
                "message": " Book us \n",
            },
        )
        email = recording_mailer.sent[0]
        assert email.sender == "80k Twins Contact <no-reply@yourdomain.com>"
        assert email.to == [
            "info@80ktwins.com",
            "kamar@80ktwins.com",
            "kiyel@80ktwins.com",
        ]
        assert email.subject == "New contact form message from Kamar"
        assert email.reply_to == "fan@example.com"
        assert email.text == (
            "Name: Kamar\nEmail: fan@example.com\n\nMessage:\nBook us"
        )

    def test_non_string_values_are_coerced(self, contact_relay, recording_mailer):
        contact_relay.handle("POST", {**VALID, "message": 42})
        assert recording_mailer.sent[0].text.endswith("Message:\n42")

    @pytest.mark.parametrize(
        "value, text",
        [
            (True, "true"),
            (["Book", "us"], "Book,us"),
            (2.0, "2"),
            ({}, "[object Object]"),
        ],
    )
    def test_values_are_stringified_like_a_browser(
        self, contact_relay, recording_mailer, value, text
    ):
        contact_relay.handle("POST", {**VALID, "message": value})
        assert recording_mailer.sent[0].text.endswith(f"Message:\n{text}")

    @pytest.mark.parametrize("value", [0, False, None, float("nan")])
    def test_falsy_values_are_missing(self, contact_relay, recording_mailer, value):
        result = contact_relay.handle("POST", {**VALID, "name": value})
        assert result.status_code == 400
        assert recording_mailer.sent == []

    def test_identical_submissions_send_twice(self, contact_relay, recording_mailer):
        contact_relay.handle("POST", VALID)
        contact_relay.handle("POST", VALID)
        assert len(recording_mailer.sent) == 2


class TestDeliveryFailure:
    def test_provider_failure_is_500(self, contact_relay, recording_mailer, caplog):
        recording_mailer.fail_with(EmailDeliveryError("HTTP 503 from provider"))
        with caplog.at_level(logging.ERROR, logger="twins.services.relay"):
            result = contact_relay.handle("POST", VALID)

        assert result.status_code == 500
        assert result.body == {"error": "Error sending email."}
        assert result.outcome == "failed"
        assert "Error sending contact email" in caplog.text
        assert "HTTP 503 from provider" in caplog.text

    def test_unexpected_error_is_also_500(self, contact_relay, recording_mailer):
        recording_mailer.fail_with(RuntimeError("boom"))
        result = contact_relay.handle("POST", VALID)
        assert result.status_code == 500
        assert "boom" not in json.dumps(result.body)
