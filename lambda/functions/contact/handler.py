"""Lambda handler — relay contact form submissions behind API Gateway."""

from __future__ import annotations

import base64
import binascii
import json
import logging

from twins.services.relay import relay

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def _method(event: dict) -> str:
    # REST APIs (payload v1) and HTTP APIs (payload v2) put the verb in
    # different places.
    method = event.get("httpMethod")
    if not method:
        context = event.get("requestContext") or {}
        method = (context.get("http") or {}).get("method", "")
    return method


def _body(event: dict) -> str | bytes | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError):
            logger.warning("Discarding body that is not valid base64")
            return None
    return body


def lambda_handler(event: dict, context: object) -> dict:
    result = relay.handle(_method(event), _body(event))
    logger.info(
        "Contact relay finished",
        extra={"status_code": result.status_code, "outcome": result.outcome},
    )
    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": "application/json", **result.headers},
        "body": json.dumps(result.body),
    }
