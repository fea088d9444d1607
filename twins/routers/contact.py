from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from twins.config import settings
from twins.observability.metrics import CONTACT_SUBMISSIONS
from twins.security import limiter
from twins.services.relay import ContactRelay, relay

router = APIRouter(prefix="/api", tags=["contact"])

# Every verb is routed here so the relay itself answers 405 with ``Allow``.
_ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_relay() -> ContactRelay:
    return relay


@router.api_route(
    "/contact", methods=_ROUTED_METHODS, summary="Relay a contact message"
)
@limiter.limit(settings.contact_rate_limit)
async def contact(
    request: Request, contact_relay: ContactRelay = Depends(get_relay)
):
    """Forward ``{name, email, message}`` to the site inboxes."""
    body = await request.body()
    result = await run_in_threadpool(contact_relay.handle, request.method, body)
    CONTACT_SUBMISSIONS.labels(result.outcome).inc()
    return JSONResponse(
        result.body, status_code=result.status_code, headers=result.headers
    )
