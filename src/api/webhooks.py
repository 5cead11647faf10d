"""
GitHub webhook endpoint running the first-interaction gate per delivery
"""

from typing import Dict, Any

import structlog
from fastapi import APIRouter, Request, HTTPException, Depends
from fastapi.responses import JSONResponse

from config.settings import settings
from src.services.shared_services import process_event
from src.utils.webhook_validator import validate_github_webhook, is_supported_event

router = APIRouter()
logger = structlog.get_logger()


async def verify_webhook_signature(request: Request) -> None:
    """Verify GitHub webhook signature"""
    if not settings.GITHUB_WEBHOOK_SECRET:
        raise HTTPException(status_code=503, detail="Webhook secret is not configured")

    signature = request.headers.get("X-Hub-Signature-256")
    if not signature:
        raise HTTPException(status_code=401, detail="Missing webhook signature")

    body = await request.body()
    if not validate_github_webhook(body, signature, settings.GITHUB_WEBHOOK_SECRET):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")


@router.post("/github")
async def github_webhook(
    request: Request,
    _: None = Depends(verify_webhook_signature),
) -> JSONResponse:
    """Handle an issues or pull_request delivery"""
    event_type = request.headers.get("X-GitHub-Event", "unknown")
    delivery_id = request.headers.get("X-GitHub-Delivery", "unknown")

    try:
        payload: Dict[str, Any] = await request.json()
    except ValueError as e:
        logger.error("Failed to parse webhook payload", error=str(e))
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Webhook payload must be a JSON object")

    if not is_supported_event(event_type):
        return JSONResponse(
            content={"status": "ignored", "reason": f"Unsupported event type: {event_type}"},
            status_code=200
        )

    logger.info(
        "Received GitHub webhook",
        event_type=event_type,
        delivery_id=delivery_id,
        action=payload.get("action"),
        repository=(payload.get("repository") or {}).get("full_name")
    )

    result = await process_event(payload)

    logger.info(
        "Webhook event processed",
        delivery_id=delivery_id,
        state=result.state.value,
        message=result.message
    )
    return JSONResponse(content=result.to_dict(), status_code=200 if result.succeeded else 500)
