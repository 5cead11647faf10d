#!/usr/bin/env python3
"""
First Interaction
Greets first-time contributors on their first issue or pull request.

Runs once per GitHub Actions event by default; set RUN_MODE=server to
receive webhooks instead.
"""

import asyncio
import json
import logging
import sys
from typing import Dict, Any

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.webhooks import router as webhook_router
from src.api.health import router as health_router, SERVICE_VERSION
from src.models.configuration import ConfigurationError, ResponseConfig
from src.services.event_gate import EventGate, GateResult
from src.services.shared_services import process_event
from config.settings import settings

# Configure structured logging
logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Create FastAPI application
app = FastAPI(
    title="First Interaction",
    description="Welcomes first-time contributors to a repository",
    version=SERVICE_VERSION,
)

app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(webhook_router, prefix="/webhook", tags=["webhooks"])


def load_event_payload(event_path: str) -> Dict[str, Any]:
    """Read the triggering event written by the Actions runner"""
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set, no event to process")
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Unable to read event payload {event_path}: {e}")
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Event payload {event_path} is not a JSON object")
    return payload


def report_result(result: GateResult) -> int:
    """Translate a gate result into Actions output and an exit code"""
    if result.succeeded:
        logger.info("Run finished", state=result.state.value, message=result.message)
        return 0
    # Workflow command that marks the step as failed in the Actions UI
    print(f"::error::{result.message}")
    return 1


def run_action() -> int:
    """Process the single event of this workflow run"""
    try:
        ResponseConfig.from_settings(settings).validate_messages()
        payload = load_event_payload(settings.GITHUB_EVENT_PATH)
    except ConfigurationError as e:
        return report_result(EventGate.failed_result(e))

    result = asyncio.run(process_event(payload, settings))
    return report_result(result)


if __name__ == "__main__":
    if settings.RUN_MODE == "server":
        uvicorn.run(
            "main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=False,
            log_level=settings.LOG_LEVEL.lower(),
        )
    else:
        sys.exit(run_action())
