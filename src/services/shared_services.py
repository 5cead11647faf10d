"""
Wiring shared by the action entry point and the webhook endpoint
"""

from typing import Dict, Any, Optional

from config.settings import settings as default_settings
from src.models.configuration import ResponseConfig, ConfigurationError
from .github_client import GitHubClient
from .event_gate import EventGate, GateResult


def build_gate(github_client: Optional[GitHubClient], config: ResponseConfig,
               settings=None) -> EventGate:
    """Create an EventGate from settings"""
    settings = settings or default_settings
    return EventGate(
        github_client,
        config,
        debug_mode=settings.DEBUG_MODE,
        max_pages=settings.max_history_pages,
        fallback_repository=settings.GITHUB_REPOSITORY,
    )


async def process_event(payload: Dict[str, Any], settings=None) -> GateResult:
    """Run one trigger payload end to end with a fresh client"""
    settings = settings or default_settings
    config = ResponseConfig.from_settings(settings)

    # Misconfiguration must fail before a client (or token) is needed
    try:
        config.validate_messages()
    except ConfigurationError:
        return await build_gate(None, config, settings).run(payload)

    try:
        github_client = GitHubClient(token=settings.GITHUB_TOKEN, api_url=settings.GITHUB_API_URL)
    except ValueError as e:
        return EventGate.failed_result(e)

    async with github_client:
        gate = build_gate(github_client, config, settings)
        return await gate.run(payload)
