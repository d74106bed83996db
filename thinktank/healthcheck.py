"""Model health checks — ping each model before starting a debate."""

import asyncio
import logging

from thinktank.model_service import ModelService

logger = logging.getLogger(__name__)

_PING_PROMPT = "Reply with the word OK only."
_TIMEOUT_SEC = 15.0


async def _check_one(service: ModelService, model_id: str) -> tuple[str, bool, str]:
    """Ping a single model. Returns (model_id, ok, error_message)."""
    try:
        await asyncio.wait_for(
            service.invoke(model_id, _PING_PROMPT, max_tokens=16),
            timeout=_TIMEOUT_SEC,
        )
        return model_id, True, ""
    except Exception as exc:
        logger.debug("Health check failed for %s: %s", model_id, exc)
        return model_id, False, str(exc) or type(exc).__name__


async def run_health_checks(
    service: ModelService,
    model_ids: list[str],
) -> dict[str, tuple[bool, str]]:
    """Ping all distinct model_ids in parallel.

    Returns:
        Dict mapping model id -> (ok, error_message).
        error_message is "" when ok is True.
    """
    unique_ids = list(dict.fromkeys(model_ids))
    results = await asyncio.gather(*(_check_one(service, m) for m in unique_ids))
    return {model_id: (ok, err) for model_id, ok, err in results}
