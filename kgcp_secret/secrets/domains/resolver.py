"""Pick the best-fitting stored value for a logical key."""
import logging
from typing import AbstractSet, Callable, Optional

from .errors import FetchError, NotFoundError
from .key_matcher import candidates
from .models import ResolutionRequest

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


def resolve(
    key: str,
    request: ResolutionRequest,
    inventory: AbstractSet[str],
    fetch: Fetcher,
) -> str:
    """
    Resolve a logical key to the value of its most specific stored variant.

    Args:
        key: Logical key as listed in the request
        request: Scope (namespace, name, stage, tag) used to qualify the key
        inventory: Names present in the store for the request's project
        fetch: Reads one stored key; raises FetchError on failure

    Returns:
        The first non-empty value found, walking candidates most specific first

    Raises:
        NotFoundError: If no candidate yields a value. When a fetch failed
            along the way, the last failure is attached as the cause.
    """
    last_error: Optional[FetchError] = None

    for candidate in candidates(key, request):
        if candidate not in inventory:
            continue
        try:
            value = fetch(candidate)
        except FetchError as e:
            logger.info(f"Fetch failed for candidate {candidate}: {e}")
            last_error = e
            continue
        if value:
            logger.debug(f"Resolved '{key}' from stored key '{candidate}'")
            return value
        logger.debug(f"Stored key '{candidate}' is empty, trying next candidate")

    raise NotFoundError(key, request.project_id, cause=last_error)
