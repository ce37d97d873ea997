"""Pick the first working executable among ordered candidates."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from lsp_installer.core.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def resolve_first_successful(
    candidates: Sequence[str],
    attempt: Callable[[str], Awaitable[Result[T, object]]],
) -> Result[tuple[str, T], list[object]]:
    """Try each candidate in order and stop at the first Success.

    A candidate counts as failed when ``attempt`` returns a Failure or raises.
    Candidates after the first success are never attempted.

    Returns:
        ``Success((candidate, value))`` for the winning candidate, or
        ``Failure(errors)`` with one error per candidate, in order.
    """
    errors: list[object] = []
    for candidate in candidates:
        try:
            result = await attempt(candidate)
        except Exception as exc:
            result = Failure(exc)

        if result.is_success():
            logger.debug("Resolved executable '%s'", candidate)
            return Success((candidate, result.get_or_none()))

        logger.debug("Candidate '%s' failed: %s", candidate, result.err_or_none())
        errors.append(result.err_or_none())

    return Failure(errors)
