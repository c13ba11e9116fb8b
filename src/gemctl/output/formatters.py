"""Human-readable rendering of ServiceResult.

Success output is the optional ``message`` followed by ``lines``; failure
output is the error message, with the error code appended in verbose mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gemctl.services.result import ServiceResult


def format_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Format a ServiceResult for display."""
    if not result.ok:
        if result.error is None:
            return f"{result.op} failed"
        if verbose:
            return f"{result.error.message} [{result.error.code}]"
        return result.error.message

    parts: list[str] = []
    message = result.data.get("message")
    if message:
        parts.append(str(message))
    parts.extend(str(line) for line in result.data.get("lines", []))
    return "\n".join(parts)
