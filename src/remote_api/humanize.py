# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
User-facing translations of engine errors.

``humanize_error`` is used by presentation layers to turn a failed call
into text an end user can act on. It takes no part in call control flow.
Services override ``RemoteAPI.humanize_error`` to add provider-specific
cases and fall back to ``default_humanize_error``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import (
    AuthenticationFailedError,
    InvalidAuthParamsError,
    LocalRateLimitExceededError,
)


@dataclass(frozen=True)
class HumanizedError:
    """Short title and longer explanation of an error."""

    title: str
    detail: str


UNKNOWN_ERROR = HumanizedError(
    title="Unknown error",
    detail=(
        "Oops... looks like something went wrong and we are not sure what "
        "exactly. Please report this issue to customer support."
    ),
)


def default_humanize_error(error: BaseException | None) -> HumanizedError:
    """Translate the engine's own error types; anything else is unknown."""
    if isinstance(error, AuthenticationFailedError):
        return HumanizedError(
            title="Account access denied",
            detail=(
                "Looks like your account authorization is expired or was never "
                "established. Please reconnect your account."
            ),
        )
    if isinstance(error, InvalidAuthParamsError):
        return HumanizedError(
            title="Your account access token is missing or invalid",
            detail=(
                "Sorry, this should not have happened and is probably a problem "
                "on our side. Please report the issue to customer support."
            ),
        )
    if isinstance(error, LocalRateLimitExceededError):
        return HumanizedError(
            title="Too many requests",
            detail=(
                "We are sending too many requests to this service right now. "
                "Please try again in a moment."
            ),
        )
    return UNKNOWN_ERROR


__all__ = ["UNKNOWN_ERROR", "HumanizedError", "default_humanize_error"]
