# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Tagged results of API error hooks.

Auth strategies and services answer a provider error with one of:

* ``Bubble`` - propagate the original error (the default)
* ``Handled`` - swallow the error; the call succeeds with an optional
  substitute response
* ``Retry`` - dispatch a rebuilt APICall once more

The pipeline matches on these values instead of catching a dedicated
exception type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .call import APICall, CallParams, Response


@dataclass(frozen=True)
class Bubble:
    """Propagate the error."""

    error: BaseException | None = None


@dataclass(frozen=True)
class Handled:
    """The error was dealt with; use ``response`` (possibly None) as the result."""

    response: Response | None = None


@dataclass(frozen=True)
class Retry:
    """Dispatch ``api_call`` once more, optionally with updated params."""

    api_call: APICall
    params: CallParams | None = None


ErrorOutcome = Union[Bubble, Handled, Retry]

BUBBLE = Bubble()
"""Shared default outcome."""


__all__ = ["BUBBLE", "Bubble", "ErrorOutcome", "Handled", "Retry"]
