# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response normalization.

An endpoint's ``normalize`` rule reshapes the provider's response data
before it reaches the caller:

- A mapping ``{target_key: "dot.path"}`` picks values out of the raw data.
  Numeric path segments index into lists. A path that cannot be followed
  is logged and its key left out; a mapping never raises.
- A function ``(service, params, raw_data) -> data`` replaces the data
  with its return value. Errors raised by the function propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types.call import CallParams
    from .types.endpoint import Endpoint

logger = logging.getLogger(__name__)

MISSING = object()


def lookup_path(data: Any, path: str) -> Any:
    """
    Follow a dot-notation path into nested mappings and sequences.

    Returns the ``MISSING`` sentinel when any segment
    cannot be followed.
    """
    current = data
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return MISSING
        else:
            return MISSING
    return current


class ResponseNormalizer:
    """Applies an endpoint's normalization rule to raw response data."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def normalize(
        self,
        service: Any,
        endpoint: Endpoint,
        params: CallParams,
        raw: Any,
    ) -> Any:
        rule = endpoint.normalize
        if rule is None:
            return raw
        if isinstance(rule, Mapping):
            return self._apply_mapping(endpoint, rule, raw)
        return rule(service, params, raw)

    def _apply_mapping(
        self, endpoint: Endpoint, mapping: Mapping[str, str], raw: Any
    ) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for target_key, source_path in mapping.items():
            value = lookup_path(raw, source_path)
            if value is MISSING:
                self._logger.warning(
                    f"Could not normalize '{target_key}' for endpoint "
                    f"{endpoint.name}: path '{source_path}' not found in response"
                )
                continue
            normalized[target_key] = value
        return normalized


__all__ = ["MISSING", "ResponseNormalizer", "lookup_path"]
