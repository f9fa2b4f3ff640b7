# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Endpoint registration and URL resolution."""

from .registry import ENDPOINTS_ATTRIBUTE, EndpointRegistry
from .url import URLResolver, placeholders

__all__ = ["ENDPOINTS_ATTRIBUTE", "EndpointRegistry", "URLResolver", "placeholders"]
