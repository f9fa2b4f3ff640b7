# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
URL template resolution.

Templates are either absolute (they contain ``://``) or relative to the
service base URL. Path placeholders are written ``:name`` directly after a
``/``, so the port in ``https://host:8080`` is never taken for one.
Values are substituted as plain strings without URL escaping, and query
parameters are left to the transport.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..exceptions import ConfigurationError, MissingPathParameterError

PLACEHOLDER_PATTERN = re.compile(r"/:([A-Za-z0-9_]+)")


def placeholders(template: str) -> list[str]:
    """Names of the path placeholders in a template, in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


class URLResolver:
    """
    Resolves endpoint URL templates against a base URL.

    Args:
        base_url: Prefix for relative templates; may be None for services
            that only declare absolute endpoints

    Example:
        >>> URLResolver("https://api.example.com").resolve(
        ...     "/users/:user_id/details", {"user_id": "123"}
        ... )
        'https://api.example.com/users/123/details'
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = base_url

    def join(self, template: str) -> str:
        if "://" in template:
            return template
        if not self.base_url:
            raise ConfigurationError(
                f"Relative URL '{template}' needs a base URL; override base_url()"
            )
        if self.base_url.endswith("/") and template.startswith("/"):
            return self.base_url + template[1:]
        return self.base_url + template

    def resolve(
        self, template: str, path_params: Mapping[str, Any] | None = None
    ) -> str:
        """
        Build the request URL for a template.

        Raises:
            MissingPathParameterError: If any placeholder has no value; every
                missing name is reported, not just the first
            ConfigurationError: If the template is relative and there is no
                base URL
        """
        values = path_params or {}
        missing = [name for name in placeholders(template) if values.get(name) is None]
        if missing:
            raise MissingPathParameterError(template, missing)

        path = PLACEHOLDER_PATTERN.sub(
            lambda match: f"/{values[match.group(1)]}", template
        )
        return self.join(path)


__all__ = ["PLACEHOLDER_PATTERN", "URLResolver", "placeholders"]
