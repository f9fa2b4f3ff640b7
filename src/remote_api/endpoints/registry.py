# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Endpoint registry.

Provider adapters declare their endpoints in an ``endpoints`` table on the
service class. Mixins that add a capability (a mail API, a calendar API)
carry their own table. The registry walks the class MRO once when the
service is constructed, so a subclass can redeclare an inherited endpoint
and its version is the one used.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..exceptions import (
    AuthStrategyNotConfiguredError,
    ConfigurationError,
    EndpointNotFoundError,
)
from ..types.endpoint import Endpoint

if TYPE_CHECKING:
    from ..auth.registry import AuthRegistry

logger = logging.getLogger(__name__)

ENDPOINTS_ATTRIBUTE = "endpoints"


def _declared_table(owner: str, table: Iterable[Endpoint]) -> dict[str, Endpoint]:
    declared: dict[str, Endpoint] = {}
    for endpoint in table:
        if not isinstance(endpoint, Endpoint):
            raise ConfigurationError(
                f"{owner}.{ENDPOINTS_ATTRIBUTE} must contain Endpoint instances, "
                f"got {type(endpoint).__name__}"
            )
        if endpoint.name in declared:
            raise ConfigurationError(
                f"Endpoint {endpoint.name} declared twice in {owner}"
            )
        declared[endpoint.name] = endpoint
    return declared


class EndpointRegistry:
    """
    Read-only map of endpoint name -> Endpoint for one service.

    Example:
        >>> registry = EndpointRegistry.from_service(GitHubAPI)
        >>> registry.get("get_user").url
        '/users/:username'
    """

    def __init__(self, endpoints: Iterable[Endpoint], service_name: str) -> None:
        self.service_name = service_name
        self._endpoints = MappingProxyType(
            _declared_table(service_name, endpoints)
        )

    @classmethod
    def from_service(
        cls,
        service_cls: type,
        extra: Iterable[Endpoint] = (),
        strategies: AuthRegistry | None = None,
        service_name: str | None = None,
    ) -> EndpointRegistry:
        """
        Collect the endpoint tables declared along a service class's MRO.

        Args:
            service_cls: The concrete service class
            extra: Endpoints passed at construction; they override declared ones
            strategies: When given, every declared auth type must be in it
            service_name: Name used in messages; defaults to the class name

        Raises:
            ConfigurationError: If one table declares a name twice
            AuthStrategyNotConfiguredError: If an endpoint needs a strategy
                the service does not supply
        """
        name = service_name or service_cls.__name__
        collected: dict[str, Endpoint] = dict(_declared_table(name, extra))

        for klass in service_cls.__mro__:
            table = vars(klass).get(ENDPOINTS_ATTRIBUTE)
            if not table:
                continue
            for endpoint_name, endpoint in _declared_table(
                klass.__qualname__, table
            ).items():
                collected.setdefault(endpoint_name, endpoint)

        if strategies is not None:
            for endpoint in collected.values():
                if endpoint.auth is not None and endpoint.auth not in strategies:
                    raise AuthStrategyNotConfiguredError(
                        endpoint.auth, name, endpoint.name
                    )

        logger.debug(f"Registered {len(collected)} endpoints for {name}")
        return cls(collected.values(), name)

    def get(self, name: str) -> Endpoint:
        """
        Look up an endpoint by name.

        Raises:
            EndpointNotFoundError: If the service declares no such endpoint
        """
        endpoint = self._endpoints.get(name)
        if endpoint is None:
            raise EndpointNotFoundError(self.service_name, name)
        return endpoint

    def names(self) -> list[str]:
        return sorted(self._endpoints)

    def __contains__(self, name: object) -> bool:
        return name in self._endpoints

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self._endpoints.values())

    def __len__(self) -> int:
        return len(self._endpoints)


__all__ = ["ENDPOINTS_ATTRIBUTE", "EndpointRegistry"]
