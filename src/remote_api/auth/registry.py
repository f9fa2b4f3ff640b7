# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Read-only map of auth strategy type -> strategy instance for one service."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from ..exceptions import AuthStrategyNotConfiguredError, ConfigurationError
from ..types.auth import AuthStrategyType, strategy_type_name
from .base import AuthStrategy
from .none import NoneAuthStrategy


class AuthRegistry:
    """
    Holds one strategy instance per type, built once when the service is
    constructed.

    The NONE strategy is always present. Registering two strategies of the
    same type is a configuration error. The registry is never mutated after
    construction, so concurrent reads need no locking.
    """

    def __init__(
        self,
        strategies: Iterable[AuthStrategy | None],
        service_name: str,
    ) -> None:
        self.service_name = service_name
        by_type: dict[str, AuthStrategy] = {}
        for strategy in strategies:
            if strategy is None:
                continue
            key = strategy_type_name(strategy.type())
            if key in by_type:
                raise ConfigurationError(
                    f"Duplicate auth strategy {key} for {service_name}"
                )
            by_type[key] = strategy
        by_type.setdefault(AuthStrategyType.NONE.value, NoneAuthStrategy())
        self._strategies = MappingProxyType(by_type)

    def find(self, strategy_type: AuthStrategyType | str) -> AuthStrategy | None:
        return self._strategies.get(strategy_type_name(strategy_type))

    def get(
        self,
        strategy_type: AuthStrategyType | str,
        endpoint_name: str | None = None,
    ) -> AuthStrategy:
        """
        Get the strategy registered for a type.

        Raises:
            AuthStrategyNotConfiguredError: If no strategy has that type
        """
        strategy = self.find(strategy_type)
        if strategy is None:
            raise AuthStrategyNotConfiguredError(
                strategy_type, self.service_name, endpoint_name
            )
        return strategy

    def __contains__(self, strategy_type: object) -> bool:
        if not isinstance(strategy_type, (str, AuthStrategyType)):
            return False
        return strategy_type_name(strategy_type) in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)
