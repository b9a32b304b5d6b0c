# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Ordered registry of request/response interceptors."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

Handler = Callable[[Any], Any]


@dataclass
class Interceptor:
    """A fulfilled/rejected handler pair; either side may be omitted."""

    fulfilled: Handler | None = None
    rejected: Handler | None = None
    run_when: Callable[[Any], bool] | None = None

    def applies_to(self, config: Any) -> bool:
        return self.run_when is None or bool(self.run_when(config))


class InterceptorManager:
    """
    FIFO list of interceptors for one direction (request or response).

    Ejecting leaves a hole instead of compacting, so ids returned by ``use`` stay
    valid for the lifetime of the manager.
    """

    def __init__(self) -> None:
        self._handlers: list[Interceptor | None] = []

    def use(
        self,
        fulfilled: Handler | None = None,
        rejected: Handler | None = None,
        *,
        run_when: Callable[[Any], bool] | None = None,
    ) -> int:
        self._handlers.append(Interceptor(fulfilled=fulfilled, rejected=rejected, run_when=run_when))
        return len(self._handlers) - 1

    def eject(self, interceptor_id: int) -> None:
        if 0 <= interceptor_id < len(self._handlers):
            self._handlers[interceptor_id] = None

    def clear(self) -> None:
        self._handlers = []

    def for_each(self, visitor: Callable[[Interceptor], object]) -> None:
        for interceptor in self:
            visitor(interceptor)

    def __iter__(self) -> Iterator[Interceptor]:
        return (handler for handler in list(self._handlers) if handler is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)


__all__ = ["Handler", "Interceptor", "InterceptorManager"]
