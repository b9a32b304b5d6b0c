# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cooperative request cancellation.

A CancelToken does not abort anything by itself. Triggering it records a ``Cancel``
reason and wakes whoever is waiting on the token; the dispatcher polls the token at
each pipeline boundary and adapters subscribe to abort their in-flight work.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import NamedTuple

from .errors import Cancel

CancelFunction = Callable[..., None]


class CancelToken:
    """Signal object handed to a request through ``RequestConfig.cancel_token``."""

    def __init__(self, executor: Callable[[CancelFunction], object]):
        if not callable(executor):
            raise TypeError("executor must be callable")
        self.reason: Cancel | None = None
        self._callbacks: list[Callable[[Cancel], object]] = []
        executor(self._cancel)

    def _cancel(self, message: str | None = None) -> None:
        if self.reason is not None:
            return
        # Set before notifying so reentrant cancel() calls from callbacks are no-ops.
        self.reason = Cancel(message)
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self.reason)

    @property
    def cancelled(self) -> bool:
        return self.reason is not None

    def requested(self) -> Cancel | None:
        """Return the Cancel reason if cancellation happened, without raising."""
        return self.reason

    def throw_if_requested(self) -> None:
        if self.reason is not None:
            raise self.reason

    async def wait(self) -> Cancel:
        """
        Suspend until the token is cancelled and return the reason.

        Each call waits on a future bound to the running loop, so one token can be
        reused across ``asyncio.run`` invocations.
        """
        if self.reason is not None:
            return self.reason
        future: asyncio.Future[Cancel] = asyncio.get_running_loop().create_future()

        def wake(reason: Cancel) -> None:
            if not future.done():
                future.set_result(reason)

        self.add_callback(wake)
        try:
            return await future
        finally:
            self.remove_callback(wake)

    def add_callback(self, callback: Callable[[Cancel], object]) -> None:
        """Call ``callback(reason)`` once cancelled; immediately if already cancelled."""
        if self.reason is not None:
            callback(self.reason)
            return
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[Cancel], object]) -> None:
        """Detach a callback that has not fired yet; unknown callbacks are ignored."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @classmethod
    def source(cls) -> CancelSource:
        """Create a token together with its cancel trigger."""
        triggers: list[CancelFunction] = []
        token = cls(triggers.append)
        return CancelSource(token=token, cancel=triggers[0])


class CancelSource(NamedTuple):
    token: CancelToken
    cancel: CancelFunction


__all__ = ["CancelFunction", "CancelSource", "CancelToken"]
