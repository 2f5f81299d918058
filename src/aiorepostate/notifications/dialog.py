"""Single confirmation dialog answered by the rendering layer."""

from __future__ import annotations

import asyncio
import logging

from ..models import ConfirmRequest

logger = logging.getLogger(__name__)


class ConfirmDialog:
    """A modal yes/no prompt.

    :meth:`show_confirm` suspends until the rendering layer calls
    :meth:`confirm` or :meth:`close`.  Only one prompt is open at a time; a
    new prompt cancels the previous one as if the user had declined it.
    """

    def __init__(self) -> None:
        self.request: ConfirmRequest | None = None
        self._pending: asyncio.Future[bool] | None = None

    @property
    def is_open(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def show_confirm(self, request: ConfirmRequest) -> bool:
        if self.is_open:
            logger.debug("Replacing pending confirmation: %s", self.request)
            self._resolve(False)

        future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        self._pending = future
        self.request = request
        return await future

    def confirm(self) -> None:
        self._resolve(True)

    def close(self) -> None:
        self._resolve(False)

    def _resolve(self, answer: bool) -> None:
        future = self._pending
        self._pending = None
        self.request = None
        if future is not None and not future.done():
            future.set_result(answer)
