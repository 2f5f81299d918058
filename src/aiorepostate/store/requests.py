"""Request tickets used to drop responses that were superseded."""

from __future__ import annotations


class RequestSlot:
    """Tracks the latest request for one piece of state and its loading flag.

    :meth:`begin` hands out a ticket; only the holder of the latest ticket may
    settle the slot.  :meth:`cancel` invalidates every outstanding ticket.
    """

    __slots__ = ("loading", "sequence")

    def __init__(self) -> None:
        self.sequence = 0
        self.loading = False

    def begin(self) -> int:
        self.sequence += 1
        self.loading = True
        return self.sequence

    def is_current(self, ticket: int) -> bool:
        return ticket == self.sequence

    def settle(self, ticket: int) -> bool:
        """Clear the loading flag if *ticket* is still current."""
        if ticket != self.sequence:
            return False
        self.loading = False
        return True

    def cancel(self) -> None:
        self.sequence += 1
        self.loading = False
