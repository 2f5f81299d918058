"""Checks applied to hunk/line addresses before a partial mutation.

Hunk and line indices are positions within the most recently fetched diff of
a file, so they go stale after any mutation of that file.  The store reloads
the displayed diff after every partial mutation; callers that pass a hunk
``fingerprint`` additionally get :class:`StaleHunkError` instead of a
mutation applied to the wrong lines.
"""

from __future__ import annotations

from ..exceptions import InvalidRequestError, StaleHunkError
from ..models import FileDiff, HunkAddress


def validate_address(address: HunkAddress, displayed: FileDiff | None = None) -> None:
    """Raise :class:`InvalidRequestError` if *address* cannot be applied.

    *displayed* is the loaded diff the caller is looking at for the same path
    and staged state, if any.  Range checks only run when it is given; a
    fingerprinted address without it is rejected as stale.
    """
    if address.hunk_index < 0:
        raise InvalidRequestError(f"Invalid hunk index {address.hunk_index} for {address.path}")

    if address.line_indices is not None:
        if not address.line_indices:
            raise InvalidRequestError(f"No lines selected in {address.path}")
        if min(address.line_indices) < 0:
            raise InvalidRequestError(f"Invalid line index for {address.path}")

    if displayed is None or displayed.path != address.path:
        # A pinned hunk cannot be checked while its diff is loading or not shown.
        if address.fingerprint is not None:
            raise StaleHunkError(f"Diff of {address.path} is not loaded; reload the diff")
        return

    hunk = displayed.hunk(address.hunk_index)
    if hunk is None:
        if address.fingerprint is not None:
            raise StaleHunkError(
                f"Hunk {address.hunk_index} of {address.path} no longer exists; reload the diff"
            )
        return

    if address.fingerprint is not None and hunk.fingerprint != address.fingerprint:
        raise StaleHunkError(
            f"Hunk {address.hunk_index} of {address.path} changed; reload the diff"
        )

    if address.line_indices is not None and max(address.line_indices) >= len(hunk.lines):
        raise InvalidRequestError(
            f"Line index out of range for hunk {address.hunk_index} of {address.path}"
        )
