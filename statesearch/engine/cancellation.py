"""Cooperative cancellation, checked by traversals at node boundaries."""


class CancellationToken:
    """
    One-way cancel flag.

    Nothing is interrupted: a traversal polls `cancelled` before each node
    hook and ends with stopped=True once it is set.
    """

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
