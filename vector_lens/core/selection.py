"""
Shared "selected id" value.
The plot and the list views both write to and subscribe to one store
instead of calling into each other.
"""

from typing import Callable, Optional

Listener = Callable[[Optional[int]], None]


class SelectionStore:
    """Observable holder for the currently selected record id."""

    def __init__(self, selected_id: Optional[int] = None):
        self._selected_id = selected_id
        self._listeners: list[Listener] = []

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def has_selection(self) -> bool:
        return self._selected_id is not None

    def select(self, record_id: Optional[int]) -> None:
        """Set the selection and notify subscribers if it changed."""
        if record_id == self._selected_id:
            return
        self._selected_id = record_id
        for listener in list(self._listeners):
            listener(record_id)

    def clear(self) -> None:
        self.select(None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new id on every change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
