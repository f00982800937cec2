from tesserax.core.moves import Move


class MoveHistory:
    """
    Linear undo/redo log. Each entry is the tuple of moves committed together
    (a scramble is a single entry); the cursor splits done from undone entries.
    """

    def __init__(self):
        self._entries: list[tuple[Move, ...]] = []
        self._cursor = 0

    def record(self, *moves: Move):
        if not moves:
            raise ValueError("A history entry needs at least one move.")
        del self._entries[self._cursor:]
        self._entries.append(tuple(moves))
        self._cursor = len(self._entries)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries)

    def undo(self) -> tuple[Move, ...]:
        """Step the cursor back; returns the entry whose moves must be reverted."""
        if not self.can_undo():
            raise IndexError("Nothing to undo.")
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> tuple[Move, ...]:
        if not self.can_redo():
            raise IndexError("Nothing to redo.")
        entry = self._entries[self._cursor]
        self._cursor += 1
        return entry

    def get_turn_count(self) -> int:
        return self._cursor

    def clear(self):
        self._entries.clear()
        self._cursor = 0

    @property
    def entries(self) -> tuple[tuple[Move, ...], ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)
