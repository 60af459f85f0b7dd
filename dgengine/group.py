"""Nested group identifiers used to tag render commands."""

from __future__ import annotations

NONE = 0
_MAX_ID = 0xFFFF


class GroupStack:
    """Hands out increasing group ids and tracks which group is current."""

    def __init__(self) -> None:
        self._last_id = NONE
        self._stack: list[int] = [NONE]

    def begin_new_group(self) -> int:
        """Open a new group, make it current and return its id."""
        if self._last_id >= _MAX_ID:
            raise OverflowError("too many groups")
        self._last_id += 1
        self._stack.append(self._last_id)
        return self._last_id

    def end_current_group(self) -> None:
        """Close the current group; the outermost group is never closed."""
        if len(self._stack) > 1:
            self._stack.pop()

    def current_id(self) -> int:
        """Return the id of the innermost open group."""
        return self._stack[-1]

    def reset(self) -> None:
        """Forget all groups and start numbering again."""
        self._last_id = NONE
        self._stack = [NONE]