"""Interning registry for instantiation locations."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .models import Location


class LineRegistry:
    """Own every :class:`Location` seen during a run.

    ``intern`` hands out small integer handles; the tree and the
    aggregated graph key everything on those handles so two occurrences
    of the same ``(file, line)`` always collapse onto one identity.
    """

    def __init__(self) -> None:
        self._locations: List[Location] = []
        self._handles: Dict[Tuple[str, int], int] = {}

    def intern(self, file: str, line: int) -> int:
        handle = self.lookup(file, line)
        if handle is None:
            handle = len(self._locations)
            self._locations.append(Location(file, line))
            self._handles[(file, line)] = handle
        assert self._locations[handle] == Location(file, line)
        return handle

    def lookup(self, file: str, line: int) -> Optional[int]:
        return self._handles.get((file, line))

    def location(self, handle: int) -> Location:
        return self._locations[handle]

    def __len__(self) -> int:
        return len(self._locations)
