"""Reconstruct the nested instantiation tree from a linear event stream.

The compiler reports instantiations as a flat sequence of enter/exit
warnings interleaved with backtrace frames.  :class:`TreeBuilder` replays
that sequence against a cursor into an :class:`InstantiationTree` so the
nesting (which instantiation triggered which) is recovered.

Input is never trusted to be balanced: extra exits stop at the root and
unterminated enters are committed when the stream ends.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .dialects import Dialect
from .models import CommitPolicy, EventKind, ExitDepthPolicy, LineEvent
from .registry import LineRegistry

logger = logging.getLogger(__name__)


@dataclass
class TreeNode:
    location: Optional[int]
    parent: Optional[int]
    depth: int = 0
    # backtrace counter when committed; reported through ParseStats, never shapes the tree
    backtrace_depth: int = 0
    children: List[int] = field(default_factory=list)


class InstantiationTree:
    """Arena of tree nodes addressed by index; index 0 is the synthetic root."""

    ROOT = 0

    def __init__(self) -> None:
        self.nodes: List[TreeNode] = [TreeNode(location=None, parent=None)]

    def add_child(self, parent: int, location: int, backtrace_depth: int = 0) -> int:
        parent_node = self.nodes[parent]
        index = len(self.nodes)
        self.nodes.append(
            TreeNode(
                location=location,
                parent=parent,
                depth=parent_node.depth + 1,
                backtrace_depth=backtrace_depth,
            )
        )
        parent_node.children.append(index)
        return index

    def node(self, index: int) -> TreeNode:
        return self.nodes[index]

    def ancestors(self, index: int) -> Iterator[int]:
        """Yield the indices above *index*, nearest first, ending at the root."""
        parent = self.nodes[index].parent
        while parent is not None:
            yield parent
            parent = self.nodes[parent].parent

    def postorder(self) -> Iterator[int]:
        """Yield every index with children before their parent.

        Iterative so that pathologically deep recursion chains in the
        input cannot exhaust the interpreter stack.
        """
        stack = [(self.ROOT, False)]
        while stack:
            index, expanded = stack.pop()
            if expanded:
                yield index
                continue
            stack.append((index, True))
            for child in reversed(self.nodes[index].children):
                stack.append((child, False))

    def max_depth(self) -> int:
        return max(node.depth for node in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


class TreeBuilder:
    """State machine turning classified events into an instantiation tree.

    Args:
        dialect: Supplies the commit-timing and exit-depth policies and the
            ``file:line`` splitter used by :meth:`feed`.
        registry: Interns locations for :meth:`feed`. A fresh registry is
            created when omitted.
    """

    def __init__(self, dialect: Dialect, registry: Optional[LineRegistry] = None) -> None:
        self.dialect = dialect
        self.registry = registry if registry is not None else LineRegistry()
        self.tree = InstantiationTree()
        self.current = InstantiationTree.ROOT
        self.backtrace_depth = 0
        self.pending: Optional[int] = None
        self.skipped = 0
        self._open_skips: List[int] = []

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def enter(self, location: int) -> None:
        if self.dialect.commit_policy is CommitPolicy.EAGER:
            self.backtrace_depth += 1
            logger.debug("Committing %d at backtrace depth %d", location, self.backtrace_depth)
            self._descend(location)
            self.backtrace_depth = 0
            return

        self._commit_pending()
        self.pending = location

    def backtrace(self) -> None:
        self.backtrace_depth += 1

    def skip(self) -> None:
        """Account for an enter whose location could not be resolved.

        No node is created, but its matching exit must not move the cursor.
        A pending entry is committed first since the skipped enter nests
        inside it.
        """
        self.skipped += 1
        self._commit_pending()
        self._open_skips.append(self.current)

    def exit(self) -> None:
        self._commit_pending()
        if self._open_skips and self._open_skips[-1] == self.current:
            self._open_skips.pop()
        else:
            self._ascend()
        if self.dialect.exit_depth_policy is ExitDepthPolicy.RESET:
            self.backtrace_depth = 0
        elif self.backtrace_depth:
            self.backtrace_depth -= 1
        self.pending = None

    def finish(self) -> InstantiationTree:
        """Commit any unterminated entry and return the finished tree."""
        self._commit_pending()
        return self.tree

    def feed(self, event: LineEvent) -> bool:
        """Route one classified line; return False if it was not actionable."""
        if event.kind is EventKind.ENTER:
            parts = self.dialect.split_file_and_line(event.fragment)
            if parts is None:
                self.skip()
                return False
            self.enter(self.registry.intern(*parts))
        elif event.kind is EventKind.BACKTRACE:
            self.backtrace()
        elif event.kind is EventKind.EXIT:
            self.exit()
        else:
            return False
        return True

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def _commit_pending(self) -> None:
        if self.pending is not None:
            self._descend(self.pending)
            self.pending = None

    def _descend(self, location: int) -> None:
        self.current = self.tree.add_child(self.current, location, self.backtrace_depth)

    def _ascend(self) -> None:
        parent = self.tree.node(self.current).parent
        if parent is None:
            logger.debug("Unmatched exit at the root; ignoring")
            return
        self.current = parent
