"""Core data models shared by the parsing, aggregation and reporting layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class EventKind(str, Enum):
    ENTER = "enter"
    EXIT = "exit"
    BACKTRACE = "backtrace"
    UNMATCHED = "unmatched"


class CommitPolicy(str, Enum):
    """When an observed enter event is attached to the tree."""

    DEFERRED = "deferred"  # enter-first: commit on the next enter or exit
    EAGER = "eager"  # backtrace-first: commit immediately


class ExitDepthPolicy(str, Enum):
    """How the backtrace counter is unwound on an exit event."""

    DECREMENT = "decrement"
    RESET = "reset"


@dataclass(frozen=True)
class Location:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}({self.line})"


@dataclass(frozen=True)
class LineEvent:
    kind: EventKind
    fragment: str = ""


@dataclass
class AggregateRecord:
    count: int = 0
    total_with_children: int = 0
    children: Dict[int, int] = field(default_factory=dict)
    parents: Dict[int, int] = field(default_factory=dict)


@dataclass
class FrequencyRow:
    location: str
    count: int
    cumulative: int


@dataclass
class FrequencyReport:
    rows: List[FrequencyRow] = field(default_factory=list)
    total_matches: int = 0
    max_location_width: int = 0


@dataclass
class ParentEdge:
    location: Location
    weight: int


@dataclass
class ChildEdge:
    location: Location
    weight: int
    count: int


@dataclass
class CallGraphEntry:
    location: Location
    count: int
    total_with_children: int
    parents: List[ParentEdge] = field(default_factory=list)
    children: List[ChildEdge] = field(default_factory=list)


@dataclass
class ParseStats:
    lines: int = 0
    enter: int = 0
    exit: int = 0
    backtrace: int = 0
    unmatched: int = 0
    skipped: int = 0
    max_depth: int = 0
    max_backtrace_depth: int = 0
    dialect: Optional[str] = None
