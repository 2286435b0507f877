"""Compiler dialects: line-shape patterns and commit-timing policies.

Each dialect bundles the four patterns needed to read one compiler's
diagnostic stream (enter message, exit message, backtrace frame and the
``file:line`` splitter) together with the policies the tree builder uses
to decide *when* an observed instantiation becomes part of the tree.

The patterns match the deliberately triggered warnings of the
``template_profiler`` instrumentation:

- **msvc** prints the C4150 warning first and follows it with the
  ``see reference to`` backtrace.
- **gcc** (and clang, which mimics it) prints the ``instantiated from``
  backtrace first and the warning last.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .models import CommitPolicy, EventKind, ExitDepthPolicy, LineEvent

logger = logging.getLogger(__name__)


class UnknownDialectError(ValueError):
    """Raised when a dialect name does not resolve to a known compiler."""


@dataclass(frozen=True)
class Dialect:
    name: str
    description: str
    enter: re.Pattern
    exit: re.Pattern
    backtrace: re.Pattern
    split: re.Pattern
    fragment_format: str
    commit_policy: CommitPolicy
    exit_depth_policy: ExitDepthPolicy

    def classify(self, line: str) -> LineEvent:
        """Classify one raw diagnostic line.

        Patterns are tried in a fixed order (enter, backtrace, exit) and
        must match the whole line.  Enter events carry the captured
        location text verbatim; backtrace frames carry a location text
        rebuilt in this dialect's ``file:line`` shape.
        """
        text = line.rstrip("\r\n")

        match = self.enter.fullmatch(text)
        if match:
            return LineEvent(EventKind.ENTER, match.group(1))

        match = self.backtrace.fullmatch(text)
        if match:
            fragment = self.fragment_format.format(file=match.group(1), line=match.group(2))
            return LineEvent(EventKind.BACKTRACE, fragment)

        if self.exit.fullmatch(text):
            return LineEvent(EventKind.EXIT)

        return LineEvent(EventKind.UNMATCHED)

    def split_file_and_line(self, fragment: str) -> Optional[Tuple[str, int]]:
        """Split a location fragment into ``(file, line)``.

        Returns ``None`` when the fragment does not end in a numeric line
        number in this dialect's notation.
        """
        match = self.split.fullmatch(fragment)
        if not match:
            logger.debug("Unsplittable location fragment for %s: %r", self.name, fragment)
            return None
        return match.group(1), int(match.group(2))


# ===================================================================
# Built-in dialects
# ===================================================================

_MSVC_WARNING = (
    r" : warning C4150: deletion of pointer to incomplete type "
    r"'template_profiler::incomplete_{kind}'; no destructor called"
)

MSVC = Dialect(
    name="msvc",
    description="Microsoft Visual C++ (warning first, then 'see reference to' backtrace)",
    enter=re.compile(r"(.*)" + _MSVC_WARNING.format(kind="enter")),
    exit=re.compile(r"(.*)" + _MSVC_WARNING.format(kind="exit")),
    backtrace=re.compile(r"        (.*)\((\d+)\) : see reference to .*"),
    split=re.compile(r"(.*)\((\d+)\)"),
    fragment_format="{file}({line})",
    commit_policy=CommitPolicy.DEFERRED,
    exit_depth_policy=ExitDepthPolicy.DECREMENT,
)

GCC = Dialect(
    name="gcc",
    description="GCC >= 4.3 and clang ('instantiated from' backtrace first, then warning)",
    enter=re.compile(r"(.*): warning: .+int template_profiler::enter\(int\).*"),
    exit=re.compile(r"(.*): warning: .+int template_profiler::exit\(int\).*"),
    backtrace=re.compile(r"(.*):(\d+):   instantiated from .*"),
    split=re.compile(r"(.*):(\d+)"),
    fragment_format="{file}:{line}",
    commit_policy=CommitPolicy.EAGER,
    exit_depth_policy=ExitDepthPolicy.RESET,
)

GCC_LEGACY = Dialect(
    name="gcc-legacy",
    description="GCC < 4.3 (division-by-zero warnings)",
    enter=re.compile(r"(.*): warning: division by zero in .template_profiler::enter_value / 0."),
    exit=re.compile(r"(.*): warning: division by zero in .template_profiler::exit_value / 0."),
    backtrace=GCC.backtrace,
    split=GCC.split,
    fragment_format=GCC.fragment_format,
    commit_policy=CommitPolicy.EAGER,
    exit_depth_policy=ExitDepthPolicy.RESET,
)

DIALECTS: Dict[str, Dialect] = {d.name: d for d in (MSVC, GCC, GCC_LEGACY)}

ALIASES: Dict[str, str] = {
    "cl": "msvc",
    "clang": "gcc",
    "g++": "gcc",
}


def available_dialects() -> List[Dialect]:
    return list(DIALECTS.values())


def get_dialect(name: str) -> Dialect:
    """Resolve a dialect by name or alias (case-insensitive)."""
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    try:
        return DIALECTS[key]
    except KeyError:
        known = ", ".join(sorted(DIALECTS))
        raise UnknownDialectError(f"Unknown compiler dialect '{name}'. Known dialects: {known}") from None
