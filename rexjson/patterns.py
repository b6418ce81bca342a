from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern


@dataclass(frozen=True)
class NamedPattern:
    """A compiled regular expression together with its named groups.

    Group names are kept in declaration order; unnamed groups never show up
    here and contribute nothing to a result.
    """
    pattern: Pattern[str]
    group_names: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        ordered = sorted(self.pattern.groupindex.items(), key=lambda item: item[1])
        object.__setattr__(self, "group_names", tuple(name for name, _ in ordered))

    @property
    def source(self) -> str:
        return self.pattern.pattern

    def matches(self, line: str) -> re.Match[str] | None:
        return self.pattern.search(line)

    def captures(self, line: str) -> list[tuple[str, str]]:
        """Return (name, value) pairs from the first match in 'line'.

        A named group that did not take part in the match yields "".
        An empty list means the pattern did not match.
        """
        m = self.matches(line)
        if m is None:
            return []
        return [(name, m.group(name) or "") for name in self.group_names]
