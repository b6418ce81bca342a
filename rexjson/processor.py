from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TextIO

from .patterns import NamedPattern
from .types import ResultRecord

logger = logging.getLogger(__name__)


@dataclass
class Processor:
    patterns: list[NamedPattern]
    unique: bool = False

    def merge_line(self, line: str) -> ResultRecord:
        """Apply every pattern to 'line' and merge their named captures.

        Patterns run in order; a field captured more than once is promoted to
        an array. With 'unique' set, repeated values for a field are dropped.
        """
        record = ResultRecord()
        for pattern in self.patterns:
            for name, value in pattern.captures(line):
                record.merge(name, value, self.unique)
        return record

    def render(self, record: ResultRecord, line_number: int, line: str) -> str | None:
        """Serialize 'record' to compact JSON, or None if it cannot be."""
        try:
            return json.dumps(record.as_mapping(), ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            logger.warning("Could not serialize fields for line %d: %r (%s)", line_number, line, e)
            return None

    def process_stream(self, src: TextIO, dst: TextIO) -> None:
        lines_read = 0
        records_written = 0
        for line_number, raw_line in enumerate(src, start=1):
            lines_read = line_number
            line = _strip_terminator(raw_line)
            record = self.merge_line(line)
            if not record:
                continue
            rendered = self.render(record, line_number, line)
            if rendered is None:
                continue
            dst.write(rendered + "\n")
            records_written += 1
        logger.debug("Read %d line(s), wrote %d record(s)", lines_read, records_written)


def _strip_terminator(raw_line: str) -> str:
    return raw_line.removesuffix("\n").removesuffix("\r")
