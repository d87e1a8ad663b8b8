"""
Layout tracing infrastructure for tuistudio.

This module provides data structures for capturing a detailed trace of a
layout pass. When tracing is enabled, the engine records every decision it
makes: the viewport it started from, the box each node received, how each
flexbox line was packed, how grid tracks were divided and where sizing
cycles were cut.

This is primarily useful for:
1. Debugging layout issues (understanding why a node ended up where it did)
2. Writing targeted tests (verifying specific placement decisions)

Usage:
    >>> engine = LayoutEngine(trace=True)
    >>> engine.calculate_layout(root, 80, 24)
    >>> trace = engine.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("layout_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TraceRecord:
    """
    Record of a single layout decision.

    Attributes:
        stage: Kind of decision (e.g., "place", "flex-line", "grid-tracks")
        node_id: The node the decision concerns, or None for pass-level records
        data: Relevant values at the time of the decision
    """

    stage: str
    node_id: Optional[str]
    data: Dict[str, Any]

    def __str__(self) -> str:
        target = self.node_id if self.node_id is not None else "-"
        values = ", ".join(f"{key}={value}" for key, value in self.data.items())
        return f"[{self.stage}] {target}: {values}"


@dataclass
class LayoutTrace:
    """
    Complete trace of one calculate_layout call.

    Attributes:
        viewport: (width, height) the pass started from
        records: Every recorded decision, in the order it was made
    """

    viewport: Tuple[int, int] = (0, 0)
    records: List[TraceRecord] = field(default_factory=list)

    def add(self, stage: str, node_id: Optional[str] = None, **data: Any) -> None:
        """Record a layout decision."""
        self.records.append(TraceRecord(stage, node_id, dict(data)))

    def get_records_for(self, node_id: str) -> List[TraceRecord]:
        """Get all records concerning a node."""
        return [r for r in self.records if r.node_id == node_id]

    def get_records_by_stage(self, stage: str) -> List[TraceRecord]:
        """Get all records of one stage."""
        return [r for r in self.records if r.stage == stage]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the viewport and a count of records per stage.
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Viewport: {self.viewport[0]}x{self.viewport[1]}",
            f"Total records: {len(self.records)}",
            "",
        ]

        stage_counts: Dict[str, int] = {}
        for record in self.records:
            stage_counts[record.stage] = stage_counts.get(record.stage, 0) + 1

        lines.append("Records by stage:")
        for stage, count in sorted(stage_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {stage}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Generate a complete dump of the trace, one line per record."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]
        lines.extend(str(record) for record in self.records)
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
