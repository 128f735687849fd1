"""Plain-text presentation of benchmark results."""
from __future__ import annotations

import sys
from typing import List, Optional, Sequence, TextIO

from .benchmark import AccuracyRecord, BenchmarkReport, CategoryAccuracy, CategorySpeed
from .primitives import SegmentPair
from .relations import Relation, to_intersection_type


def _banner(title: str) -> List[str]:
    rule = '=' * len(title)
    return [rule, title, rule]


def _fmt_number(value: float) -> str:
    return f"{value:.17g}"


def _relation_label(relation: Optional[Relation]) -> str:
    # None stands for a solver that raised
    return "error" if relation is None else to_intersection_type(relation).name.lower()


def format_segment_pair(pair: SegmentPair) -> str:
    """``{(x1, y1), (x2, y2)} | {(x3, y3), (x4, y4)}`` at full precision."""
    c = [_fmt_number(v) for v in pair.coords()]
    return "{(%s, %s), (%s, %s)} | {(%s, %s), (%s, %s)}" % tuple(c)


def format_speed_report(blocks: Sequence[CategorySpeed]) -> str:
    lines = _banner("Speed Benchmarks")
    for block in blocks:
        lines.append(f"{block.category.title}: {block.n_cases} test cases")
        if not block.results:
            lines.append("\t<no test cases>")
        width = max((len(r.solver.value) for r in block.results), default=0)
        for res in block.results:
            lines.append(f"\t{res.solver.value.ljust(width)}  {res.ns_per_call:12.1f} ns per call")
        lines.append("")
    return "\n".join(lines)


def _accuracy_line(record: AccuracyRecord, width: int) -> List[str]:
    name = record.solver.value.ljust(width)
    head = f"\t{name}  Max diff is {record.deviation:g}"
    if record.mismatches:
        head += f"  ({record.mismatches}/{record.cases} classification mismatches)"
    if record.pair is None:
        return [head, "\t\t<no deviation>", ""]
    lines = [head, "\t\t" + format_segment_pair(record.pair)]
    if record.candidate != record.reference:
        lines.append(f"\t\tclassified {_relation_label(record.candidate)}, "
                     f"reference {_relation_label(record.reference)}")
    lines.append("")
    return lines


def format_accuracy_report(blocks: Sequence[CategoryAccuracy]) -> str:
    lines = _banner("Accuracy Benchmarks")
    for block in blocks:
        lines.append(f"{block.category.title}: {block.n_cases} test cases "
                     f"(reference {block.reference.value})")
        width = max((len(k.value) for k in block.records), default=0)
        for record in block.records.values():
            lines.extend(_accuracy_line(record, width))
    return "\n".join(lines)


def format_report(report: BenchmarkReport) -> str:
    parts = []
    if report.speed:
        parts.append(format_speed_report(report.speed))
    if report.accuracy:
        parts.append(format_accuracy_report(report.accuracy))
    return "\n".join(parts) if parts else "<no results>"


def print_report(report: BenchmarkReport, file: Optional[TextIO] = None) -> None:
    out = file or sys.stdout
    print(format_report(report), file=out)


__all__ = [
    'format_segment_pair', 'format_speed_report', 'format_accuracy_report',
    'format_report', 'print_report',
]
