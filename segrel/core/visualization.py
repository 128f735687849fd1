"""Static plots of a segment pair and the points the solvers report.

Used to inspect the worst offending pairs found by the accuracy harness.
"""
from __future__ import annotations

import os as _os
from typing import Iterable, List, Optional

import matplotlib as _mpl
# Non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .benchmark import CategoryAccuracy
from .logging_utils import get_logger
from .primitives import Segment, SegmentPair
from .relations import describe
from .solvers import SOLVERS, SolverKind

logger = get_logger('segrel.viz')

_SEGMENT_COLORS = ('tab:blue', 'tab:orange')


def _extension(segment: Segment, span: float) -> Optional[np.ndarray]:
    """Two far points on the segment's infinite line, or None for a point-like segment."""
    length = segment.length()
    if length == 0 or not np.isfinite(length):
        return None
    u = segment.direction().as_array() / length
    mid = segment.midpoint().as_array()
    return np.vstack((mid - span * u, mid + span * u))


def plot_segment_pair(
    pair: SegmentPair,
    outname: str = 'segment_pair.png',
    solvers: Optional[Iterable[SolverKind]] = None,
    title: Optional[str] = None,
) -> str:
    """Draw both segments, their extensions and each solver's point; returns ``outname``."""
    kinds = list(SOLVERS) if solvers is None else list(solvers)
    pts = np.array([p.as_array() for s in (pair.first, pair.second) for p in (s.p1, s.p2)])
    finite = pts[np.all(np.isfinite(pts), axis=1)]
    span = float(np.ptp(finite, axis=0).max()) if finite.size else 1.0
    span = span if span > 0 else 1.0

    fig, ax = plt.subplots(figsize=(6, 6))
    for segment, color, label in zip((pair.first, pair.second), _SEGMENT_COLORS, ('A', 'B')):
        ext = _extension(segment, span)
        if ext is not None:
            ax.plot(ext[:, 0], ext[:, 1], linestyle='--', linewidth=0.8, color=color, alpha=0.5)
        ax.plot([segment.p1.x, segment.p2.x], [segment.p1.y, segment.p2.y],
                color=color, linewidth=2.0, marker='o', markersize=4, label=f'segment {label}')

    markers = 'xs^vD+'
    for i, kind in enumerate(kinds):
        relation, point = SOLVERS[kind](pair.first, pair.second, True)
        label = f'{kind.value}: {describe(relation)}'
        if point is None:
            ax.plot([], [], linestyle='none', marker=markers[i % len(markers)], label=label + ' (no point)')
            continue
        ax.plot([point.x], [point.y], linestyle='none', marker=markers[i % len(markers)],
                markersize=8, label=label)

    if finite.size:
        lo = finite.min(axis=0) - 0.1 * span
        hi = finite.max(axis=0) + 0.1 * span
        ax.set_xlim(lo[0], hi[0])
        ax.set_ylim(lo[1], hi[1])
    ax.set_aspect('equal', adjustable='datalim')
    ax.legend(fontsize=7, loc='best')
    ax.set_title(title or 'segment pair')
    fig.savefig(outname, dpi=150)
    plt.close(fig)
    return outname


def plot_worst_cases(blocks: Iterable[CategoryAccuracy], out_dir: str) -> List[str]:
    """One PNG per (category, solver) worst case with a recorded pair."""
    _os.makedirs(out_dir, exist_ok=True)
    written = []
    for block in blocks:
        for kind, record in block.records.items():
            if record.pair is None:
                continue
            outname = _os.path.join(out_dir, f'{block.category.value}__{kind.value}.png')
            title = f'{block.category.title}: {kind.value} max diff {record.deviation:g}'
            plot_segment_pair(record.pair, outname, solvers=(kind, block.reference), title=title)
            written.append(outname)
    logger.info("wrote %d worst-case plots to %s", len(written), out_dir)
    return written


__all__ = ['plot_segment_pair', 'plot_worst_cases']
