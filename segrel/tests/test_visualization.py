import os

from segrel.core.benchmark import Benchmarker
from segrel.core.config import BenchmarkConfig
from segrel.core.corpus import DEFAULT_PRESETS, TestCategory
from segrel.core.primitives import SegmentPair
from segrel.core.solvers import SolverKind
from segrel.core.visualization import plot_segment_pair, plot_worst_cases


def test_plot_segment_pair(tmp_path):
    out = str(tmp_path / 'pair.png')
    assert plot_segment_pair(DEFAULT_PRESETS[0].pair(), out) == out
    assert os.path.getsize(out) > 0


def test_plot_degenerate_pair(tmp_path):
    pair = SegmentPair.from_coords([1, 1, 1, 1, 1, 1, 1, 1])
    out = str(tmp_path / 'point.png')
    plot_segment_pair(pair, out, solvers=[SolverKind.GAUSS_ELIM, SolverKind.FLSI_ORIG], title='points')
    assert os.path.exists(out)


def test_plot_worst_cases(tmp_path):
    cfg = BenchmarkConfig(monte_carlo_cases=5, categories=(TestCategory.PRESET_PARALLEL,))
    blocks = Benchmarker(cfg).run_accuracy()
    written = plot_worst_cases(blocks, str(tmp_path / 'worst'))
    expected = [r for b in blocks for r in b.records.values() if r.pair is not None]
    assert len(written) == len(expected)
    for path in written:
        assert os.path.exists(path)
