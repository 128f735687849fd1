import io

from segrel.core.benchmark import BenchmarkReport, Benchmarker
from segrel.core.config import BenchmarkConfig
from segrel.core.corpus import TestCategory
from segrel.core.primitives import SegmentPair
from segrel.core.report import format_report, format_segment_pair, print_report
from segrel.core.solvers import SOLVERS, SolverFamily, SolverInfo, SolverKind


def _report(mode='all'):
    cfg = BenchmarkConfig(iterations_per_solver=20, monte_carlo_cases=10,
                          categories=(TestCategory.PRESET_PARALLEL, TestCategory.MONTE_CARLO))
    return Benchmarker(cfg).run(mode)


def test_format_segment_pair():
    pair = SegmentPair.from_coords([1, 1, 3, 4, 5, 6, 7, 9])
    assert format_segment_pair(pair) == "{(1, 1), (3, 4)} | {(5, 6), (7, 9)}"
    # full round-trip precision
    pair = SegmentPair.from_coords([0.1, 0, 0, 0, 0, 0, 0, 0])
    assert format_segment_pair(pair).startswith("{(0.10000000000000001, 0)")


def test_speed_section():
    text = format_report(_report('speed'))
    assert "Speed Benchmarks" in text
    assert "PresetParallel: 5 test cases" in text
    assert "MonteCarlo: 10 test cases" in text
    assert text.count("ns per call") == 2 * 6
    assert "Accuracy Benchmarks" not in text


def test_accuracy_section():
    text = format_report(_report('accuracy'))
    assert "Accuracy Benchmarks" in text
    assert "PresetParallel: 5 test cases (reference gauss_elim)" in text
    assert "Max diff is" in text
    # flsi_orig reports collinear presets as no intersection
    assert "Max diff is inf" in text
    assert "classified" in text and "reference" in text
    assert "classification mismatches" in text


def test_empty_report():
    assert format_report(BenchmarkReport(BenchmarkConfig())) == "<no results>"


def test_print_report_to_stream():
    buf = io.StringIO()
    print_report(_report('speed'), file=buf)
    assert buf.getvalue().startswith("================")


def test_raising_solver_is_labelled_error(monkeypatch):
    def boom(a, b, want_point=False):
        raise RuntimeError("boom")

    monkeypatch.setitem(SOLVERS, SolverKind.FLSI_V2,
                        SolverInfo(SolverKind.FLSI_V2, boom, SolverFamily.FLAGS, 'raises'))
    cfg = BenchmarkConfig(monte_carlo_cases=5, categories=(TestCategory.PRESET_NON_PARALLEL,))
    text = format_report(Benchmarker(cfg).run('accuracy'))
    assert "classified error, reference unbounded" in text
