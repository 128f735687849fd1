import pytest

from segrel.cli import build_parser, config_from_args, main
from segrel.core.corpus import TestCategory
from segrel.core.solvers import SolverKind


def test_parser_overrides():
    args = build_parser().parse_args(['--cases', '10', '--seed', '4', '--metric', 'manhattan',
                                      '--category', 'monte_carlo', '--category', 'preset_parallel',
                                      '--reference', 'cross_hypot'])
    cfg = config_from_args(args)
    assert cfg.monte_carlo_cases == 10
    assert cfg.random_seed == 4
    assert cfg.metric == 'manhattan'
    assert cfg.categories == (TestCategory.MONTE_CARLO, TestCategory.PRESET_PARALLEL)
    assert cfg.reference_solver is SolverKind.CROSS_HYPOT
    assert cfg.iterations_per_solver == 100_000


def test_parser_rejects_unknown_category():
    with pytest.raises(SystemExit):
        build_parser().parse_args(['--category', 'everything'])


def test_accuracy_run(capsys):
    rc = main(['--mode', 'accuracy', '--cases', '20', '--category', 'monte_carlo'])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Accuracy Benchmarks" in out
    assert "MonteCarlo: 20 test cases" in out


def test_speed_run(capsys):
    rc = main(['--mode', 'speed', '--iterations', '10', '--category', 'preset_non_parallel'])
    assert rc == 0
    assert "PresetNonParallel: 8 test cases" in capsys.readouterr().out


def test_invalid_configuration_returns_2(capsys):
    assert main(['--cases', '0']) == 2
    assert main(['--iterations', '-5']) == 2
    assert capsys.readouterr().out == ""


def test_plot_dir(tmp_path):
    out_dir = tmp_path / 'plots'
    rc = main(['--mode', 'accuracy', '--category', 'preset_parallel', '--plot-dir', str(out_dir)])
    assert rc == 0
    pngs = sorted(p.name for p in out_dir.glob('*.png'))
    assert 'preset_parallel__flsi_orig.png' in pngs
