import logging
import pickle

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

import ehrenfest
from ehrenfest import EhrenfestConf, EhrenfestResults, InvalidParameter, run, run_many, setup


class TestRun:

    def test_series_length(self, scenario):
        scenario['K'] = 10
        res = run(**scenario)

        assert isinstance(res, EhrenfestResults)
        assert len(res) == 10
        assert res.time_points.size == 10
        assert res.quantum_positions.size == 10
        assert res.classical_positions.size == 10

    def test_no_steps(self, scenario):
        scenario['K'] = 0
        res = run(**scenario)

        assert len(res) == 0
        assert res.time_points.size == 0
        assert res.quantum_positions.size == 0
        assert res.classical_positions.size == 0

    def test_time_points(self, scenario):
        res = run(**scenario)
        dt = np.sqrt(scenario['x0'] / scenario['f']) / scenario['K']

        assert_allclose(res.time_points, np.arange(scenario['K']) * dt)

    def test_classical_trajectory_exact(self, scenario):
        scenario['K'] = 17
        res = run(**scenario)
        x0, f = scenario['x0'], scenario['f']

        for t, x in zip(res.time_points, res.classical_positions):
            assert x == x0 - f * t**2

    def test_deterministic(self, scenario):
        res1 = run(**scenario)
        res2 = run(**scenario)

        assert_array_equal(res1.time_points, res2.time_points)
        assert_array_equal(res1.quantum_positions, res2.quantum_positions)
        assert_array_equal(res1.classical_positions, res2.classical_positions)

    def test_scenario(self, scenario):
        res = run(**scenario)
        t, quantum, classical = (res.time_points, res.quantum_positions,
                                 res.classical_positions)

        assert t[0] == 0.0
        assert classical[0] == 8.0
        assert quantum[0] == pytest.approx(8.0, abs=scenario['sigma'])
        assert np.all(np.diff(classical) < 0)
        assert quantum[-1] < quantum[0]

    def test_norm_preserved(self, scenario):
        scenario['K'] = 50
        res = run(**scenario)

        assert_allclose(res.norms, 1.0, rtol=1e-6)

    def test_banded_method(self, scenario):
        res_dense = run(**scenario)
        res_banded = run(**scenario, method='banded')

        assert_allclose(res_banded.quantum_positions, res_dense.quantum_positions,
                        rtol=1e-10)
        assert_array_equal(res_banded.classical_positions, res_dense.classical_positions)

    def test_verbose(self, scenario, capsys):
        run(**scenario, verbose=True)
        assert '5/5' in capsys.readouterr().err

    def test_two_intervals(self):
        res = run(L=1.0, M=2, K=3, x0=0.5, f=1.0, sigma=0.2)

        # A single interior point at the center of the well
        assert_allclose(res.quantum_positions, 0.5)


class TestEhrenfestConf:

    def test_defaults(self, scenario):
        conf = EhrenfestConf(**scenario)

        assert conf.method == 'dense'
        assert conf.verbose is False
        assert conf.L == 10.0

    def test_derived(self, scenario):
        conf = EhrenfestConf(**scenario)

        assert conf.dx == pytest.approx(0.2)
        assert conf.n_interior == 49
        assert conf.t_final == pytest.approx(2.0)
        assert conf.dt == pytest.approx(0.4)

    def test_dt_without_steps(self, scenario):
        scenario['K'] = 0
        assert EhrenfestConf(**scenario).dt is None

    def test_missing_argument(self, scenario):
        del scenario['sigma']
        with pytest.raises(InvalidParameter, match='sigma'):
            EhrenfestConf(**scenario)

    def test_unknown_argument(self, scenario):
        with pytest.raises(InvalidParameter, match='dt'):
            EhrenfestConf(**scenario, dt=0.1)

    def test_unknown_attribute(self, scenario):
        with pytest.raises(AttributeError):
            EhrenfestConf(**scenario).n_jobs

    @pytest.mark.parametrize('arg, value', [
        ('L', 0.0), ('L', -1.0), ('L', np.inf),
        ('x0', 0.0), ('x0', -2.0),
        ('f', 0.0), ('f', -1.0), ('f', np.nan),
        ('sigma', 0.0), ('sigma', -0.5),
        ('M', 1), ('M', 0), ('M', 10.0), ('M', True),
        ('K', -1), ('K', 2.5),
        ('L', '10'),
        ('method', 'lu'),
    ])
    def test_invalid_values(self, scenario, arg, value):
        scenario[arg] = value
        with pytest.raises(InvalidParameter):
            EhrenfestConf(**scenario)

    def test_invalid_parameter_is_value_error(self, scenario):
        scenario['L'] = -1.0
        with pytest.raises(ValueError):
            run(**scenario)

    def test_numpy_integers(self, scenario):
        scenario['M'] = np.int64(50)
        scenario['K'] = np.int32(5)
        assert EhrenfestConf(**scenario).n_interior == 49

    def test_packet_outside_well_warns(self, scenario, caplog):
        scenario['x0'] = 12.0
        with caplog.at_level(logging.WARNING, logger='ehrenfest'):
            EhrenfestConf(**scenario)

        assert 'outside the well' in caplog.text

    def test_pickle(self, scenario):
        conf = pickle.loads(pickle.dumps(EhrenfestConf(**scenario, method='banded')))

        assert conf.method == 'banded'
        assert conf.dt == pytest.approx(0.4)


class TestRunMany:

    def test_order(self, scenario):
        params = [dict(scenario, K=k) for k in (3, 1, 4)]
        results = run_many(params)

        assert [len(res) for res in results] == [3, 1, 4]

    def test_matches_run(self, scenario):
        params = [scenario, dict(scenario, x0=5.0)]
        results = run_many(params, n_jobs=2)

        # Workers may use a different number of BLAS threads
        for p, res in zip(params, results):
            assert_allclose(res.quantum_positions, run(**p).quantum_positions, rtol=1e-12)

    def test_shared_options(self, scenario):
        results = run_many([scenario], method='banded')
        assert_allclose(results[0].quantum_positions, run(**scenario).quantum_positions,
                        rtol=1e-10)

    def test_validates_before_running(self, scenario):
        with pytest.raises(InvalidParameter):
            run_many([scenario, dict(scenario, M=1)])


def test_setup_idempotent():
    setup(logging.DEBUG)
    setup(logging.DEBUG)
    assert logging.getLogger('ehrenfest').level == logging.DEBUG

    setup()
    assert logging.getLogger('ehrenfest').level == logging.WARNING
    assert ehrenfest.ehrenfest._setup_done
