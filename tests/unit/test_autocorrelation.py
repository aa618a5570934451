"""Tests for grouped autocorrelation."""

import pytest

import numpy as np

from chaindiag.core.diagnostics.autocorrelation import (
    DEFAULT_LAGS,
    MCMCArray,
    as_mcmc_array,
    compute_autocorrelation,
    sample_acf,
    select_parameters,
)
from chaindiag.core.shared.exceptions import ConfigurationError, ValidationError


def _reference_acf(x, lags):
    """Biased ACF written out term by term."""
    n = len(x)
    m = sum(x) / n
    c0 = sum((v - m) ** 2 for v in x) / n
    return [sum((x[t] - m) * (x[t + k] - m) for t in range(n - k)) / n / c0 for k in range(lags + 1)]


class TestSampleAcf:
    """Autocorrelation of a single series."""

    def test_matches_reference_formula(self, rng):
        x = rng.normal(size=50)
        np.testing.assert_allclose(sample_acf(x, 10), _reference_acf(list(x), 10), atol=1e-12)

    def test_lag_zero_is_exactly_one(self, rng):
        assert sample_acf(rng.normal(size=30) * 1e6 + 5, 5)[0] == 1.0

    def test_values_bounded(self, rng):
        acf = sample_acf(rng.normal(size=100).cumsum(), 50)
        assert np.all(np.abs(acf) <= 1.0 + 1e-12)

    def test_alternating_series(self):
        acf = sample_acf(np.array([1.0, -1.0] * 10), 2)
        assert acf[1] == pytest.approx(-19 / 20)
        assert acf[2] == pytest.approx(18 / 20)

    def test_constant_series(self):
        np.testing.assert_array_equal(sample_acf(np.full(10, 3.0), 3), [1.0, 0.0, 0.0, 0.0])


class TestMCMCArray:
    """Construction and parameter selection."""

    def test_two_dimensional_input_is_one_chain(self, rng):
        array = as_mcmc_array(rng.normal(size=(20, 3)))
        assert (array.n_iterations, array.n_chains, array.n_parameters) == (20, 1, 3)
        assert array.parameter_names == ("V1", "V2", "V3")

    def test_wrong_dimensions(self):
        with pytest.raises(ValidationError, match="3D"):
            as_mcmc_array(np.zeros(10))

    def test_name_count_mismatch(self):
        with pytest.raises(ValidationError, match="parameter names"):
            as_mcmc_array(np.zeros((10, 2, 2)), ["a"])

    def test_duplicate_names(self):
        with pytest.raises(ValidationError, match="unique"):
            MCMCArray(draws=np.zeros((10, 1, 2)), parameter_names=("a", "a"))

    def test_rename_existing_array(self):
        array = as_mcmc_array(np.zeros((10, 1, 2)))
        assert as_mcmc_array(array, ["a", "b"]).parameter_names == ("a", "b")

    def test_select_by_name_keeps_array_order(self, ar1_draws):
        draws, names = ar1_draws
        array = as_mcmc_array(draws, names)
        selected = select_parameters(array, pars=["beta", "alpha"])
        assert selected.parameter_names == ("alpha", "beta")

    def test_select_by_regex(self, rng):
        array = as_mcmc_array(rng.normal(size=(10, 1, 4)), ["alpha", "beta[1]", "beta[2]", "sigma"])
        selected = select_parameters(array, pars=["sigma"], regex_pars=[r"^beta\["])
        assert selected.parameter_names == ("beta[1]", "beta[2]", "sigma")
        np.testing.assert_array_equal(selected.draws, array.draws[:, :, 1:])

    def test_select_single_string(self, ar1_draws):
        draws, names = ar1_draws
        array = as_mcmc_array(draws, names)
        assert select_parameters(array, pars="alpha").parameter_names == ("alpha",)
        assert select_parameters(array, regex_pars="^b").parameter_names == ("beta",)

    def test_select_unknown_name(self, ar1_draws):
        draws, names = ar1_draws
        with pytest.raises(ValidationError, match="gamma"):
            select_parameters(as_mcmc_array(draws, names), pars=["gamma"])

    def test_select_no_match(self, ar1_draws):
        draws, names = ar1_draws
        with pytest.raises(ValidationError, match="No parameters"):
            select_parameters(as_mcmc_array(draws, names), regex_pars=["^zeta"])

    def test_empty_selection_keeps_all(self, ar1_draws):
        draws, names = ar1_draws
        array = as_mcmc_array(draws, names)
        assert select_parameters(array) is array


class TestComputeAutocorrelation:
    """Records over (chain, parameter, lag)."""

    def test_record_count_and_order(self, ar1_draws):
        draws, names = ar1_draws
        table = compute_autocorrelation(as_mcmc_array(draws, names), lags=5)
        assert len(table) == 3 * 2 * 6
        keys = [(r.chain, r.parameter, r.lag) for r in table]
        expected = [(c, p, k) for c in (1, 2, 3) for p in names for k in range(6)]
        assert keys == expected

    def test_lag_zero_is_one(self, ar1_draws):
        draws, names = ar1_draws
        table = compute_autocorrelation(as_mcmc_array(draws, names), lags=10)
        for record in table:
            if record.lag == 0:
                assert record.autocorrelation == pytest.approx(1.0, abs=1e-9)

    def test_matches_per_series_acf(self, ar1_draws):
        draws, names = ar1_draws
        table = compute_autocorrelation(as_mcmc_array(draws, names), lags=4)
        beta_chain_2 = [r.autocorrelation for r in table if r.chain == 2 and r.parameter == "beta"]
        np.testing.assert_allclose(beta_chain_2, sample_acf(draws[:, 1, 1], 4))

    def test_ar1_decay(self, ar1_draws):
        draws, names = ar1_draws
        table = compute_autocorrelation(as_mcmc_array(draws, names), lags=1)
        lag_one = [r.autocorrelation for r in table if r.lag == 1]
        assert all(0.6 < value < 0.95 for value in lag_one)

    def test_default_lags(self, rng):
        table = compute_autocorrelation(as_mcmc_array(rng.normal(size=(30, 1, 1))))
        assert table.lags == DEFAULT_LAGS
        assert len(table) == DEFAULT_LAGS + 1

    def test_two_chains_thirty_iterations(self, rng):
        array = as_mcmc_array(rng.normal(size=(30, 2, 1)))
        assert len(compute_autocorrelation(array, lags=25)) == 52
        with pytest.raises(ConfigurationError, match="lags=29"):
            compute_autocorrelation(array, lags=29)

    def test_largest_valid_lag(self, rng):
        array = as_mcmc_array(rng.normal(size=(30, 1, 1)))
        assert len(compute_autocorrelation(array, lags=28)) == 29
        with pytest.raises(ConfigurationError):
            compute_autocorrelation(array, lags=29)

    @pytest.mark.parametrize("lags", [-1, 2.5, True])
    def test_invalid_lags(self, rng, lags):
        with pytest.raises(ConfigurationError):
            compute_autocorrelation(as_mcmc_array(rng.normal(size=(30, 1, 1))), lags=lags)

    def test_non_finite_draws(self, rng):
        draws = rng.normal(size=(30, 2, 2))
        draws[3, 1, 1] = np.nan
        with pytest.raises(ValidationError, match="beta"):
            compute_autocorrelation(as_mcmc_array(draws, ["alpha", "beta"]), lags=5)

    def test_threaded_matches_sequential(self, ar1_draws):
        draws, names = ar1_draws
        array = as_mcmc_array(draws, names)
        sequential = compute_autocorrelation(array, lags=8)
        threaded = compute_autocorrelation(array, lags=8, n_workers=4)
        assert threaded.records == sequential.records
