"""Pytest fixtures for chaindiag tests."""

import pytest

import numpy as np


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def ar1_draws(rng):
    """AR(1) draws of shape (iteration, chain, parameter) with known correlation."""
    n_iter, n_chains, n_params = 400, 3, 2
    phi = 0.8
    draws = np.zeros((n_iter, n_chains, n_params))
    noise = rng.normal(size=(n_iter, n_chains, n_params))
    draws[0] = noise[0]
    for t in range(1, n_iter):
        draws[t] = phi * draws[t - 1] + noise[t]
    return draws, ["alpha", "beta"]


@pytest.fixture
def rhat_values(rng):
    """Random Rhat values spanning all three buckets."""
    return rng.uniform(1.0, 1.15, size=100)


@pytest.fixture
def neff_ratios(rng):
    """Random effective-sample-size ratios in [0, 1]."""
    return rng.uniform(0.0, 1.0, size=100)


@pytest.fixture
def sample_config_file(tmp_path):
    """Create a sample TOML configuration file."""
    config_path = tmp_path / "chaindiag.toml"
    content = """
[rhat]
breakpoints = [1.01, 1.05]

[autocorrelation]
lags = 10
style = "bar"
n_workers = 2
"""
    config_path.write_text(content)
    return config_path
