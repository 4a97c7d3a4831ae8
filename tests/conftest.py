"""Shared test fixtures and configuration."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from weaver.config import make_run_config
from weaver.lesion import severity_grid
from weaver.studies import STUDIES
from weaver.sweep import build_network


@pytest.fixture
def run_config():
    """Standard run parameters."""
    return make_run_config()


@pytest.fixture
def clusters():
    return STUDIES["logopenic_clusters"]


@pytest.fixture
def group_studies():
    return STUDIES["group_studies"]


@pytest.fixture
def small_network(clusters, run_config):
    """Rate-scaled five-word network."""
    return build_network(clusters, run_config)


@pytest.fixture
def large_network(group_studies, run_config):
    """Rate-scaled twelve-concept network with the reduced semantic rate."""
    return build_network(group_studies, run_config)


@pytest.fixture
def coarse_grid():
    """Endpoints and a midpoint of the weight grid."""
    return np.array([0.0, 0.5, 0.99])


@pytest.fixture
def full_weight_grid():
    return severity_grid("weight")
