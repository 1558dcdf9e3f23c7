import copy

import pytest

from tests.samples import SCENARIO_PARAMETERS


@pytest.fixture
def scenario_parameters():
    return copy.deepcopy(SCENARIO_PARAMETERS)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "PARAM_TREE_EXAMPLE_SEED",
        "PARAM_TREE_STRICT",
        "PARAM_TREE_OUTPUT_DIR",
        "PARAM_TREE_OUTPUT_FORMAT",
        "PARAM_TREE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
