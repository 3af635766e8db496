import sys
from copy import deepcopy
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from Quantum_Walks.config import Config

_RESTORED = (
    "coin",
    "self_loop_weight",
    "tolerance",
    "diagnostics",
    "search",
    "log_verbosity",
    "config_file",
    "output_dir",
)


@pytest.fixture(autouse=True)
def _diagnostics_on() -> None:
    """Check unitarity after every step and restore ``Config`` afterwards."""

    saved = {name: deepcopy(getattr(Config, name)) for name in _RESTORED}
    Config.diagnostics = True
    yield
    for name, value in saved.items():
        setattr(Config, name, value)
