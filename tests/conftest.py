"""
================================================================================
PYTEST CONFIGURATION
================================================================================

Pytest configuration and shared fixtures for the entire test suite.

Global Setup:
    - TEST_MODE=1 in the environment
    - Working directory switched to a temp dir BEFORE test modules import,
      so outputs/, configs/ and the price cache never touch the project
    - Project root on sys.path for `cost_basis` and `cli` imports

Author: robertbiv
================================================================================
"""
import os
import sys
import shutil
import tempfile
import pytest
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_WORK_DIR = None
_ORIGINAL_CWD = None


def pytest_configure(config):
    """
    Hook called before test collection starts.
    Set up the isolated working directory BEFORE any test modules are imported.
    """
    global _TEST_WORK_DIR, _ORIGINAL_CWD

    os.environ['TEST_MODE'] = '1'
    os.environ['PYTEST_RUNNING'] = '1'

    _TEST_WORK_DIR = Path(tempfile.mkdtemp(prefix="cost_basis_test_"))
    (_TEST_WORK_DIR / 'configs').mkdir(parents=True, exist_ok=True)

    _ORIGINAL_CWD = os.getcwd()
    os.chdir(_TEST_WORK_DIR)


def pytest_unconfigure(config):
    """
    Hook called after all tests finish.
    Restore original directory and clean up.
    """
    global _TEST_WORK_DIR, _ORIGINAL_CWD

    if _ORIGINAL_CWD:
        os.chdir(_ORIGINAL_CWD)

    if _TEST_WORK_DIR and _TEST_WORK_DIR.exists():
        shutil.rmtree(_TEST_WORK_DIR, ignore_errors=True)

    for var in ('TEST_MODE', 'PYTEST_RUNNING'):
        os.environ.pop(var, None)


@pytest.fixture(autouse=True)
def test_run_context():
    """Console-only logging for every test"""
    from cost_basis.utils.logger import set_run_context
    set_run_context('test')
    yield
    set_run_context('test')


@pytest.fixture
def prices():
    from test_common import FakePriceFetcher
    return FakePriceFetcher()


@pytest.fixture
def ledger():
    from cost_basis.core.ledger import LotLedger
    return LotLedger()
