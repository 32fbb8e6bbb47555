import os
import tempfile
import shutil
import atexit

_gn_test_data_dir = None


def pytest_configure(config):
    """Point GENEALOGIE_DATA_FILE at a session-scoped temporary location so
    the web app and any subprocesses never read the repository-local
    `data/` folder.
    """
    global _gn_test_data_dir
    td = tempfile.mkdtemp(prefix="gn_test_data_")
    _gn_test_data_dir = td
    os.environ.setdefault("GENEALOGIE_DATA_FILE", os.path.join(td, "personnes.json"))


def pytest_unconfigure(config):
    """Remove the temporary data directory created for the test session."""
    global _gn_test_data_dir
    td = _gn_test_data_dir
    _gn_test_data_dir = None
    if td and os.path.exists(td):
        shutil.rmtree(td, ignore_errors=True)


# also register an atexit fallback in case pytest_unconfigure isn't called
def _atexit_cleanup():
    td = _gn_test_data_dir
    if td and os.path.exists(td):
        shutil.rmtree(td, ignore_errors=True)


atexit.register(_atexit_cleanup)
import sys
from pathlib import Path

# Ensure repo root is on sys.path so tests can import the package directly
root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))
