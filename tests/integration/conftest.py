import json
import os
import sys
import shutil
import socket
import time
import subprocess
from pathlib import Path
import urllib.request

import pytest


DATASET = [
    {"id": "issa_000001", "nom": "ISSA", "nomPere": "MAMIA", "sexe": "m", "clan": "Kel"},
    {"id": "aicha_000002", "nom": "AÏCHA", "sexe": "f"},
    {"id": "moussa_000003", "nom": "MOUSSA", "nomPere": "ISSA", "sexe": "m", "pereId": "issa_000001", "mereId": "aicha_000002"},
    {"id": "mariama_000004", "nom": "MARIAMA", "nomPere": "ISSA", "sexe": "f", "pereId": "issa_000001", "mereId": "aicha_000002"},
    {"id": "ali_000005", "nom": "ALI", "nomPere": "ISSA", "sexe": "m", "pereId": "issa_000001"},
    {"id": "oumar_000006", "nom": "OUMAR", "nomPere": "MOUSSA", "nomGrandPere": "ISSA", "sexe": "m", "pereId": "moussa_000003"},
    {"id": "fanta_000007", "nom": "FANTA", "nomPere": "BOUBACAR", "sexe": "f", "mereId": "mariama_000004"},
    {"id": "zeinab_000008", "nom": "ZEINAB", "sexe": "f"},
]


def _find_free_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    addr, port = s.getsockname()
    s.close()
    return port


@pytest.fixture(scope="module")
def live_server(tmp_path_factory):
    """Start a uvicorn server from a temporary copy of the package and yield base url.

    The fixture copies the package into a temp dir, writes a small dataset,
    starts uvicorn as a subprocess pointed at it, waits for readiness by
    polling /openapi.json, and then yields the base URL. The server is
    terminated after the tests.
    """
    tmp = tmp_path_factory.mktemp("gn_live")
    # repo root is two levels up from tests/integration/conftest.py
    repo_root = Path(__file__).resolve().parents[2]
    shutil.copytree(repo_root / "genealogie_py", tmp / "genealogie_py")

    data_file = tmp / "personnes.json"
    data_file.write_text(json.dumps(DATASET, ensure_ascii=False), encoding="utf-8")

    port = _find_free_port()
    cmd = [sys.executable, "-m", "uvicorn", "genealogie_py.web.app:app", "--host", "127.0.0.1", "--port", str(port)]
    env = os.environ.copy()
    env["GENEALOGIE_DATA_FILE"] = str(data_file)
    env.pop("GENEALOGIE_CONFIG", None)
    # Ensure the temporary copy is importable first
    env_pythonpath = env.get("PYTHONPATH", "")
    env["PYTHONPATH"] = str(tmp) + (os.pathsep + env_pythonpath if env_pythonpath else "")
    # Do not capture stdout/stderr so server startup errors are visible in test output
    proc = subprocess.Popen(cmd, cwd=str(tmp), env=env, stdout=None, stderr=None)

    base = f"http://127.0.0.1:{port}"
    deadline = time.time() + 30
    last_exc = None
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(base + "/openapi.json", timeout=1) as r:
                if r.status == 200:
                    break
        except Exception as e:
            last_exc = e
            time.sleep(0.2)
            continue
    else:
        proc.kill()
        proc.communicate(timeout=1)
        pytest.fail(f"Server did not become ready in time; last error: {last_exc}")

    try:
        yield base
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
