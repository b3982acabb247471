import sys
from pathlib import Path

import pytest


def _add_repo_root_to_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_add_repo_root_to_path()


@pytest.fixture
def ledger_dir(tmp_path, monkeypatch):
    d = tmp_path / "ledger"
    monkeypatch.setenv("PANELCALC_DATA_DIR", str(d))
    monkeypatch.delenv("PANELCALC_DEBUG", raising=False)
    return d
