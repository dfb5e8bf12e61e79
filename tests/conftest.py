import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from psortm_app.coms.containers import Container
from psortm_app.logging import Log


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config and log settings out of the tests."""
    monkeypatch.delenv("PSORTM_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    Log.SetLogFile(None)
    Log.SetDebug(False)
    yield
    Log.SetLogFile(None)
    Log.SetDebug(False)


class RunRecorder:
    """Stands in for Container.Run and snapshots the results directory."""

    def __init__(self, exit_code=0):
        self.exit_code = exit_code
        self.calls = []

    def __call__(self, container, command=None):
        outdir = Path(container.binds[0][0])
        self.calls.append(
            dict(
                container=container,
                command=list(command or []),
                run_command=container.MakeRunCommand(command),
                files_present=sorted(p.name for p in outdir.iterdir()),
            )
        )
        return self.exit_code


@pytest.fixture
def recorder(monkeypatch):
    rec = RunRecorder()
    monkeypatch.setattr(Container, "Run", lambda self, command=None: rec(self, command))
    return rec


@pytest.fixture
def inputs(tmp_path):
    """A sequence file and taxonomy file outside of an empty results directory."""
    src = tmp_path / "inputs"
    src.mkdir()
    seq = src / "a.fasta"
    seq.write_text(">p1\nMKTAYIAKQR\n")
    tax = src / "tax.csv"
    tax.write_text("p1,Bacteria,Gram-negative\n")
    out = tmp_path / "out"
    out.mkdir()
    return seq, tax, out
