import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from .logging import Log

class StagingError(Exception):
    pass

@dataclass
class StagedFile:
    source: Path
    destination: Path
    created: bool

def Stage(source: Path, outdir: Path) -> StagedFile:
    # anything already at the destination, dangling links included, belongs to the user
    destination = Path(outdir)/Path(source).name
    if os.path.lexists(destination):
        Log.Debug(f"[{destination}] already present, not staging")
        return StagedFile(Path(source), destination, created=False)
    try:
        shutil.copy(source, destination)
    except OSError as e:
        raise StagingError(f"failed to copy [{source}] to [{destination}]: {e}")
    Log.Debug(f"staged [{source}] -> [{destination}]")
    return StagedFile(Path(source), destination, created=True)

def Unstage(staged: StagedFile):
    if not staged.created: return
    try:
        staged.destination.unlink()
    except OSError as e:
        raise StagingError(f"failed to remove staged file [{staged.destination}]: {e}")
    Log.Debug(f"removed [{staged.destination}]")

class StagingArea:
    """
    Stages files into a directory and removes, on exit, only the copies
    it made. Cleanup runs even if the body raises.
    """

    def __init__(self, outdir: Path) -> None:
        self.outdir = Path(outdir)
        self.staged: list[StagedFile] = []

    def Stage(self, source: Path) -> StagedFile:
        staged = Stage(source, self.outdir)
        self.staged.append(staged)
        return staged

    def Cleanup(self):
        errors = []
        while len(self.staged) > 0:
            staged = self.staged.pop()
            try:
                Unstage(staged)
            except StagingError as e:
                errors.append(str(e))
        if len(errors) > 0:
            raise StagingError("\n".join(errors))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.Cleanup()
        except StagingError as e:
            if exc_type is None: raise
            # the original error wins, but the leftover copies are still reported
            Log.Error(str(e))
