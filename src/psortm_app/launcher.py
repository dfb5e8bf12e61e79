import os
from dataclasses import dataclass, replace
from pathlib import Path

from .config import LauncherConfig
from .coms.containers import Container
from .logging import Log
from .staging import StagedFile, StagingArea

class UsageError(Exception):
    def __init__(self, problems: list[str]) -> None:
        super().__init__("\n".join(problems))
        self.problems = problems

def _strip_trailing_sep(path: str):
    while len(path) > 1 and path.endswith(os.sep):
        path = path[:-1]
    return path

def _absolute(path: Path|str):
    return Path(_strip_trailing_sep(os.path.abspath(os.path.expanduser(str(path)))))

@dataclass
class InvocationOptions:
    seq: Path|None = None
    tax: Path|None = None
    outdir: Path|None = None
    cutoff: float|None = None
    divergent: float|None = None
    format: str|None = None
    output: str|None = None
    exact: bool = False
    verbose: bool = False
    version: bool = False

    def Validate(self) -> list[str]:
        problems = []
        for flag, label, p in [
            ("-i/--seq", "sequence file", self.seq),
            ("-t/--tax", "taxonomy file", self.tax),
        ]:
            if p is None:
                problems.append(f"a {label} must be given with {flag}")
            elif not _absolute(p).is_file():
                problems.append(f"{label} [{p}] does not exist or is not a file")
        if self.outdir is None:
            problems.append("a results directory must be given with -r/--outdir")
        elif not _absolute(self.outdir).is_dir():
            problems.append(f"results directory [{self.outdir}] does not exist or is not a directory")

        if self.seq is not None and self.tax is not None and len(problems) == 0:
            seq, tax = _absolute(self.seq), _absolute(self.tax)
            if seq.name == tax.name and seq != tax:
                problems.append(f"sequence and taxonomy files must have different names, both are [{seq.name}]")
        return problems

    def Normalized(self):
        def _norm(p):
            return None if p is None else _absolute(p)
        return replace(self, seq=_norm(self.seq), tax=_norm(self.tax), outdir=_norm(self.outdir))

    def PassThroughArgs(self) -> list[str]:
        args = []
        for flag, v in [
            ("--cutoff", self.cutoff),
            ("--divergent", self.divergent),
            ("--format", self.format),
            ("--output", self.output),
        ]:
            if v is not None: args += [flag, str(v)]
        if self.exact: args.append("--exact")
        if self.verbose: args.append("--verbose")
        return args

def MakeContainer(options: InvocationOptions, seq: StagedFile, tax: StagedFile, config: LauncherConfig):
    mount = config.mount
    return Container(
        image=config.image,
        entrypoint=config.tool,
        binds=[(options.outdir, mount)],
        env=dict(
            MOUNT=str(options.outdir),
            OUTDIR=str(mount),
            SEQFILE=str(mount/seq.destination.name),
            TAXFILE=str(mount/tax.destination.name),
        ),
        runtime=config.runtime,
        sudo=config.sudo,
    )

def _plan(options: InvocationOptions):
    problems = options.Validate()
    if len(problems) > 0:
        raise UsageError(problems)
    return options.Normalized()

def DescribeLaunch(options: InvocationOptions, config: LauncherConfig):
    """the command Launch() would run, without touching the filesystem"""
    options = _plan(options)
    def _would_stage(p: Path):
        destination = options.outdir/p.name
        return StagedFile(p, destination, created=not os.path.lexists(destination))
    container = MakeContainer(options, _would_stage(options.seq), _would_stage(options.tax), config)
    return container.MakeRunCommand(options.PassThroughArgs())

def Launch(options: InvocationOptions, config: LauncherConfig|None = None) -> int:
    """
    Stage the sequence and taxonomy files into the results directory, run
    the tool's container once with that directory mounted, then remove the
    copies made here. Files already present in the results directory are
    left alone.

    Raises UsageError before anything on disk is touched if the options are
    incomplete, and StagingError if a copy or cleanup fails. The tool's own
    exit code is logged but does not change the result.
    """
    if config is None: config = LauncherConfig()
    options = _plan(options)
    Log.Debug(f"sequences [{options.seq}]")
    Log.Debug(f"taxonomy [{options.tax}]")
    Log.Debug(f"results [{options.outdir}] mounted at [{config.mount}]")

    with StagingArea(options.outdir) as area:
        seq = area.Stage(options.seq)
        tax = area.Stage(options.tax)
        container = MakeContainer(options, seq, tax, config)
        code = container.Run(options.PassThroughArgs())
    if code != 0:
        Log.Warn(f"{Path(config.tool).name} exited with code [{code}]")
    else:
        Log.Info(f"results written to [{options.outdir}]")
    return 0
