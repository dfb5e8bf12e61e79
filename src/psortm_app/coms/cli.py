import sys
from pathlib import Path
import argparse

from ..constants import NAME, VERSION, HOMEPAGE, SHORT_SUMMARY, ENTRY_POINTS
from ..config import LauncherConfig, ConfigError
from ..launcher import InvocationOptions, UsageError, Launch, DescribeLaunch
from ..logging import Log
from ..staging import StagingError

CLI_ENTRY = [e.split("=")[0].strip() for e in ENTRY_POINTS][0]

class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_help(sys.stderr)
        self.exit(2, '\n%s: error: %s\n' % (self.prog, message))

def MakeParser():
    parser = ArgumentParser(
        prog = CLI_ENTRY,
        description = SHORT_SUMMARY,
        epilog = f"{NAME} v{VERSION}, {HOMEPAGE}",
    )

    # required, but checked by the launcher so each missing one gets its own message
    parser.add_argument("-i", "--seq", metavar="PATH", type=Path, help="input sequence file (required)")
    parser.add_argument("-t", "--tax", metavar="PATH", type=Path, help="taxonomy classification file (required)")
    parser.add_argument("-r", "--outdir", metavar="PATH", type=Path, help="local results directory, mounted into the container (required)")

    tool = parser.add_argument_group("prediction options", "passed through to the predictor")
    tool.add_argument("-c", "--cutoff", type=float, help="cutoff value for reported localizations")
    tool.add_argument("-d", "--divergent", type=float, help="cutoff for multiple localization sites")
    tool.add_argument("-f", "--format", help="sequence file format")
    tool.add_argument("-o", "--output", help="output style")
    tool.add_argument("-e", "--exact", action="store_true", help="skip the SCL-BLAST exact match search")
    tool.add_argument("-v", "--verbose", action="store_true", help="verbose output, also enables debug logging")

    parser.add_argument("--version", action="store_true", help="print version information and exit")
    parser.add_argument("--config", metavar="PATH", type=Path, help="yaml file with launcher settings")
    parser.add_argument("--log", metavar="PATH", type=Path, help="write log lines to PATH.out and PATH.err")
    parser.add_argument("--dry-run", action="store_true", help="print the container command without running it")
    return parser

def _version_text(config: LauncherConfig|None):
    lines = [
        f"{NAME} v{VERSION}",
        f"{HOMEPAGE}",
    ]
    if config is not None:
        lines.append(f"image: {config.image} ({config.runtime.value})")
    return "\n".join(lines)

def main(raw_args=None):
    parser = MakeParser()
    args = parser.parse_args(raw_args)
    if args.log is not None:
        Log.SetLogFile(args.log)
    Log.SetDebug(args.verbose)

    try:
        config = LauncherConfig.Resolve(args.config)
    except ConfigError as e:
        if args.version:
            print(_version_text(None))
            return 0
        Log.Error(str(e))
        return 2

    if args.version:
        print(_version_text(config))
        return 0

    options = InvocationOptions(
        seq=args.seq,
        tax=args.tax,
        outdir=args.outdir,
        cutoff=args.cutoff,
        divergent=args.divergent,
        format=args.format,
        output=args.output,
        exact=args.exact,
        verbose=args.verbose,
    )
    try:
        if args.dry_run:
            print(DescribeLaunch(options, config))
            return 0
        return Launch(options, config)
    except UsageError as e:
        for problem in e.problems:
            print(problem, file=sys.stderr)
        print("", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 2
    except StagingError as e:
        Log.Error(str(e))
        return 1
