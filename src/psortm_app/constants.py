from pathlib import Path

NAME = Path(__file__).parent.name
HOMEPAGE = "https://www.psort.org"
SHORT_SUMMARY = "Launcher for the containerized PSORTm subcellular localization predictor"

ENTRY_POINTS = [
    "psortm=psortm_app.coms.cli:main",
]

with open(Path(__file__).parent/"version.txt") as f:
    VERSION = f.read().strip()

DEFAULT_IMAGE = "brinkmanlab/psortm:1.0.2"
DEFAULT_MOUNT = Path("/tmp/results")
DEFAULT_TOOL = "/usr/local/psortb/bin/psort"
CONFIG_ENV_VAR = "PSORTM_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config")/NAME/"config.yml"
