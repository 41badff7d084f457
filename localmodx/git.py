"""Clone or update git checkouts.

SRP: this module only wraps the git binary. Which repos to sync lives in
localmodx.modx.installer.
"""

import logging
from pathlib import Path

from localmodx.config import GIT_BIN
from localmodx.utils import log, run_step_cmd


def clone_or_pull(url: str, dest: Path) -> bool:
    dest = Path(dest)
    if dest.exists():
        log(f"Pull latest version of {dest.name}")
        return run_step_cmd([GIT_BIN, "-C", str(dest), "pull"])
    if not url:
        logging.error("No repository URL for %s", dest)
        return False
    log(f"Clone {url} into {dest}")
    dest.parent.mkdir(parents=True, exist_ok=True)
    return run_step_cmd([GIT_BIN, "clone", url, str(dest)])
