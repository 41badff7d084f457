"""Utility helpers shared by the scaffold steps.

- init_logging: configure console + file logging with run-id.
- status_pass/status_fail: concise console status lines (with run-id).
- run_cmd: thin wrapper over subprocess.run with check + text enabled.
- log: debug-level logger for normal status lines (file-oriented).
- require: guard helper that logs a SKIP line when a condition fails.
- package_name_from_url: last path segment of a git URL.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
import subprocess
import time
from pathlib import Path
from typing import Sequence

from localmodx.config import CMD_TIMEOUT, LOG_DIR


_RUN_ID = ""
RID_ENV = "LOCALMODX_RID"


def _gen_run_id() -> str:
    import uuid

    return uuid.uuid4().hex[:8]


def _log_dir(log_root: Path | None = None) -> Path:
    """LOCALMODX_LOG_DIR, else log/ in a source checkout, else log/ under log_root or cwd."""
    if LOG_DIR:
        return Path(LOG_DIR)
    # Project root = parent of 'localmodx'; only a checkout carries pyproject.toml
    project = Path(__file__).resolve().parent.parent
    if (project / "pyproject.toml").exists():
        return project / "log"
    return Path(log_root or Path.cwd()) / "log"


def init_logging(run_id: str | None = None, log_root: Path | None = None) -> str:
    """Initialize logging with console + rotating file handlers.

    - Console: minimal, CRITICAL only; status lines go through print.
    - File: DEBUG+, rich format, written to log/localmodx-<rid>.log
    Returns the run-id used.
    """
    global _RUN_ID
    if _RUN_ID:
        return _RUN_ID

    rid = run_id or os.environ.get(RID_ENV) or _gen_run_id()
    _RUN_ID = rid

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    try:
        log_dir = _log_dir(log_root)
        log_dir.mkdir(parents=True, exist_ok=True)
        logfile = log_dir / f"localmodx-{rid}.log"
    except OSError:
        logfile = Path(f"localmodx-{rid}.log").resolve()

    # Quiet any pre-existing console handlers
    for h in list(root.handlers):
        if type(h) is logging.StreamHandler:
            h.setLevel(logging.CRITICAL)

    has_file = any(
        isinstance(h, RotatingFileHandler)
        and getattr(h, "baseFilename", "").endswith(logfile.name)
        for h in root.handlers
    )
    if not has_file:
        fh = RotatingFileHandler(logfile, maxBytes=5 * 1024 * 1024, backupCount=3)
        fh.setLevel(logging.DEBUG)
        ffmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        fh.setFormatter(ffmt)
        root.addHandler(fh)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.CRITICAL)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(ch)

    logging.debug("Logging initialized. run_id=%s file=%s", rid, logfile)
    os.environ[RID_ENV] = rid
    return rid


def _rid() -> str:
    return _RUN_ID or os.environ.get(RID_ENV, "--------")


def status_pass(msg: str) -> None:
    print(f"PASS: {msg} [{_rid()}]")


def status_fail(msg: str) -> None:
    print(f"FAIL: {msg} [{_rid()}]", flush=True)


def log(msg: str) -> None:
    # File-oriented normal progress; stays out of console noise.
    logging.debug(msg)


def _fmt_cmd_for_log(args: Sequence[str]) -> str:
    pretty = [os.path.basename(args[0])] + list(args[1:]) if args else []
    return " ".join(pretty)


def run_cmd(args: Sequence[str], cwd: Path | str | None = None, timeout: int = CMD_TIMEOUT) -> None:
    """Run a command, raising CalledProcessError/TimeoutExpired on failure."""
    shown = _fmt_cmd_for_log(args)
    where = f" (in {cwd})" if cwd else ""
    log(f"RUN: {shown}{where}")
    t0 = time.monotonic()
    subprocess.run(list(args), check=True, text=True, cwd=cwd, timeout=timeout)
    log(f"PASS: {shown} ({time.monotonic() - t0:.1f}s)")


def run_step_cmd(args: Sequence[str], cwd: Path | str | None = None) -> bool:
    """run_cmd for step functions: failures are logged and returned as False."""
    try:
        run_cmd(args, cwd=cwd)
        return True
    except subprocess.CalledProcessError as err:
        logging.error("%s exit=%s", _fmt_cmd_for_log(args), err.returncode)
    except subprocess.TimeoutExpired as err:
        logging.error("%s timeout after %ss", _fmt_cmd_for_log(args), err.timeout)
    except OSError as err:
        logging.error("Could not run %s: %s", _fmt_cmd_for_log(args), err)
    return False


def require(condition: bool, message: str, level: str = "info") -> bool:
    if condition:
        return True

    if level == "error":
        logging.error(f"SKIP: {message}")
    elif level == "warning":
        logging.warning(f"SKIP: {message}")
    else:
        log(f"SKIP: {message}")

    return False


def package_name_from_url(url: str) -> str:
    """Derive a package folder name from a git URL.

    "https://host/org/pkg.git/" -> "pkg", "git@host:pkg.git" -> "pkg".
    """
    text = (url or "").strip().rstrip("/")
    name = text.rsplit("/", 1)[-1]
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name
