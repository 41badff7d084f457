"""Module entry point: re-run single scaffold steps from saved answers."""

from __future__ import annotations

import sys
from pathlib import Path

from localmodx.utils import init_logging, status_fail, status_pass
from .archive import fetch_core_sources
from .installer import (
    build_core,
    composer_install,
    install_phase,
    prepare_package,
    repoman_install,
    run_setup,
    sync_repoman,
)
from .prompts import load_saved_answers
from .site import answers_file
from .templates import write_build_config

USAGE = "usage: fetch|build-config|repos|core|setup|composer|repoman|install [root]"


def _repos(root: Path, answers: dict) -> bool:
    if not sync_repoman(root):
        return False
    return prepare_package(root, answers)


COMMANDS = {
    "fetch": lambda root, answers: fetch_core_sources(root),
    "build-config": write_build_config,
    "repos": _repos,
    "core": lambda root, answers: build_core(root),
    "setup": lambda root, answers: run_setup(root),
    "composer": composer_install,
    "repoman": repoman_install,
    "install": install_phase,
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        status_fail(USAGE)
        return 1
    cmd = argv[0]
    if cmd not in COMMANDS:
        status_fail(f"unknown subcommand {cmd}; {USAGE}")
        return 1
    root = Path(argv[1]) if len(argv) > 1 else Path.cwd()
    init_logging(None, log_root=root)
    answers = load_saved_answers(root)
    if not answers and cmd != "fetch":
        status_fail(f"no saved answers in {answers_file(root)}; run autolocal-modx first")
        return 1
    if not COMMANDS[cmd](root, answers):
        status_fail(f"{cmd} failed; see log")
        return 1
    status_pass(cmd)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
