"""Writing and install phases for a MODX destination root.

Each phase runs its steps in order and prints one PASS/FAIL status line
per step; the first failing step stops the phase.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from localmodx.config import COMPOSER_BIN, MODX_ARCHIVE_URL, PHP_BIN, PUBLIC_FOLDER, REPOMAN_REPO_URL
from localmodx.git import clone_or_pull
from localmodx.utils import log, require, run_step_cmd, status_fail, status_pass
from .archive import fetch_core_sources
from .site import (
    core_is_built,
    repoman_dir,
    setup_pending,
    user_package_dir,
)
from .templates import write_build_config, write_setup_config


# ─── Packages ──────────────────────────────────────────────────────────────
def sync_repoman(root: Path) -> bool:
    return clone_or_pull(REPOMAN_REPO_URL, repoman_dir(root))


def sync_package(root: Path, answers: dict[str, Any]) -> bool:
    git_clone = answers.get("gitClone")
    if not require(bool(git_clone), "no git clone URL; package not synced"):
        return True
    name = answers.get("packageName")
    if not name:
        logging.error("No packageName for %s; refusing to sync into the packages dir", git_clone)
        return False
    return clone_or_pull(git_clone, user_package_dir(root, name))


def new_package(root: Path, package_name: str) -> bool:
    target = user_package_dir(root, package_name)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        logging.error("Could not create package dir %s: %s", target, err)
        return False
    log(f"PASS: Package dir ready {target}")
    return True


def prepare_package(root: Path, answers: dict[str, Any]) -> bool:
    """Clone/pull the package when a git URL is known, else create its dir."""
    if answers.get("gitClone"):
        if not sync_package(root, answers):
            logging.error("Could not sync package %s", answers.get("packageName"))
            return False
        return True
    if not require(bool(answers.get("packageName")), "no packageName; nothing to prepare"):
        return True
    return new_package(root, answers["packageName"])


def _package_dir_or_none(root: Path, answers: dict[str, Any]) -> Path | None:
    name = answers.get("packageName")
    if not name:
        return None
    return user_package_dir(root, name)


# ─── Install steps ─────────────────────────────────────────────────────────
def build_core(root: Path) -> bool:
    if not require(not core_is_built(root), "core transport already built"):
        return True
    log("Running MODX build script")
    return run_step_cmd([PHP_BIN, f"{PUBLIC_FOLDER}/_build/transport.core.php"], cwd=root)


def run_setup(root: Path) -> bool:
    if not require(setup_pending(root), "no setup dir; MODX already installed"):
        return True
    log("Running MODX setup script")
    return run_step_cmd(
        [PHP_BIN, f"{PUBLIC_FOLDER}/setup/index.php", "--installmode=new"], cwd=root
    )


def composer_install(root: Path, answers: dict[str, Any]) -> bool:
    targets = [repoman_dir(root)]
    pkg = _package_dir_or_none(root, answers)
    if pkg is not None:
        targets.append(pkg)
    for target in targets:
        if not require((target / "composer.json").exists(), f"no composer.json in {target}"):
            continue
        if not run_step_cmd([COMPOSER_BIN, "install"], cwd=target):
            return False
    return True


def repoman_install(root: Path, answers: dict[str, Any]) -> bool:
    repoman = repoman_dir(root)
    if require((repoman / "vendor").exists(), "repoman has no vendor dir"):
        if not run_step_cmd([PHP_BIN, "repoman", "install", "."], cwd=repoman):
            return False
    pkg = _package_dir_or_none(root, answers)
    if pkg is None:
        return True
    if require((pkg / "vendor").exists(), f"{pkg.name} has no vendor dir"):
        if not run_step_cmd([PHP_BIN, "repoman", "install", f"../{pkg.name}"], cwd=repoman):
            return False
    return True


# ─── Phases ────────────────────────────────────────────────────────────────
def run_steps(steps: list[tuple[str, Callable[[], bool]]]) -> bool:
    for name, step in steps:
        if not step():
            status_fail(f"{name}; see log")
            return False
        status_pass(name)
    return True


def write_phase(root: Path, answers: dict[str, Any], archive_url: str = MODX_ARCHIVE_URL) -> bool:
    ok = run_steps([
        ("fetch sources", lambda: fetch_core_sources(root, archive_url)),
        ("build config", lambda: write_build_config(root, answers)),
        ("setup config", lambda: write_setup_config(root, answers)),
        ("repoman sync", lambda: sync_repoman(root)),
        ("package", lambda: prepare_package(root, answers)),
    ])
    if ok:
        log(f"PASS: Writing phase complete for {Path(root).resolve()}")
    return ok


def install_phase(root: Path, answers: dict[str, Any]) -> bool:
    ok = run_steps([
        ("core build", lambda: build_core(root)),
        ("setup", lambda: run_setup(root)),
        ("composer install", lambda: composer_install(root, answers)),
        ("repoman install", lambda: repoman_install(root, answers)),
    ])
    if ok:
        log(f"PASS: Install phase complete for {Path(root).resolve()}")
    return ok
