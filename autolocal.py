#!/usr/bin/env python3
"""CLI to scaffold a local MODX development site.

Inputs: answers from interactive prompts (saved answers become defaults),
optional git URL of the package to develop.
Side effects: downloads and unpacks MODX into public/, writes build and
setup configs, clones repoman and the package, runs the MODX build and
setup scripts, composer install and repoman install.
"""
import argparse
import sys
from pathlib import Path

from localmodx.config import MODX_ARCHIVE_URL
from localmodx.modx.installer import install_phase, write_phase
from localmodx.modx.prompts import collect_answers
from localmodx.utils import init_logging, log, status_fail, status_pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autolocal-modx", description="Scaffold a local MODX site."
    )
    parser.add_argument("--root", default=".", help="destination root (default: cwd)")
    parser.add_argument("--git-clone", default=None, help="git URL of the package to develop")
    parser.add_argument(
        "--defaults", action="store_true", help="accept saved/default answers without asking"
    )
    parser.add_argument(
        "--skip-install", action="store_true", help="stop after writing; run no installers"
    )
    parser.add_argument("--archive-url", default=MODX_ARCHIVE_URL, help=argparse.SUPPRESS)
    return parser


# ─── Orchestration Steps ───────────────────────────────────────────────
def step_prompting(root: Path, git_clone: str | None, accept_defaults: bool) -> dict | None:
    try:
        return collect_answers(root, git_clone, accept_defaults=accept_defaults)
    except ValueError as err:
        status_fail(f"prompting: {err}")
        return None
    except (KeyboardInterrupt, OSError) as err:
        status_fail(f"prompting aborted: {str(err) or type(err).__name__}")
        return None


def scaffold_site(root: Path, git_clone: str | None, accept_defaults: bool = False,
                  skip_install: bool = False, archive_url: str = MODX_ARCHIVE_URL) -> bool:
    answers = step_prompting(root, git_clone, accept_defaults)
    if answers is None:
        return False
    status_pass("prompting")
    if not write_phase(root, answers, archive_url):
        return False
    if skip_install:
        log("SKIP: install phase (--skip-install)")
        status_pass(f"site scaffolded in {root.resolve()} (install skipped)")
        return True
    if not install_phase(root, answers):
        return False
    status_pass(f"site scaffolded in {root.resolve()}")
    return True


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    root = Path(args.root)
    init_logging(None, log_root=root)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        status_fail(f"cannot use root {root}: {err}")
        return 1
    ok = scaffold_site(
        root,
        args.git_clone or None,
        accept_defaults=args.defaults,
        skip_install=args.skip_install,
        archive_url=args.archive_url,
    )
    return 0 if ok else 1


def run() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(run())
