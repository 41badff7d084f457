"""Interactive prompt sequence with defaults persisted to the answers file.

Prompts are plain dicts: name, message, default, and optional
required/secret flags. Saved answers from a previous run become the
defaults of the next one. The admin password is never persisted.
"""

from __future__ import annotations

import getpass
import json
import logging
from pathlib import Path
from typing import Any, Callable

from localmodx.config import (
    DEFAULT_DB_HOST,
    DEFAULT_DB_NAME,
    DEFAULT_DB_PASS,
    DEFAULT_DB_USER,
    DEFAULT_TABLE_PREFIX,
)
from localmodx.utils import log, package_name_from_url
from .site import answers_file, needs_admin_answers, package_dir_setting

NEVER_PERSIST = ("cmspassword",)

PACKAGE_PROMPTS = [
    {"name": "siteName", "message": "What is your site's name?", "required": True},
    {
        "name": "packageName",
        "message": "What would you like the package to be called?",
        "required": True,
    },
]

DB_PROMPTS = [
    {"name": "dbName", "message": "Database name:", "default": DEFAULT_DB_NAME},
    {"name": "dbUser", "message": "Database user:", "default": DEFAULT_DB_USER},
    {"name": "dbPassword", "message": "Database password:", "default": DEFAULT_DB_PASS},
    {"name": "dbHostname", "message": "Database host:", "default": DEFAULT_DB_HOST},
    {
        "name": "dbTablePrefix",
        "message": "Database table prefix:",
        "default": DEFAULT_TABLE_PREFIX,
    },
]

ADMIN_PROMPTS = [
    {"name": "cmsadmin", "message": "Admin User:"},
    {"name": "cmspassword", "message": "Admin password:", "secret": True},
    {"name": "cmsadminemail", "message": "Admin email:"},
]


def build_prompts(root: Path, git_clone: str | None) -> list[dict[str, Any]]:
    prompts = [dict(p) for p in DB_PROMPTS]
    if not git_clone:
        prompts = [dict(p) for p in PACKAGE_PROMPTS] + prompts
    if needs_admin_answers(root):
        prompts += [dict(p) for p in ADMIN_PROMPTS]
    return prompts


def load_saved_answers(root: Path) -> dict[str, Any]:
    path = answers_file(root)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as err:
        logging.warning("Ignoring unreadable answers file %s: %s", path, err)
        return {}
    if not isinstance(data, dict):
        logging.warning("Ignoring answers file %s: not a JSON object", path)
        return {}
    return data


def apply_saved_defaults(prompts: list[dict[str, Any]], saved: dict[str, Any]) -> list[dict[str, Any]]:
    for prompt in prompts:
        if prompt["name"] in saved:
            prompt["default"] = saved[prompt["name"]]
    return prompts


def _question(prompt: dict[str, Any]) -> str:
    default = prompt.get("default")
    if default in (None, "") or prompt.get("secret"):
        return f"{prompt['message']} "
    return f"{prompt['message']} ({default}) "


def _ask_one(
    prompt: dict[str, Any],
    input_fn: Callable[[str], str],
    secret_fn: Callable[[str], str],
) -> str:
    default = prompt.get("default")
    default = "" if default is None else str(default)
    reader = secret_fn if prompt.get("secret") else input_fn
    while True:
        try:
            raw = reader(_question(prompt))
        except EOFError:
            raw = None
        value = (raw or "").strip() or default
        if value or not prompt.get("required"):
            return value
        if raw is None:
            raise ValueError(f"{prompt['name']} is required")
        print(f"  {prompt['name']} is required")


def ask(
    prompts: list[dict[str, Any]],
    accept_defaults: bool = False,
    input_fn: Callable[[str], str] = input,
    secret_fn: Callable[[str], str] = getpass.getpass,
) -> dict[str, str]:
    """Ask each prompt in order and return answers keyed by prompt name.

    With accept_defaults nothing is read; a required prompt without a
    default raises ValueError.
    """
    answers: dict[str, str] = {}
    for prompt in prompts:
        if accept_defaults:
            default = prompt.get("default")
            value = "" if default is None else str(default)
            if not value and prompt.get("required"):
                raise ValueError(f"{prompt['name']} is required; no saved default")
            answers[prompt["name"]] = value
            continue
        answers[prompt["name"]] = _ask_one(prompt, input_fn, secret_fn)
    return answers


def resolve_answers(answers: dict[str, Any], git_clone: str | None) -> dict[str, Any]:
    resolved = dict(answers)
    if git_clone:
        resolved["gitClone"] = git_clone
        if not resolved.get("packageName"):
            resolved["packageName"] = package_name_from_url(git_clone)
        if not resolved["packageName"]:
            raise ValueError(f"cannot derive packageName from {git_clone}")
    resolved["packageDir"] = package_dir_setting()
    return resolved


def save_answers(root: Path, answers: dict[str, Any]) -> Path:
    path = answers_file(root)
    persisted = {k: v for k, v in answers.items() if k not in NEVER_PERSIST}
    path.write_text(json.dumps(persisted, indent=2) + "\n", encoding="utf-8")
    log(f"PASS: Saved answers to {path}")
    return path


def collect_answers(
    root: Path,
    git_clone: str | None,
    accept_defaults: bool = False,
    input_fn: Callable[[str], str] = input,
    secret_fn: Callable[[str], str] = getpass.getpass,
) -> dict[str, Any]:
    """Full prompting step: build, seed defaults, ask, resolve and persist."""
    prompts = build_prompts(root, git_clone)
    apply_saved_defaults(prompts, load_saved_answers(root))
    answers = ask(prompts, accept_defaults, input_fn=input_fn, secret_fn=secret_fn)
    resolved = resolve_answers(answers, git_clone)
    save_answers(root, resolved)
    return resolved
