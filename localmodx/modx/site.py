"""Destination-root layout and the file-existence guards used by every step."""

from __future__ import annotations

from pathlib import Path

from localmodx.config import PACKAGES_FOLDER, PROMPT_FILE, PUBLIC_FOLDER


def public_dir(root: Path) -> Path:
    return Path(root) / PUBLIC_FOLDER


def package_dir(root: Path) -> Path:
    return public_dir(root) / PACKAGES_FOLDER


def package_dir_setting() -> str:
    """Relative package directory as persisted in the answers file."""
    return f"{PUBLIC_FOLDER}/{PACKAGES_FOLDER}/"


def repoman_dir(root: Path) -> Path:
    return package_dir(root) / "repoman"


def user_package_dir(root: Path, package_name: str) -> Path:
    return package_dir(root) / package_name


def setup_dir(root: Path) -> Path:
    return public_dir(root) / "setup"


def build_dir(root: Path) -> Path:
    return public_dir(root) / "_build"


def transport_zip(root: Path) -> Path:
    return public_dir(root) / "core" / "packages" / "core.transport.zip"


def answers_file(root: Path) -> Path:
    return Path(root) / PROMPT_FILE


def has_core_sources(root: Path) -> bool:
    return public_dir(root).exists()


def core_is_built(root: Path) -> bool:
    return transport_zip(root).exists()


def setup_pending(root: Path) -> bool:
    return setup_dir(root).is_dir()


def needs_admin_answers(root: Path) -> bool:
    # Setup will run either on fresh sources or on a pending setup dir.
    return not has_core_sources(root) or setup_pending(root)
