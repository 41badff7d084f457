"""Download, unpack and promote the MODX sources into the public folder.

Every step is a no-op once the public folder exists.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import requests

from localmodx.config import (
    DOWNLOAD_CHUNK,
    DOWNLOAD_TIMEOUT,
    MODX_ARCHIVE_FILE,
    MODX_ARCHIVE_URL,
    MODX_EXTRACTED_DIR,
)
from localmodx.utils import log, require
from .site import has_core_sources, public_dir


def archive_path(root: Path) -> Path:
    return Path(root) / MODX_ARCHIVE_FILE


def download_archive(url: str, dest: Path) -> bool:
    part = dest.with_name(dest.name + ".part")
    log(f"Downloading {url} -> {dest}")
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as resp:
            resp.raise_for_status()
            with open(part, "wb") as fh:
                for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK):
                    if chunk:
                        fh.write(chunk)
        part.replace(dest)
    except requests.RequestException as err:
        logging.error("Download failed for %s: %s", url, err)
        part.unlink(missing_ok=True)
        return False
    except OSError as err:
        logging.error("Could not write %s: %s", dest, err)
        part.unlink(missing_ok=True)
        return False
    log(f"PASS: Downloaded {dest} ({dest.stat().st_size} bytes)")
    return True


def _top_level_folder(names: list[str]) -> str:
    tops = {n.split("/", 1)[0] for n in names if n.strip("/")}
    if len(tops) == 1:
        return tops.pop()
    return MODX_EXTRACTED_DIR


def _check_members(names: list[str], root: Path) -> None:
    base = root.resolve()
    for name in names:
        target = (base / name).resolve()
        if not target.is_relative_to(base):
            raise ValueError(f"unsafe archive member {name!r}")


def extract_archive(archive: Path, root: Path) -> str:
    """Extract every member into root and return the archive's top folder."""
    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
        _check_members(names, Path(root))
        zf.extractall(root)
    folder = _top_level_folder(names)
    log(f"PASS: Unzipped {archive} ({len(names)} entries, top={folder})")
    return folder


def promote_extracted(root: Path, folder: str, archive: Path) -> None:
    source = Path(root) / folder
    target = public_dir(root)
    source.rename(target)
    archive.unlink(missing_ok=True)
    log(f"PASS: Renamed {source} -> {target}; removed {archive}")


def fetch_core_sources(root: Path, url: str = MODX_ARCHIVE_URL) -> bool:
    if not require(not has_core_sources(root), f"{public_dir(root)} exists; keeping sources"):
        return True
    archive = archive_path(root)
    if not download_archive(url, archive):
        return False
    try:
        folder = extract_archive(archive, root)
    except (zipfile.BadZipFile, ValueError, OSError) as err:
        logging.error("Could not unzip %s: %s", archive, err)
        return False
    try:
        promote_extracted(root, folder, archive)
    except OSError as err:
        logging.error("Could not move %s into place: %s", folder, err)
        return False
    return True
