from __future__ import annotations

import io
import subprocess
import zipfile
from pathlib import Path

import pytest


MODX_FILES = {
    "core/config/config.inc.tpl": "<?php\n",
    "core/packages/.gitignore": "*\n",
    "_build/transport.core.php": "<?php\n",
    "setup/index.php": "<?php\n",
    "manager/index.php": "<?php\n",
}


def make_modx_zip(top: str = "revolution-master", extra: dict[str, str] | None = None) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(f"{top}/", "")
        for name, body in MODX_FILES.items():
            zf.writestr(f"{top}/{name}", body)
        for name, body in (extra or {}).items():
            zf.writestr(name, body)
    return buf.getvalue()


class FakeResponse:
    def __init__(self, body: bytes, error: Exception | None = None):
        self.body = body
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error

    def iter_content(self, chunk_size: int = 1024):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i : i + chunk_size]


class CommandRecorder:
    """Stand-in for subprocess.run that records argv and cwd."""

    def __init__(self):
        self.calls: list[tuple[list[str], str | None]] = []
        self.fail_on: set[str] = set()

    def __call__(self, args, check=False, text=False, cwd=None, timeout=None, **kwargs):
        argv = [str(a) for a in args]
        self.calls.append((argv, str(cwd) if cwd is not None else None))
        if any(token in argv for token in self.fail_on):
            raise subprocess.CalledProcessError(2, argv)
        return subprocess.CompletedProcess(argv, 0)

    @property
    def argvs(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]


@pytest.fixture
def root(tmp_path: Path) -> Path:
    site = tmp_path / "site"
    site.mkdir()
    return site


@pytest.fixture
def commands(monkeypatch) -> CommandRecorder:
    recorder = CommandRecorder()
    monkeypatch.setattr(subprocess, "run", recorder)
    return recorder


@pytest.fixture
def public(root: Path) -> Path:
    """A root whose MODX sources are already unpacked (setup still pending)."""
    pub = root / "public"
    for name in MODX_FILES:
        path = pub / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("<?php\n")
    return pub


@pytest.fixture
def answers() -> dict[str, str]:
    return {
        "siteName": "Demo",
        "packageName": "demo",
        "dbName": "modx_demo",
        "dbUser": "root",
        "dbPassword": "root",
        "dbHostname": "localhost",
        "dbTablePrefix": "modx_",
        "cmsadmin": "admin",
        "cmspassword": "secret",
        "cmsadminemail": "admin@example.test",
        "packageDir": "public/packages/",
    }


@pytest.fixture
def serve(monkeypatch):
    """Fake requests.get serving one body (or raising error from raise_for_status)."""
    import requests

    requested = []

    def install(body=b"", error=None):
        def fake_get(url, stream=False, timeout=None):
            requested.append(url)
            return FakeResponse(body, error)

        monkeypatch.setattr(requests, "get", fake_get)
        return requested

    return install
