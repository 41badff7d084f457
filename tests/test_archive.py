import pytest
import requests

from conftest import make_modx_zip
from localmodx.modx import archive

URL = "https://example.test/modx/master.zip"


def test_fetch_unpacks_into_public(root, serve):
    requested = serve(make_modx_zip())
    assert archive.fetch_core_sources(root, URL) is True
    assert requested == [URL]
    assert (root / "public" / "setup" / "index.php").exists()
    assert (root / "public" / "_build" / "transport.core.php").exists()
    assert not (root / "modx.zip").exists()
    assert not (root / "revolution-master").exists()


def test_fetch_follows_archive_top_folder(root, serve):
    serve(make_modx_zip(top="revolution-3.x"))
    assert archive.fetch_core_sources(root, URL) is True
    assert (root / "public" / "manager" / "index.php").exists()


def test_fetch_skipped_when_public_exists(root, serve):
    (root / "public").mkdir()
    requested = serve(error=AssertionError("must not download"))
    assert archive.fetch_core_sources(root, URL) is True
    assert requested == []


def test_download_http_error(root, serve):
    serve(b"nope", error=requests.HTTPError("404 Client Error"))
    assert archive.fetch_core_sources(root, URL) is False
    assert not (root / "public").exists()
    assert not (root / "modx.zip.part").exists()


def test_download_connection_error(root, monkeypatch):
    def refuse(url, stream=False, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests, "get", refuse)
    assert archive.download_archive(URL, root / "modx.zip") is False
    assert not (root / "modx.zip").exists()


def test_corrupt_archive_fails(root, serve):
    serve(b"this is not a zip file")
    assert archive.fetch_core_sources(root, URL) is False
    assert not (root / "public").exists()


def test_extract_refuses_escaping_members(root, tmp_path):
    bad = tmp_path / "bad.zip"
    bad.write_bytes(make_modx_zip(extra={"../escaped.txt": "x"}))
    with pytest.raises(ValueError):
        archive.extract_archive(bad, root)
    assert not (tmp_path / "escaped.txt").exists()


def test_extract_returns_top_folder(root, tmp_path):
    good = tmp_path / "good.zip"
    good.write_bytes(make_modx_zip())
    assert archive.extract_archive(good, root) == "revolution-master"


def test_extract_overwrites_existing_files(root, tmp_path):
    stale = root / "revolution-master" / "setup" / "index.php"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale")
    fresh = tmp_path / "fresh.zip"
    fresh.write_bytes(make_modx_zip())
    archive.extract_archive(fresh, root)
    assert stale.read_text() == "<?php\n"
