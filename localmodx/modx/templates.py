"""Render the MODX build and setup configs from the collected answers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable
from xml.sax.saxutils import escape as xml_escape

from localmodx.config import DEFAULT_LANGUAGE, PUBLIC_FOLDER
from localmodx.utils import log, require
from .site import build_dir, core_is_built, setup_dir, setup_pending, transport_zip

TEMPLATE_DIR = Path(__file__).resolve().parent / "tpl"


def php_escape(value: str) -> str:
    """Escape for a single-quoted PHP string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def xml_text(value: str) -> str:
    return xml_escape(value, {'"': "&quot;"})


class _Blank(dict):
    def __missing__(self, key: str) -> str:
        logging.warning("Template value %s missing; rendering empty", key)
        return ""


def render_template(name: str, context: dict[str, Any], escape: Callable[[str], str]) -> str:
    template = (TEMPLATE_DIR / name).read_text(encoding="utf-8")
    values = _Blank({k: escape("" if v is None else str(v)) for k, v in context.items()})
    return template.format_map(values)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    log(f"PASS: Wrote {path}")


def write_build_config(root: Path, answers: dict[str, Any]) -> bool:
    if not require(not core_is_built(root), f"{transport_zip(root)} exists; build config untouched"):
        return True
    target = build_dir(root)
    try:
        for name in ("build.config.php", "build.properties.php"):
            content = render_template(f"{name}.tpl", answers, php_escape)
            _write(target / name, content)
    except OSError as err:
        logging.error("Could not write build config in %s: %s", target, err)
        return False
    return True


def write_setup_config(root: Path, answers: dict[str, Any]) -> bool:
    if not require(setup_pending(root), f"{setup_dir(root)} missing; setup config not needed"):
        return True
    context = dict(answers)
    context["basePath"] = str(Path(root).resolve())
    context["publicFolder"] = PUBLIC_FOLDER
    context.setdefault("language", DEFAULT_LANGUAGE)
    target = setup_dir(root) / "config.xml"
    try:
        _write(target, render_template("config.xml.tpl", context, xml_text))
    except OSError as err:
        logging.error("Could not write %s: %s", target, err)
        return False
    return True
