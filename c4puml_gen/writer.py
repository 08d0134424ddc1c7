# c4puml_gen/writer.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .config import WriterConfig
from .diagrams.registry import render_view
from .model import View, Workspace
from .model_view import view_title
from .puml_fmt import plantuml_block


def write_puml(path: Path, source: str) -> None:
    """Write PlantUML source to a `.puml` file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")


def write_md(path: Path, title: str, diagram_code: str) -> None:
    """Write a titled Markdown file containing a PlantUML diagram block."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = f"# {title}\n\n{plantuml_block(diagram_code)}"
    path.write_text(content, encoding="utf-8")


def _preflight_views(views: Sequence[View]) -> None:
    """Fail fast on view keys that would overwrite each other or escape out_dir."""
    seen: set[str] = set()
    for view in views:
        key = view.key
        if not key:
            raise ValueError("view is missing a key")
        if key in seen:
            raise ValueError(f"duplicate view key {key!r}")
        seen.add(key)
        # View keys are used as file names.
        if "/" in key or "\\" in key or ".." in key:
            raise ValueError(f"view key {key!r} is not safe for use as a file name")


def select_views(workspace: Workspace, keys: Optional[Sequence[str]] = None) -> list[View]:
    if not keys:
        return list(workspace.views)

    by_key = {view.key: view for view in workspace.views}
    missing = [key for key in keys if key not in by_key]
    if missing:
        raise KeyError(f"unknown view key(s): {', '.join(missing)}")
    return [by_key[key] for key in keys]


def render_workspace(
    workspace: Workspace,
    out_dir: Path,
    cfg: WriterConfig,
    *,
    view_keys: Optional[Sequence[str]] = None,
    markdown: bool = False,
) -> list[Path]:
    """Render the selected views, one file per view; return the paths written.

    Every view is rendered before anything is written, so a failing view
    leaves out_dir untouched.
    """
    views = select_views(workspace, view_keys)
    _preflight_views(views)

    rendered = [(view, render_view(view, workspace.model, cfg)) for view in views]

    written: list[Path] = []
    for view, source in rendered:
        if markdown:
            path = out_dir / f"{view.key}.md"
            write_md(path, view_title(view, workspace.model), source)
        else:
            path = out_dir / f"{view.key}.puml"
            write_puml(path, source)
        written.append(path)
    return written
