# c4puml_gen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import LAYOUT_DIRECTIONS
from .errors import C4PumlError, InvalidConfiguration
from .io import build_workspace, load_config, load_document
from .validate import validate_workspace
from .writer import render_workspace


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="c4puml-gen",
        description="Generate C4-PlantUML diagrams from a YAML architecture workspace.",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        required=True,
        help="Workspace YAML file, or a directory of YAML parts merged in name order.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("diagrams"),
        help="Output directory (one file per view)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with a `writer:` section of rendering options",
    )
    parser.add_argument(
        "--views",
        type=str,
        default="",
        help="Comma-separated view keys to render (default: all views)",
    )
    parser.add_argument(
        "--no-legend",
        dest="legend",
        action="store_const",
        const=False,
        default=None,
        help="Omit LAYOUT_WITH_LEGEND()",
    )
    parser.add_argument(
        "--sketch",
        action="store_const",
        const=True,
        default=None,
        help="Emit LAYOUT_AS_SKETCH()",
    )
    parser.add_argument(
        "--layout",
        type=str,
        choices=LAYOUT_DIRECTIONS,
        default=None,
        help="Layout direction macro",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help=(
            "Include C4-PlantUML from this base URL instead of the PlantUML "
            "stdlib (e.g. https://raw.githubusercontent.com/plantuml-stdlib/C4-PlantUML/master/)"
        ),
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Write Markdown pages with a plantuml code block instead of .puml files",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on validation warnings (e.g., alias collisions). Errors always fail.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args = _parse_args(argv)

    try:
        cfg = load_config(args.config).with_overrides(
            include_legend_layout=args.legend,
            sketch_mode=args.sketch,
            layout_direction=args.layout,
            custom_base_url=args.base_url,
        )
    except InvalidConfiguration as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2)

    doc = load_document(args.workspace)

    errors, warnings = validate_workspace(doc)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    workspace = build_workspace(doc)
    view_keys = [k.strip() for k in args.views.split(",") if k.strip()] or None

    try:
        written = render_workspace(
            workspace,
            args.out_dir,
            cfg,
            view_keys=view_keys,
            markdown=args.markdown,
        )
    except (C4PumlError, KeyError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2)

    for path in written:
        print(path)
