# c4puml_gen/diagrams/document.py
from __future__ import annotations

from ..config import WriterConfig
from ..constants import CUSTOM_INCLUDES, STDLIB_INCLUDES
from ..model import DeploymentNode, Model, View
from ..model_view import view_title
from ..puml_fmt import puml_comment, puml_title
from ..sink import LineSink
from .boundaries import Partition
from .deployment import write_deployment_tree
from .deployment_defs import DEPLOYMENT_FALLBACK_DEFINITIONS
from .elements import close_boundary, open_boundary, write_element

LAYOUT_DIRECTION_MACROS: dict[str, str] = {
    "top-down": "LAYOUT_TOP_DOWN",
    "left-right": "LAYOUT_LEFT_RIGHT",
}


def write_include(include_kind: str, sink: LineSink, cfg: WriterConfig) -> None:
    if cfg.has_custom_base:
        sink.write(f"!includeurl {cfg.custom_base_url}{CUSTOM_INCLUDES[include_kind]}")
        return

    sink.write(f"!include {STDLIB_INCLUDES[include_kind]}")
    if include_kind == "deployment":
        sink.extend(DEPLOYMENT_FALLBACK_DEFINITIONS)


def write_prolog(
    view: View,
    model: Model,
    sink: LineSink,
    cfg: WriterConfig,
    *,
    include_kind: str,
    label: str,
) -> None:
    sink.write("@startuml")
    write_include(include_kind, sink, cfg)
    sink.write()

    sink.write(puml_comment(f"{label}: {view.key}"))
    sink.write(f"title {puml_title(view_title(view, model))}")
    sink.write()

    layout_lines: list[str] = []
    if cfg.include_legend_layout:
        layout_lines.append("LAYOUT_WITH_LEGEND()")
    if cfg.sketch_mode:
        layout_lines.append("LAYOUT_AS_SKETCH()")
    if cfg.layout_direction != "none":
        layout_lines.append(LAYOUT_DIRECTION_MACROS[cfg.layout_direction])

    if layout_lines:
        sink.extend(layout_lines)
        sink.write()


def write_epilog(sink: LineSink) -> None:
    sink.write("@enduml")


def write_partition(partition: Partition, sink: LineSink) -> None:
    """Outer elements, the framed inner elements, then any sibling frames."""
    for element in partition.outer:
        write_element(element, sink, 0)

    frame = partition.frame
    if frame is not None:
        open_boundary(frame, sink, 0)

    inner_depth = 1 if frame is not None else 0
    for element in partition.inner:
        write_element(element, sink, inner_depth)

    if frame is not None:
        close_boundary(sink, 0)

    for parent, children in partition.extra_frames:
        open_boundary(parent, sink, 0)
        for element in children:
            write_element(element, sink, 1)
        close_boundary(sink, 0)


def write_deployment_partition(partition: Partition, sink: LineSink) -> None:
    roots = [e for e in partition.outer if isinstance(e, DeploymentNode)]
    write_deployment_tree(roots, sink)
