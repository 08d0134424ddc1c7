# c4puml_gen/diagrams/registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, TextIO

from ..config import WriterConfig
from ..model import Model, RelationshipView, View
from ..sink import LineSink
from .boundaries import Partition, classify
from .document import write_deployment_partition, write_epilog, write_partition, write_prolog
from .relationships import write_dynamic_relationships, write_relationships

BodyFn = Callable[[Partition, LineSink], None]
RelationshipsFn = Callable[[Iterable[RelationshipView], LineSink], None]


@dataclass(frozen=True)
class ViewSpec:
    kind: str
    label: str
    include_kind: str
    write_body: BodyFn
    write_relationships: RelationshipsFn


VIEW_SPECS: dict[str, ViewSpec] = {
    spec.kind: spec
    for spec in (
        ViewSpec(
            kind="system_landscape",
            label="SystemLandscapeView",
            include_kind="context",
            write_body=write_partition,
            write_relationships=write_relationships,
        ),
        ViewSpec(
            kind="system_context",
            label="SystemContextView",
            include_kind="context",
            write_body=write_partition,
            write_relationships=write_relationships,
        ),
        ViewSpec(
            kind="container",
            label="ContainerView",
            include_kind="container",
            write_body=write_partition,
            write_relationships=write_relationships,
        ),
        ViewSpec(
            kind="component",
            label="ComponentView",
            include_kind="component",
            write_body=write_partition,
            write_relationships=write_relationships,
        ),
        ViewSpec(
            kind="dynamic",
            label="DynamicView",
            include_kind="dynamic",
            write_body=write_partition,
            write_relationships=write_dynamic_relationships,
        ),
        ViewSpec(
            kind="deployment",
            label="DeploymentView",
            include_kind="deployment",
            write_body=write_deployment_partition,
            write_relationships=write_relationships,
        ),
    )
}


def get_view_spec(kind: str) -> ViewSpec:
    try:
        return VIEW_SPECS[kind]
    except KeyError:
        raise ValueError(f"unknown view kind: {kind!r}") from None


def write_view(view: View, model: Model, sink: LineSink, cfg: WriterConfig) -> None:
    """Header, elements, relationships, footer: one pass, in that order."""
    spec = get_view_spec(view.kind)
    partition = classify(view, model)

    write_prolog(view, model, sink, cfg, include_kind=spec.include_kind, label=spec.label)
    spec.write_body(partition, sink)
    spec.write_relationships(view.relationships, sink)
    write_epilog(sink)


def render_view(view: View, model: Model, cfg: Optional[WriterConfig] = None) -> str:
    """Render one view to PlantUML source text."""
    sink = LineSink()
    write_view(view, model, sink, cfg or WriterConfig())
    return sink.getvalue()


def stream_view(
    view: View, model: Model, stream: TextIO, cfg: Optional[WriterConfig] = None
) -> None:
    """Render one view and write it to `stream` only once it is complete."""
    sink = LineSink()
    write_view(view, model, sink, cfg or WriterConfig())
    sink.flush_to(stream)
