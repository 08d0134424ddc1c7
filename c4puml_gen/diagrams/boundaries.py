# c4puml_gen/diagrams/boundaries.py
"""Split a view's elements into those drawn inside a boundary and outside it.

Every partition is name-ordered (stable), so output does not depend on the
order elements were added to the view.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..constants import DYNAMIC_SCOPE_DEPTH
from ..model import Component, Container, Element, Model, Person, SoftwareSystem, View
from ..model_view import (
    build_parent_index,
    is_descendant_of,
    root_deployment_nodes,
    sort_by_name,
)
from .elements import Frame


@dataclass(frozen=True)
class Partition:
    """Result of classifying one view.

    outer: drawn at top level, before the frame.
    frame: the boundary drawn around `inner`, or None for no frame.
    inner: drawn inside `frame` (at top level when frame is None).
    extra_frames: sibling frames drawn after the main one, each with its own
      contents (component views only).
    """

    outer: list[Element] = field(default_factory=list)
    frame: Optional[Frame] = None
    inner: list[Element] = field(default_factory=list)
    extra_frames: list[tuple[Element, list[Element]]] = field(default_factory=list)


def _view_elements(view: View) -> list[Element]:
    return list(view.elements)


def _enterprise_frame(view: View, model: Model) -> Optional[Frame]:
    show = view.enterprise_boundary_visible
    if show is None:
        show = True
    if not show or model.enterprise is None:
        return None
    return model.enterprise


def _is_external(element: Element) -> bool:
    return isinstance(element, (Person, SoftwareSystem)) and element.is_external


def classify_landscape(view: View, model: Model) -> Partition:
    # Externals come first whether or not the enterprise frame is drawn.
    elements = _view_elements(view)
    return Partition(
        outer=sort_by_name(e for e in elements if _is_external(e)),
        frame=_enterprise_frame(view, model),
        inner=sort_by_name(e for e in elements if not _is_external(e)),
    )


def classify_context(view: View, model: Model) -> Partition:
    return Partition(
        frame=_enterprise_frame(view, model),
        inner=sort_by_name(_view_elements(view)),
    )


def classify_container(view: View, model: Model) -> Partition:
    elements = _view_elements(view)
    outer = sort_by_name(e for e in elements if not isinstance(e, Container))
    inner = sort_by_name(e for e in elements if isinstance(e, Container))
    frame = view.scope if outer else None
    return Partition(outer=outer, frame=frame, inner=inner)


def classify_component(view: View, model: Model) -> Partition:
    elements = _view_elements(view)
    scope_id = view.scope.id if view.scope is not None else None

    outer = sort_by_name(e for e in elements if not isinstance(e, Component))
    inner: list[Element] = []
    groups: dict[str, tuple[Element, list[Element]]] = {}

    for element in elements:
        if not isinstance(element, Component):
            continue
        parent = element.parent
        if parent is None or parent.id == scope_id:
            # Parentless components stay with the scope.
            inner.append(element)
            continue
        if parent.id not in groups:
            groups[parent.id] = (parent, [])
        groups[parent.id][1].append(element)

    extra_frames = [
        (parent, sort_by_name(children))
        for parent, children in sorted(groups.values(), key=lambda pair: pair[0].name)
    ]
    show = bool(outer or extra_frames)
    return Partition(
        outer=outer,
        frame=view.scope if show else None,
        inner=sort_by_name(inner),
        extra_frames=extra_frames,
    )


def classify_dynamic(view: View, model: Model) -> Partition:
    elements = _view_elements(view)
    scope = view.scope
    if scope is None:
        # No model-wide boundary computation without a scope element.
        return Partition(inner=sort_by_name(elements))

    parents = build_parent_index(elements)

    inner: list[Element] = []
    outer: list[Element] = []
    for element in sort_by_name(elements):
        if is_descendant_of(element.id, scope.id, parents, max_depth=DYNAMIC_SCOPE_DEPTH):
            inner.append(element)
        else:
            outer.append(element)

    return Partition(outer=outer, frame=scope if outer else None, inner=inner)


def classify_deployment(view: View, model: Model) -> Partition:
    """Deployment views have no boundary; the outer list holds the root nodes."""
    return Partition(outer=list(root_deployment_nodes(view.elements)))


CLASSIFIERS = {
    "system_landscape": classify_landscape,
    "system_context": classify_context,
    "container": classify_container,
    "component": classify_component,
    "dynamic": classify_dynamic,
    "deployment": classify_deployment,
}


def classify(view: View, model: Model) -> Partition:
    try:
        classifier = CLASSIFIERS[view.kind]
    except KeyError:
        raise ValueError(f"unknown view kind: {view.kind!r}") from None
    return classifier(view, model)
