# c4puml_gen/model_view.py
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, TypeVar

from .model import (
    Container,
    DeploymentNode,
    Element,
    Model,
    Order,
    SoftwareSystem,
    View,
)

E = TypeVar("E", bound=Element)

_ORDER_PART_RE = re.compile(r"^\d+$")


def build_parent_index(elements: Iterable[Element]) -> dict[str, Optional[str]]:
    """Map element IDs to parent IDs (None at the top), following each
    element's parent chain so ancestors outside `elements` are included."""
    parents: dict[str, Optional[str]] = {}
    for element in elements:
        current: Optional[Element] = element
        while current is not None and current.id not in parents:
            parent = current.parent
            parents[current.id] = parent.id if parent is not None else None
            current = parent
    return parents


def is_descendant_of(
    element_id: str,
    ancestor_id: str,
    parents: dict[str, Optional[str]],
    *,
    max_depth: int,
) -> bool:
    """True when ancestor_id is within max_depth parent hops of element_id."""
    current = parents.get(element_id)
    for _ in range(max_depth):
        if current is None:
            return False
        if current == ancestor_id:
            return True
        current = parents.get(current)
    return False


def sort_by_name(elements: Iterable[E]) -> list[E]:
    # sorted() is stable: equal names keep their view order.
    return sorted(elements, key=lambda e: e.name)


def natural_order_key(order: Optional[Order]) -> tuple[tuple[int, int, str], ...]:
    """Sort key for dynamic step indices: 2 < 10 and 1.2 < 1.10."""
    if order is None:
        return ()
    parts: list[tuple[int, int, str]] = []
    for part in str(order).strip().split("."):
        if _ORDER_PART_RE.match(part):
            parts.append((0, int(part), ""))
        else:
            parts.append((1, 0, part))
    return tuple(parts)


def _scope_system(view: View) -> Optional[SoftwareSystem]:
    scope = view.scope
    while scope is not None and not isinstance(scope, SoftwareSystem):
        scope = scope.parent
    return scope


def default_view_name(view: View, model: Model) -> str:
    """Name a view the way the modelling tool does when no title is set."""
    kind = view.kind
    scope = view.scope

    if kind == "system_landscape":
        if model.enterprise is not None:
            return f"System Landscape for {model.enterprise.name}"
        return "System Landscape"

    if kind == "system_context":
        system = _scope_system(view)
        return f"{system.name} - System Context" if system else "System Context"

    if kind == "container":
        system = _scope_system(view)
        return f"{system.name} - Containers" if system else "Containers"

    if kind == "component":
        if isinstance(scope, Container) and scope.parent is not None:
            return f"{scope.parent.name} - {scope.name} - Components"
        return f"{scope.name} - Components" if scope else "Components"

    if kind == "dynamic":
        return f"{scope.name} - Dynamic" if scope else "Dynamic"

    if kind == "deployment":
        system = _scope_system(view)
        name = f"{system.name} - Deployment" if system else "Deployment"
        if view.environment:
            name = f"{name} - {view.environment}"
        return name

    raise ValueError(f"unknown view kind: {kind!r}")


def view_title(view: View, model: Model) -> str:
    for candidate in (view.title, view.description):
        if candidate and candidate.strip():
            return candidate.strip()
    return default_view_name(view, model)


def root_deployment_nodes(elements: Sequence[Element]) -> list[DeploymentNode]:
    """Top-level deployment nodes among the view's elements, by name."""
    return sort_by_name(
        e for e in elements if isinstance(e, DeploymentNode) and e.parent is None
    )
