# c4puml_gen/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Tuple

from .io import iter_element_entries, relationship_id
from .model import DIRECTIONS, VIEW_KINDS
from .puml_fmt import tokenize_name

Severity = Literal["error", "warning"]

LIST_SECTIONS: tuple[str, ...] = (
    "people",
    "software_systems",
    "deployment_nodes",
    "relationships",
    "views",
)

# Views whose boundary is drawn around a scope element.
SCOPED_VIEW_KINDS: frozenset[str] = frozenset({"container", "component"})


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    `ignore` drops issues by code; `escalate` turns warnings into errors.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)

    # Distinct names that collapse to one alias render as one diagram node.
    check_alias_collisions: bool = True


def validate_workspace_issues(
    doc: dict[str, Any], cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a workspace document.

    The renderer assumes a well-formed workspace; everything that would make
    building or rendering it fail is reported here as an error.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    for section in LIST_SECTIONS:
        items = doc.get(section)
        if items is None:
            continue
        if not isinstance(items, list):
            emit("error", "E_SECTION_NOT_LIST", f"workspace.{section} must be a list", path=f"/{section}")
            continue
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                emit(
                    "warning",
                    "W_SECTION_ITEM_NOT_MAPPING",
                    f"workspace.{section} contains a non-mapping item; skipping",
                    path=f"/{section}/{i}",
                )

    enterprise = doc.get("enterprise")
    if enterprise is not None and not isinstance(enterprise, str):
        emit("error", "E_ENTERPRISE_NOT_STRING", "workspace.enterprise must be a string", path="/enterprise")

    # Elements
    element_kinds: dict[str, str] = {}
    element_paths: dict[str, str] = {}
    aliases: dict[str, tuple[str, str]] = {}
    instance_refs: list[tuple[str, Any]] = []

    for path, kind, item, _parent_id in iter_element_entries(doc):
        element_id = item.get("id")
        if kind == "ContainerInstance":
            instance_refs.append((path, item.get("container")))
            if element_id is None:
                continue

        if not isinstance(element_id, str) or not element_id:
            emit("error", "E_ELEMENT_MISSING_ID", f"{kind} item missing string `id`", path=f"{path}/id")
            continue

        if element_id in element_kinds:
            emit(
                "error",
                "E_ELEMENT_DUPLICATE_ID",
                f"duplicate element id {element_id!r} (also at {element_paths[element_id]})",
                path=f"{path}/id",
            )
            continue
        element_kinds[element_id] = kind
        element_paths[element_id] = path

        name = item.get("name")
        if kind != "ContainerInstance" and (not isinstance(name, str) or not name.strip()):
            emit("error", "E_ELEMENT_MISSING_NAME", f"{kind} {element_id!r} missing string `name`", path=f"{path}/name")
        elif isinstance(name, str) and cfg.check_alias_collisions:
            alias = tokenize_name(name)
            if alias in aliases and aliases[alias][1] != name:
                emit(
                    "warning",
                    "W_ALIAS_COLLISION",
                    f"element {element_id!r} name {name!r} has the same alias {alias!r} "
                    f"as element {aliases[alias][0]!r}",
                    path=f"{path}/name",
                    hint="Rename one element; aliases keep only [A-Za-z0-9_]",
                )
            else:
                aliases.setdefault(alias, (element_id, name))

        location = item.get("location")
        if kind in ("Person", "SoftwareSystem") and location is not None and location not in ("internal", "external"):
            emit(
                "error",
                "E_ELEMENT_LOCATION_INVALID",
                f"{kind} {element_id!r} location must be 'internal' or 'external', got {location!r}",
                path=f"{path}/location",
            )

        if kind == "DeploymentNode":
            instances = item.get("instances", 1)
            if isinstance(instances, bool) or not isinstance(instances, int) or instances < 1:
                emit(
                    "error",
                    "E_NODE_INSTANCES_INVALID",
                    f"deployment node {element_id!r} instances must be a positive integer",
                    path=f"{path}/instances",
                )

    for path, container_id in instance_refs:
        if not isinstance(container_id, str) or not container_id:
            emit("error", "E_INSTANCE_MISSING_CONTAINER", "container instance missing string `container`", path=f"{path}/container")
        elif element_kinds.get(container_id) != "Container":
            emit(
                "error",
                "E_INSTANCE_UNKNOWN_CONTAINER",
                f"container instance references unknown container {container_id!r}",
                path=f"{path}/container",
            )

    # Relationships
    rel_ids: set[str] = set()
    rels = doc.get("relationships") or []
    for i, rel in enumerate(rels if isinstance(rels, list) else []):
        if not isinstance(rel, dict):
            continue

        for end in ("from", "to"):
            ref = rel.get(end)
            if not isinstance(ref, str) or not ref:
                emit("error", "E_REL_MISSING_ENDPOINT", f"relationship missing string `{end}`", path=f"/relationships/{i}/{end}")
            elif ref not in element_kinds:
                emit(
                    "error",
                    "E_REL_UNKNOWN_ENDPOINT",
                    f"relationship.{end} references unknown element id {ref!r}",
                    path=f"/relationships/{i}/{end}",
                )

        rel_id = relationship_id(rel)
        if rel_id in rel_ids:
            emit("error", "E_REL_DUPLICATE_ID", f"duplicate relationship id {rel_id!r}", path=f"/relationships/{i}")
        rel_ids.add(rel_id)

    # Views
    view_keys: dict[str, int] = {}
    views = doc.get("views") or []
    for i, view in enumerate(views if isinstance(views, list) else []):
        if not isinstance(view, dict):
            continue
        base = f"/views/{i}"

        kind = view.get("kind")
        if kind not in VIEW_KINDS:
            emit(
                "error",
                "E_VIEW_UNKNOWN_KIND",
                f"view kind {kind!r} is not one of {', '.join(VIEW_KINDS)}",
                path=f"{base}/kind",
            )

        key = view.get("key")
        if not isinstance(key, (str, int)) or isinstance(key, bool) or str(key) == "":
            emit("error", "E_VIEW_MISSING_KEY", "view missing `key`", path=f"{base}/key")
        elif str(key) in view_keys:
            emit(
                "error",
                "E_VIEW_DUPLICATE_KEY",
                f"duplicate view key {key!r} (also in views[{view_keys[str(key)]}])",
                path=f"{base}/key",
            )
        else:
            view_keys[str(key)] = i

        scope = view.get("scope")
        if scope is not None and (not isinstance(scope, str) or scope not in element_kinds):
            emit("error", "E_VIEW_UNKNOWN_SCOPE", f"view {key!r} scope references unknown element id {scope!r}", path=f"{base}/scope")
        elif scope is None and kind in SCOPED_VIEW_KINDS:
            emit(
                "warning",
                "W_VIEW_MISSING_SCOPE",
                f"{kind} view {key!r} has no scope; its boundary will not be drawn",
                path=f"{base}/scope",
            )

        elements = view.get("elements") or []
        if not isinstance(elements, list):
            emit("error", "E_VIEW_ELEMENTS_NOT_LIST", f"view {key!r} elements must be a list", path=f"{base}/elements")
            elements = []
        for j, ref in enumerate(elements):
            if not isinstance(ref, str) or ref not in element_kinds:
                emit(
                    "error",
                    "E_VIEW_UNKNOWN_ELEMENT",
                    f"view {key!r} references unknown element id {ref!r}",
                    path=f"{base}/elements/{j}",
                )

        view_rels = view.get("relationships") or []
        if not isinstance(view_rels, list):
            emit("error", "E_VIEW_RELATIONSHIPS_NOT_LIST", f"view {key!r} relationships must be a list", path=f"{base}/relationships")
            view_rels = []
        for j, entry in enumerate(view_rels):
            entry_path = f"{base}/relationships/{j}"
            if isinstance(entry, str):
                entry = {"id": entry}
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str) or entry["id"] not in rel_ids:
                ref = entry.get("id") if isinstance(entry, dict) else entry
                emit("error", "E_VIEW_UNKNOWN_RELATIONSHIP", f"view {key!r} references unknown relationship {ref!r}", path=entry_path)
                continue

            direction = entry.get("direction")
            if direction is not None and direction not in DIRECTIONS:
                emit(
                    "error",
                    "E_VIEW_REL_UNKNOWN_DIRECTION",
                    f"view {key!r} relationship {entry['id']!r} direction {direction!r} is not one of "
                    f"{', '.join(DIRECTIONS)}",
                    path=f"{entry_path}/direction",
                )

            if kind == "dynamic" and entry.get("order") is None:
                emit(
                    "warning",
                    "W_DYNAMIC_REL_MISSING_ORDER",
                    f"dynamic view {key!r} relationship {entry['id']!r} has no `order`",
                    path=f"{entry_path}/order",
                )

    return issues


def validate_workspace(doc: dict[str, Any]) -> Tuple[list[str], list[str]]:
    """Split validation issues into (errors, warnings) message lists."""
    issues = validate_workspace_issues(doc)
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
