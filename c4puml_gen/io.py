# c4puml_gen/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Optional

import yaml

from .config import WriterConfig
from .constants import CONFIG_SECTION, WORKSPACE_GLOB
from .errors import InvalidConfiguration
from .model import (
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    Element,
    Enterprise,
    Model,
    Person,
    Relationship,
    RelationshipView,
    SoftwareSystem,
    View,
    Workspace,
)

# (document path, element kind, raw mapping, parent id)
ElementEntry = tuple[str, str, dict[str, Any], Optional[str]]


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level YAML must be a mapping in {path}, got {type(data).__name__}"
        )

    return data


def _deep_merge(dst: dict[str, Any], src: dict[str, Any], *, src_path: Path) -> None:
    """Deep-merge `src` into `dst`.

    Merge rules:
      - missing key -> copy
      - list + list -> concatenate (preserve file order)
      - dict + dict -> recursive merge
      - scalar conflicts -> error (unless equal)
    """
    for key, value in src.items():
        if key not in dst:
            dst[key] = value
            continue

        existing = dst[key]
        if isinstance(existing, list) and isinstance(value, list):
            dst[key] = existing + value
            continue

        if isinstance(existing, dict) and isinstance(value, dict):
            _deep_merge(existing, value, src_path=src_path)
            continue

        if existing == value:
            continue

        raise ValueError(
            f"Workspace merge conflict on key {key!r} from {src_path}: "
            f"existing type={type(existing).__name__}, new type={type(value).__name__}"
        )


def load_document(path: Path) -> dict[str, Any]:
    """Load a workspace document (single YAML file or directory of parts)."""
    if not path.exists():
        raise FileNotFoundError(str(path))

    if path.is_dir():
        merged: dict[str, Any] = {}
        # Deterministic merge order: sorted file names.
        for part_path in sorted(path.glob(WORKSPACE_GLOB)):
            _deep_merge(merged, _load_yaml_mapping(part_path), src_path=part_path)
        return merged

    return _load_yaml_mapping(path)


def load_config(path: Optional[Path]) -> WriterConfig:
    """Read the `writer:` section of a YAML config file."""
    if path is None:
        return WriterConfig()
    try:
        data = _load_yaml_mapping(path)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(str(e)) from e
    return WriterConfig.from_mapping(data.get(CONFIG_SECTION))


def _items(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else ""


def iter_element_entries(doc: dict[str, Any]) -> Iterator[ElementEntry]:
    """Walk every element mapping in document order, parents first."""
    for i, item in enumerate(_items(doc.get("people"))):
        yield f"/people/{i}", "Person", item, None

    for i, system in enumerate(_items(doc.get("software_systems"))):
        sys_path = f"/software_systems/{i}"
        yield sys_path, "SoftwareSystem", system, None
        for j, container in enumerate(_items(system.get("containers"))):
            cnt_path = f"{sys_path}/containers/{j}"
            yield cnt_path, "Container", container, system.get("id")
            for k, component in enumerate(_items(container.get("components"))):
                yield f"{cnt_path}/components/{k}", "Component", component, container.get("id")

    def walk_nodes(nodes: Any, base: str, parent_id: Optional[str]) -> Iterator[ElementEntry]:
        for i, node in enumerate(_items(nodes)):
            node_path = f"{base}/{i}"
            yield node_path, "DeploymentNode", node, parent_id
            yield from walk_nodes(node.get("children"), f"{node_path}/children", node.get("id"))
            for j, instance in enumerate(_items(node.get("container_instances"))):
                yield (
                    f"{node_path}/container_instances/{j}",
                    "ContainerInstance",
                    instance,
                    node.get("id"),
                )

    yield from walk_nodes(doc.get("deployment_nodes"), "/deployment_nodes", None)


def relationship_id(item: dict[str, Any]) -> str:
    rel_id = item.get("id")
    if isinstance(rel_id, str) and rel_id:
        return rel_id
    return f"{item.get('from')}->{item.get('to')}"


def _instance_id(item: dict[str, Any], parent_id: Optional[str], n: int) -> str:
    inst_id = item.get("id")
    if isinstance(inst_id, str) and inst_id:
        return inst_id
    return f"{parent_id}/{item.get('container')}/{n}"


def _build_elements(doc: dict[str, Any], model: Model) -> dict[str, Element]:
    index: dict[str, Element] = {}
    pending_instances: list[tuple[ContainerInstance, str]] = []

    for path, kind, item, parent_id in iter_element_entries(doc):
        parent = index[parent_id] if parent_id else None
        element: Element

        if kind == "Person":
            element = Person(
                id=item["id"],
                name=_text(item, "name"),
                description=_text(item, "description"),
                location=item.get("location", "internal"),
            )
        elif kind == "SoftwareSystem":
            element = SoftwareSystem(
                id=item["id"],
                name=_text(item, "name"),
                description=_text(item, "description"),
                location=item.get("location", "internal"),
            )
        elif kind == "Container":
            element = Container(
                id=item["id"],
                name=_text(item, "name"),
                description=_text(item, "description"),
                parent=parent,
                technology=_text(item, "technology"),
                is_database=bool(item.get("database", False)),
            )
            parent.containers.append(element)  # type: ignore[union-attr]
        elif kind == "Component":
            element = Component(
                id=item["id"],
                name=_text(item, "name"),
                description=_text(item, "description"),
                parent=parent,
                technology=_text(item, "technology"),
                is_database=bool(item.get("database", False)),
            )
            parent.components.append(element)  # type: ignore[union-attr]
        elif kind == "DeploymentNode":
            element = DeploymentNode(
                id=item["id"],
                name=_text(item, "name"),
                description=_text(item, "description"),
                parent=parent,
                technology=_text(item, "technology"),
                instances=int(item.get("instances", 1)),
                environment=_text(item, "environment") or "Default",
            )
            if isinstance(parent, DeploymentNode):
                parent.children.append(element)
        elif kind == "ContainerInstance":
            if not isinstance(parent, DeploymentNode):
                raise TypeError(f"container instance at {path} has no deployment node")
            n = len(parent.container_instances) + 1
            element = ContainerInstance(
                id=_instance_id(item, parent_id, n),
                name=_text(item, "name"),
                description=_text(item, "description"),
                parent=parent,
                instance_id=int(item.get("instance_id", n)),
            )
            parent.container_instances.append(element)
            pending_instances.append((element, item["container"]))
        else:
            raise ValueError(f"unknown element kind: {kind!r}")

        index[element.id] = element
        model.add(element)

    # Instances may be declared before the containers they deploy.
    for instance, container_id in pending_instances:
        container = index[container_id]
        if not isinstance(container, Container):
            raise TypeError(
                f"container instance {instance.id!r} references {container_id!r}, "
                f"which is a {container.kind}"
            )
        instance.container = container
        if not instance.name:
            instance.name = container.name

    return index


def _build_view(
    item: dict[str, Any],
    index: dict[str, Element],
    relationships: dict[str, Relationship],
) -> View:
    elements = [index[element_id] for element_id in item.get("elements", []) or []]

    scope_id = item.get("scope")
    scope = index[scope_id] if isinstance(scope_id, str) and scope_id else None

    rel_views: list[RelationshipView] = []
    if "relationships" in item:
        for entry in item.get("relationships") or []:
            if isinstance(entry, str):
                entry = {"id": entry}
            rel_views.append(
                RelationshipView(
                    relationship=relationships[entry["id"]],
                    order=entry.get("order"),
                    description=entry.get("description"),
                    direction=entry.get("direction") or "none",
                )
            )
    else:
        # Default: every relationship between two of the view's elements.
        members = {id(e) for e in elements}
        for rel in relationships.values():
            if id(rel.source) in members and id(rel.destination) in members:
                rel_views.append(RelationshipView(relationship=rel))

    visible = item.get("enterprise_boundary_visible")
    return View(
        kind=item["kind"],
        key=str(item["key"]),
        elements=elements,
        relationships=rel_views,
        scope=scope,
        enterprise_boundary_visible=visible if isinstance(visible, bool) else None,
        title=_text(item, "title"),
        description=_text(item, "description"),
        environment=_text(item, "environment"),
    )


def build_workspace(doc: dict[str, Any]) -> Workspace:
    """Build model objects from a (validated) workspace document."""
    enterprise_name = doc.get("enterprise")
    model = Model(
        enterprise=Enterprise(enterprise_name)
        if isinstance(enterprise_name, str) and enterprise_name
        else None
    )
    index = _build_elements(doc, model)

    relationships: dict[str, Relationship] = {}
    for item in _items(doc.get("relationships")):
        tags = item.get("tags") or []
        rel = Relationship(
            id=relationship_id(item),
            source=index[item["from"]],
            destination=index[item["to"]],
            description=_text(item, "description"),
            technology=_text(item, "technology"),
            tags=tuple(str(t) for t in tags),
        )
        relationships[rel.id] = rel
        model.relationships.append(rel)

    views = [_build_view(item, index, relationships) for item in _items(doc.get("views"))]

    name = doc.get("name")
    return Workspace(name=name if isinstance(name, str) else "", model=model, views=views)


def load_workspace(path: Path) -> Workspace:
    return build_workspace(load_document(path))
