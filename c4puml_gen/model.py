# c4puml_gen/model.py
"""Plain data containers for an architecture workspace.

The renderer only reads these objects. Parent links are traversal-only
back-references; children lists keep insertion order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Optional, Union

Location = Literal["internal", "external"]

ViewKind = Literal[
    "system_landscape",
    "system_context",
    "container",
    "component",
    "dynamic",
    "deployment",
]
VIEW_KINDS: tuple[str, ...] = (
    "system_landscape",
    "system_context",
    "container",
    "component",
    "dynamic",
    "deployment",
)

Direction = Literal[
    "none",
    "back",
    "neighbor",
    "neighbour",
    "back-neighbor",
    "back-neighbour",
    "up",
    "down",
    "left",
    "right",
]
DIRECTIONS: tuple[str, ...] = (
    "none",
    "back",
    "neighbor",
    "neighbour",
    "back-neighbor",
    "back-neighbour",
    "up",
    "down",
    "left",
    "right",
)

Order = Union[int, str]


@dataclass(eq=False)
class Element:
    id: str
    name: str
    description: str = ""
    parent: Optional[Element] = field(default=None, repr=False)

    kind: ClassVar[str] = "Element"


@dataclass(eq=False)
class Person(Element):
    location: Location = "internal"

    kind: ClassVar[str] = "Person"

    @property
    def is_external(self) -> bool:
        return self.location == "external"


@dataclass(eq=False)
class SoftwareSystem(Element):
    location: Location = "internal"
    containers: list[Container] = field(default_factory=list, repr=False)

    kind: ClassVar[str] = "SoftwareSystem"

    @property
    def is_external(self) -> bool:
        return self.location == "external"


@dataclass(eq=False)
class Container(Element):
    technology: str = ""
    is_database: bool = False
    components: list[Component] = field(default_factory=list, repr=False)

    kind: ClassVar[str] = "Container"


@dataclass(eq=False)
class Component(Element):
    technology: str = ""
    is_database: bool = False

    kind: ClassVar[str] = "Component"


@dataclass(eq=False)
class DeploymentNode(Element):
    technology: str = ""
    instances: int = 1
    environment: str = "Default"
    children: list[DeploymentNode] = field(default_factory=list, repr=False)
    container_instances: list[ContainerInstance] = field(
        default_factory=list, repr=False
    )

    kind: ClassVar[str] = "DeploymentNode"


@dataclass(eq=False)
class ContainerInstance(Element):
    """A deployed copy of a container; drawn with the container's details."""

    container: Optional[Container] = field(default=None, repr=False)
    instance_id: int = 1

    kind: ClassVar[str] = "ContainerInstance"


@dataclass(frozen=True)
class Enterprise:
    name: str

    kind: ClassVar[str] = "Enterprise"


@dataclass(eq=False)
class Relationship:
    id: str
    source: Element
    destination: Element
    description: str = ""
    technology: str = ""
    tags: tuple[str, ...] = ()


@dataclass(eq=False)
class RelationshipView:
    """A relationship as placed in one view."""

    relationship: Relationship
    order: Optional[Order] = None
    # Dynamic views may describe the same relationship differently per step.
    description: Optional[str] = None
    direction: Direction = "none"


@dataclass(eq=False)
class View:
    kind: ViewKind
    key: str
    elements: list[Element] = field(default_factory=list)
    relationships: list[RelationshipView] = field(default_factory=list)
    scope: Optional[Element] = None
    enterprise_boundary_visible: Optional[bool] = None
    title: str = ""
    description: str = ""
    environment: str = ""


@dataclass(eq=False)
class Model:
    enterprise: Optional[Enterprise] = None
    elements: list[Element] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    def add(self, element: Element) -> Element:
        self.elements.append(element)
        return element

    def element(self, element_id: str) -> Element:
        for element in self.elements:
            if element.id == element_id:
                return element
        raise KeyError(f"Unknown element id: {element_id!r}")


@dataclass(eq=False)
class Workspace:
    name: str
    model: Model
    views: list[View] = field(default_factory=list)
