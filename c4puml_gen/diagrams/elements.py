# c4puml_gen/diagrams/elements.py
from __future__ import annotations

from typing import Optional, Union

from ..constants import BOUNDARY_TECHNOLOGY_BREAK, BOUNDARY_TECHNOLOGY_WIDTH
from ..errors import UnsupportedElementKind
from ..model import (
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    Element,
    Enterprise,
    Person,
    SoftwareSystem,
)
from ..puml_fmt import (
    assert_puml_alias,
    block_text,
    puml_boundary_close,
    puml_boundary_open,
    puml_call,
    tokenize_name,
)
from ..sink import LineSink

Frame = Union[Element, Enterprise]


def element_alias(element: Frame) -> str:
    return assert_puml_alias(tokenize_name(element.name))


def _node_technology(node: DeploymentNode) -> str:
    technology = (node.technology or "").strip()
    if node.instances > 1:
        suffix = f"(x{node.instances})"
        technology = f"{technology} {suffix}" if technology else suffix
    return technology


def boundary_line(element: Frame) -> str:
    """Opening line of a boundary frame; the caller writes the close."""
    alias = element_alias(element)

    if isinstance(element, Enterprise):
        return puml_boundary_open("Enterprise_Boundary", alias, element.name)
    if isinstance(element, SoftwareSystem):
        return puml_boundary_open("System_Boundary", alias, element.name)
    if isinstance(element, Container):
        return puml_boundary_open("Container_Boundary", alias, element.name)
    if isinstance(element, DeploymentNode):
        technology = _node_technology(element)
        # PlantUML does not wrap boundary titles on its own.
        if len(technology) > BOUNDARY_TECHNOLOGY_WIDTH:
            technology = block_text(
                technology, BOUNDARY_TECHNOLOGY_WIDTH, BOUNDARY_TECHNOLOGY_BREAK
            )
        # The fallback Deployment_Node macro takes its technology positionally.
        return puml_boundary_open(
            "Deployment_Node", alias, element.name, technology, min_args=2
        )

    raise UnsupportedElementKind(element.kind, "boundary")


def element_line(element: Element) -> str:
    """Single leaf line for an element, e.g. `ContainerDb(db, "DB", "SQL")`."""
    alias = element_alias(element)
    title = element.name
    description: Optional[str] = element.description
    technology: Optional[str] = None
    external = False
    database = False
    min_args = 0

    if isinstance(element, Person):
        macro = "Person"
        external = element.is_external
    elif isinstance(element, SoftwareSystem):
        macro = "System"
        external = element.is_external
    elif isinstance(element, Container):
        macro = "Container"
        technology = element.technology
        database = element.is_database
    elif isinstance(element, Component):
        macro = "Component"
        technology = element.technology
        database = element.is_database
    elif isinstance(element, ContainerInstance):
        macro = "ContainerInstance"
        # Fallback ContainerInstance macros take at least label and technology.
        technology = ""
        min_args = 2
        container = element.container
        if container is not None:
            title = container.name
            description = container.description
            technology = container.technology
            database = container.is_database
    else:
        raise UnsupportedElementKind(element.kind, "element")

    if database:
        macro += "Db"
    if external:
        macro += "_Ext"

    if technology is None:
        return puml_call(macro, alias, title, description)
    return puml_call(macro, alias, title, technology, description, min_args=min_args)


def write_element(element: Element, sink: LineSink, depth: int = 0) -> None:
    sink.write(element_line(element), depth)


def open_boundary(element: Frame, sink: LineSink, depth: int = 0) -> None:
    sink.write(boundary_line(element), depth)


def close_boundary(sink: LineSink, depth: int = 0) -> None:
    sink.write(puml_boundary_close(), depth)
