# c4puml_gen/diagrams/deployment.py
from __future__ import annotations

from typing import Iterable

from ..model import DeploymentNode
from ..model_view import sort_by_name
from ..sink import LineSink
from .elements import close_boundary, open_boundary, write_element


def write_deployment_node(node: DeploymentNode, sink: LineSink, depth: int = 0) -> None:
    """Write a node frame, its child nodes (by name), then its instances.

    Container instances keep the order they were deployed in.
    """
    open_boundary(node, sink, depth)

    for child in sort_by_name(node.children):
        write_deployment_node(child, sink, depth + 1)

    for instance in node.container_instances:
        write_element(instance, sink, depth + 1)

    close_boundary(sink, depth)


def write_deployment_tree(roots: Iterable[DeploymentNode], sink: LineSink) -> None:
    for root in sort_by_name(roots):
        write_deployment_node(root, sink, 0)
