# c4puml_gen/diagrams/relationships.py
from __future__ import annotations

from typing import Iterable, Optional

from ..model import Direction, RelationshipView
from ..model_view import natural_order_key
from ..puml_fmt import has_value, quote, tokenize_name
from ..sink import LineSink

# C4-PlantUML spells neighbour without the u.
RELATIONSHIP_MACROS: dict[str, str] = {
    "none": "Rel",
    "back": "Rel_Back",
    "neighbor": "Rel_Neighbor",
    "neighbour": "Rel_Neighbor",
    "back-neighbor": "Rel_Back_Neighbor",
    "back-neighbour": "Rel_Back_Neighbor",
    "up": "Rel_Up",
    "down": "Rel_Down",
    "left": "Rel_Left",
    "right": "Rel_Right",
}


def layout_macro(direction: Optional[Direction]) -> str:
    return RELATIONSHIP_MACROS.get(direction or "none", "Rel")


def relationship_line(rv: RelationshipView, label: Optional[str] = None) -> str:
    rel = rv.relationship
    source = tokenize_name(rel.source.name)
    dest = tokenize_name(rel.destination.name)
    if label is None:
        label = rel.description or ""

    args = [source, dest, quote(label)]
    if has_value(rel.technology):
        args.append(quote(rel.technology))
    return f"{layout_macro(rv.direction)}({', '.join(args)})"


def static_order(relationships: Iterable[RelationshipView]) -> list[RelationshipView]:
    return sorted(
        relationships,
        key=lambda rv: rv.relationship.source.name + rv.relationship.destination.name,
    )


def dynamic_order(relationships: Iterable[RelationshipView]) -> list[RelationshipView]:
    return sorted(relationships, key=lambda rv: natural_order_key(rv.order))


def dynamic_label(rv: RelationshipView) -> str:
    description = rv.description
    if description is None:
        description = rv.relationship.description or ""
    return f"{rv.order}: {description}"


def write_relationships(relationships: Iterable[RelationshipView], sink: LineSink) -> None:
    for rv in static_order(relationships):
        sink.write(relationship_line(rv))


def write_dynamic_relationships(
    relationships: Iterable[RelationshipView], sink: LineSink
) -> None:
    for rv in dynamic_order(relationships):
        sink.write(relationship_line(rv, dynamic_label(rv)))
