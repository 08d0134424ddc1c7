# c4puml_gen/constants.py
from __future__ import annotations

# Indentation unit for nested boundary contents.
INDENT = "  "

# Dynamic views treat an element as inside the scope boundary when the scope
# is its parent, grandparent or great-grandparent. Deeper nesting is outside.
DYNAMIC_SCOPE_DEPTH = 3

# Boundary titles do not wrap in PlantUML; long technology strings are split
# into blocks of at least this many characters.
BOUNDARY_TECHNOLOGY_WIDTH = 30
BOUNDARY_TECHNOLOGY_BREAK = r"</size>\n<size:TECHN_FONT_SIZE>"

# C4-PlantUML library files by include kind.
STDLIB_INCLUDES: dict[str, str] = {
    "context": "<C4/C4_Context>",
    "container": "<C4/C4_Container>",
    "component": "<C4/C4_Component>",
    # No stdlib dynamic library; the component definitions cover it.
    "dynamic": "<C4/C4_Component>",
    "deployment": "<C4/C4_Container>",
}
CUSTOM_INCLUDES: dict[str, str] = {
    "context": "C4_Context.puml",
    "container": "C4_Container.puml",
    "component": "C4_Component.puml",
    "dynamic": "C4_Dynamic.puml",
    "deployment": "C4_Deployment.puml",
}

# Workspace files loaded from a split directory, in merge order.
WORKSPACE_GLOB = "*.yaml"
CONFIG_SECTION = "writer"
