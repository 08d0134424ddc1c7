# c4puml_gen/diagrams/deployment_defs.py
from __future__ import annotations

# Emitted after `!include <C4/C4_Container>` when no custom base URL is set:
# the PlantUML stdlib ships no C4_Deployment.puml, so deployment views carry
# their own colors, legend and node/instance macros. Output must not vary.
DEPLOYMENT_FALLBACK_DEFINITIONS: tuple[str, ...] = tuple(
    r"""' C4_Deployment.puml is missing, simulate it with following definitions
' Colors
' ##################################
!define INSTANCE_BG_COLOR  #438DD5
!define NODE_FONT_COLOR    #888888
!define NODE_BG_COLOR      #FFFFFF

' Styling
' ##################################
skinparam rectangle<<instance>> {
  roundCorner 10
  Shadowing true
  FontColor ELEMENT_FONT_COLOR
  BackgroundColor INSTANCE_BG_COLOR
  BorderColor #3C7FC0
}

skinparam database<<instance>> {
  roundCorner 10
  Shadowing true
  FontColor ELEMENT_FONT_COLOR
  BackgroundColor INSTANCE_BG_COLOR
  BorderColor #3C7FC0
}

skinparam rectangle<<node>> {
  roundCorner 10
  Shadowing true
  FontColor NODE_FONT_COLOR
  BackgroundColor NODE_BG_COLOR
  BorderColor #444444
}

' Layout
' ##################################
!definelong LAYOUT_WITH_LEGEND
hide stereotype
legend right
|=                    |= Type               |
|<NODE_BG_COLOR>      | deployment node     |
|<INSTANCE_BG_COLOR>  | deployment instance |
endlegend
!enddefinelong

' Instances
' ##################################
!define ContainerInstance(e_alias, e_label, e_techn) rectangle "==e_label\n//<size:TECHN_FONT_SIZE>Instance: [e_techn]</size>//" <<instance>> as e_alias
!define ContainerInstance(e_alias, e_label, e_techn, e_descr) rectangle "==e_label\n//<size:TECHN_FONT_SIZE>Instance: [e_techn]</size>//\n\n e_descr" <<instance>> as e_alias

!define ContainerInstanceDb(e_alias, e_label, e_techn) database "==e_label\n//<size:TECHN_FONT_SIZE>Instance: [e_techn]</size>//" <<instance>> as e_alias
!define ContainerInstanceDb(e_alias, e_label, e_techn, e_descr) database "==e_label\n//<size:TECHN_FONT_SIZE>Instance: [e_techn]</size>//\n\n e_descr" <<instance>> as e_alias


' Nodes
' ##################################
!define Deployment_Node(e_alias, e_label, e_techn) rectangle "==e_label\n<size:TECHN_FONT_SIZE>[e_techn]</size>" <<node>> as e_alias
""".split("\n")
)
