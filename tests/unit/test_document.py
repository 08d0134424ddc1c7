import io
import re

import pytest

from c4puml_gen.config import WriterConfig
from c4puml_gen.diagrams.deployment_defs import DEPLOYMENT_FALLBACK_DEFINITIONS
from c4puml_gen.diagrams.registry import VIEW_SPECS, get_view_spec, render_view, stream_view
from c4puml_gen.errors import UnsupportedElementKind
from c4puml_gen.model import (
    Container,
    ContainerInstance,
    DeploymentNode,
    Element,
    Model,
    RelationshipView,
    View,
)

NO_LEGEND = WriterConfig(include_legend_layout=False)


def container_view(bank, **kwargs):
    return View(
        kind="container",
        key="containers",
        scope=bank.ibs,
        elements=[bank.customer, bank.db, bank.spa, bank.email],
        relationships=[
            RelationshipView(relationship=bank.rels.spa_db),
            RelationshipView(relationship=bank.rels.customer_spa),
        ],
        **kwargs,
    )


def test_container_view_document(bank):
    text = render_view(container_view(bank), bank.model, NO_LEGEND)

    assert text == (
        "@startuml\n"
        "!include <C4/C4_Container>\n"
        "\n"
        "' ContainerView: containers\n"
        "title Internet Banking System - Containers\n"
        "\n"
        'Person_Ext(Customer, "Customer")\n'
        'System_Ext(EmailSystem, "E-mail System")\n'
        'System_Boundary(InternetBankingSystem, "Internet Banking System") {\n'
        '  ContainerDb(Database, "Database", "Oracle")\n'
        '  Container(SinglePageApplication, "Single-Page Application", "Angular")\n'
        "}\n"
        'Rel(Customer, SinglePageApplication, "Uses")\n'
        'Rel(SinglePageApplication, Database, "Reads", "JDBC")\n'
        "@enduml\n"
    )


def test_default_config_adds_legend_layout(bank):
    lines = render_view(container_view(bank), bank.model).split("\n")

    title_at = lines.index("title Internet Banking System - Containers")
    assert lines[title_at + 1 : title_at + 4] == ["", "LAYOUT_WITH_LEGEND()", ""]


def test_layout_lines_follow_config_order(bank):
    cfg = WriterConfig(include_legend_layout=True, sketch_mode=True, layout_direction="left-right")
    lines = render_view(container_view(bank), bank.model, cfg).split("\n")

    title_at = lines.index("title Internet Banking System - Containers")
    assert lines[title_at + 1 : title_at + 6] == [
        "",
        "LAYOUT_WITH_LEGEND()",
        "LAYOUT_AS_SKETCH()",
        "LAYOUT_LEFT_RIGHT",
        "",
    ]


def test_no_layout_lines_means_single_blank_after_title(bank):
    lines = render_view(container_view(bank), bank.model, NO_LEGEND).split("\n")

    title_at = lines.index("title Internet Banking System - Containers")
    assert lines[title_at + 1] == ""
    assert lines[title_at + 2].startswith("Person_Ext(")


def test_title_prefers_view_title_then_description(bank):
    titled = container_view(bank, title="Shop\nfront", description="ignored")
    assert "title Shop\\nfront\n" in render_view(titled, bank.model, NO_LEGEND)

    described = container_view(bank, description="What the bank runs")
    assert "title What the bank runs\n" in render_view(described, bank.model, NO_LEGEND)


@pytest.mark.parametrize(
    ("kind", "include"),
    [
        ("system_landscape", "<C4/C4_Context>"),
        ("system_context", "<C4/C4_Context>"),
        ("container", "<C4/C4_Container>"),
        ("component", "<C4/C4_Component>"),
        ("dynamic", "<C4/C4_Component>"),
    ],
)
def test_stdlib_include_per_kind(bank, kind, include):
    view = View(kind=kind, key="k", scope=bank.ibs, elements=[bank.customer])
    lines = render_view(view, bank.model).split("\n")

    assert lines[0] == "@startuml"
    assert lines[1] == f"!include {include}"
    assert lines[2] == ""
    assert lines[3] == f"' {VIEW_SPECS[kind].label}: k"
    assert lines[-2] == "@enduml"
    assert lines[-1] == ""


@pytest.mark.parametrize(
    ("kind", "file_name"),
    [
        ("system_landscape", "C4_Context.puml"),
        ("container", "C4_Container.puml"),
        ("component", "C4_Component.puml"),
        ("dynamic", "C4_Dynamic.puml"),
        ("deployment", "C4_Deployment.puml"),
    ],
)
def test_custom_base_url_uses_includeurl(bank, kind, file_name):
    cfg = WriterConfig(custom_base_url="https://example.org/c4/")
    view = View(kind=kind, key="k", scope=bank.ibs, elements=[])
    lines = render_view(view, bank.model, cfg).split("\n")

    assert lines[1] == f"!includeurl https://example.org/c4/{file_name}"
    assert lines[2] == ""


def test_deployment_view_carries_fallback_definitions(deployment, fixture_dir):
    golden = (fixture_dir / "golden" / "deployment_fallback.puml").read_text(encoding="utf-8")
    view = View(
        kind="deployment",
        key="live",
        elements=[deployment.a, deployment.b, deployment.instance],
        environment="Live",
    )
    text = render_view(view, deployment.model, NO_LEGEND)

    assert text.startswith(
        "@startuml\n!include <C4/C4_Container>\n" + golden + "\n' DeploymentView: live\n"
    )
    assert text.endswith(
        "title Deployment - Live\n"
        "\n"
        'Deployment_Node(A, "A", "") {\n'
        '  Deployment_Node(B, "B", "") {\n'
        '    ContainerInstance(WebApp, "Web App", "Java", "Serves pages.")\n'
        "  }\n"
        "}\n"
        "@enduml\n"
    )


def test_fallback_definitions_match_golden_file(fixture_dir):
    golden = (fixture_dir / "golden" / "deployment_fallback.puml").read_text(encoding="utf-8")
    assert "\n".join(DEPLOYMENT_FALLBACK_DEFINITIONS) + "\n" == golden


def test_deployment_view_with_custom_base_has_no_fallback(deployment):
    cfg = WriterConfig(custom_base_url="https://example.org/", include_legend_layout=False)
    view = View(kind="deployment", key="live", elements=[deployment.a])
    text = render_view(view, deployment.model, cfg)

    assert DEPLOYMENT_FALLBACK_DEFINITIONS[0] not in text


def test_context_view_relationships_follow_enterprise_frame(bank):
    view = View(
        kind="system_context",
        key="context",
        scope=bank.ibs,
        elements=[bank.ibs, bank.customer],
        relationships=[RelationshipView(relationship=bank.rels.customer_ibs)],
    )
    lines = render_view(view, bank.model, NO_LEGEND).split("\n")

    body = lines[lines.index("title Internet Banking System - System Context") + 2 :]
    assert body == [
        'Enterprise_Boundary(BigBankplc, "Big Bank plc") {',
        '  Person_Ext(Customer, "Customer")',
        '  System(InternetBankingSystem, "Internet Banking System")',
        "}",
        'Rel(Customer, InternetBankingSystem, "Uses")',
        "@enduml",
        "",
    ]


def test_dynamic_view_numbers_steps(bank):
    view = View(
        kind="dynamic",
        key="signin",
        scope=bank.api,
        elements=[bank.spa, bank.signin, bank.security],
        relationships=[
            RelationshipView(relationship=bank.rels.signin_security, order=2),
            RelationshipView(relationship=bank.rels.spa_signin, order=1, description="Submits"),
        ],
    )
    lines = render_view(view, bank.model, NO_LEGEND).split("\n")

    assert lines[lines.index("title API Application - Dynamic") + 2 :] == [
        'Container(SinglePageApplication, "Single-Page Application", "Angular")',
        'Container_Boundary(APIApplication, "API Application") {',
        '  Component(SecurityComponent, "Security Component", "Spring Bean")',
        '  Component(SignInController, "Sign In Controller", "Spring MVC")',
        "}",
        'Rel(SinglePageApplication, SignInController, "1: Submits", "JSON/HTTPS")',
        'Rel(SignInController, SecurityComponent, "2: Uses")',
        "@enduml",
        "",
    ]


def test_rendering_is_deterministic(bank):
    first = render_view(container_view(bank), bank.model)
    reordered = View(
        kind="container",
        key="containers",
        scope=bank.ibs,
        elements=[bank.email, bank.spa, bank.db, bank.customer],
        relationships=[
            RelationshipView(relationship=bank.rels.customer_spa),
            RelationshipView(relationship=bank.rels.spa_db),
        ],
    )

    assert render_view(reordered, bank.model) == first
    assert render_view(container_view(bank), bank.model) == first


def test_stream_view_writes_complete_document(bank):
    out = io.StringIO()
    stream_view(container_view(bank), bank.model, out, NO_LEGEND)

    assert out.getvalue() == render_view(container_view(bank), bank.model, NO_LEGEND)


def test_unsupported_element_leaves_stream_untouched(bank):
    class Widget(Element):
        kind = "Widget"

    view = View(kind="container", key="c", scope=bank.ibs, elements=[Widget(id="w", name="W")])
    out = io.StringIO()

    with pytest.raises(UnsupportedElementKind):
        stream_view(view, bank.model, out)
    assert out.getvalue() == ""


def test_unknown_view_kind_is_rejected():
    with pytest.raises(ValueError):
        get_view_spec("sequence")
    with pytest.raises(ValueError):
        render_view(View(kind="sequence", key="x"), Model())  # type: ignore[arg-type]


def test_deployment_view_ignores_non_root_nodes(deployment):
    orphan_child = DeploymentNode(id="c", name="Child", parent=deployment.a)
    view = View(kind="deployment", key="d", elements=[orphan_child])
    text = render_view(view, deployment.model, NO_LEGEND)

    assert "Deployment_Node(" not in text.split("' DeploymentView: d")[1]


# `!define Macro(a, b, c)` lines in the inline fallback block.
DEFINE_RE = re.compile(r"^!define (\w+)\(([^)]*)\)")
CALL_RE = re.compile(r"^\s*(Deployment_Node|ContainerInstance(?:Db)?)\((\w+)((?:, \"(?:[^\"\\]|\\.)*\")*)\)")
QUOTED_RE = re.compile(r'"(?:[^"\\]|\\.)*"')


def _fallback_arities():
    arities = {}
    for line in DEPLOYMENT_FALLBACK_DEFINITIONS:
        match = DEFINE_RE.match(line)
        if match:
            arities.setdefault(match.group(1), set()).add(len(match.group(2).split(",")))
    return arities


def test_fallback_deployment_calls_match_defined_macros():
    bare = Container(id="bare", name="Bare Worker")
    store = Container(id="store", name="Store", description="Keeps data.", is_database=True)
    root = DeploymentNode(id="root", name="Root")
    box = DeploymentNode(id="box", name="Box", parent=root, instances=2)
    root.children.append(box)
    box.container_instances.extend(
        [
            ContainerInstance(id="b1", name="Bare Worker", parent=box, container=bare),
            ContainerInstance(id="s1", name="Store", parent=box, container=store),
        ]
    )
    view = View(kind="deployment", key="d", elements=[root, box])
    body = render_view(view, Model(), NO_LEGEND).split("' DeploymentView: d")[1]

    arities = _fallback_arities()
    calls = [CALL_RE.match(line) for line in body.split("\n")]
    calls = [match for match in calls if match]

    assert [match.group(1) for match in calls] == [
        "Deployment_Node",
        "Deployment_Node",
        "ContainerInstance",
        "ContainerInstanceDb",
    ]
    for match in calls:
        arity = 1 + len(QUOTED_RE.findall(match.group(3)))
        assert arity in arities[match.group(1)], match.group(0)
