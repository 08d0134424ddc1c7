from pathlib import Path
from types import SimpleNamespace

import pytest

from c4puml_gen.model import (
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    Enterprise,
    Model,
    Person,
    Relationship,
    SoftwareSystem,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixture_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def bank() -> SimpleNamespace:
    """A small hand-built banking model shared by the renderer tests."""
    model = Model(enterprise=Enterprise("Big Bank plc"))

    customer = model.add(Person(id="customer", name="Customer", location="external"))
    staff = model.add(Person(id="staff", name="Staff", description="Back office staff."))
    ibs = model.add(SoftwareSystem(id="ibs", name="Internet Banking System"))
    mainframe = model.add(SoftwareSystem(id="mainframe", name="Mainframe Banking System"))
    email = model.add(SoftwareSystem(id="email", name="E-mail System", location="external"))

    spa = model.add(
        Container(id="spa", name="Single-Page Application", parent=ibs, technology="Angular")
    )
    api = model.add(Container(id="api", name="API Application", parent=ibs, technology="Java"))
    db = model.add(
        Container(id="db", name="Database", parent=ibs, technology="Oracle", is_database=True)
    )
    ibs.containers.extend([spa, api, db])

    signin = model.add(Component(id="signin", name="Sign In Controller", parent=api, technology="Spring MVC"))
    security = model.add(Component(id="security", name="Security Component", parent=api, technology="Spring Bean"))
    api.components.extend([signin, security])

    def rel(rel_id, source, destination, description="", technology=""):
        r = Relationship(
            id=rel_id,
            source=source,
            destination=destination,
            description=description,
            technology=technology,
        )
        model.relationships.append(r)
        return r

    rels = SimpleNamespace(
        customer_ibs=rel("customer_ibs", customer, ibs, "Uses"),
        ibs_email=rel("ibs_email", ibs, email, "Sends e-mail using"),
        customer_spa=rel("customer_spa", customer, spa, "Uses"),
        spa_db=rel("spa_db", spa, db, "Reads", "JDBC"),
        spa_signin=rel("spa_signin", spa, signin, "Calls", "JSON/HTTPS"),
        signin_security=rel("signin_security", signin, security, "Uses"),
        security_db=rel("security_db", security, db, "Reads from", "JDBC"),
    )

    return SimpleNamespace(
        model=model,
        customer=customer,
        staff=staff,
        ibs=ibs,
        mainframe=mainframe,
        email=email,
        spa=spa,
        api=api,
        db=db,
        signin=signin,
        security=security,
        rels=rels,
    )


@pytest.fixture
def deployment() -> SimpleNamespace:
    """Root node A > child node B > one instance of the Web App container."""
    model = Model()
    web = model.add(Container(id="web", name="Web App", technology="Java", description="Serves pages."))

    a = model.add(DeploymentNode(id="a", name="A"))
    b = model.add(DeploymentNode(id="b", name="B", parent=a))
    a.children.append(b)

    instance = model.add(ContainerInstance(id="web_1", name="Web App", parent=b, container=web))
    b.container_instances.append(instance)

    return SimpleNamespace(model=model, web=web, a=a, b=b, instance=instance)
