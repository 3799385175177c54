from uuid import uuid4

from portal.app.services.route_gate import (
    ADMIN_ONLY,
    ADMIN_OR_CLIENT,
    CLIENT_ONLY,
    GateState,
    gate_for_path,
    post_sign_in_location,
    sign_in_location,
)
from portal.domain.entities import Role
from tests.utils.factories import make_auth_session


def test_no_session_is_unauthenticated_and_keeps_requested_path():
    decision = ADMIN_ONLY.evaluate("/clients/42", None)

    assert decision.state == GateState.unauthenticated
    assert decision.redirect_to == "/auth?from=%2Fclients%2F42"
    assert decision.from_path == "/clients/42"
    assert decision.render_content is False


def test_resolving_never_renders_content():
    decision = ADMIN_ONLY.evaluate("/", make_auth_session(Role.admin), resolving=True)

    assert decision.state == GateState.resolving
    assert decision.render_content is False


def test_permitted_role_renders():
    decision = ADMIN_OR_CLIENT.evaluate(
        "/client/view", make_auth_session(Role.client, client_id=uuid4())
    )

    assert decision.state == GateState.permitted
    assert decision.render_content is True
    assert decision.redirect_to is None


def test_client_on_admin_view_is_sent_to_client_home():
    decision = ADMIN_ONLY.evaluate("/", make_auth_session(Role.client, client_id=uuid4()))

    assert decision.state == GateState.redirected
    assert decision.redirect_to == "/client/view"


def test_admin_on_client_view_is_sent_to_admin_home():
    decision = CLIENT_ONLY.evaluate("/client/view", make_auth_session(Role.admin))

    assert decision.state == GateState.redirected
    assert decision.redirect_to == "/"


def test_role_none_is_sent_to_sign_in():
    decision = ADMIN_OR_CLIENT.evaluate("/client/view", make_auth_session(Role.none))

    assert decision.state == GateState.redirected
    assert decision.redirect_to == "/auth"


def test_sign_in_location_without_from():
    assert sign_in_location("/auth") == "/auth"
    assert sign_in_location("") == "/auth"


def test_gate_for_path():
    assert gate_for_path("/auth") is None
    assert gate_for_path("/setup?token=abc") is None
    assert gate_for_path("/recover") is None
    assert gate_for_path("/client/view") is CLIENT_ONLY
    assert gate_for_path("/clients/") is ADMIN_ONLY
    assert gate_for_path("/") is ADMIN_ONLY
    assert gate_for_path("/somewhere-new") is ADMIN_ONLY


def test_post_sign_in_location_keeps_permitted_destination():
    admin = make_auth_session(Role.admin)
    client = make_auth_session(Role.client, client_id=uuid4())

    assert post_sign_in_location(admin, "/clients/7") == "/clients/7"
    assert post_sign_in_location(client, "/clients/7") == "/client/view"
    assert post_sign_in_location(client, None) == "/client/view"
    assert post_sign_in_location(admin, "//evil.example.com") == "/"
