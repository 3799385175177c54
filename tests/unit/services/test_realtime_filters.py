from uuid import uuid4

from portal.api.routes.realtime import REALTIME_TABLES, row_filter_for
from portal.domain.entities import Role
from tests.utils.factories import make_auth_session


def test_sessions_are_scoped_to_the_caller():
    session = make_auth_session(Role.admin)

    assert row_filter_for("sessions", session, None) == {"user_id": session.principal.id}


def test_client_is_pinned_to_its_own_rows():
    client_id = uuid4()
    session = make_auth_session(Role.client, client_id=client_id)

    assert row_filter_for("interactions", session, None) == {"client_id": client_id}
    assert row_filter_for("clients", session, None) == {"id": client_id}
    assert row_filter_for("interactions", session, client_id) == {"client_id": client_id}
    assert row_filter_for("interactions", session, uuid4()) is None


def test_admin_may_narrow_or_see_all():
    session = make_auth_session(Role.admin)
    client_id = uuid4()

    assert row_filter_for("client_activities", session, None) == {}
    assert row_filter_for("client_activities", session, client_id) == {"client_id": client_id}


def test_principal_without_role_gets_nothing():
    session = make_auth_session(Role.none)

    assert row_filter_for("clients", session, None) is None
    assert "sessions" in REALTIME_TABLES


def test_client_without_binding_gets_nothing():
    session = make_auth_session(Role.client, client_id=None)

    assert row_filter_for("interactions", session, None) is None
    assert row_filter_for("clients", session, uuid4()) is None
