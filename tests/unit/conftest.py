from unittest.mock import AsyncMock, MagicMock

import pytest

REPOSITORIES = (
    "users",
    "sessions",
    "mfa_factors",
    "user_roles",
    "clients",
    "invitations",
    "recovery_tokens",
    "activities",
    "interactions",
    "website_urls",
    "drive_links",
    "error_logs",
)


def _returns_argument(entity):
    return entity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.publish_change = MagicMock()

    for name in REPOSITORIES:
        repository = AsyncMock()
        # create/update hand back the entity they were given
        repository.create = AsyncMock(side_effect=_returns_argument)
        repository.update = AsyncMock(side_effect=_returns_argument)
        setattr(uow, name, repository)
    return uow
