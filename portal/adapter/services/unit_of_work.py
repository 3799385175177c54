import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel.ext.asyncio.session import AsyncSession

from portal.adapter.repositories.activity_repository import ActivityRepository
from portal.adapter.repositories.client_repository import ClientRepository
from portal.adapter.repositories.content_source_repository import (
    DriveLinkRepository,
    WebsiteUrlRepository,
)
from portal.adapter.repositories.error_log_repository import ErrorLogRepository
from portal.adapter.repositories.interaction_repository import InteractionRepository
from portal.adapter.repositories.invitation_repository import InvitationRepository
from portal.adapter.repositories.mfa_factor_repository import MfaFactorRepository
from portal.adapter.repositories.recovery_token_repository import RecoveryTokenRepository
from portal.adapter.repositories.session_repository import SessionRepository
from portal.adapter.repositories.user_repository import UserRepository
from portal.adapter.repositories.user_role_repository import UserRoleRepository
from portal.app.services.change_feed import ChangeFeed
from portal.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, change_feed: Optional[ChangeFeed] = None):
        self.session = session
        self.change_feed = change_feed
        self._pending_changes: List[Tuple[str, Dict[str, Any]]] = []

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.mfa_factors = MfaFactorRepository(self.session)
        self.user_roles = UserRoleRepository(self.session)
        self.clients = ClientRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.recovery_tokens = RecoveryTokenRepository(self.session)
        self.activities = ActivityRepository(self.session)
        self.interactions = InteractionRepository(self.session)
        self.website_urls = WebsiteUrlRepository(self.session)
        self.drive_links = DriveLinkRepository(self.session)
        self.error_logs = ErrorLogRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()
        changes, self._pending_changes = self._pending_changes, []
        if self.change_feed is None:
            return
        for table, row in changes:
            self.change_feed.publish(table, row)

    async def rollback(self):
        await self.session.rollback()
        self._pending_changes = []

    def publish_change(self, table: str, row: dict) -> None:
        self._pending_changes.append((table, row))
