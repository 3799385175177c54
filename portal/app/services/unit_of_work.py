from abc import ABC, abstractmethod

from portal.app.repositories.activity_repository import IActivityRepository
from portal.app.repositories.client_repository import IClientRepository
from portal.app.repositories.content_source_repository import (
    IDriveLinkRepository,
    IWebsiteUrlRepository,
)
from portal.app.repositories.error_log_repository import IErrorLogRepository
from portal.app.repositories.interaction_repository import IInteractionRepository
from portal.app.repositories.invitation_repository import IInvitationRepository
from portal.app.repositories.mfa_factor_repository import IMfaFactorRepository
from portal.app.repositories.recovery_token_repository import IRecoveryTokenRepository
from portal.app.repositories.session_repository import ISessionRepository
from portal.app.repositories.user_repository import IUserRepository
from portal.app.repositories.user_role_repository import IUserRoleRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    mfa_factors: IMfaFactorRepository
    user_roles: IUserRoleRepository
    clients: IClientRepository
    invitations: IInvitationRepository
    recovery_tokens: IRecoveryTokenRepository
    activities: IActivityRepository
    interactions: IInteractionRepository
    website_urls: IWebsiteUrlRepository
    drive_links: IDriveLinkRepository
    error_logs: IErrorLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def publish_change(self, table: str, row: dict) -> None:
        """Queue a change notification, delivered after the next successful commit"""
        pass
