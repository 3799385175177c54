from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from portal.app.repositories.invitation_repository import IInvitationRepository
from portal.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        stmt = select(Invitation).where(Invitation.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_client_id(self, client_id: UUID) -> List[Invitation]:
        """Get all invitations for a client, newest first"""
        stmt = (
            select(Invitation)
            .where(Invitation.client_id == client_id)
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def claim_pending(self, token: str, now: datetime) -> bool:
        """
        Move a pending, unexpired invitation to accepted.

        The status and expiry checks are part of the UPDATE itself, so of two
        concurrent redeemers exactly one sees rowcount == 1.
        """
        stmt = (
            update(Invitation)
            .where(
                Invitation.token == token,
                Invitation.status == InvitationStatus.pending,
                Invitation.expires_at >= now,
            )
            .values(status=InvitationStatus.accepted, accepted_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def expire_pending_for_client(self, client_id: UUID) -> int:
        """Expire every pending invitation of a client"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.client_id == client_id,
                Invitation.status == InvitationStatus.pending,
            )
            .values(status=InvitationStatus.expired)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_client_id(self, client_id: UUID) -> int:
        stmt = delete(Invitation).where(Invitation.client_id == client_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
