"""
Redeem Invitation Use Case

Turns a setup token into a provisioned client principal and signs it in.
"""

import logging
from datetime import datetime

from portal.app.services.activity_recorder import ActivityRecorder
from portal.app.services.credentials import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    verify_password,
)
from portal.app.services.role_resolver import RoleResolver
from portal.app.services.route_gate import ROLE_HOME
from portal.app.services.session_issuer import open_session
from portal.app.services.totp import verified_factors
from portal.app.services.unit_of_work import UnitOfWork
from portal.domain.activities import InvitationAccepted
from portal.domain.base import utcnow
from portal.domain.entities import (
    AppRole,
    ClientAccount,
    Invitation,
    InvitationStatus,
    Role,
    User,
    UserRole,
    UserStatus,
)
from portal.domain.identity import Principal, ResolvedIdentity
from portal.libs.result import Error, Result, Return
from portal.app.use_cases.auth.dtos import IdentityInfo, PrincipalInfo

from .dtos import RedeemInvitationResponse

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired invitation link"


def _invalid() -> Result:
    return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))


def _account_exists(invitation: Invitation) -> Result:
    if invitation.status == InvitationStatus.pending:
        return Return.err(
            Error(
                "ACCOUNT_EXISTS",
                "An account already exists for this email. Sign in instead.",
            )
        )
    return _invalid()


def _bound_to(identity: ResolvedIdentity, client: ClientAccount) -> bool:
    return identity.role == Role.client and identity.client_id == client.id


def _client_profile(client: ClientAccount) -> dict:
    return {
        "role": AppRole.client.value,
        "client_id": str(client.id),
        "full_name": client.client_name,
    }


class RedeemInvitationUseCase:
    """
    Use case for completing account setup from an invitation.

    Business Rules:
    - The token must exist and not be past expires_at; any failure returns
      the same INVALID_TOKEN error
    - An account already bound to the invitation's client that accepts the
      submitted password is signed in (a repeated click is not an error)
    - An account bound elsewhere, or holding a confirmed email, is never
      signed in or claimed for: ACCOUNT_EXISTS while the token is pending
    - An unconfirmed, unbound account for the email is taken over: the token
      proves the address, its password is replaced, its MFA factors dropped
      and its sessions revoked
    - Re-entry never bypasses MFA: a bound account with a verified factor is
      sent to the sign-in form
    - Otherwise the pending -> accepted conditional update is the commit
      point; the principal is provisioned only after winning it
    - Two concurrent redeemers provision at most one principal
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, password: str) -> Result[RedeemInvitationResponse]:
        if len(password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        async with self.uow:
            now = utcnow()
            invitation = await self.uow.invitations.get_by_token(token)
            if (
                invitation is None
                or invitation.status == InvitationStatus.expired
                or invitation.is_expired(now)
            ):
                return _invalid()

            client = await self.uow.clients.get_by_id(invitation.client_id)
            if client is None or client.deleted_at is not None:
                return _invalid()

            existing = await self.uow.users.get_by_email(invitation.email)
            if existing is not None:
                identity = await RoleResolver(self.uow).resolve(Principal.from_user(existing))
                if _bound_to(identity, client):
                    return await self._reenter(existing, invitation, client, password, now)
                if existing.email_confirmed or identity.role != Role.none:
                    logger.warning(
                        f"Invitation {invitation.id} email is held by unrelated user {existing.id}"
                    )
                    return _account_exists(invitation)

            if invitation.status != InvitationStatus.pending:
                return _invalid()

            claimed = await self.uow.invitations.claim_pending(token, now)
            if not claimed:
                # Lost the race; the winner may be this same user
                email, client_id = invitation.email, client.id
                await self.uow.rollback()
                existing = await self.uow.users.get_by_email(email)
                invitation = await self.uow.invitations.get_by_token(token)
                client = await self.uow.clients.get_by_id(client_id)
                if existing is not None and invitation is not None and client is not None:
                    identity = await RoleResolver(self.uow).resolve(
                        Principal.from_user(existing)
                    )
                    if _bound_to(identity, client):
                        return await self._reenter(existing, invitation, client, password, now)
                return _invalid()

            if existing is None:
                user = User(
                    email=invitation.email,
                    password_hash=hash_password(password),
                    user_metadata=_client_profile(client),
                    email_confirmed=True,
                )
                user = await self.uow.users.create(user)
                await self.uow.user_roles.create(
                    UserRole(user_id=user.id, role=AppRole.client, client_id=client.id)
                )
            else:
                user = await self._take_over(existing, client, password)

            self.uow.publish_change(
                "client_invitations",
                {"id": str(invitation.id), "client_id": str(client.id)},
            )
            response = await self._sign_in(user, client, account_created=True)
            await self.uow.commit()
            logger.info(f"Invitation {invitation.id} accepted, provisioned user {user.id}")

            await ActivityRecorder(self.uow).record(
                client.id, InvitationAccepted(email=invitation.email)
            )
            return Return.ok(response)

    async def _take_over(self, user: User, client: ClientAccount, password: str) -> User:
        user.password_hash = hash_password(password)
        user.email_confirmed = True
        user.user_metadata = _client_profile(client)
        user = await self.uow.users.update(user)

        record = await self.uow.user_roles.get_by_user_id(user.id)
        if record is None:
            await self.uow.user_roles.create(
                UserRole(user_id=user.id, role=AppRole.client, client_id=client.id)
            )
        else:
            record.role = AppRole.client
            record.client_id = client.id
            await self.uow.user_roles.update(record)

        await self.uow.mfa_factors.delete_all_for_user(user.id)
        revoked = await self.uow.sessions.revoke_all_for_user(user.id)
        self.uow.publish_change("sessions", {"user_id": str(user.id), "event": "revoked"})
        logger.warning(
            f"Unconfirmed user {user.id} taken over by invitation setup, "
            f"{revoked} sessions revoked"
        )
        return user

    async def _reenter(
        self,
        user: User,
        invitation: Invitation,
        client: ClientAccount,
        password: str,
        now: datetime,
    ) -> Result[RedeemInvitationResponse]:
        if not verify_password(password, user.password_hash):
            return _account_exists(invitation)

        if user.status == UserStatus.disabled:
            return Return.err(Error("USER_DISABLED", "User account is disabled"))

        # A second factor is only asked for on the sign-in form
        if verified_factors(await self.uow.mfa_factors.list_by_user_id(user.id)):
            return _account_exists(invitation)

        if invitation.status == InvitationStatus.pending:
            # Best effort; losing this claim to the other click is fine
            await self.uow.invitations.claim_pending(invitation.token, now)

        response = await self._sign_in(user, client, account_created=False)
        await self.uow.commit()
        logger.info(f"Invitation {invitation.id} re-entered by existing user {user.id}")
        return Return.ok(response)

    async def _sign_in(
        self, user: User, client: ClientAccount, account_created: bool
    ) -> RedeemInvitationResponse:
        issued = await open_session(self.uow, user)
        principal = Principal.from_user(user)
        identity = await RoleResolver(self.uow).resolve(principal)
        return RedeemInvitationResponse(
            access_token=issued.access_token,
            refresh_token=issued.refresh_token,
            expires_in=issued.expires_in,
            session_id=str(issued.session.id),
            user=PrincipalInfo(
                id=str(user.id),
                email=user.email,
                full_name=principal.user_metadata.get("full_name"),
            ),
            identity=IdentityInfo.from_identity(identity),
            redirect_to=ROLE_HOME[identity.role],
            client_id=str(client.id),
            account_created=account_created,
        )
