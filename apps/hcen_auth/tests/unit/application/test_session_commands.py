"""Session command and query tests."""

import pytest

from apps.hcen_auth.application.session.commands import LogoutInteractor, RefreshSessionInteractor
from apps.hcen_auth.application.session.queries import GetSessionQueryService
from apps.hcen_auth.application.session.services import SessionManager
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.domain.exceptions import AuthenticationError, AuthErrorKind
from apps.hcen_auth.infrastructure.security import JwtSessionTokenService


@pytest.fixture
def token_service() -> JwtSessionTokenService:
    return JwtSessionTokenService(secret_key="test-secret-key-for-testing-only")


@pytest.fixture
def manager(session_store, audit_sink, clock) -> SessionManager:
    return SessionManager(session_store, audit_sink, clock=clock)


class TestGetSessionQueryService:
    @pytest.mark.asyncio
    async def test_resolves_token_to_live_session(self, token_service, manager) -> None:
        session = await manager.create("12345678", ClientType.WEB)
        token = token_service.issue(session)

        result = await GetSessionQueryService(token_service, manager).execute(token)

        assert result.session_id == session.session_id

    @pytest.mark.asyncio
    async def test_token_outliving_its_session_is_rejected(self, token_service, manager) -> None:
        session = await manager.create("12345678", ClientType.WEB)
        token = token_service.issue(session)
        await manager.invalidate(session.session_id)

        with pytest.raises(AuthenticationError) as exc_info:
            await GetSessionQueryService(token_service, manager).execute(token)

        assert exc_info.value.kind is AuthErrorKind.TOKEN_EXPIRED

    @pytest.mark.asyncio
    async def test_subject_mismatch_is_invalid_token(self, token_service, manager) -> None:
        session = await manager.create("12345678", ClientType.WEB)
        forged = token_service.issue(
            type(session)(
                session_id=session.session_id,
                subject_id="99999999",
                client_type=session.client_type,
                issued_at=session.issued_at,
                expires_at=session.expires_at,
            )
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await GetSessionQueryService(token_service, manager).execute(forged)

        assert exc_info.value.kind is AuthErrorKind.INVALID_TOKEN


class TestRefreshSessionInteractor:
    @pytest.mark.asyncio
    async def test_refresh_issues_new_token_for_same_session(
        self, token_service, manager, clock
    ) -> None:
        # Arrange
        session = await manager.create("12345678", ClientType.MOBILE)
        token = token_service.issue(session)
        clock.advance(600)

        # Act
        issued = await RefreshSessionInteractor(token_service, manager).execute(token)

        # Assert
        assert issued.session.session_id == session.session_id
        assert issued.session.expires_at > session.expires_at
        assert issued.expires_in == 3600
        assert token_service.decode(issued.session_token).session_id == session.session_id

    @pytest.mark.asyncio
    async def test_refresh_with_garbage_token_fails(self, token_service, manager) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await RefreshSessionInteractor(token_service, manager).execute("not-a-jwt")

        assert exc_info.value.kind is AuthErrorKind.INVALID_TOKEN


class TestLogoutInteractor:
    @pytest.mark.asyncio
    async def test_logout_removes_session(self, token_service, manager) -> None:
        session = await manager.create("12345678", ClientType.WEB)
        token = token_service.issue(session)

        removed = await LogoutInteractor(token_service, manager).execute(token)

        assert removed is True
        assert not await manager.exists(session.session_id)

    @pytest.mark.asyncio
    async def test_second_logout_is_harmless(self, token_service, manager) -> None:
        session = await manager.create("12345678", ClientType.WEB)
        token = token_service.issue(session)
        interactor = LogoutInteractor(token_service, manager)
        await interactor.execute(token)

        assert await interactor.execute(token) is False
