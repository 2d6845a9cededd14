"""Entity tests."""

from datetime import datetime, timedelta, timezone

import pytest

from apps.hcen_auth.domain.entities import AuthorizationState, RateLimitCounter, Session
from apps.hcen_auth.domain.enums import ClientType

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestAuthorizationState:
    def test_record_uses_camel_case_fields(self) -> None:
        state = AuthorizationState(
            state_token="S",
            nonce="N",
            client_type=ClientType.MOBILE,
            redirect_uri="hcen://callback",
            created_at=NOW,
            code_challenge="C",
        )

        record = state.to_record()

        assert record == {
            "nonce": "N",
            "clientType": "MOBILE",
            "redirectUri": "hcen://callback",
            "codeChallenge": "C",
            "createdAt": NOW.isoformat(),
        }
        assert AuthorizationState.from_record("S", record) == state

    def test_from_record_rejects_unknown_client_type(self) -> None:
        record = {
            "nonce": "N",
            "clientType": "DESKTOP",
            "redirectUri": "https://app/cb",
            "createdAt": NOW.isoformat(),
        }

        with pytest.raises(ValueError):
            AuthorizationState.from_record("S", record)


class TestSession:
    @pytest.fixture
    def session(self) -> Session:
        return Session(
            session_id="sid",
            subject_id="12345678",
            client_type=ClientType.WEB,
            issued_at=NOW,
            expires_at=NOW + timedelta(hours=1),
            attributes={"role": "PATIENT"},
        )

    def test_remaining_seconds(self, session: Session) -> None:
        assert session.remaining_seconds(NOW) == 3600
        assert session.remaining_seconds(NOW + timedelta(hours=2)) == 0

    def test_extended_keeps_identifier(self, session: Session) -> None:
        later = NOW + timedelta(minutes=30)

        extended = session.extended(later, 3600)

        assert extended.session_id == session.session_id
        assert extended.issued_at == NOW
        assert extended.expires_at == later + timedelta(hours=1)

    def test_record_roundtrip(self, session: Session) -> None:
        assert Session.from_record(session.to_record()) == session


class TestRateLimitCounter:
    def test_remaining_and_exceeded(self) -> None:
        counter = RateLimitCounter("10.0.0.1", "auth:callback", 4, NOW, limit=3)

        assert counter.remaining == 0
        assert counter.exceeded
