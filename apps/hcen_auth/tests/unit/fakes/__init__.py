"""Test doubles shared across unit tests."""

from __future__ import annotations

import base64
import fnmatch
import math
import time
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
from jose import jwt

from apps.hcen_auth.application.audit.ports import AuthAuditEvent, AuthAuditEventType
from apps.hcen_auth.application.common.exceptions import StoreUnavailableError
from apps.hcen_auth.application.common.ports import StorePool
from apps.hcen_auth.application.users.ports import UserIdentity
from apps.hcen_auth.domain.enums import ClientType
from apps.hcen_auth.infrastructure.oauth import GubUyOidcClient, JwksIdTokenValidator


class FakeClock:
    """Controllable wall clock (also usable as a monotonic source)."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime.now(timezone.utc).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)

    def monotonic(self) -> float:
        return self._now.timestamp()


class InMemoryKeyValueStore:
    """KeyValueStore with TTLs driven by a FakeClock."""

    def __init__(self, pool: StorePool = StorePool.STATE, clock: FakeClock | None = None) -> None:
        self._pool = pool
        self._clock = clock or FakeClock()
        self._data: dict[str, tuple[str, float | None]] = {}
        self.failure: Exception | None = None

    @property
    def pool(self) -> StorePool:
        return self._pool

    def _now(self) -> float:
        return self._clock.monotonic()

    def _check_available(self, operation: str) -> None:
        if self.failure is not None:
            raise StoreUnavailableError(self._pool.value, operation, str(self.failure))

    def _live(self, key: str) -> tuple[str, float | None] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        _, deadline = entry
        if deadline is not None and deadline <= self._now():
            del self._data[key]
            return None
        return entry

    def keys(self) -> list[str]:
        return [key for key in list(self._data) if self._live(key) is not None]

    async def get(self, key: str) -> str | None:
        self._check_available("get")
        entry = self._live(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check_available("set")
        self._data[key] = (value, self._now() + ttl_seconds)

    async def delete(self, key: str) -> bool:
        self._check_available("delete")
        if self._live(key) is None:
            return False
        del self._data[key]
        return True

    async def exists(self, key: str) -> bool:
        self._check_available("exists")
        return self._live(key) is not None

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        self._check_available("expire")
        entry = self._live(key)
        if entry is None:
            return False
        self._data[key] = (entry[0], self._now() + ttl_seconds)
        return True

    async def replace(self, key: str, value: str, ttl_seconds: int) -> bool:
        self._check_available("replace")
        if self._live(key) is None:
            return False
        self._data[key] = (value, self._now() + ttl_seconds)
        return True

    async def ttl(self, key: str) -> int | None:
        self._check_available("ttl")
        entry = self._live(key)
        if entry is None or entry[1] is None:
            return None
        return math.ceil(entry[1] - self._now())

    async def get_and_delete(self, key: str) -> str | None:
        self._check_available("getdel")
        entry = self._live(key)
        if entry is None:
            return None
        del self._data[key]
        return entry[0]

    async def increment_window(self, key: str, window_seconds: int) -> int:
        self._check_available("incr")
        entry = self._live(key)
        if entry is None:
            entry = ("0", self._now() + window_seconds)
        count = int(entry[0]) + 1
        self._data[key] = (str(count), entry[1])
        return count

    async def delete_matching(self, pattern: str) -> int:
        self._check_available("scan")
        matched = [key for key in self.keys() if fnmatch.fnmatchcase(key, pattern)]
        for key in matched:
            del self._data[key]
        return len(matched)


class RecordingAuditSink:
    def __init__(self) -> None:
        self.events: list[AuthAuditEvent] = []

    async def record(self, event: AuthAuditEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[AuthAuditEventType]:
        return [event.event_type for event in self.events]


class FakeUserDirectory:
    def __init__(self, users: dict[str, UserIdentity] | None = None) -> None:
        self.users = dict(users or {})
        self.lookups: list[str] = []

    async def find_by_ci(self, ci: str) -> UserIdentity | None:
        self.lookups.append(ci)
        return self.users.get(ci)


class IdpStub:
    """gub.uy stand-in served through ``httpx.MockTransport``.

    Every request is recorded, so ``network_calls`` proves whether the
    broker talked to the IdP at all.
    """

    BASE_URL = "https://idp.test"
    ISSUER = "https://idp.test/oidc/v1"
    WEB_CLIENT_ID = "hcen-web"
    MOBILE_CLIENT_ID = "hcen-mobile"
    WEB_CLIENT_SECRET = "web-secret"
    SIGNING_SECRET = "idp-signing-secret-for-tests-0123456789"
    KID = "test-key"

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.subject = "12345678"
        self.nonce: str | None = None
        self.token_status = 200
        self.token_body: dict[str, Any] | None = None
        self.token_error: Exception | None = None
        self.extra_claims: dict[str, Any] = {"primer_nombre": "Ana", "primer_apellido": "Pérez"}
        self.userinfo: dict[str, Any] = {"primer_nombre": "Ana", "primer_apellido": "Pérez"}
        self.transport = httpx.MockTransport(self._handle)

    @property
    def network_calls(self) -> int:
        return len(self.requests)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]

    @property
    def jwk(self) -> dict[str, str]:
        key = base64.urlsafe_b64encode(self.SIGNING_SECRET.encode()).rstrip(b"=").decode()
        return {"kty": "oct", "kid": self.KID, "alg": "HS256", "k": key}

    def remember_nonce_from(self, authorization_url: str) -> None:
        """The IdP learns the nonce from the authorization request."""
        self.nonce = parse_qs(urlparse(authorization_url).query)["nonce"][0]

    def id_token(self, *, nonce: str | None = None, **overrides: Any) -> str:
        now = int(time.time())
        claims: dict[str, Any] = {
            "iss": self.ISSUER,
            "aud": self.WEB_CLIENT_ID,
            "sub": self.subject,
            "uid": self.subject,
            "iat": now,
            "exp": now + 300,
            "nonce": nonce if nonce is not None else self.nonce,
            **self.extra_claims,
        }
        claims.update(overrides)
        return jwt.encode(claims, self.SIGNING_SECRET, algorithm="HS256", headers={"kid": self.KID})

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/jwks":
            return httpx.Response(200, json={"keys": [self.jwk]})
        if path == "/token":
            if self.token_error is not None:
                raise self.token_error
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"error": "invalid_grant", "error_description": "Code already used"},
                )
            body = self.token_body or {
                "access_token": "idp-access-token",
                "token_type": "Bearer",
                "expires_in": 3600,
                "id_token": self.id_token(),
                "scope": "openid personal_info document",
            }
            return httpx.Response(200, json=body)
        if path == "/userinfo":
            return httpx.Response(200, json=self.userinfo)
        return httpx.Response(404)

    def validator(self, monotonic=time.monotonic) -> JwksIdTokenValidator:
        return JwksIdTokenValidator(
            jwks_uri=f"{self.BASE_URL}/jwks",
            issuer=self.ISSUER,
            audiences=[self.WEB_CLIENT_ID, self.MOBILE_CLIENT_ID],
            algorithms=["HS256"],
            transport=self.transport,
            monotonic=monotonic,
        )

    def client(self) -> GubUyOidcClient:
        return GubUyOidcClient(
            authorization_endpoint=f"{self.BASE_URL}/authorize",
            token_endpoint=f"{self.BASE_URL}/token",
            userinfo_endpoint=f"{self.BASE_URL}/userinfo",
            client_ids={
                ClientType.WEB: self.WEB_CLIENT_ID,
                ClientType.MOBILE: self.MOBILE_CLIENT_ID,
            },
            id_token_validator=self.validator(),
            web_client_secret=self.WEB_CLIENT_SECRET,
            acr_values="urn:iduruguay:nid:2 urn:iduruguay:nid:3",
            timeout_seconds=2.0,
            transport=self.transport,
        )
