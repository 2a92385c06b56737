"""User Context — resolves the authenticated caller from the ambient request principal.

Invariants:
    - Outside any request scope, get_current_user() raises UserContextUnavailableError
      (programming error), it never pretends the caller is anonymous
    - Inside a scope without an authenticated identity it returns None (anonymous)
    - The principal is request-scoped (ContextVar): concurrent requests never see
      each other's identity

Design Decisions:
    - Token issuance and verification are external: an upstream gateway authenticates
      the caller and forwards identity headers, which principal_from_headers() turns
      into claims
    - Claims kept as (type, value) pairs: several role claims per principal
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator, Mapping, cast

from restaurants.core.domain_types import CurrentUser
from restaurants.core.errors import UserContextUnavailableError

CLAIM_USER_ID = "sub"
CLAIM_EMAIL = "email"
CLAIM_ROLE = "role"

USER_ID_HEADER = "x-user-id"
USER_EMAIL_HEADER = "x-user-email"
USER_ROLES_HEADER = "x-user-roles"


@dataclass(frozen=True)
class Principal:
    """Identity claims attached to one request."""
    claims: tuple[tuple[str, str], ...] = ()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.find_first(CLAIM_USER_ID)) and bool(self.find_first(CLAIM_EMAIL))

    def find_first(self, claim_type: str) -> str | None:
        for kind, value in self.claims:
            if kind == claim_type:
                return value
        return None

    def find_all(self, claim_type: str) -> list[str]:
        return [value for kind, value in self.claims if kind == claim_type]


ANONYMOUS = Principal()

_NO_REQUEST_SCOPE = object()
_request_principal: ContextVar[object] = ContextVar(
    "request_principal", default=_NO_REQUEST_SCOPE,
)


def principal_from_headers(headers: Mapping[str, str]) -> Principal:
    """Build claims from gateway identity headers; missing headers mean anonymous."""
    claims: list[tuple[str, str]] = []
    user_id = (headers.get(USER_ID_HEADER) or "").strip()
    email = (headers.get(USER_EMAIL_HEADER) or "").strip()
    if user_id:
        claims.append((CLAIM_USER_ID, user_id))
    if email:
        claims.append((CLAIM_EMAIL, email))
    for role in (headers.get(USER_ROLES_HEADER) or "").split(","):
        if role.strip():
            claims.append((CLAIM_ROLE, role.strip()))
    return Principal(tuple(claims))


@contextmanager
def request_scope(principal: Principal) -> Iterator[None]:
    """Bind a principal for the duration of one request."""
    token = _request_principal.set(principal)
    try:
        yield
    finally:
        _request_principal.reset(token)


class UserContext:
    """Reads the current request's principal as a CurrentUser."""

    def get_current_user(self) -> CurrentUser | None:
        value = _request_principal.get()
        if value is _NO_REQUEST_SCOPE:
            raise UserContextUnavailableError("User context is not present")
        principal = cast(Principal, value)
        if not principal.is_authenticated:
            return None
        return CurrentUser(
            id=principal.find_first(CLAIM_USER_ID) or "",
            email=principal.find_first(CLAIM_EMAIL) or "",
            roles=frozenset(principal.find_all(CLAIM_ROLE)),
        )
