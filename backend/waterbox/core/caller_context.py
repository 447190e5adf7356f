"""Caller Context — the resolved identity the core receives for every operation.

Invariants:
    - Built by the shell from gateway headers; core never parses tokens
    - roles is a frozenset of upper-cased role names (order and case never matter)
    - has_any_role() is the only permission question the core can ask

Design Decisions:
    - Frozen dataclass: one identity per request, passed down read-only
    - Roles parsed from a comma-separated header value: the gateway flattens
      the token's realm roles before forwarding
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CallerContext:
    """Caller identity: subject id, display username and role set."""
    id: str
    username: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_any_role(self, *roles: str) -> bool:
        return any(r.upper() in self.roles for r in roles)


def parse_roles(raw: str | None) -> frozenset[str]:
    """Split a comma-separated role header, dropping blanks and a ROLE_ prefix."""
    if not raw:
        return frozenset()
    roles = set()
    for part in raw.split(","):
        role = part.strip().upper()
        if role.startswith("ROLE_"):
            role = role[len("ROLE_"):]
        if role:
            roles.add(role)
    return frozenset(roles)


def build_caller_context(
    user_id: str, username: str | None, raw_roles: str | None,
) -> CallerContext:
    """Assemble a CallerContext; username falls back to the subject id."""
    return CallerContext(
        id=user_id,
        username=username or user_id,
        roles=parse_roles(raw_roles),
    )
