from __future__ import annotations

import hmac
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


VIA_TAG = "db"

SITE_TYPES: Tuple[str, ...] = ("Static", "Responsive", "Dynamic")


@dataclass(frozen=True)
class Submission:
    """One persisted contact-form record.

    Field names follow the JSON the front end posts, so ``site_type`` is
    serialized as ``siteType``.
    """

    name: str
    email: str
    site_type: Optional[str]
    budget: Optional[str]
    description: str
    via: str = VIA_TAG
    ts: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["siteType"] = data.pop("site_type")
        return {
            key: data[key]
            for key in ("name", "email", "siteType", "budget", "description", "via", "ts")
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Submission":
        """Build a record from stored JSON, ignoring unknown keys."""

        ts = data.get("ts")
        return cls(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            site_type=data.get("siteType"),
            budget=data.get("budget"),
            description=str(data.get("description") or ""),
            via=str(data.get("via") or VIA_TAG),
            ts=int(ts) if isinstance(ts, (int, float)) and not isinstance(ts, bool) else 0,
        )


@dataclass(frozen=True)
class Credential:
    """Opaque shared secret guarding the admin view.

    The token handed to an authorized caller is currently the secret
    itself; callers only ever compare against it or ask for a token, so a
    hashed or rotating scheme can replace this class without touching the
    gate.
    """

    _secret: Optional[str] = None

    @classmethod
    def from_value(cls, value: Optional[str]) -> "Credential":
        return cls(value or None)

    @property
    def configured(self) -> bool:
        return self._secret is not None

    def matches(self, candidate: Optional[str]) -> bool:
        if self._secret is None or not isinstance(candidate, str) or not candidate:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self._secret.encode("utf-8"))

    def issue_token(self) -> str:
        if self._secret is None:
            raise ValueError("No admin secret configured")
        return self._secret

    def __repr__(self) -> str:
        state = "configured" if self.configured else "unset"
        return f"Credential(<{state}>)"
