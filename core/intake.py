"""Contact-form intake: validate one submission and persist it."""

from __future__ import annotations

import math
import re
import time
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import ValidationError
from .logsink import LogSink
from .store import SubmissionStore
from .types import SITE_TYPES, VIA_TAG, Submission


MAX_DESCRIPTION_WORDS = 300

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
BUDGET_PATTERN = re.compile(r"^\d+(\.\d+)?$")

# Whitespace and line terminators as the browser sees them, so word counts
# agree with the contact form.
_WS = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
_TRIM_PATTERN = re.compile(rf"\A{_WS}+|{_WS}+\Z")
_SPLIT_PATTERN = re.compile(rf"{_WS}+")


def count_words(text: Optional[str]) -> int:
    """Count whitespace-delimited words; blank text has none."""

    if not text:
        return 0
    trimmed = _TRIM_PATTERN.sub("", text)
    if not trimmed:
        return 0
    return len([word for word in _SPLIT_PATTERN.split(trimmed) if word])


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _site_type(value: Any) -> Optional[str]:
    raw = _text(value).strip()
    if not raw:
        return None
    for option in SITE_TYPES:
        if option.lower() == raw.lower():
            return option
    raise ValidationError("Invalid site type")


def _budget(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        raise ValidationError("Invalid budget")
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            raise ValidationError("Invalid budget")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        raw = str(value)
    else:
        raw = _text(value).strip()
    if not raw:
        return None
    if not BUDGET_PATTERN.match(raw):
        raise ValidationError("Invalid budget")
    return raw


def validate_submission(payload: Mapping[str, Any], *, ts: int = 0) -> Submission:
    """Check ``payload`` and build the record that would be stored.

    Raises :class:`ValidationError` with the reason shown to the caller.
    """

    name = _text(payload.get("name")).strip()
    email = _text(payload.get("email")).strip()
    if not name or not email:
        raise ValidationError("Name and email are required")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email")

    description = _text(payload.get("description"))
    if count_words(description) > MAX_DESCRIPTION_WORDS:
        raise ValidationError(f"Description must be {MAX_DESCRIPTION_WORDS} words or fewer")

    return Submission(
        name=name,
        email=email,
        site_type=_site_type(payload.get("siteType")),
        budget=_budget(payload.get("budget")),
        description=description,
        via=VIA_TAG,
        ts=ts,
    )


def _now_ms() -> int:
    return int(time.time() * 1000)


class IntakeService:
    """Validate contact submissions and prepend them to the store."""

    def __init__(
        self,
        store: SubmissionStore,
        sink: LogSink,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.store = store
        self.sink = sink
        self.clock = clock

    def submit(self, payload: Optional[Mapping[str, Any]]) -> Submission:
        if not isinstance(payload, Mapping):
            payload = {}
        submission = validate_submission(payload, ts=self.clock())
        self.store.append(submission)
        self.sink.write(f"Saved to DB from {submission.email} ({submission.name})")
        return submission

    @staticmethod
    def acknowledgement() -> Dict[str, str]:
        return {"message": "Submission saved"}
