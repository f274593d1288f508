"""Shared-secret gate in front of the stored submissions.

A caller is either anonymous or holds the access token issued by
:meth:`AccessGate.login`.  Every read re-checks the secret; a server with
no secret configured never authorizes anyone.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import Unauthorized
from .logsink import LogSink
from .store import SubmissionStore
from .types import Credential, Submission


COOKIE_NAME = "admin_key"
COOKIE_MAX_AGE = 7 * 24 * 60 * 60


class AccessGate:
    def __init__(self, credential: Credential, store: SubmissionStore, sink: LogSink) -> None:
        self.credential = credential
        self.store = store
        self.sink = sink

    def login(self, candidate: Optional[str], remote_addr: Optional[str] = None) -> str:
        """Check ``candidate`` and return the token to carry as a cookie."""

        caller = remote_addr or "unknown"
        state = "[present]" if candidate else "[missing]"
        self.sink.write(f"Login attempt from {caller} (provided_key:{state})")
        if not self.credential.matches(candidate):
            self.sink.write(f"Login FAILED for {caller}")
            raise Unauthorized()
        self.sink.write(f"Login SUCCESS for {caller}")
        return self.credential.issue_token()

    def logout(self, remote_addr: Optional[str] = None) -> None:
        """Forget the caller's token; the HTTP layer clears the cookie."""

        self.sink.write(f"Logout from {remote_addr or 'unknown'}")

    def authorize(self, key: Optional[str] = None, token: Optional[str] = None) -> None:
        """Accept an explicit ``key`` or the stored ``token``.

        An explicit key takes precedence over the token, as a query
        parameter overrides the cookie.
        """

        candidate = key or token
        if not self.credential.matches(candidate):
            raise Unauthorized()

    def list_submissions(
        self,
        key: Optional[str] = None,
        token: Optional[str] = None,
        remote_addr: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Submission]:
        candidate = key or token
        try:
            self.authorize(key=key, token=token)
        except Unauthorized:
            has_key = "yes" if candidate else "no"
            self.sink.write(
                f"Unauthorized /api/submissions access from {remote_addr or 'unknown'} (has_key:{has_key})"
            )
            raise
        return self.store.list(limit)
