"""Coordination context shared by the modules of one build"""

import logging
from typing import List, Optional

from ..api.exceptions import StagingStateError
from ..core.local_store import LocalStagingStore
from ..models.build import BuildContext
from ..models.result import RemoteStagingResult

logger = logging.getLogger(__name__)


class StagingSession:
    """State of one build's staged deploy

    Created at build start, handed to every module's deploy call and
    closed after the remote commit (or when the build is abandoned).
    """

    def __init__(self, build: BuildContext, store: LocalStagingStore, resume: bool = False):
        """
        Initialize staging session

        Args:
            build: Build context
            store: Local staging store for this build
            resume: Treat content already under the staging root as staged
                by earlier modules of this build (one process per module)
        """
        self.build = build
        self.store = store
        self.staged_profiles: List[str] = []
        self.remote_result: Optional[RemoteStagingResult] = None
        self._closed = False

        if resume:
            self.staged_profiles.extend(store.profile_ids())
            if self.staged_profiles:
                logger.debug(f"Resuming with staged profiles: {', '.join(self.staged_profiles)}")

    @property
    def committed(self) -> bool:
        return self.remote_result is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_staged_content(self) -> bool:
        """Check if any module of this build staged locally"""
        return bool(self.staged_profiles)

    def ensure_open(self) -> None:
        """Raise if the session can no longer be used"""
        if self._closed:
            raise StagingStateError("Staging session is closed")

    def record_staged(self, profile_id: str) -> None:
        """Remember that a module staged content under a profile"""
        if profile_id not in self.staged_profiles:
            self.staged_profiles.append(profile_id)

    def mark_committed(self, result: RemoteStagingResult) -> None:
        """Record the remote commit; a build commits at most once"""
        if self.committed:
            raise StagingStateError("Staged content of this build was already committed")
        self.remote_result = result

    def close(self) -> None:
        """Tear down the session; staged files stay on disk"""
        if not self._closed:
            self._closed = True
            if self.has_staged_content and not self.committed:
                logger.info(
                    f"Session closed without remote commit; staged content kept in {self.store.root}"
                )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
