"""Local staging store: the on-disk holding area for staged artifacts"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Set, Tuple

from ..api.exceptions import ConfigError, StagingStateError, TransportError
from ..constants import PROFILE_ID_PATTERN, STAGING_COMMITTED_FILE, STAGING_INDEX_FILE
from ..models.artifact import Artifact
from ..utils.file_utils import copy_file, list_relative_files, write_json

logger = logging.getLogger(__name__)


class LocalStagingStore:
    """Accumulates artifacts under ``root/<profile id>/<repository path>``

    Modules write sequentially; there is no locking, so two writers must
    never share a profile directory.
    """

    def __init__(self, root: Path):
        """
        Initialize local staging store

        Args:
            root: Staging root directory
        """
        self.root = Path(root)
        self._consumed: Set[str] = set()

    def profile_directory(self, profile_id: str) -> Path:
        """Get the staging directory of a profile"""
        if not PROFILE_ID_PATTERN.match(profile_id):
            raise ConfigError(f"Invalid staging profile id: {profile_id!r}")
        return self.root / profile_id

    def prepare(self, profile_id: str) -> Path:
        """
        Create (if needed) and return the staging directory of a profile

        Content left by an earlier, successfully committed build is removed
        so it is never uploaded twice.
        """
        directory = self.profile_directory(profile_id)
        try:
            if self.is_committed(profile_id):
                logger.info(f"Clearing already committed content of profile {profile_id}")
                shutil.rmtree(directory)
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TransportError(f"Cannot create staging directory {directory}: {e}", e) from e
        return directory

    def stage(self, file: Path, artifact: Artifact, staging_directory: Path) -> List[str]:
        """
        Copy an artifact (and its descriptor metadata) into a staging directory

        Writing the same coordinates again silently replaces the earlier copy.

        Args:
            file: Content to stage
            artifact: Artifact the content belongs to
            staging_directory: Profile staging directory from prepare()

        Returns:
            Relative paths written
        """
        written = [(Path(file), artifact.repository_path)]
        descriptor = artifact.descriptor
        if descriptor is not None:
            written.append((descriptor.file, artifact.descriptor_path))

        try:
            for source, relative_path in written:
                target = staging_directory / relative_path
                copy_file(source, target)
                logger.debug(f"Staged {source} -> {target}")
            self._append_index(staging_directory, [rel for _, rel in written])
        except OSError as e:
            raise TransportError(
                f"Failed to stage {artifact.coordinates} into {staging_directory}: {e}", e
            ) from e

        return [rel for _, rel in written]

    def profile_ids(self) -> List[str]:
        """List profile ids with staged content that was not committed yet"""
        if not self.root.is_dir():
            return []

        return sorted(
            entry.name for entry in self.root.iterdir()
            if entry.is_dir()
            and PROFILE_ID_PATTERN.match(entry.name)
            and not (entry / STAGING_COMMITTED_FILE).exists()
            and self._listing(entry)
        )

    def files(self, profile_id: str) -> List[Tuple[str, Path]]:
        """
        List staged files of a profile in staging order

        Returns:
            (relative path, absolute path) tuples
        """
        directory = self.profile_directory(profile_id)
        return [(rel, directory / rel) for rel in self._listing(directory)]

    def consume(self, profile_id: str) -> List[Tuple[str, Path]]:
        """Hand a profile's content to a remote commit, at most once per store"""
        if profile_id in self._consumed:
            raise StagingStateError(
                f"Staged content of profile {profile_id} was already committed"
            )
        self._consumed.add(profile_id)
        return self.files(profile_id)

    def is_consumed(self, profile_id: str) -> bool:
        return profile_id in self._consumed

    def is_committed(self, profile_id: str) -> bool:
        """Check if a profile's content already went into a staging repository"""
        return (self.profile_directory(profile_id) / STAGING_COMMITTED_FILE).exists()

    def mark_committed(self, profile_id: str, repository_id: str) -> None:
        """Record that a profile's content was uploaded; the files stay on disk"""
        marker = self.profile_directory(profile_id) / STAGING_COMMITTED_FILE
        try:
            write_json(marker, {
                "repository_id": repository_id,
                "committed": datetime.now().isoformat(),
            })
        except OSError as e:
            raise TransportError(f"Cannot record commit of profile {profile_id}: {e}", e) from e

    def _listing(self, directory: Path) -> List[str]:
        # Index order first, then anything copied in by hand
        on_disk = list_relative_files(
            directory, exclude=[STAGING_INDEX_FILE, STAGING_COMMITTED_FILE]
        )
        present = set(on_disk)
        ordered = [rel for rel in self._read_index(directory) if rel in present]
        seen = set(ordered)
        ordered.extend(rel for rel in on_disk if rel not in seen)
        return ordered

    @staticmethod
    def _read_index(directory: Path) -> List[str]:
        index_file = directory / STAGING_INDEX_FILE
        if not index_file.exists():
            return []

        entries = []
        for line in index_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and line not in entries:
                entries.append(line)
        return entries

    def _append_index(self, directory: Path, relative_paths: List[str]) -> None:
        known = set(self._read_index(directory))
        new_entries = [rel for rel in relative_paths if rel not in known]
        if not new_entries:
            return

        with open(directory / STAGING_INDEX_FILE, "a", encoding="utf-8") as f:
            for rel in new_entries:
                f.write(rel + "\n")
