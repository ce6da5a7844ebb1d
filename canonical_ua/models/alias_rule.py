from collections.abc import Callable
from typing import NamedTuple

from canonical_ua.models.agent_record import AgentRecord


class Rename(NamedTuple):
    """Substitute the family, keep the detected version."""

    family: str


class RenameWithVersion(NamedTuple):
    """Substitute both the family and the version with constants."""

    family: str
    major: int
    minor: int = 0
    patch: int = 0

    @property
    def target(self) -> AgentRecord:
        return AgentRecord(self.family, self.major, self.minor, self.patch)


class VersionMapEntry(NamedTuple):
    expression: str
    target: AgentRecord


class VersionMap(NamedTuple):
    """
    Per-version remapping of a family.

    Entry order matters: the first exact match wins, and the nearest-match
    fallback prefers later entries on ties.
    """

    entries: tuple[VersionMapEntry, ...]

    @classmethod
    def of(cls, *entries: tuple[str, str, int]) -> 'VersionMap':
        """
        Build a map from (expression, family, major) triples.

        >>> VersionMap.of(('2.1', 'chrome', 41)).entries[0].target
        AgentRecord(family='chrome', major=41, minor=0, patch=0)
        """
        return cls(
            tuple(
                VersionMapEntry(expression, AgentRecord(family, major))
                for expression, family, major in entries
            )
        )


class Computed(NamedTuple):
    """Arbitrary adjustment of the detected record."""

    transform: Callable[[AgentRecord], AgentRecord]


type AliasRule = Rename | RenameWithVersion | VersionMap | Computed
