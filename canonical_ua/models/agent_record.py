from typing import NamedTuple


class AgentRecord(NamedTuple):
    family: str
    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def from_parts(
        cls,
        family: str,
        major: str | int | None,
        minor: str | int | None = None,
        patch: str | int | None = None,
    ) -> 'AgentRecord':
        """
        Build a record from loosely typed version parts.

        Missing or non-numeric parts become 0 and the family is lowercased.

        >>> AgentRecord.from_parts('Chrome', '41', None, '2272')
        AgentRecord(family='chrome', major=41, minor=0, patch=2272)
        """
        return cls(family.lower(), _to_int(major), _to_int(minor), _to_int(patch))

    def to_version(self) -> str:
        """
        Format the version as a dotted string.

        >>> AgentRecord('ie', 11).to_version()
        '11.0.0'
        """
        return f'{self.major}.{self.minor}.{self.patch}'

    def without_patch(self) -> 'AgentRecord':
        return self if not self.patch else self._replace(patch=0)

    def __str__(self) -> str:
        return f'{self.family}/{self.to_version()}'


def _to_int(value: str | int | None) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    value = value.strip()
    return int(value) if value.isdecimal() else 0
