import re

from canonical_ua.config import NORMALIZED_USER_AGENT_MAX_LENGTH
from canonical_ua.models.agent_record import AgentRecord

_NORMALIZED_RE = re.compile(r'(\w+)/(\d+)(?:\.(\d+)(?:\.(\d+))?)?', re.IGNORECASE)

# family names produced by classification may contain spaces
_NAMED_RE = re.compile(r'([^/]+)/(\d+)(?:\.(\d+)(?:\.(\d+))?)?')


def parse_normalized(user_agent: str) -> AgentRecord | None:
    """
    Recognize a user agent that is already in the family/major.minor.patch form.

    Returns None for any other input. The patch component is always dropped.

    >>> parse_normalized('Chrome/50.1.2')
    AgentRecord(family='chrome', major=50, minor=1, patch=0)
    >>> parse_normalized('Mozilla/5.0 (Windows NT 10.0)') is None
    True
    """
    # avoid running the regex on strings that cannot possibly match
    if len(user_agent) >= NORMALIZED_USER_AGENT_MAX_LENGTH:
        return None

    return parse_canonical(user_agent)


def parse_canonical(user_agent: str) -> AgentRecord | None:
    """
    Recognize the canonical family/major.minor.patch form of any length.

    >>> parse_canonical('VeryLongFamilyName/100.100.100')
    AgentRecord(family='verylongfamilyname', major=100, minor=100, patch=0)
    """
    match = _NORMALIZED_RE.fullmatch(user_agent)
    if match is None:
        return None

    return AgentRecord.from_parts(match[1], match[2], match[3])


def parse_named(user_agent: str) -> AgentRecord | None:
    """
    Recognize a name/version pair whose name may contain any character except '/'.

    >>> parse_named('Opera Coast/3.0.5')
    AgentRecord(family='opera coast', major=3, minor=0, patch=0)
    """
    match = _NAMED_RE.fullmatch(user_agent)
    if match is None:
        return None

    return AgentRecord.from_parts(match[1], match[2], match[3])
