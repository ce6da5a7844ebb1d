import re
from collections.abc import Callable
from copy import copy

from ua_parser import BasicResolver, Parser, load_builtins
from ua_parser.matchers import UserAgentMatcher

from canonical_ua.models.agent_record import AgentRecord

type UserAgentParser = Callable[[str], AgentRecord]

UNKNOWN_AGENT = AgentRecord('other', 0)


def _case_insensitive(matcher: UserAgentMatcher) -> UserAgentMatcher:
    result = copy(matcher)
    result.pattern = re.compile(matcher.regex, re.IGNORECASE)
    return result


# the builtin resolvers that bulk-compile patterns would drop the flag
_PARSER = Parser(BasicResolver(([_case_insensitive(m) for m in load_builtins()[0]], [], [])))


def parse_user_agent(user_agent: str) -> AgentRecord:
    """
    Parse the browser family and version out of a user agent string.

    Matching ignores case. Unrecognized input produces the 'other' family.
    """
    result = _PARSER.parse_user_agent(user_agent)
    if result is None:
        return UNKNOWN_AGENT
    return AgentRecord.from_parts(result.family, result.major, result.minor, result.patch)
