from collections.abc import Mapping

import pytest

from canonical_ua.lib.lru_cache import LRUCache
from canonical_ua.lib.user_agent import UserAgentClassifier
from canonical_ua.lib.user_agent_parser import UNKNOWN_AGENT
from canonical_ua.models.agent_record import AgentRecord


class StubParser:
    """User agent parser returning fixed records and recording every call."""

    def __init__(self, records: Mapping[str, AgentRecord]) -> None:
        self.records = records
        self.calls: list[str] = []

    def __call__(self, user_agent: str) -> AgentRecord:
        self.calls.append(user_agent)
        return self.records.get(user_agent, UNKNOWN_AGENT)


@pytest.fixture
def stub_parser() -> StubParser:
    return StubParser({
        'Mozilla/5.0 Edge/16.16299': AgentRecord('Edge', 16, 16299, 15),
        'Mozilla/5.0 CriOS': AgentRecord('Chrome Mobile iOS', 56, 0, 2924),
        'Mozilla/5.0 OPR/30': AgentRecord('Opera', 30, 0, 1835),
        'Mozilla/5.0 MSIE 6.0': AgentRecord('IE', 6, 0, 0),
        'Mozilla/5.0 MSIE 7.0': AgentRecord('IE', 7, 0, 0),
        'Mozilla/5.0 Chrome/71.0.3578.98 Safari/537.36': AgentRecord('Chrome', 71, 0, 3578),
    })


@pytest.fixture
def classifier(stub_parser: StubParser) -> UserAgentClassifier:
    return UserAgentClassifier(parser=stub_parser, cache=LRUCache(16))
