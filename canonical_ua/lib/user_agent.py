import logging
from collections.abc import Mapping

from sentry_sdk import capture_exception

import canonical_ua.lib.sentry  # noqa: F401
from canonical_ua.config import USER_AGENT_CACHE_MAX_SIZE
from canonical_ua.lib.lru_cache import LRUCache, SynchronizedLRUCache
from canonical_ua.lib.user_agent_aliases import ALIASES, resolve_alias
from canonical_ua.lib.user_agent_baseline import (
    BASELINE_VERSIONS,
    get_baseline,
    is_unknown,
    meets_baseline,
    satisfies_requested,
)
from canonical_ua.lib.user_agent_parser import UNKNOWN_AGENT, UserAgentParser, parse_user_agent
from canonical_ua.lib.user_agent_sanitizer import sanitize_user_agent
from canonical_ua.lib.user_agent_shape import parse_canonical, parse_named, parse_normalized
from canonical_ua.models.agent_record import AgentRecord
from canonical_ua.models.alias_rule import AliasRule


class UserAgentClassifier:
    """
    Classify user agents into a canonical family and a patch-less version.

    Results of full parsing are memoized by the sanitized user agent. The
    classifier owns its cache; share one instance across threads only with a
    SynchronizedLRUCache.
    """

    __slots__ = ('_aliases', '_cache', '_parser')

    def __init__(
        self,
        parser: UserAgentParser = parse_user_agent,
        cache: LRUCache[str, AgentRecord] | None = None,
        aliases: Mapping[str, AliasRule] = ALIASES,
    ) -> None:
        self._parser = parser
        self._cache = cache if cache is not None else LRUCache(USER_AGENT_CACHE_MAX_SIZE)
        self._aliases = aliases

    def classify(self, user_agent: str) -> 'UserAgent':
        return UserAgent(self.resolve(user_agent))

    def normalize(self, user_agent: str) -> str:
        record = parse_canonical(user_agent)
        if record is not None:
            return str(record)

        record = self.resolve(user_agent)
        if record.family == UNKNOWN_AGENT.family:
            # classified names like 'opera coast/3.0.0' are not known to the parser
            named = parse_named(user_agent)
            if named is not None:
                record = resolve_alias(named, self._aliases)

        return str(record)

    def resolve(self, user_agent: str) -> AgentRecord:
        user_agent = sanitize_user_agent(user_agent)

        record = parse_normalized(user_agent)
        if record is not None:
            return record

        cache = self._cache
        record = cache.get(user_agent)
        if record is not None:
            return record

        logging.debug('User agent cache miss for %r', user_agent)
        record = resolve_alias(self._parse(user_agent), self._aliases)
        cache[user_agent] = record
        return record

    def _parse(self, user_agent: str) -> AgentRecord:
        try:
            return self._parser(user_agent)
        except Exception:
            capture_exception()
            logging.warning('Failed to parse user agent %r', user_agent, exc_info=True)
            return UNKNOWN_AGENT


class UserAgent:
    """Classification result of a single user agent."""

    __slots__ = ('record',)

    def __init__(self, record: AgentRecord) -> None:
        self.record = record

    @staticmethod
    def classify(user_agent: str) -> 'UserAgent':
        """Classify the user agent using the process-wide classifier."""
        return _CLASSIFIER.classify(user_agent)

    @staticmethod
    def normalize(user_agent: str) -> str:
        """
        Convert the user agent into the canonical 'family/major.minor.0' form.

        >>> UserAgent.normalize('Chrome/50.1.2')
        'chrome/50.1.0'
        """
        return _CLASSIFIER.normalize(user_agent)

    @staticmethod
    def get_baselines() -> Mapping[str, str]:
        return BASELINE_VERSIONS

    def get_family(self) -> str:
        return self.record.family

    def get_version(self) -> str:
        return self.record.to_version()

    def satisfies(self, expression: str) -> bool:
        """Check if the user agent satisfies both the requested range and its family baseline."""
        return satisfies_requested(self.record, expression)

    def get_baseline(self) -> str | None:
        return get_baseline(self.record.family)

    def meets_baseline(self) -> bool:
        return meets_baseline(self.record)

    def is_unknown(self) -> bool:
        """Check if the user agent is not supported or is older than its baseline."""
        return is_unknown(self.record)

    def __repr__(self) -> str:
        return f'{type(self).__qualname__}({str(self.record)!r})'


_CLASSIFIER = UserAgentClassifier(cache=SynchronizedLRUCache(USER_AGENT_CACHE_MAX_SIZE))
