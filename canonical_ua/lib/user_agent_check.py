from functools import lru_cache

from canonical_ua.lib.user_agent import UserAgent


@lru_cache(maxsize=512)
def is_browser_supported(user_agent: str, expression: str = '*') -> bool:
    """
    Check if the given user agent is a supported browser satisfying the version range.

    >>> is_browser_supported('ie/6')
    False
    """
    # support empty user agents
    if not user_agent:
        return True

    return UserAgent.classify(user_agent).satisfies(expression)
