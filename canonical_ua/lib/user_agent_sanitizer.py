import re

from canonical_ua.config import USER_AGENT_MAX_LENGTH

# Tokens that complicate parsing without changing the rendering engine.
# Each pattern removes its first occurrence only, in this order.
_STRIP_PATTERNS = (
    # Chrome, Opera and Firefox on iOS render with the platform UIWebView;
    # without their token the string is detected as the underlying ios_saf
    re.compile(r'(?:CriOS|OPiOS)/\d+\.\d+\.\d+\.\d+|FxiOS/\d+\.\d+'),
    # Vivaldi is identical to Chrome
    re.compile(r' vivaldi/[\d.]+\d+', re.IGNORECASE),
    # Facebook in-app browser [FBAN/...] or [FB_IAB/...]
    re.compile(r' \[(?:FB_IAB|FBAN|FBIOS|FB4A)/[^\]]+\]', re.IGNORECASE),
    # Electron runtime wrapper
    re.compile(r' Electron/[\d.]+\d+', re.IGNORECASE),
)


def sanitize_user_agent(user_agent: str) -> str:
    """
    Bound the user agent length and strip tokens known to cause misclassification.

    >>> sanitize_user_agent('Mozilla/5.0 Chrome/71.0.3578.98 Electron/4.0.0 Safari/537.36')
    'Mozilla/5.0 Chrome/71.0.3578.98 Safari/537.36'
    """
    # limit the length to avoid worst-case parsing performance
    user_agent = user_agent[:USER_AGENT_MAX_LENGTH]

    for pattern in _STRIP_PATTERNS:
        user_agent = pattern.sub('', user_agent, count=1)

    return user_agent
