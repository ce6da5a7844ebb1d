"""
npm-style semantic version ranges, evaluated with packaging.specifiers.

Supported expressions:
- wildcards: "*", "x", ""
- X-ranges and partial versions: "10", "9.9.*", "18.9" (any version with that prefix)
- comparators: ">=7", "<2.1", ">1", "<=3.6", "=1.2.3"
- tilde and caret ranges: "~1.2", "^4"
- hyphen ranges: "1.2 - 2.3"
- comparator sets separated by whitespace (all must hold) and alternatives
  separated by "||" (any may hold)
"""

import re
from functools import lru_cache

import cython
from packaging.specifiers import SpecifierSet
from packaging.version import Version


class InvalidRangeError(ValueError):
    pass


_COMPARATOR_RE = re.compile(
    r'^(?P<op><=|>=|<|>|=|~|\^)?v?(?P<major>\d+|[xX*])?(?:\.(?P<minor>\d+|[xX*]))?(?:\.(?P<patch>\d+|[xX*]))?$'
)
_OPERATOR_SPACE_RE = re.compile(r'(<=|>=|<|>|=|~|\^)\s+')
_HYPHEN_RE = re.compile(r'\s+-\s+')

# matches no release version
_NOTHING = '<0'


@cython.cfunc
def _parse_partial(match: re.Match[str]) -> tuple[int, ...]:
    """Collect the numeric version parts, stopping at the first wildcard or missing part."""
    parts: list[int] = []
    for name in ('major', 'minor', 'patch'):
        value = match[name]
        if value is None or not value.isdecimal():
            break
        parts.append(int(value))
    return tuple(parts)


@cython.cfunc
def _join(parts: tuple[int, ...]) -> str:
    return '.'.join(map(str, parts))


@cython.cfunc
def _bump(parts: tuple[int, ...]) -> str:
    """Smallest version above every version with the given prefix."""
    return _join((*parts[:-1], parts[-1] + 1))


def _comparator_specifiers(comparator: str) -> list[str]:
    match = _COMPARATOR_RE.fullmatch(comparator)
    if match is None:
        raise InvalidRangeError(f'Invalid version comparator {comparator!r}')

    op = match['op'] or '='
    parts = _parse_partial(match)
    n: cython.int = len(parts)

    if n == 0:
        return [_NOTHING] if op in {'<', '>'} else []

    version = _join(parts)

    if op == '=':
        return [f'=={version}' if n == 3 else f'=={version}.*']
    if op in {'>=', '<'}:
        return [f'{op}{version}']
    if op == '>':
        return [f'>{version}' if n == 3 else f'>={_bump(parts)}']
    if op == '<=':
        return [f'<={version}' if n == 3 else f'<{_bump(parts)}']
    if op == '~':
        return [f'>={version}', f'<{_bump(parts[:2])}']

    # caret: allow changes that do not modify the left-most non-zero part
    upper_index: cython.int = 0
    while upper_index < n - 1 and parts[upper_index] == 0:
        upper_index += 1
    return [f'>={version}', f'<{_bump(parts[: upper_index + 1])}']


@lru_cache(maxsize=512)
def parse_range(expression: str) -> tuple[SpecifierSet, ...]:
    """
    Compile a range expression into alternative specifier sets.

    >>> parse_range('9.9.*')
    (<SpecifierSet('==9.9.*')>,)
    """
    result: list[SpecifierSet] = []

    for alternative in expression.split('||'):
        alternative = _OPERATOR_SPACE_RE.sub(r'\1', alternative.strip())
        specifiers: list[str] = []

        hyphen = _HYPHEN_RE.split(alternative)
        if len(hyphen) == 2:
            specifiers.extend(_comparator_specifiers('>=' + hyphen[0]))
            specifiers.extend(_comparator_specifiers('<=' + hyphen[1]))
        elif len(hyphen) > 2:
            raise InvalidRangeError(f'Invalid hyphen range {alternative!r}')
        else:
            for comparator in alternative.split():
                specifiers.extend(_comparator_specifiers(comparator))

        result.append(SpecifierSet(','.join(specifiers)))

    return tuple(result)


def satisfies(version: str, expression: str) -> bool:
    """
    Check whether the dotted version satisfies the range expression.

    Raises InvalidRangeError if the expression cannot be parsed.

    >>> satisfies('7.0.0', '>=7')
    True
    >>> satisfies('18.10.0', '18.9')
    False
    """
    v = Version(version)
    return any(specifier_set.contains(v) for specifier_set in parse_range(expression))
