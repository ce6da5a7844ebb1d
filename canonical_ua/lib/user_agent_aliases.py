"""
Mappings between the families detected by the user agent parser and the
canonical family names.

Only families listed in the baseline table are supported, so every alias
should ultimately resolve to one of them. Multiple names may map to the same
canonical family.
"""

import sys
from collections.abc import Mapping
from types import MappingProxyType

import cython

from canonical_ua.lib.semver_range import satisfies
from canonical_ua.models.agent_record import AgentRecord
from canonical_ua.models.alias_rule import (
    AliasRule,
    Computed,
    Rename,
    RenameWithVersion,
    VersionMap,
    VersionMapEntry,
)

ALIASES: Mapping[str, AliasRule] = MappingProxyType({
    'blackberry webkit': Rename('bb'),
    'blackberry': Rename('bb'),
    #
    'pale moon (firefox variant)': Rename('firefox'),
    'pale moon': Rename('firefox'),
    'firefox mobile': Rename('firefox_mob'),
    'firefox namoroka': Rename('firefox'),
    'firefox shiretoko': Rename('firefox'),
    'firefox minefield': Rename('firefox'),
    'firefox alpha': Rename('firefox'),
    'firefox beta': Rename('firefox'),
    'microb': Rename('firefox'),
    'mozilladeveloperpreview': Rename('firefox'),
    'iceweasel': Rename('firefox'),
    #
    'opera tablet': Rename('opera'),
    'opera mobile': Rename('op_mob'),
    'opera mini': Rename('op_mini'),
    #
    'chrome mobile': Rename('chrome'),
    'chrome mobile webview': Rename('chrome'),
    'chrome frame': Rename('chrome'),
    'chromium': Rename('chrome'),
    'headlesschrome': Rename('chrome'),
    #
    'ie mobile': Rename('ie_mob'),
    'ie large screen': Rename('ie'),
    'internet explorer': Rename('ie'),
    'edge': Rename('ie'),
    'edge mobile': Rename('ie'),
    'uc browser': VersionMap.of(
        ('10', 'uc browser', 0),
        ('9.9.*', 'ie', 10),
    ),
    #
    'chrome mobile ios': Rename('ios_chr'),
    'mobile safari': Rename('ios_saf'),
    'iphone': Rename('ios_saf'),
    'iphone simulator': Rename('ios_saf'),
    'mobile safari uiwebview': Rename('ios_saf'),
    'mobile safari ui/wkwebview': Rename('ios_saf'),
    #
    'samsung internet': Rename('samsung_mob'),
    'phantomjs': RenameWithVersion('safari', 5),
    #
    'yandex browser': VersionMap.of(
        ('18.9', 'chrome', 68),
        ('18.7', 'chrome', 67),
        ('18.6', 'chrome', 66),
        ('18.5', 'chrome', 65),
        ('18.4', 'chrome', 65),
        ('18.3', 'chrome', 64),
        ('18.2', 'chrome', 63),
        ('18.1', 'chrome', 63),
        ('17.11', 'chrome', 62),
        ('17.10', 'chrome', 61),
        ('17.9', 'chrome', 60),
        ('17.8', 'chrome', 59),
        ('17.7', 'chrome', 59),
        ('17.6', 'chrome', 58),
        ('17.5', 'chrome', 57),
        ('17.4', 'chrome', 57),
        ('17.3', 'chrome', 56),
        ('17.2', 'chrome', 55),
        ('17.1', 'chrome', 55),
        ('16.11', 'chrome', 54),
        ('16.10', 'chrome', 51),
        ('16.9', 'chrome', 51),
        ('16.8', 'chrome', 51),
        ('16.7', 'chrome', 51),
        ('16.6', 'chrome', 50),
        ('16.5', 'chrome', 49),
        ('16.4', 'chrome', 49),
        ('16.3', 'chrome', 47),
        ('16.2', 'chrome', 47),
        ('16.1', 'chrome', 47),
        ('15.12', 'chrome', 46),
        ('15.11', 'chrome', 45),
        ('15.10', 'chrome', 45),
        ('15.9', 'chrome', 44),
        ('15.8', 'chrome', 43),
        ('15.7', 'chrome', 43),
        ('15.6', 'chrome', 42),
        ('15.5', 'chrome', 41),
        ('15.4', 'chrome', 41),
        ('15.3', 'chrome', 40),
        ('15.2', 'chrome', 40),
        ('15.1', 'chrome', 40),
        ('14.10', 'chrome', 37),
        ('14.9', 'chrome', 36),
        ('14.8', 'chrome', 36),
        ('14.7', 'chrome', 35),
        ('14.6', 'chrome', 34),
        ('14.5', 'chrome', 34),
        ('14.4', 'chrome', 33),
        ('14.3', 'chrome', 32),
        ('14.2', 'chrome', 32),
        ('13.12', 'chrome', 30),
        ('13.10', 'chrome', 28),
    ),
    # Opera 15+ is built on Chromium
    'opera': VersionMap.of(
        *((str(opera), 'chrome', opera + 13) for opera in range(20, 48)),
    ),
    'googlebot': VersionMap.of(
        ('2.1', 'chrome', 41),
    ),
})


def resolve_alias(record: AgentRecord, aliases: Mapping[str, AliasRule] = ALIASES) -> AgentRecord:
    """
    Translate a detected record onto the canonical family set.

    Families without an alias pass through unchanged. The patch component is
    always dropped from the result.

    >>> resolve_alias(AgentRecord('Edge', 16, 16299, 15))
    AgentRecord(family='ie', major=16, minor=16299, patch=0)
    """
    family = record.family.lower()
    if family != record.family:
        record = record._replace(family=family)

    rule = aliases.get(family)

    match rule:
        case None:
            pass
        case Rename():
            record = record._replace(family=rule.family)
        case RenameWithVersion():
            record = rule.target
        case Computed():
            computed = rule.transform(record)
            record = computed._replace(family=computed.family.lower())
        case VersionMap():
            record = _resolve_version_map(record, rule.entries)

    return record.without_patch()


@cython.cfunc
def _expression_component(part: str) -> int | None:
    """Numeric value of a dot-separated expression component, None when not a number."""
    if not part:
        return 0
    return int(part) if part.isdecimal() else None


def _resolve_version_map(record: AgentRecord, entries: tuple[VersionMapEntry, ...]) -> AgentRecord:
    # the detected patch never takes part in the match
    version = record.without_patch().to_version()

    best_major: cython.Py_ssize_t = sys.maxsize
    best_minor: cython.Py_ssize_t = sys.maxsize
    best = record

    for entry in entries:
        if satisfies(version, entry.expression):
            return entry.target

        # fallback to the nearest match, later entries win ties
        parts = entry.expression.split('.', 2)
        expr_major = _expression_component(parts[0])
        expr_minor = _expression_component(parts[1] if len(parts) > 1 else '')

        # non-numeric components ('*', '>=7') never compare as nearer
        if expr_major is None:
            continue

        major_diff: cython.Py_ssize_t = abs(record.major - expr_major)
        if major_diff <= best_major:
            best_major = major_diff
            if expr_minor is None:
                continue

            minor_diff: cython.Py_ssize_t = abs(record.minor - expr_minor)
            if minor_diff <= best_minor:
                best_minor = minor_diff
                best = entry.target

    return best
