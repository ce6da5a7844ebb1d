import logging
from collections.abc import Mapping
from types import MappingProxyType

import orjson

from canonical_ua.config import USER_AGENT_BASELINES_FILE
from canonical_ua.lib.semver_range import InvalidRangeError, parse_range, satisfies
from canonical_ua.models.agent_record import AgentRecord


def get_baseline(family: str) -> str | None:
    """Minimum supported version range of the canonical family, or None if it is not supported."""
    return BASELINE_VERSIONS.get(family)


def meets_baseline(record: AgentRecord) -> bool:
    """
    Check if the record satisfies the baseline of its own family.

    Families without a baseline never meet it.
    """
    baseline = BASELINE_VERSIONS.get(record.family)
    if baseline is None:
        return False
    return satisfies(record.to_version(), baseline)


def satisfies_requested(record: AgentRecord, expression: str) -> bool:
    """
    Check if the record satisfies both the requested range and its family baseline.

    An invalid requested range is never satisfied.
    """
    try:
        requested = satisfies(record.to_version(), expression)
    except InvalidRangeError:
        logging.debug('Rejected invalid version range %r', expression)
        return False
    return requested and meets_baseline(record)


def is_unknown(record: AgentRecord) -> bool:
    """Check if the family is unsupported, or below its minimum supported version."""
    return record.family not in BASELINE_VERSIONS or not meets_baseline(record)


def _load_baselines() -> Mapping[str, str]:
    data: dict[str, str] = orjson.loads(USER_AGENT_BASELINES_FILE.read_bytes())
    for family, expression in data.items():
        if family != family.lower():
            raise ValueError(f'Baseline family {family!r} must be lowercase')
        # fail early on malformed ranges
        parse_range(expression)
    return MappingProxyType(data)


BASELINE_VERSIONS = _load_baselines()
logging.info('Loaded %d browser baselines', len(BASELINE_VERSIONS))
