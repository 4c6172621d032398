"""Resolution of DNS intent declared through resource annotations."""

import logging
import re
from decimal import Decimal
from typing import Iterable, Mapping

from routedns.core.models import ResolvedAnnotations

logger = logging.getLogger(__name__)

ANNOTATION_PREFIX = "external-dns.alpha.kubernetes.io/"
HOSTNAME_ANNOTATION = ANNOTATION_PREFIX + "hostname"
TARGET_ANNOTATION = ANNOTATION_PREFIX + "target"
TTL_ANNOTATION = ANNOTATION_PREFIX + "ttl"

TTL_MIN = 1
TTL_MAX = 2**31 - 1

# Longer units first so "ms" is not read as minutes
_DURATION_UNIT = r"(?:ns|us|µs|μs|ms|h|m|s)"
_DURATION_RE = re.compile(rf"(?:[0-9]+(?:\.[0-9]+)?{_DURATION_UNIT})+")
_DURATION_PART_RE = re.compile(rf"([0-9]+(?:\.[0-9]+)?)({_DURATION_UNIT})")
_SECONDS_RE = re.compile(r"[0-9]+")
_UNIT_SECONDS = {
    "h": Decimal(3600),
    "m": Decimal(60),
    "s": Decimal(1),
    "ms": Decimal("1e-3"),
    "us": Decimal("1e-6"),
    "µs": Decimal("1e-6"),
    "μs": Decimal("1e-6"),
    "ns": Decimal("1e-9"),
}


def dedupe(values: Iterable[str]) -> list[str]:
    """Drop repeated values, keeping the first occurrence of each."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


def split_values(raw: str | None) -> list[str]:
    """Split a comma separated annotation value, trimming and deduplicating."""
    if not raw:
        return []
    return dedupe(part.strip() for part in raw.split(",") if part.strip())


def parse_ttl(raw: str | None) -> int:
    """Parse a TTL given in seconds (``300``) or as a duration (``5m``, ``1h30m``, ``1500ms``).

    Durations are truncated to whole seconds. Returns 0 when the value is
    absent or invalid.
    """
    if raw is None:
        return 0
    value = raw.strip()
    if not value:
        return 0

    try:
        if _SECONDS_RE.fullmatch(value):
            seconds = int(value)
        elif _DURATION_RE.fullmatch(value):
            seconds = int(sum(
                Decimal(amount) * _UNIT_SECONDS[unit]
                for amount, unit in _DURATION_PART_RE.findall(value)
            ))
        else:
            logger.debug(f"Ignoring invalid TTL annotation value {raw!r}")
            return 0
    except (ValueError, ArithmeticError) as e:
        logger.debug(f"Ignoring unparsable TTL annotation value {raw!r}: {e}")
        return 0

    if seconds < TTL_MIN or seconds > TTL_MAX:
        logger.debug(f"Ignoring out of range TTL {seconds}")
        return 0
    return seconds


def resolve_annotations(annotations: Mapping[str, str] | None) -> ResolvedAnnotations:
    """Extract hostnames, targets and TTL from an annotation map.

    Never raises: a malformed value only empties the field it belongs to.
    """
    annotations = annotations or {}

    hostnames = [
        h for h in split_values(annotations.get(HOSTNAME_ANNOTATION)) if h != "*"
    ]
    targets = split_values(annotations.get(TARGET_ANNOTATION))
    ttl = parse_ttl(annotations.get(TTL_ANNOTATION))

    return ResolvedAnnotations(hostnames=hostnames, targets=targets, ttl=ttl)
