"""Hostname extraction from Traefik route match expressions.

A match expression such as::

    Host(`a.example.com`) || (Host(`b.example.com`, `c.example.com`) && PathPrefix(`/api`))

is flattened into the ordered union of the literal hosts passed to the
host functions of the route's kind. Boolean structure is not evaluated:
a host referenced anywhere in the expression is considered served.
"""

import re
from functools import lru_cache
from typing import Iterable

from routedns.core.annotations import dedupe
from routedns.core.models import Route

WILDCARD = "*"

_LITERAL = r"`[^`]*`"
_LITERAL_RE = re.compile(r"`([^`]*)`")


@lru_cache(maxsize=None)
def _call_pattern(functions: tuple[str, ...]) -> re.Pattern[str]:
    # Longest names first so HostHeader is not consumed as Host
    names = "|".join(re.escape(f) for f in sorted(functions, key=len, reverse=True))
    return re.compile(
        rf"(?<![\w])(?:{names})\s*\(\s*({_LITERAL}(?:\s*,\s*{_LITERAL})*)\s*\)"
    )


def parse_hostnames(expression: str, functions: Iterable[str]) -> list[str]:
    """Return the hosts referenced by ``functions`` calls in ``expression``.

    Arguments are returned in the order they appear, first occurrence
    wins. Wildcard and empty literals are dropped. An expression without
    a recognized call yields an empty list.
    """
    functions = tuple(functions)
    if not expression or not functions:
        return []

    hosts: list[str] = []
    for call in _call_pattern(functions).finditer(expression):
        for literal in _LITERAL_RE.findall(call.group(1)):
            host = literal.strip()
            if host and host != WILDCARD:
                hosts.append(host)

    return dedupe(hosts)


def hostnames_from_routes(routes: Iterable[Route], functions: Iterable[str]) -> list[str]:
    """Fold :func:`parse_hostnames` over routes, deduplicating across them."""
    functions = tuple(functions)
    hosts: list[str] = []
    for route in routes:
        hosts.extend(parse_hostnames(route.match, functions))
    return dedupe(hosts)
