"""Kubernetes style selector expressions.

Supports the label-selector grammar::

    key=value   key==value   key!=value
    key in (a, b)   key notin (a, b)
    key   !key

with comma separated requirements combined with AND. An empty
expression selects everything.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from routedns.core.errors import SelectorError

_KEY_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?/)?[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
_VALUE_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?$")
_SET_RE = re.compile(r"^(?P<key>\S+)\s+(?P<op>in|notin)\s*\((?P<values>[^)]*)\)$")
_EQ_RE = re.compile(r"^(?P<key>[^=!\s]+)\s*(?P<op>==|!=|=)\s*(?P<value>[^=!\s]*)$")


class Operator(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "!="
    IN = "in"
    NOT_IN = "notin"
    EXISTS = "exists"
    DOES_NOT_EXIST = "!"


@dataclass(frozen=True)
class Requirement:
    """A single selector requirement."""

    key: str
    operator: Operator
    values: frozenset[str] = field(default_factory=frozenset)

    def matches(self, labels: Mapping[str, str]) -> bool:
        present = self.key in labels
        if self.operator is Operator.EXISTS:
            return present
        if self.operator is Operator.DOES_NOT_EXIST:
            return not present
        if self.operator in (Operator.EQUALS, Operator.IN):
            return present and labels[self.key] in self.values
        # != and notin also match when the key is absent
        return not present or labels[self.key] not in self.values


@dataclass(frozen=True)
class Selector:
    """Parsed selector: a conjunction of requirements."""

    requirements: tuple[Requirement, ...] = ()
    expression: str = ""

    @classmethod
    def parse(cls, expression: str | None) -> "Selector":
        expression = (expression or "").strip()
        if not expression:
            return cls()
        requirements = tuple(
            _parse_requirement(part.strip()) for part in _split_top_level(expression)
        )
        return cls(requirements=requirements, expression=expression)

    @property
    def empty(self) -> bool:
        return not self.requirements

    def matches(self, labels: Mapping[str, str] | None) -> bool:
        labels = labels or {}
        return all(r.matches(labels) for r in self.requirements)

    def __str__(self) -> str:
        return self.expression


def _split_top_level(expression: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in expression:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise SelectorError(f"Unbalanced parenthesis in selector {expression!r}")
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if depth != 0:
        raise SelectorError(f"Unbalanced parenthesis in selector {expression!r}")
    parts.append("".join(current))
    return parts


def _check_key(key: str, expression: str) -> str:
    if not _KEY_RE.match(key):
        raise SelectorError(f"Invalid key {key!r} in selector requirement {expression!r}")
    return key


def _check_value(value: str, expression: str) -> str:
    if not _VALUE_RE.match(value):
        raise SelectorError(f"Invalid value {value!r} in selector requirement {expression!r}")
    return value


def _parse_requirement(text: str) -> Requirement:
    if not text:
        raise SelectorError("Empty requirement in selector")

    m = _SET_RE.match(text)
    if m:
        key = _check_key(m.group("key"), text)
        values = frozenset(
            _check_value(v.strip(), text) for v in m.group("values").split(",")
        )
        op = Operator.IN if m.group("op") == "in" else Operator.NOT_IN
        return Requirement(key, op, values)

    m = _EQ_RE.match(text)
    if m:
        key = _check_key(m.group("key"), text)
        value = _check_value(m.group("value"), text)
        op = Operator.NOT_EQUALS if m.group("op") == "!=" else Operator.EQUALS
        return Requirement(key, op, frozenset({value}))

    if text.startswith("!"):
        return Requirement(_check_key(text[1:].strip(), text), Operator.DOES_NOT_EXIST)

    return Requirement(_check_key(text, text), Operator.EXISTS)
