"""Tests for selector expressions."""

import pytest

from routedns.core.errors import SelectorError
from routedns.core.selector import Operator, Selector

LABELS = {
    "kubernetes.io/ingress.class": "traefik",
    "tier": "edge",
}


class TestSelectorParse:
    """Tests for parsing selector expressions."""

    def test_empty(self):
        selector = Selector.parse("")
        assert selector.empty
        assert selector.matches({})

    def test_none(self):
        assert Selector.parse(None).empty

    def test_equality(self):
        selector = Selector.parse("kubernetes.io/ingress.class=traefik")
        assert len(selector.requirements) == 1
        assert selector.requirements[0].operator is Operator.EQUALS
        assert selector.requirements[0].values == frozenset({"traefik"})

    def test_set_based(self):
        selector = Selector.parse("tier in (edge, internal), env notin (dev)")
        assert [r.operator for r in selector.requirements] == [Operator.IN, Operator.NOT_IN]
        assert selector.requirements[0].values == frozenset({"edge", "internal"})

    def test_existence(self):
        selector = Selector.parse("tier,!legacy")
        assert [r.operator for r in selector.requirements] == [
            Operator.EXISTS,
            Operator.DOES_NOT_EXIST,
        ]

    @pytest.mark.parametrize(
        "expr",
        [
            "tier in (edge",
            "tier)",
            "a=b,",
            "=value",
            "key=bad value!",
            "-key=value",
        ],
    )
    def test_invalid(self, expr):
        with pytest.raises(SelectorError):
            Selector.parse(expr)

    def test_selector_error_is_value_error(self):
        with pytest.raises(ValueError):
            Selector.parse("tier in (edge")


class TestSelectorMatches:
    """Tests for evaluating selectors."""

    @pytest.mark.parametrize(
        "expr,expected",
        [
            ("kubernetes.io/ingress.class=traefik", True),
            ("kubernetes.io/ingress.class==traefik", True),
            ("kubernetes.io/ingress.class=nginx", False),
            ("kubernetes.io/ingress.class!=nginx", True),
            ("missing!=x", True),
            ("tier in (edge, internal)", True),
            ("tier notin (edge)", False),
            ("missing notin (edge)", True),
            ("missing in (edge)", False),
            ("tier", True),
            ("!tier", False),
            ("!missing", True),
            ("tier=edge,kubernetes.io/ingress.class=traefik", True),
            ("tier=edge,kubernetes.io/ingress.class=nginx", False),
        ],
    )
    def test_matches(self, expr, expected):
        assert Selector.parse(expr).matches(LABELS) is expected

    def test_none_labels(self):
        assert Selector.parse("!tier").matches(None)
        assert not Selector.parse("tier").matches(None)
