import pytest

from prosetex.core.rules import (
    RuleEngine,
    RulePhase,
    RuleRegistry,
    collect_rules,
    rewrites,
    rule,
    template,
)


def _make_rule(
    name: str, *, priority: int = 0, before: tuple[str, ...] = (), after: tuple[str, ...] = ()
):
    return rule(name, RulePhase.SYMBOLS, name, name.upper(), priority=priority, before=before, after=after)


def test_rule_order_respects_priority_and_topology():
    registry = RuleRegistry()
    registry.register(_make_rule("third", priority=1))
    registry.register(_make_rule("first", priority=0))
    registry.register(_make_rule("second", priority=1, after=("first",)))

    rules = registry.rules_for_phase(RulePhase.SYMBOLS)
    assert [math_rule.name for math_rule in rules] == ["first", "third", "second"]


def test_unconstrained_rules_keep_registration_order():
    registry = RuleRegistry()
    for name in ("zeta", "alpha", "mid"):
        registry.register(_make_rule(name))

    assert [math_rule.name for math_rule in registry] == ["zeta", "alpha", "mid"]


def test_before_constraint_moves_rule_forward():
    registry = RuleRegistry()
    registry.register(_make_rule("and"))
    registry.register(_make_rule("iff", before=("and",)))

    assert [math_rule.name for math_rule in registry] == ["iff", "and"]


def test_rule_order_cycle_detection():
    registry = RuleRegistry()
    registry.register(_make_rule("a", priority=0, before=("b",)))
    with pytest.raises(RuntimeError, match="Cyclic math rule dependencies"):
        registry.register(_make_rule("b", priority=0, before=("a",)))
    assert [math_rule.name for math_rule in registry] == ["a"]


def test_registry_describe_returns_sorted_entries():
    registry = RuleRegistry()
    registry.register(_make_rule("alpha", priority=0))
    registry.register(_make_rule("beta", priority=1, after=("alpha",)))

    snapshot = registry.describe()
    assert snapshot[0]["name"] == "alpha"
    assert snapshot[1]["name"] == "beta"
    assert snapshot[1]["after"] == ["alpha"]
    assert snapshot[1]["phase"] == "SYMBOLS"


def test_engine_applies_phases_in_enum_order():
    registry = RuleRegistry()
    registry.register(rule("second", RulePhase.CLEANUP, r"b", "c"))
    registry.register(rule("first", RulePhase.GREEK, r"a", "b"))

    assert RuleEngine(registry).run("a") == "c"


def test_template_interpolates_groups_without_escaping_braces():
    frac = rule("frac", RulePhase.FRACTIONS, r"(\w+)/(\w+)", template(r"\frac{%s}{%s}"))
    assert frac.apply("1/2 and 3/4") == r"\frac{1}{2} and \frac{3}{4}"


class _Decorated:
    @staticmethod
    @rewrites(r"\bhalf of (\w+)", phase=RulePhase.FRACTIONS)
    def half(match):
        return "$\\frac{" + match.group(1) + "}{2}$"

    @staticmethod
    @rewrites(r"\btwice (\w+)", phase=RulePhase.FRACTIONS, name="double", before=("half",))
    def twice(match):
        return "$2" + match.group(1) + "$"

    @staticmethod
    def undecorated(match):
        return ""


def test_collect_rules_binds_decorated_functions_in_definition_order():
    rules = collect_rules(_Decorated)
    assert [math_rule.name for math_rule in rules] == ["half", "double"]
    assert rules[1].before == ("half",)


def test_engine_collects_decorated_rules():
    engine = RuleEngine()
    engine.collect_from(_Decorated)

    assert len(engine.registry) == 2
    assert [math_rule.name for math_rule in engine.registry] == ["double", "half"]
    assert engine.run("half of x and twice y") == "$\\frac{x}{2}$ and $2y$"
