"""Verbal math phrase rules.

Each rule rewrites an English phrase ("x squared", "square root of y") into
LaTeX math. Rules are grouped by :class:`~prosetex.core.rules.RulePhase` and
applied in order; the order is observable and covered by tests.

Two delimiter quirks are kept. Powers and subscripts emit
display math (``$$x^2$$``) while every other rule emits inline math, and
``equals`` becomes a bare ``=`` outside math mode.
"""

from __future__ import annotations

from collections.abc import Iterable
import re

from .rules import (
    MathRule,
    RuleEngine,
    RulePhase,
    RuleRegistry,
    collect_rules,
    rewrites,
    rule,
    template,
)


# Private-use code point standing in for ``$$`` until the cleanup phase, so
# the collapse of ``$$+`` runs does not flatten display delimiters.
DISPLAY_MARK = "\ue000"

_WORD_OR_GROUP = r"(\w+|\([^)]+\))"

GREEK_LOWER = (
    "alpha",
    "beta",
    "gamma",
    "delta",
    "epsilon",
    "theta",
    "lambda",
    "mu",
    "pi",
    "sigma",
    "phi",
    "omega",
)

GREEK_UPPER = ("Delta", "Gamma", "Theta", "Lambda", "Sigma", "Phi", "Omega")

FUNCTIONS = (
    "sin",
    "cos",
    "tan",
    "csc",
    "sec",
    "cot",
    "arcsin",
    "arccos",
    "arctan",
    "ln",
    "log",
    "exp",
)


def _command(name: str) -> str:
    return "$\\" + name + "$"


def _display(body: str) -> str:
    return DISPLAY_MARK + body + DISPLAY_MARK


def _greek_rules() -> list[MathRule]:
    rules: list[MathRule] = []
    for name in GREEK_LOWER:
        capitalised = name.capitalize()
        # Leave e.g. "Delta" to the upper-case rule.
        guard = f"(?!(?-i:{capitalised})\\b)" if capitalised in GREEK_UPPER else ""
        rules.append(rule(name, RulePhase.GREEK, rf"\b{guard}{name}\b", _command(name)))
    for name in GREEK_UPPER:
        rules.append(rule(name, RulePhase.GREEK, rf"\b{name}\b", _command(name), flags=0))
    return rules


def _symbol_rules() -> list[MathRule]:
    phase = RulePhase.SYMBOLS
    return [
        rule("infinity", phase, r"infinity", r"$\infty$"),
        # Lookaheads mirror the bounded summation and integral rules.
        rule("sum", phase, r"\bsum\b(?! from\s+\w+\s*=\s*\w+\s+to\s+\w+)", r"$\sum$"),
        rule("product", phase, r"\bproduct\b", r"$\prod$"),
        rule(
            "integral", phase, r"\bintegral\b(?! from\s+\w+\s+to\s+\w+\s+of\s+[^.])", r"$\int$"
        ),
        rule("partial", phase, r"partial derivative", r"$\partial$"),
        rule("times", phase, r"\btimes\b", r"$\times$"),
        rule("cdot", phase, r"\bdot\b(?=\s)", r"$\cdot$"),
        rule("pm", phase, r"plus or minus|plus-minus", r"$\pm$"),
        rule("mp", phase, r"minus or plus|minus-plus", r"$\mp$"),
        rule("dots", phase, r"\bdots\b", r"$\ldots$"),
        rule("ellipsis", phase, r"ellipsis", r"$\ldots$"),
    ]


def _relation_rules() -> list[MathRule]:
    phase = RulePhase.RELATIONS
    return [
        rule("neq", phase, r"not equal to|not equals", r"$\neq$"),
        rule("leq", phase, r"less than or equal to|less or equal", r"$\leq$"),
        rule("geq", phase, r"greater than or equal to|greater or equal", r"$\geq$"),
        rule("approx", phase, r"approximately equal to|approximately", r"$\approx$"),
        # Bare "=", not wrapped in math mode.
        rule("equals", phase, r"\bequals\b", "="),
    ]


def _structure_rules() -> list[MathRule]:
    return [
        rule(
            "frac",
            RulePhase.FRACTIONS,
            _WORD_OR_GROUP + r"\s+over\s+" + _WORD_OR_GROUP,
            template(r"$\frac{%s}{%s}$"),
        ),
        rule("squared", RulePhase.POWERS, r"(\w+)\s+squared", template(_display("%s^2"))),
        rule("cubed", RulePhase.POWERS, r"(\w+)\s+cubed", template(_display("%s^3"))),
        # "to the power of" must win over its "to the" prefix.
        rule(
            "power",
            RulePhase.POWERS,
            r"(\w+)\s+to the(?:\s+power of)?\s+(\w+)",
            template(_display("%s^{%s}")),
        ),
        rule(
            "subscript",
            RulePhase.SUBSCRIPTS,
            r"(\w+)\s+sub\s+(\w+)",
            template(_display("%s_{%s}")),
        ),
        rule(
            "square_root",
            RulePhase.ROOTS,
            r"square root of\s+" + _WORD_OR_GROUP,
            template(r"$\sqrt{%s}$"),
        ),
        rule("sqrt", RulePhase.ROOTS, r"sqrt\(([^)]+)\)", template(r"$\sqrt{%s}$")),
        rule(
            "definite_integral",
            RulePhase.INTEGRALS,
            r"integral from\s+(\w+)\s+to\s+(\w+)\s+of\s+([^.]+)",
            template(r"$\int_{%s}^{%s} %s \, dx$"),
        ),
        rule(
            "derivative",
            RulePhase.DERIVATIVES,
            r"derivative of\s+(\w+)\s+with respect to\s+(\w+)",
            template(r"$\frac{d%s}{d%s}$"),
        ),
        rule(
            "limit",
            RulePhase.LIMITS,
            r"limit as\s+(\w+)\s+approaches\s+(\w+)",
            template(r"$\lim_{%s \to %s}$"),
        ),
        rule(
            "summation",
            RulePhase.SUMMATIONS,
            r"sum from\s+(\w+)\s*=\s*(\w+)\s+to\s+(\w+)",
            template(r"$\sum_{%s=%s}^{%s}$"),
        ),
    ]


def _keyword_rules() -> list[MathRule]:
    sets = RulePhase.NUMBER_SETS
    logic = RulePhase.LOGIC
    ops = RulePhase.SET_OPERATIONS
    arrows = RulePhase.ARROWS
    return [
        rule("reals", sets, r"\b(?:real numbers|reals)\b", r"$\mathbb{R}$"),
        rule("integers", sets, r"\bintegers\b", r"$\mathbb{Z}$"),
        rule("rationals", sets, r"\brationals\b", r"$\mathbb{Q}$"),
        rule("naturals", sets, r"\bnaturals\b", r"$\mathbb{N}$"),
        rule("forall", logic, r"\bfor all\b", r"$\forall$"),
        rule("exists", logic, r"\bthere exists\b", r"$\exists$"),
        rule("and", logic, r"\band\b(?![a-z])", r"$\land$"),
        rule("or", logic, r"\bor\b(?![a-z])", r"$\lor$"),
        rule("not", logic, r"\bnot\b(?=\s)(?!\s+in\b)", r"$\neg$"),
        rule("implies", logic, r"\bimplies\b", r"$\implies$"),
        rule("iff", logic, r"\bif and only if\b|\biff\b", r"$\iff$", before=("and",)),
        rule("in", ops, r"\belement of\b|\bin set\b", r"$\in$"),
        rule("notin", ops, r"\bnot in\b", r"$\notin$"),
        rule("subset", ops, r"\bsubset of\b", r"$\subset$"),
        rule("supset", ops, r"\bsuperset of\b", r"$\supset$"),
        rule("cup", ops, r"\bunion\b", r"$\cup$"),
        rule("cap", ops, r"\bintersection\b", r"$\cap$"),
        rule("emptyset", ops, r"\bempty set\b", r"$\emptyset$"),
        rule("rightarrow", arrows, r"\brightarrow\b|right arrow", r"$\rightarrow$"),
        rule("leftarrow", arrows, r"\bleftarrow\b|left arrow", r"$\leftarrow$"),
        rule("mapsto", arrows, r"\bmaps to\b", r"$\mapsto$"),
    ]


def _function_rules() -> list[MathRule]:
    return [
        rule(name, RulePhase.FUNCTIONS, rf"\b{name}\b", _command(name), flags=0)
        for name in FUNCTIONS
    ]


class _Notation:
    """Notations whose replacement reads better as a function."""

    @staticmethod
    @rewrites(r"absolute value of\s+(\w+)", phase=RulePhase.ABSOLUTE_VALUE)
    def absolute_value(match: re.Match[str]) -> str:
        return f"$|{match.group(1)}|$"

    @staticmethod
    @rewrites(r"\babs\(([^)]+)\)", phase=RulePhase.ABSOLUTE_VALUE, name="abs")
    def abs_call(match: re.Match[str]) -> str:
        return f"$|{match.group(1)}|$"

    @staticmethod
    @rewrites(r"(\w+)\s+choose\s+(\w+)", phase=RulePhase.BINOMIAL)
    def binom(match: re.Match[str]) -> str:
        top, bottom = match.groups()
        return "$\\binom{" + top + "}{" + bottom + "}$"


def _cleanup_rules() -> list[MathRule]:
    phase = RulePhase.CLEANUP
    return [
        rule("collapse_dollars", phase, r"\$\$+", "$", flags=0),
        rule("merge_adjacent_math", phase, r"\$\s+\$", " ", flags=0),
        rule("display_delimiters", phase, re.escape(DISPLAY_MARK), "$$", flags=0),
        rule("dollar_runs", phase, r"\${3,}", "$$", flags=0),
    ]


def default_rules() -> list[MathRule]:
    """Return a fresh copy of the built-in rule table in declaration order."""
    return [
        *_greek_rules(),
        *_symbol_rules(),
        *_relation_rules(),
        *_structure_rules(),
        *_keyword_rules(),
        *_function_rules(),
        *collect_rules(_Notation),
        *_cleanup_rules(),
    ]


def build_registry(rules: Iterable[MathRule] | None = None) -> RuleRegistry:
    """Return a registry populated with ``rules`` (built-ins by default)."""
    registry = RuleRegistry()
    registry.extend(default_rules() if rules is None else rules)
    return registry


class MathPhraseConverter:
    """Apply the ordered verbal-math rules to a line of free text."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.engine = RuleEngine(registry or build_registry())

    def convert(self, text: str) -> str:
        return self.engine.run(text)

    __call__ = convert

    def rules(self) -> tuple[MathRule, ...]:
        return tuple(self.engine.registry)

    def describe(self) -> list[dict[str, object]]:
        return self.engine.registry.describe()


_DEFAULT_CONVERTER = MathPhraseConverter()


def convert_math(text: str) -> str:
    """Rewrite verbal math phrases in ``text`` using the built-in rules."""
    return _DEFAULT_CONVERTER.convert(text)


__all__ = [
    "DISPLAY_MARK",
    "FUNCTIONS",
    "GREEK_LOWER",
    "GREEK_UPPER",
    "MathPhraseConverter",
    "build_registry",
    "convert_math",
    "default_rules",
]
