"""Rule declaration and execution engine for the verbal-math pipeline.

Verbal math phrases are rewritten by an ordered list of regular-expression
substitutions. Each :class:`MathRule` scans the *current* text and replaces
every non-overlapping match, so later rules see what earlier rules produced.
Ordering is therefore part of the contract.

Architecture

`Declaration layer`
: :class:`MathRule` binds a compiled pattern to a replacement callable and
  records its :class:`RulePhase`, priority and ``before``/``after`` constraints.

`Decorator layer`
: :func:`rewrites` attaches a :class:`RewriteDefinition` to a replacement
  function; :func:`collect_rules` binds the decorated functions of an owner.

`Registry layer`
: :class:`RuleRegistry` groups rules per phase and keeps each bucket sorted
  by priority, registration order and the explicit topology constraints.

`Execution layer`
: :class:`RuleEngine` applies the phases in enum order, each phase applying
  its rules in registry order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
import re
from types import ModuleType
from typing import Any, cast


Replacement = Callable[[re.Match[str]], str]


class RulePhase(Enum):
    """Rule categories, applied in declaration order.

    Later phases may operate on text produced by earlier ones. Word-boundary
    rules in late phases must not collide with control sequences inserted by
    early phases, which is why structural phrases (fractions, powers) run
    before the keyword phases (logic, sets, functions).
    """

    GREEK = auto()
    SYMBOLS = auto()
    RELATIONS = auto()
    FRACTIONS = auto()
    POWERS = auto()
    SUBSCRIPTS = auto()
    ROOTS = auto()
    INTEGRALS = auto()
    DERIVATIVES = auto()
    LIMITS = auto()
    SUMMATIONS = auto()
    NUMBER_SETS = auto()
    LOGIC = auto()
    SET_OPERATIONS = auto()
    ARROWS = auto()
    FUNCTIONS = auto()
    ABSOLUTE_VALUE = auto()
    BINOMIAL = auto()
    CLEANUP = auto()
    """Delimiter normalisation; always last."""


@dataclass
class MathRule:
    """Single substitution registered in the engine."""

    name: str
    phase: RulePhase
    pattern: re.Pattern[str]
    replacement: Replacement
    priority: int = 0
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()

    def apply(self, text: str) -> str:
        """Replace every non-overlapping match in ``text``."""
        return self.pattern.sub(self.replacement, text)


def literal(value: str) -> Replacement:
    """Return a replacement emitting ``value`` verbatim."""

    def _replace(_match: re.Match[str]) -> str:
        return value

    return _replace


def template(fmt: str) -> Replacement:
    """Return a replacement interpolating the match groups into ``fmt``.

    ``fmt`` uses ``%s`` placeholders so LaTeX braces need no escaping.
    """

    def _replace(match: re.Match[str]) -> str:
        return fmt % match.groups()

    return _replace


def rule(
    name: str,
    phase: RulePhase,
    pattern: str,
    replacement: str | Replacement,
    *,
    flags: int = re.IGNORECASE,
    priority: int = 0,
    before: Iterable[str] = (),
    after: Iterable[str] = (),
) -> MathRule:
    """Build a rule, compiling ``pattern`` and wrapping plain-string replacements."""
    if isinstance(replacement, str):
        replacement = literal(replacement)
    return MathRule(
        name=name,
        phase=phase,
        pattern=re.compile(pattern, flags),
        replacement=replacement,
        priority=priority,
        before=tuple(before),
        after=tuple(after),
    )


@dataclass(frozen=True)
class RewriteDefinition:
    """Descriptor installed on replacement callables by :func:`rewrites`."""

    pattern: str
    phase: RulePhase
    flags: int = re.IGNORECASE
    priority: int = 0
    name: str | None = None
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()

    def bind(self, handler: Replacement) -> MathRule:
        """Create a concrete rule using ``handler`` as its replacement."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return rule(
            name,
            self.phase,
            self.pattern,
            handler,
            flags=self.flags,
            priority=self.priority,
            before=self.before,
            after=self.after,
        )


def rewrites(
    pattern: str,
    *,
    phase: RulePhase,
    name: str | None = None,
    flags: int = re.IGNORECASE,
    priority: int = 0,
    before: Iterable[str] = (),
    after: Iterable[str] = (),
) -> Callable[[Replacement], Replacement]:
    """Decorator declaring a function as the replacement of a math rule."""
    definition = RewriteDefinition(
        pattern=pattern,
        phase=phase,
        flags=flags,
        priority=priority,
        name=name,
        before=tuple(before),
        after=tuple(after),
    )

    def decorator(handler: Replacement) -> Replacement:
        cast(Any, handler).__math_rule__ = definition
        return handler

    return decorator


def collect_rules(owner: Any) -> list[MathRule]:
    """Bind the ``@rewrites`` functions of a module, class or instance.

    Rules are returned in definition order, which becomes their registration
    order.
    """
    namespace = owner if isinstance(owner, (ModuleType, type)) else type(owner)
    collected: list[MathRule] = []
    for attribute in vars(namespace):
        handler = getattr(owner, attribute)
        definition = getattr(handler, "__math_rule__", None)
        if isinstance(definition, RewriteDefinition):
            collected.append(definition.bind(handler))
    return collected


class RuleRegistry:
    """Container used to gather math rules before execution."""

    def __init__(self) -> None:
        self._rules: dict[RulePhase, list[MathRule]] = {}
        self._sequence: dict[int, int] = {}

    def register(self, math_rule: MathRule) -> None:
        """Register a rule; its phase bucket is re-sorted immediately."""
        self._sequence.setdefault(id(math_rule), len(self._sequence))
        bucket = self._rules.setdefault(math_rule.phase, [])
        bucket[:] = self._sort_rules([*bucket, math_rule])

    def extend(self, rules: Iterable[MathRule]) -> None:
        for math_rule in rules:
            self.register(math_rule)

    def rules_for_phase(self, phase: RulePhase) -> tuple[MathRule, ...]:
        """Return the ordered rules for the requested phase."""
        return tuple(self._rules.get(phase, ()))

    def __iter__(self) -> Iterator[MathRule]:
        for phase in RulePhase:
            yield from self._rules.get(phase, ())

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._rules.values())

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered rules."""
        entries: list[dict[str, object]] = []
        for phase in RulePhase:
            for order, math_rule in enumerate(self.rules_for_phase(phase)):
                entries.append(
                    {
                        "phase": phase.name,
                        "name": math_rule.name,
                        "pattern": math_rule.pattern.pattern,
                        "priority": math_rule.priority,
                        "before": list(math_rule.before),
                        "after": list(math_rule.after),
                        "order": order,
                    }
                )
        return entries

    def _sort_key(self, rules: list[MathRule], index: int) -> tuple[int, int]:
        return (rules[index].priority, self._sequence[id(rules[index])])

    def _sort_rules(self, rules: list[MathRule]) -> list[MathRule]:
        """Return rules ordered deterministically using before/after constraints.

        Unconstrained rules keep (priority, registration order). Ties break on
        registration order rather than on name because the declaration order
        of the phrase table is part of its observable behaviour.
        """
        if len(rules) <= 1:
            return list(rules)

        name_to_index: dict[str, int] = {}
        for index, math_rule in enumerate(rules):
            name_to_index.setdefault(math_rule.name, index)

        adjacency: dict[int, set[int]] = {index: set() for index in range(len(rules))}
        indegree: dict[int, int] = dict.fromkeys(range(len(rules)), 0)

        def _add_edge(source: int, target: int) -> None:
            if target in adjacency[source]:
                return
            adjacency[source].add(target)
            indegree[target] += 1

        for current_index, math_rule in enumerate(rules):
            for target_name in math_rule.before:
                target_index = name_to_index.get(target_name)
                if target_index is not None:
                    _add_edge(current_index, target_index)
            for target_name in math_rule.after:
                target_index = name_to_index.get(target_name)
                if target_index is not None:
                    _add_edge(target_index, current_index)

        def key(idx: int) -> tuple[int, int]:
            return self._sort_key(rules, idx)

        queue: deque[int] = deque(
            sorted((index for index, count in indegree.items() if count == 0), key=key)
        )
        ordered: list[int] = []

        while queue:
            current = queue.popleft()
            ordered.append(current)
            for neighbour in sorted(adjacency[current], key=key):
                indegree[neighbour] -= 1
                if indegree[neighbour] == 0:
                    queue.append(neighbour)

            queue = deque(sorted(queue, key=key))

        if len(ordered) != len(rules):
            cycle_names = sorted(
                math_rule.name for index, math_rule in enumerate(rules) if index not in ordered
            )
            raise RuntimeError("Cyclic math rule dependencies detected: " + ", ".join(cycle_names))

        return [rules[index] for index in ordered]


class RuleEngine:
    """Execution engine applying registered rules phase by phase."""

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or RuleRegistry()

    def register(self, math_rule: MathRule) -> None:
        self.registry.register(math_rule)

    def collect_from(self, owner: Any) -> None:
        """Register every ``@rewrites`` function found on ``owner``."""
        self.registry.extend(collect_rules(owner))

    def run(self, text: str) -> str:
        """Apply every rule, in order, to ``text``."""
        for math_rule in self.registry:
            text = math_rule.apply(text)
        return text


__all__ = [
    "MathRule",
    "Replacement",
    "RewriteDefinition",
    "RuleEngine",
    "RulePhase",
    "RuleRegistry",
    "collect_rules",
    "literal",
    "rewrites",
    "rule",
    "template",
]
