"""
Label selectors used to decide which pods a policy object targets.

Two input forms are understood:

* the string form, e.g. ``"app = web, tier in (a, b), !canary"``
* the structured form with ``matchLabels`` / ``matchExpressions``

Compilation errors are surfaced as :class:`SelectorError`.
:func:`compile_selector` turns such errors into :data:`NOTHING` so that a
broken selector never selects every pod.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

SelectorSpec = Union[str, Mapping[str, Any], None]


class SelectorError(ValueError):
    """Raised when a selector cannot be compiled."""


class Operator(str, Enum):
    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


_KEY_RE = re.compile(r"^([A-Za-z0-9][-A-Za-z0-9_.]*/)?[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
_VALUE_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?$")

_SET_TERM_RE = re.compile(r"^(?P<key>[^\s!=(),]+)\s+(?P<op>in|notin)\s*\((?P<values>[^()]*)\)$")
_EQUALITY_TERM_RE = re.compile(r"^(?P<key>[^\s!=(),]+)\s*(?P<op>==|=|!=)\s*(?P<value>[^\s!=(),]*)$")
_EXISTS_TERM_RE = re.compile(r"^(?P<neg>!)?\s*(?P<key>[^\s!=(),]+)$")


def _check_key(key: str) -> str:
    if not _KEY_RE.match(key):
        raise SelectorError(f"Invalid label key '{key}'")
    return key


def _check_value(value: str) -> str:
    if not _VALUE_RE.match(value):
        raise SelectorError(f"Invalid label value '{value}'")
    return value


@dataclass(frozen=True)
class Requirement:
    key: str
    operator: Operator
    values: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        _check_key(self.key)
        if self.operator in (Operator.IN, Operator.NOT_IN):
            if not self.values:
                raise SelectorError(f"Operator {self.operator.value} on '{self.key}' requires values")
            for value in self.values:
                _check_value(value)
        elif self.values:
            raise SelectorError(f"Operator {self.operator.value} on '{self.key}' takes no values")

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.operator is Operator.EXISTS:
            return self.key in labels
        if self.operator is Operator.DOES_NOT_EXIST:
            return self.key not in labels
        if self.operator is Operator.IN:
            return self.key in labels and labels[self.key] in self.values
        return self.key not in labels or labels[self.key] not in self.values


class Selector(ABC):
    """Compiled predicate over a label set."""

    @abstractmethod
    def matches(self, labels: Mapping[str, str]) -> bool:
        """Return True if ``labels`` satisfies the selector."""


@dataclass(frozen=True)
class LabelSelector(Selector):
    """Conjunction of requirements; no requirements selects everything."""

    requirements: Tuple[Requirement, ...] = ()

    def matches(self, labels: Mapping[str, str]) -> bool:
        return all(requirement.matches(labels) for requirement in self.requirements)


class _NothingSelector(Selector):
    def matches(self, labels: Mapping[str, str]) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOTHING"

    def __reduce__(self):
        return "NOTHING"


EVERYTHING = LabelSelector()
NOTHING: Selector = _NothingSelector()


def _split_terms(text: str) -> Iterable[str]:
    depth = 0
    current = []
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise SelectorError(f"Unbalanced parenthesis in selector '{text}'")
        if char == "," and depth == 0:
            yield "".join(current).strip()
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise SelectorError(f"Unbalanced parenthesis in selector '{text}'")
    yield "".join(current).strip()


def _parse_term(term: str) -> Requirement:
    match = _SET_TERM_RE.match(term)
    if match:
        values = frozenset(item.strip() for item in match.group("values").split(",") if item.strip())
        operator = Operator.IN if match.group("op") == "in" else Operator.NOT_IN
        return Requirement(match.group("key"), operator, values)

    match = _EQUALITY_TERM_RE.match(term)
    if match:
        operator = Operator.NOT_IN if match.group("op") == "!=" else Operator.IN
        return Requirement(match.group("key"), operator, frozenset([match.group("value")]))

    match = _EXISTS_TERM_RE.match(term)
    if match:
        operator = Operator.DOES_NOT_EXIST if match.group("neg") else Operator.EXISTS
        return Requirement(match.group("key"), operator)

    raise SelectorError(f"Unable to parse selector term '{term}'")


def parse_selector(text: str) -> LabelSelector:
    """
    Parse the string form of a selector.

    An empty string yields a selector without requirements.
    """
    text = text.strip()
    if not text:
        return EVERYTHING
    requirements = []
    for term in _split_terms(text):
        if not term:
            raise SelectorError(f"Empty term in selector '{text}'")
        requirements.append(_parse_term(term))
    return LabelSelector(tuple(requirements))


def selector_from_dict(spec: Mapping[str, Any]) -> LabelSelector:
    """Compile a ``matchLabels`` / ``matchExpressions`` mapping."""
    requirements = []
    match_labels = spec.get("matchLabels") or {}
    if not isinstance(match_labels, Mapping):
        raise SelectorError("'matchLabels' must be a mapping")
    for key, value in sorted(match_labels.items()):
        requirements.append(Requirement(str(key), Operator.IN, frozenset([str(value)])))

    expressions = spec.get("matchExpressions") or []
    if not isinstance(expressions, list):
        raise SelectorError("'matchExpressions' must be a list")
    for expression in expressions:
        if not isinstance(expression, Mapping):
            raise SelectorError("Each match expression must be a mapping")
        try:
            operator = Operator(str(expression.get("operator")))
        except ValueError as exc:
            raise SelectorError(f"Unknown selector operator '{expression.get('operator')}'") from exc
        values = frozenset(str(item) for item in expression.get("values") or [])
        requirements.append(Requirement(str(expression.get("key", "")), operator, values))
    return LabelSelector(tuple(requirements))


def compile_selector(spec: SelectorSpec) -> Selector:
    """
    将原始 selector 编译为可匹配的谓词。

    ``None`` 以及无法解析的 selector 一律返回 :data:`NOTHING`（不匹配任何 Pod），
    绝不会退化为匹配全部。
    """
    if spec is None:
        return NOTHING
    try:
        if isinstance(spec, str):
            return parse_selector(spec)
        if isinstance(spec, Mapping):
            return selector_from_dict(spec)
    except SelectorError as exc:
        logger.warning("Selector %r could not be compiled, matching nothing: %s", spec, exc)
        return NOTHING
    logger.warning("Unsupported selector type %s, matching nothing", type(spec).__name__)
    return NOTHING
