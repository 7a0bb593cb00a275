"""Translate search filters into index predicates and evaluate them."""

from __future__ import annotations

from typing import Any, Mapping

from rulebook.constants import SCOPE_DELIMITER

Predicate = dict[str, Any]

AND = "$and"
EQ = "$eq"
CONTAINS = "$contains"

# joined multi-valued attributes take token containment, scalars take equality
FILTER_OPERATORS: dict[str, str] = {
    "language": CONTAINS,
    "technology": CONTAINS,
    "framework": CONTAINS,
    "category": EQ,
    "priority": EQ,
}


def translate_filters(filters: Mapping[str, str] | None) -> Predicate | None:
    if not filters:
        return None

    conditions: list[Predicate] = []
    for key, value in filters.items():
        operator = FILTER_OPERATORS.get(key)
        if operator is None or value is None:
            continue
        conditions.append({key: {operator: str(value).strip().lower()}})

    return combine(conditions)


def clauses(predicate: Predicate | None) -> list[Predicate]:
    """Flatten a predicate into its single-field clauses."""
    if not predicate:
        return []
    if AND in predicate:
        result: list[Predicate] = []
        for item in predicate[AND]:
            result.extend(clauses(item))
        return result
    return [predicate]


def combine(conditions: list[Predicate]) -> Predicate | None:
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return {AND: conditions}


def matches(predicate: Predicate | None, attributes: Mapping[str, Any]) -> bool:
    if not predicate:
        return True
    if AND in predicate:
        return all(matches(item, attributes) for item in predicate[AND])

    for field, condition in predicate.items():
        stored = attributes.get(field)
        for operator, expected in condition.items():
            if operator == EQ:
                if stored != expected:
                    return False
            elif operator == CONTAINS:
                if not isinstance(stored, str):
                    return False
                if expected not in stored.split(SCOPE_DELIMITER):
                    return False
            else:
                raise ValueError(f"Unsupported predicate operator: {operator}")
    return True
