"""Validation Pipeline — pure field rules aggregated per request type.

Invariants:
    - A rule is a pure predicate: value -> error message | None
    - Every field is checked even after another field failed (full aggregation)
    - Within one field, the first failing rule reports and the rest are skipped
    - Rules other than not_empty() pass on None: requiredness is its own rule
    - email() passes on the empty string ("valid format or empty"); matches() does
      only when built with allow_empty=True
    - when_supplied=True skips the whole field when the value is None or ""

Design Decisions:
    - Declarative Validator built once per request type at import time, never per call
    - One error per field: "empty name + zero price" reports two errors, not three
    - Nested/each prefix child fields ("address.city", "dishes[1].price") so a single
      response can point at every violated field of an aggregate
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from restaurants.core.outcomes import FieldError

Rule = Callable[[Any], str | None]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[0-9\s]{3,}$"
ZIP_CODE_PATTERN = r"^\d{5}$"


# ─── Rule catalog ────────────────────────────────────────────────

def not_empty(message: str = "must not be empty") -> Rule:
    def rule(value: Any) -> str | None:
        if value is None:
            return message
        if isinstance(value, str) and not value.strip():
            return message
        if isinstance(value, (list, tuple, set, frozenset, dict)) and not value:
            return message
        return None
    return rule


def length(min_len: int, max_len: int, message: str | None = None) -> Rule:
    """Inclusive length bounds."""
    text = message or f"must be between {min_len} and {max_len} characters long"

    def rule(value: Any) -> str | None:
        if value is None:
            return None
        if not min_len <= len(value) <= max_len:
            return text
        return None
    return rule


def max_length(max_len: int, message: str | None = None) -> Rule:
    return length(0, max_len, message or f"must be at most {max_len} characters long")


def greater_than(threshold: int | float | Decimal, message: str | None = None) -> Rule:
    text = message or f"must be greater than {threshold}"

    def rule(value: Any) -> str | None:
        if value is None:
            return None
        if not value > threshold:
            return text
        return None
    return rule


def decimal_places(max_places: int, message: str | None = None) -> Rule:
    """Reject values carrying more fractional digits than the column stores."""
    text = message or f"must have at most {max_places} decimal places"

    def rule(value: Any) -> str | None:
        if value is None:
            return None
        exponent = Decimal(str(value)).normalize().as_tuple().exponent
        if isinstance(exponent, int) and -exponent > max_places:
            return text
        return None
    return rule


def matches(
    pattern: str, message: str = "has an invalid format", allow_empty: bool = False,
) -> Rule:
    """Regex match; None passes, "" passes only when allow_empty is set."""
    compiled = re.compile(pattern)

    def rule(value: Any) -> str | None:
        if value is None or (allow_empty and value == ""):
            return None
        if not compiled.match(str(value)):
            return message
        return None
    return rule


def email(message: str = "is not a valid email address") -> Rule:
    return matches(EMAIL_PATTERN, message, allow_empty=True)


# ─── Validator ───────────────────────────────────────────────────

@dataclass(frozen=True)
class _FieldRules:
    name: str
    rules: tuple[Rule, ...]
    when_supplied: bool


def _is_supplied(value: Any) -> bool:
    return value is not None and value != ""


class Validator:
    """Ordered set of field rules for one request type."""

    def __init__(self) -> None:
        self._fields: list[_FieldRules] = []
        self._nested: list[tuple[str, "Validator", bool]] = []

    def rule_for(
        self, name: str, *rules: Rule, when_supplied: bool = False,
    ) -> "Validator":
        self._fields.append(_FieldRules(name, rules, when_supplied))
        return self

    def nested(self, name: str, validator: "Validator") -> "Validator":
        """Validate an optional sub-object; skipped when it is None."""
        self._nested.append((name, validator, False))
        return self

    def each(self, name: str, validator: "Validator") -> "Validator":
        """Validate every item of a collection field."""
        self._nested.append((name, validator, True))
        return self

    def validate(self, request: Any) -> list[FieldError]:
        errors: list[FieldError] = []
        for field_rules in self._fields:
            value = getattr(request, field_rules.name, None)
            if field_rules.when_supplied and not _is_supplied(value):
                continue
            for rule in field_rules.rules:
                message = rule(value)
                if message:
                    errors.append(FieldError(field_rules.name, message))
                    break
        for name, validator, is_collection in self._nested:
            value = getattr(request, name, None)
            if value is None:
                continue
            if is_collection:
                for index, item in enumerate(value):
                    errors.extend(
                        _prefixed(f"{name}[{index}]", validator.validate(item)),
                    )
            else:
                errors.extend(_prefixed(name, validator.validate(value)))
        return errors


def _prefixed(prefix: str, errors: list[FieldError]) -> list[FieldError]:
    return [FieldError(f"{prefix}.{e.field}", e.message) for e in errors]
