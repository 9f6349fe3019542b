"""Save-time rule validation.

Persistence collaborators call ``validate_rule`` before storing a rule. The
engine still tolerates unvalidated rules: bad conditions never match and bad
actions are skipped.
"""

from typing import List

from packages.core.errors import RuleValidationError

from .models import TransactionRule


def rule_errors(rule: TransactionRule) -> List[str]:
    """Collect every problem with a rule, prefixed by its location."""
    errors = []
    if not rule.name.strip():
        errors.append("name is required")
    if not rule.conditions:
        errors.append("at least one condition is required")
    if not rule.actions:
        errors.append("at least one action is required")

    for i, condition in enumerate(rule.conditions):
        errors.extend(f"conditions[{i}]: {e}" for e in condition.validation_errors())
    for i, action in enumerate(rule.actions):
        errors.extend(f"actions[{i}]: {e}" for e in action.validation_errors())
    return errors


def validate_rule(rule: TransactionRule) -> TransactionRule:
    """Return the rule unchanged, or raise RuleValidationError."""
    errors = rule_errors(rule)
    if errors:
        raise RuleValidationError(f"Rule {rule.name!r} is invalid", errors=errors)
    return rule
