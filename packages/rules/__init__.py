"""
Transaction Rules

User-declared condition/action rules that correct extracted transactions.
"""

from .models import (
    ActionType,
    ConditionOperator,
    LogicalOperator,
    RuleAction,
    RuleCondition,
    TransactionField,
    TransactionRule,
)
from .engine import RuleEngine, RuleEngineResult
from .validation import rule_errors, validate_rule

__all__ = [
    "ActionType",
    "ConditionOperator",
    "LogicalOperator",
    "RuleAction",
    "RuleCondition",
    "TransactionField",
    "TransactionRule",
    "RuleEngine",
    "RuleEngineResult",
    "rule_errors",
    "validate_rule",
]
