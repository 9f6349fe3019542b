"""
Rule engine: evaluates user rules against an extracted transaction and
applies the actions of every matching rule.

The engine is pure. Conditions are folded strictly left to right with no
AND/OR precedence, so ``[A, OR B, AND C]`` means ``(A or B) and C``.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

import structlog

from packages.sms_parser.models import ExtractedTransaction, TransactionType
from packages.sms_parser.patterns import to_decimal

from .models import (
    NUMERIC_OPERATORS,
    READ_ONLY_FIELDS,
    ActionType,
    ConditionOperator,
    LogicalOperator,
    RuleAction,
    RuleCondition,
    TransactionField,
    TransactionRule,
)

logger = structlog.get_logger()

# TransactionField -> ExtractedTransaction attribute
FIELD_ATTRIBUTES = {
    TransactionField.AMOUNT: "amount",
    TransactionField.TYPE: "transaction_type",
    TransactionField.CATEGORY: "category",
    TransactionField.MERCHANT: "merchant",
    TransactionField.NARRATION: "narration",
    TransactionField.SMS_TEXT: "source_text",
    TransactionField.DATE: "timestamp",
    TransactionField.ACCOUNT_NUMBER: "account_last4",
    TransactionField.REFERENCE_NUMBER: "reference_id",
    TransactionField.MODE: "mode",
    TransactionField.UPI_ID: "upi_id",
}


@dataclass
class RuleEngineResult:
    """Corrected transaction plus the ids of the rules that fired."""

    transaction: ExtractedTransaction
    applied_rule_ids: List[str] = field(default_factory=list)


class RuleEngine:
    """Applies active rules in priority order; last write wins."""

    def __init__(self, list_delimiter: str = ","):
        self.list_delimiter = list_delimiter

    @classmethod
    def from_settings(cls, settings) -> "RuleEngine":
        return cls(list_delimiter=settings.RULE_LIST_DELIMITER)

    def apply(
        self, transaction: ExtractedTransaction, rules: Iterable[TransactionRule]
    ) -> ExtractedTransaction:
        return self.evaluate(transaction, rules).transaction

    def evaluate(
        self, transaction: ExtractedTransaction, rules: Iterable[TransactionRule]
    ) -> RuleEngineResult:
        # sorted() is stable: equal (priority, created_at) keep input order
        ordered = sorted(
            (rule for rule in rules if rule.is_active),
            key=lambda rule: (rule.priority, rule.created_at),
        )

        result = RuleEngineResult(transaction=transaction)
        for rule in ordered:
            if not self.matches(rule, result.transaction):
                continue

            for action in rule.actions:
                result.transaction = self._apply_action(result.transaction, action, rule)
            result.applied_rule_ids.append(rule.id)
            logger.debug("rule_applied", rule_id=rule.id, rule_name=rule.name)

        return result

    def matches(self, rule: TransactionRule, transaction: ExtractedTransaction) -> bool:
        """Left-to-right fold of the rule's conditions."""
        if not rule.conditions:
            return False

        matched = self.evaluate_condition(rule.conditions[0], transaction)
        for condition in rule.conditions[1:]:
            outcome = self.evaluate_condition(condition, transaction)
            if condition.logical_operator is LogicalOperator.OR:
                matched = matched or outcome
            else:
                matched = matched and outcome
        return matched

    def evaluate_condition(
        self, condition: RuleCondition, transaction: ExtractedTransaction
    ) -> bool:
        # Invalid conditions never match
        if not condition.is_valid():
            return False

        operator = condition.operator
        value = condition.value
        raw = self._field_value(transaction, condition.field)
        text = self._as_text(raw)

        if operator is ConditionOperator.IS_EMPTY:
            return not text.strip()
        if operator is ConditionOperator.IS_NOT_EMPTY:
            return bool(text.strip())

        if operator in NUMERIC_OPERATORS:
            return self._compare_numeric(raw, operator, value)

        if operator is ConditionOperator.EQUALS:
            return self._equals(raw, text, value)
        if operator is ConditionOperator.NOT_EQUALS:
            return not self._equals(raw, text, value)
        if operator is ConditionOperator.CONTAINS:
            return value in text
        if operator is ConditionOperator.NOT_CONTAINS:
            return value not in text
        if operator is ConditionOperator.STARTS_WITH:
            return text.startswith(value)
        if operator is ConditionOperator.ENDS_WITH:
            return text.endswith(value)
        if operator is ConditionOperator.IN:
            return text in self._split(value)
        if operator is ConditionOperator.NOT_IN:
            return text not in self._split(value)
        if operator is ConditionOperator.REGEX_MATCHES:
            try:
                return re.search(value, text) is not None
            except re.error:
                return False
        return False

    def _field_value(self, transaction: ExtractedTransaction, field_name: TransactionField):
        if field_name is TransactionField.TYPE:
            return transaction.transaction_type.value
        if field_name is TransactionField.DATE:
            try:
                moment = datetime.fromtimestamp(transaction.timestamp / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                # out of the platform date range; reads as empty
                return None
            return moment.date().isoformat()
        return getattr(transaction, FIELD_ATTRIBUTES[field_name])

    @staticmethod
    def _as_text(raw) -> str:
        if raw is None:
            return ""
        return str(raw)

    @staticmethod
    def _equals(raw, text: str, value: str) -> bool:
        # Amounts compare numerically so that 150 == 150.00
        if isinstance(raw, Decimal):
            target = to_decimal(value)
            if target is not None:
                return raw == target
        return text == value

    @staticmethod
    def _compare_numeric(raw, operator: ConditionOperator, value: str) -> bool:
        target = to_decimal(value)
        if not isinstance(raw, Decimal) or target is None:
            return False

        if operator is ConditionOperator.LESS_THAN:
            return raw < target
        if operator is ConditionOperator.GREATER_THAN:
            return raw > target
        if operator is ConditionOperator.LESS_THAN_OR_EQUAL:
            return raw <= target
        return raw >= target

    def _split(self, value: str) -> List[str]:
        return [item.strip() for item in value.split(self.list_delimiter) if item.strip()]

    def _apply_action(
        self, transaction: ExtractedTransaction, action: RuleAction, rule: TransactionRule
    ) -> ExtractedTransaction:
        if action.field in READ_ONLY_FIELDS:
            return self._skip(transaction, action, rule, "read-only field")

        attribute = FIELD_ATTRIBUTES[action.field]
        new_value = self._coerce_action_value(transaction, action)
        if new_value is _SKIP:
            return self._skip(transaction, action, rule, "value not applicable")
        return transaction.with_updates(**{attribute: new_value})

    @staticmethod
    def _coerce_action_value(transaction: ExtractedTransaction, action: RuleAction):
        action_type = action.action_type

        if action.field is TransactionField.AMOUNT:
            if action_type is not ActionType.SET:
                return _SKIP
            amount = to_decimal(action.value)
            return _SKIP if amount is None else amount

        if action.field is TransactionField.TYPE:
            if action_type is ActionType.CLEAR:
                return TransactionType.UNKNOWN
            if action_type is ActionType.APPEND:
                return _SKIP
            transaction_type = TransactionType.parse(action.value)
            return _SKIP if transaction_type is None else transaction_type

        if action_type is ActionType.CLEAR:
            return None
        if action_type is ActionType.APPEND:
            existing: Optional[str] = getattr(transaction, FIELD_ATTRIBUTES[action.field])
            return f"{existing} {action.value}" if existing else action.value
        return action.value

    @staticmethod
    def _skip(transaction, action: RuleAction, rule: TransactionRule, reason: str):
        logger.warning(
            "rule_action_skipped",
            rule_id=rule.id,
            field=action.field.value,
            action_type=action.action_type.value,
            reason=reason,
        )
        return transaction


_SKIP = object()
