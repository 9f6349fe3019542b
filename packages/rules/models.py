"""Pydantic models for user-defined transaction rules.

A rule is a list of conditions folded left to right, plus a list of actions
applied in order when the fold is true.
"""

import re
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from packages.sms_parser.models import TransactionType
from packages.sms_parser.patterns import to_decimal


class TransactionField(str, Enum):
    AMOUNT = "AMOUNT"
    TYPE = "TYPE"
    CATEGORY = "CATEGORY"
    MERCHANT = "MERCHANT"
    NARRATION = "NARRATION"
    SMS_TEXT = "SMS_TEXT"
    DATE = "DATE"
    ACCOUNT_NUMBER = "ACCOUNT_NUMBER"
    REFERENCE_NUMBER = "REFERENCE_NUMBER"
    MODE = "MODE"
    UPI_ID = "UPI_ID"


class ConditionOperator(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    LESS_THAN = "LESS_THAN"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    IN = "IN"
    NOT_IN = "NOT_IN"
    REGEX_MATCHES = "REGEX_MATCHES"
    IS_EMPTY = "IS_EMPTY"
    IS_NOT_EMPTY = "IS_NOT_EMPTY"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class ActionType(str, Enum):
    SET = "SET"
    APPEND = "APPEND"
    CLEAR = "CLEAR"


NUMERIC_OPERATORS = frozenset({
    ConditionOperator.LESS_THAN,
    ConditionOperator.GREATER_THAN,
    ConditionOperator.LESS_THAN_OR_EQUAL,
    ConditionOperator.GREATER_THAN_OR_EQUAL,
})

VALUELESS_OPERATORS = frozenset({
    ConditionOperator.IS_EMPTY,
    ConditionOperator.IS_NOT_EMPTY,
})

# Fields derived from the source message; rules may read but not write them
READ_ONLY_FIELDS = frozenset({TransactionField.SMS_TEXT, TransactionField.DATE})


class RuleCondition(BaseModel):
    """One predicate; ``logical_operator`` joins it to the conditions before it."""

    field: TransactionField
    operator: ConditionOperator
    value: str = ""
    logical_operator: LogicalOperator = LogicalOperator.AND

    def validation_errors(self) -> List[str]:
        errors = []
        if self.operator not in VALUELESS_OPERATORS and not self.value.strip():
            errors.append(f"value is required for {self.operator.value}")

        if self.operator in NUMERIC_OPERATORS:
            if self.field is not TransactionField.AMOUNT:
                errors.append(
                    f"{self.operator.value} only applies to AMOUNT, not {self.field.value}"
                )
            elif self.value.strip() and to_decimal(self.value) is None:
                errors.append(f"value {self.value!r} is not a number")

        if self.operator is ConditionOperator.REGEX_MATCHES and self.value:
            try:
                re.compile(self.value)
            except re.error as e:
                errors.append(f"invalid regex {self.value!r}: {e}")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()


class RuleAction(BaseModel):
    """Write ``value`` into ``field`` of the matched transaction."""

    field: TransactionField
    action_type: ActionType = ActionType.SET
    value: str = ""

    def validation_errors(self) -> List[str]:
        errors = []
        if self.field in READ_ONLY_FIELDS:
            errors.append(f"{self.field.value} is read-only")
            return errors

        if self.action_type is not ActionType.CLEAR and not self.value.strip():
            errors.append(f"value is required for {self.action_type.value}")
            return errors

        if self.field is TransactionField.AMOUNT:
            if self.action_type is not ActionType.SET:
                errors.append(f"cannot {self.action_type.value} AMOUNT")
            elif to_decimal(self.value) is None:
                errors.append(f"value {self.value!r} is not a number")
        elif self.field is TransactionField.TYPE:
            if self.action_type is ActionType.APPEND:
                errors.append("cannot APPEND TYPE")
            elif self.action_type is ActionType.SET and TransactionType.parse(self.value) is None:
                errors.append(f"unknown transaction type {self.value!r}")
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()


class TransactionRule(BaseModel):
    """User-owned rule. Lower priority values run first."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: Optional[str] = None
    priority: int = 100
    is_active: bool = True
    conditions: List[RuleCondition] = Field(default_factory=list)
    actions: List[RuleAction] = Field(default_factory=list)
    created_at: int = Field(default=0, description="Creation time, epoch ms")
