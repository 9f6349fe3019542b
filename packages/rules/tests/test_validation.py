"""Save-time rule validation."""

import pytest

from packages.core.errors import RuleValidationError
from packages.rules.models import (
    ActionType,
    ConditionOperator,
    RuleAction,
    RuleCondition,
    TransactionField,
    TransactionRule,
)
from packages.rules.validation import rule_errors, validate_rule


def _rule(**kwargs):
    defaults = dict(
        name="Small food",
        conditions=[RuleCondition(field=TransactionField.AMOUNT,
                                  operator=ConditionOperator.LESS_THAN, value="200")],
        actions=[RuleAction(field=TransactionField.CATEGORY, value="Food")],
    )
    defaults.update(kwargs)
    return TransactionRule(**defaults)


class TestValidateRule:

    def test_valid_rule_is_returned(self):
        rule = _rule()
        assert validate_rule(rule) is rule

    def test_defaults(self):
        rule = _rule()
        assert rule.priority == 100
        assert rule.is_active is True
        assert rule.id != _rule().id

    def test_missing_parts(self):
        errors = rule_errors(_rule(name="  ", conditions=[], actions=[]))
        assert errors == [
            "name is required",
            "at least one condition is required",
            "at least one action is required",
        ]

    def test_errors_are_located(self):
        rule = _rule(
            conditions=[
                RuleCondition(field=TransactionField.MERCHANT,
                              operator=ConditionOperator.CONTAINS, value="AMZN"),
                RuleCondition(field=TransactionField.AMOUNT,
                              operator=ConditionOperator.GREATER_THAN, value="abc"),
            ],
            actions=[RuleAction(field=TransactionField.SMS_TEXT, value="x")],
        )

        with pytest.raises(RuleValidationError) as exc_info:
            validate_rule(rule)

        assert exc_info.value.errors == [
            "conditions[1]: value 'abc' is not a number",
            "actions[0]: SMS_TEXT is read-only",
        ]
        body = exc_info.value.to_problem_detail()
        assert body["title"] == "Invalid Rule"
        assert body["detail"] == "Rule 'Small food' is invalid"


class TestConditionValidation:

    @pytest.mark.parametrize(
        "field, operator, value",
        [
            (TransactionField.MERCHANT, ConditionOperator.EQUALS, ""),
            (TransactionField.MERCHANT, ConditionOperator.LESS_THAN, "10"),
            (TransactionField.AMOUNT, ConditionOperator.GREATER_THAN_OR_EQUAL, "ten"),
            (TransactionField.UPI_ID, ConditionOperator.REGEX_MATCHES, "[unclosed"),
        ],
    )
    def test_invalid(self, field, operator, value):
        assert not RuleCondition(field=field, operator=operator, value=value).is_valid()

    @pytest.mark.parametrize(
        "field, operator, value",
        [
            (TransactionField.CATEGORY, ConditionOperator.IS_EMPTY, ""),
            (TransactionField.AMOUNT, ConditionOperator.LESS_THAN, "1000"),
            (TransactionField.MODE, ConditionOperator.IN, "UPI,IMPS"),
            (TransactionField.SMS_TEXT, ConditionOperator.REGEX_MATCHES, r"debited\s+by"),
        ],
    )
    def test_valid(self, field, operator, value):
        assert RuleCondition(field=field, operator=operator, value=value).is_valid()


class TestActionValidation:

    @pytest.mark.parametrize(
        "field, action_type, value",
        [
            (TransactionField.DATE, ActionType.SET, "2024-01-01"),
            (TransactionField.MERCHANT, ActionType.SET, " "),
            (TransactionField.AMOUNT, ActionType.SET, "lots"),
            (TransactionField.AMOUNT, ActionType.CLEAR, ""),
            (TransactionField.TYPE, ActionType.SET, "refund"),
            (TransactionField.TYPE, ActionType.APPEND, "INCOME"),
        ],
    )
    def test_invalid(self, field, action_type, value):
        assert not RuleAction(field=field, action_type=action_type, value=value).is_valid()

    @pytest.mark.parametrize(
        "field, action_type, value",
        [
            (TransactionField.TYPE, ActionType.SET, "income"),
            (TransactionField.TYPE, ActionType.CLEAR, ""),
            (TransactionField.AMOUNT, ActionType.SET, "99.50"),
            (TransactionField.NARRATION, ActionType.APPEND, "monthly"),
            (TransactionField.CATEGORY, ActionType.CLEAR, ""),
        ],
    )
    def test_valid(self, field, action_type, value):
        assert RuleAction(field=field, action_type=action_type, value=value).is_valid()

    def test_enum_values_parse_from_strings(self):
        action = RuleAction.model_validate({"field": "MERCHANT", "action_type": "SET",
                                            "value": "Amazon"})
        assert action.field is TransactionField.MERCHANT
        assert action.is_valid()
