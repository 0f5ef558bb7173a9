"""
Column validation rules

Rule sets are attached to columns through ``Column.info["validate"]`` and
checked on every insert/update of the mapped class by ``attach_validation``.
"""

import math
import re
from collections import namedtuple
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List

from sqlalchemy import event, inspect

from movie_catalog.errors import ValidationFailure

Rule = namedtuple("Rule", ["name", "check", "message"])


def _not_empty(value) -> bool:
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _is_decimal(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_date(value) -> bool:
    return isinstance(value, date)


def _is_unsigned(value) -> bool:
    if not _is_decimal(value):
        return True
    return value >= 0


def _is_before_today(value) -> bool:
    if not _is_date(value):
        return True
    if isinstance(value, datetime):
        value = value.date()
    return value < date.today()


# None is only ever reported by not_null
NOT_NULL = Rule("notNull", lambda value: value is not None, "Field cannot be null.")
NOT_EMPTY = Rule("notEmpty", _not_empty, "Field cannot be empty.")
IS_DECIMAL = Rule("isDecimal", _is_decimal, "Field must be a decimal number.")
IS_INT = Rule("isInt", _is_int, "Field must be an integer.")
IS_DATE = Rule("isDate", _is_date, "Field must be a date in YYYY-MM-DD format.")
IS_UNSIGNED = Rule("isUnsigned", _is_unsigned, "Field cannot be negative.")
IS_BEFORE_TODAY = Rule(
    "isBefore", _is_before_today, "Date must be earlier than the current date."
)

DEFAULT_VALIDATE = (NOT_NULL, NOT_EMPTY)

ISO_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})(?:[T ].*)?", re.ASCII)


def coerce_decimal(value):
    """Turn numeric strings into Decimal, leave anything else untouched"""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else value
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return value
        # NaN and Infinity stay raw so isDecimal reports them
        return number if number.is_finite() else value
    return value


def coerce_int(value):
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def coerce_date(value):
    """Accept YYYY-MM-DD strings (a trailing T or space time part is ignored)"""
    if isinstance(value, str):
        match = ISO_DATE_RE.fullmatch(value.strip())
        if not match:
            return value
        try:
            return datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            return value
    if isinstance(value, datetime):
        return value.date()
    return value


def check_rules(rules, value) -> List[str]:
    """Return the messages of every rule ``value`` fails"""
    if value is None:
        return [r.message for r in rules if r is NOT_NULL]
    return [r.message for r in rules if not r.check(value)]


def collect_errors(instance) -> List[Dict[str, str]]:
    errors = []
    for column in inspect(instance).mapper.columns:
        rules = column.info.get("validate")
        if not rules:
            continue
        value = getattr(instance, column.key)
        for message in check_rules(rules, value):
            errors.append({"path": column.key, "message": message})
    return errors


def validate_instance(instance) -> None:
    errors = collect_errors(instance)
    if errors:
        raise ValidationFailure(errors)


def _before_write(mapper, connection, target):
    validate_instance(target)


def attach_validation(cls):
    """Run column rules before any INSERT or UPDATE of ``cls``"""
    event.listen(cls, "before_insert", _before_write)
    event.listen(cls, "before_update", _before_write)
    return cls
