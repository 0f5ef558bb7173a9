"""Query-string parsing shared by the resource handlers"""

from typing import Sequence

from flask import current_app, request

from movie_catalog.errors import InvalidParameter


def page_limit() -> int:
    """``?limit=``, falling back to the default when missing or not positive"""
    limit = request.args.get("limit", type=int)
    if not limit or limit < 0:
        return current_app.config["DEFAULT_PAGE_LIMIT"]
    return min(limit, current_app.config["MAX_PAGE_LIMIT"])


def page_offset() -> int:
    offset = request.args.get("offset", type=int)
    if not offset or offset < 0:
        return 0
    return offset


def order_field(fields: Sequence[str], default: str = "id") -> str:
    order = request.args.get("order")
    if not order:
        return default
    if order not in fields:
        raise InvalidParameter(
            f"Invalid order parameter. Only {', '.join(fields)} can be used."
        )
    return order


def positive_id(value, message: str = "The ID must be a positive integer.") -> int:
    value = "" if value is None else str(value)
    if not (value.isascii() and value.isdigit()):
        raise InvalidParameter(message)
    return int(value)
