"""Helpers for turning portal JSON envelopes into typed records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..utils.http_client import OperationError, ParseError

ModelT = TypeVar("ModelT", bound=BaseModel)


def unwrap(data: Any, *keys: str, what: str) -> Any:
    """Walk ``keys`` into a JSON envelope such as ``{"object": {"aaData": [...]}}``."""

    for key in keys:
        if not isinstance(data, dict) or key not in data:
            logging.error("Unexpected %s envelope, missing %r", what, key)
            raise ParseError(f"invalid {what} format")
        data = data[key]
    return data


def parse_records(model: Type[ModelT], items: Any, what: str) -> List[ModelT]:
    if items is None:
        return []
    if not isinstance(items, Iterable) or isinstance(items, (str, dict)):
        raise ParseError(f"invalid {what} format")
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as exc:
        logging.error("Unexpected %s format: %s", what, exc)
        raise ParseError(f"invalid {what} format") from exc


def ensure_success(reply: Any, message: str) -> None:
    """Write endpoints answer ``{"result": "success", ...}`` when they succeed."""

    if isinstance(reply, dict) and reply.get("result") == "success":
        return
    detail = reply.get("msg") if isinstance(reply, dict) else None
    logging.error("%s: %s", message, detail or reply)
    raise OperationError(f"{message}: {detail}" if detail else message)
