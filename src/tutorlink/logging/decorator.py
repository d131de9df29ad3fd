# SPDX-FileCopyrightText: 2026 Tutorlink authors
#
# SPDX-License-Identifier: Apache-2.0

"""Method-level logging decorator for sessions and action histories."""

import dataclasses
import enum
import functools
import inspect
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable
from uuid import UUID

from tutorlink.logging.event_log import EventLog


@runtime_checkable
class Loggable(Protocol):
    """Instance with an optional event log. Used by @log_method."""

    event_log: EventLog | None


def _build_args_dict(
    fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Map positional + keyword args to parameter names, skipping self."""
    sig = inspect.signature(fn)
    # None stands in for self (already stripped from args by the wrapper).
    bound = sig.bind(None, *args, **kwargs)
    bound.arguments.pop("self", None)
    return {k: _serialize_result(v) for k, v in bound.arguments.items()}


def _get_log(instance: Any) -> EventLog | None:
    log = getattr(instance, "event_log", None)
    if log is None or not log.is_open:
        return None
    return log


_F = TypeVar("_F", bound=Callable[..., Any])


def log_method(
    *,
    before: bool = False,
    after: bool = False,
) -> Callable[[_F], _F]:
    """Log method calls to the instance's EventLog.

    Looks up `event_log` on the instance at call time. If it is None or
    closed, the method runs without logging. Exceptions propagate
    unlogged.
    """

    def decorator(fn: _F) -> _F:
        event_name = fn.__name__

        @functools.wraps(fn)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            log = _get_log(self)
            args_dict = _build_args_dict(fn, args, kwargs) if log else {}
            if log and before:
                log.log(event_name, args_dict)
            result = fn(self, *args, **kwargs)
            if log and after:
                result_data: dict[str, Any] = {**args_dict}
                if result is not None:
                    result_data["result"] = _serialize_result(result)
                log.log(f"{event_name}.result", result_data)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _serialize_result(value: Any) -> Any:
    """Best-effort serialization for log entries."""
    if isinstance(value, str | int | float | bool | type(None)):
        return value
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, UUID):
        return value.hex
    # Actions carry a whole Session; their label is enough.
    label = getattr(value, "label", None)
    if isinstance(label, str):
        return label
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _serialize_result(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.repr
        }
    return str(value)
