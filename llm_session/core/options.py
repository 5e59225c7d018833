"""
Option processors.

Small pure functions that turn a caller-supplied option set into the
resolved options a provider expects. A processor has the signature
``(value, options) -> options``: ``value`` is the original value of the key
the processor is registered under, ``options`` the map accumulated so far.
Processors never mutate the map they receive.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

from .errors import OptionProcessingError

logger = logging.getLogger(__name__)

OptionProcessor = Callable[[Any, Dict[str, Any]], Dict[str, Any]]


def set_default(key: str, default: Any) -> OptionProcessor:
    """Store ``default`` under ``key`` when the value is missing."""
    def processor(value: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        updated = dict(options)
        updated[key] = default if value is None else value
        return updated
    return processor


def rename_key(old_key: str, new_key: str) -> OptionProcessor:
    """Move the value from ``old_key`` to ``new_key``."""
    def processor(value: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        if value is None:
            return options
        updated = dict(options)
        updated.pop(old_key, None)
        updated[new_key] = value
        return updated
    return processor


def transform_value(key: str, fn: Callable[[Any], Any]) -> OptionProcessor:
    """Replace the value under ``key`` with ``fn(value)``.

    Errors raised by ``fn`` are reported as OptionProcessingError so a bad
    option fails while the request is being built, never at the provider.
    """
    def processor(value: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        if value is None:
            return options
        try:
            transformed = fn(value)
        except (TypeError, ValueError, AttributeError) as e:
            raise OptionProcessingError(key, value, str(e)) from e
        updated = dict(options)
        updated[key] = transformed
        return updated
    return processor


def compose(processors: List[OptionProcessor]) -> OptionProcessor:
    """Chain processors in order.

    Every step sees the same original value and the map produced by the
    previous step.
    """
    processors = list(processors)

    def processor(value: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        for step in processors:
            options = step(value, options)
        return options
    return processor


def positive_int(value: Any) -> int:
    """Accept a positive integer token count; ``bool`` is not one."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValueError("must be a positive integer")
    return value


def text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def prepend_system_message(key: str = "system") -> OptionProcessor:
    """Turn ``key`` into a system-role message at the head of ``messages``."""
    def processor(value: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        if value is None:
            return options
        if not isinstance(value, str):
            raise OptionProcessingError(key, value, "system prompt must be a string")
        updated = dict(options)
        del updated[key]
        messages = list(updated.get("messages") or [])
        updated["messages"] = [{"role": "system", "content": value}] + messages
        return updated
    return processor


def apply_processors(
    processors: Mapping[str, OptionProcessor],
    options: Mapping[str, Any],
) -> Dict[str, Any]:
    """Run a key -> processor mapping over ``options`` in declaration order.

    Keys with no registered processor are passed through untouched.
    """
    resolved = dict(options)
    for key, processor in processors.items():
        resolved = processor(resolved.get(key), resolved)
    logger.debug("Resolved options: %s", sorted(resolved))
    return resolved
