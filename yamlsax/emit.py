"""Helpers for writing YAML fragments the parser reads back unchanged."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from yamlsax.errors import QuotingError
from yamlsax.scanner import QUOTES


def _is_quoted(value: str) -> bool:
  return len(value) >= 2 and value[0] in QUOTES and value[0] == value[-1]


def _needs_protection(value: str) -> bool:
  # '#' would start a comment, '[' a flow sequence, and outer spaces get trimmed.
  return "#" in value or value.startswith("[") or value != value.strip(" ")


def quote_scalar(value: str) -> str:
  """Return ``value`` quoted as needed for a bare YAML value position.

  Raises:
    QuotingError: if ``value`` holds both quote characters and is not
      already quoted.
  """
  if not value or _is_quoted(value):
    return value
  has_double = '"' in value
  has_single = "'" in value
  if has_double and not has_single:
    return f"'{value}'"
  if has_single and not has_double:
    return f'"{value}"'
  if has_single and has_double:
    raise QuotingError(f"cannot quote a value containing both quote characters: {value!r}")
  if _needs_protection(value):
    return f"'{value}'"
  return value


def create_key_value(key: str, value: str) -> str:
  return f"{key}: {quote_scalar(value)}\n"


def create_sequence(items: Iterable[str]) -> str:
  return "[" + ", ".join(items) + "]"


def create_key_value_seq(key: str, items: Iterable[Any]) -> str:
  return f"{key}: {create_sequence(str(item) for item in items)}\n"


def _format_scalar(value: Any) -> str:
  if isinstance(value, bool):
    return "true" if value else "false"
  if value is None:
    return ""
  return str(value)


def _dump_lines(value: Any, indent: int) -> Iterable[str]:
  prefix = " " * indent
  if isinstance(value, dict):
    for key, val in value.items():
      if isinstance(val, dict) and val:
        yield f"{prefix}{key}:\n"
        yield from _dump_lines(val, indent + 2)
      elif isinstance(val, list) and val:
        yield f"{prefix}{key}:\n"
        yield from _dump_lines(val, indent + 2)
      elif isinstance(val, list):
        yield prefix + create_key_value_seq(key, val)
      elif isinstance(val, dict):
        yield prefix + create_key_value(key, "")
      else:
        yield prefix + create_key_value(key, _format_scalar(val))
  elif isinstance(value, list):
    for item in value:
      if isinstance(item, (dict, list)) and item:
        yield f"{prefix}-\n"
        yield from _dump_lines(item, indent + 2)
      elif isinstance(item, list):
        yield f"{prefix}- []\n"
      elif item is None or isinstance(item, dict):
        # An empty item reads back as no item at all.
        raise ValueError(f"cannot write {item!r} as a sequence item")
      elif item == "":
        yield f"{prefix}- ''\n"
      else:
        yield f"{prefix}- {quote_scalar(_format_scalar(item))}\n"
  else:
    yield f"{prefix}{quote_scalar(_format_scalar(value))}\n"


def dump(data: Any) -> str:
  """Render nested dicts, lists and scalars as block YAML."""
  return "".join(_dump_lines(data, 0))
