"""Build plain Python values from parser events."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from yamlsax.errors import ParseError, ParseFault
from yamlsax.handler import YamlHandler
from yamlsax.parser import YamlParser


def parse_scalar(text: str) -> Any:
  lowered = text.lower()
  if lowered == "true":
    return True
  if lowered == "false":
    return False
  if lowered in {"null", "none", "~"}:
    return None
  try:
    return int(text)
  except ValueError:
    pass
  try:
    return float(text)
  except ValueError:
    pass
  return text


@dataclass
class _Frame:
  value: dict | list
  key: str | None = None


class TreeBuilder(YamlHandler):
  """Assemble dicts, lists and strings from events.

  A key that never receives a value maps to None. With ``typed`` set, scalars
  go through :func:`parse_scalar`; quoting is not visible in the events, so
  ``'5'`` and ``5`` both become ``5``.
  """

  def __init__(self, typed: bool = False) -> None:
    self.typed = typed
    self.root: Any = None
    self.error: ParseError | None = None
    self._frames: list[_Frame] = []

  def _attach(self, value: Any) -> None:
    if not self._frames:
      self.root = value
      return
    frame = self._frames[-1]
    if isinstance(frame.value, list):
      frame.value.append(value)
    else:
      frame.value[frame.key] = value

  def on_start_document(self) -> None:
    self.root = None
    self._frames.clear()

  def on_end_document(self) -> None:
    pass

  def on_start_sequence(self) -> None:
    items: list[Any] = []
    self._attach(items)
    self._frames.append(_Frame(items))

  def on_end_sequence(self) -> None:
    self._frames.pop()

  def on_start_mapping(self) -> None:
    mapping: dict[str, Any] = {}
    self._attach(mapping)
    self._frames.append(_Frame(mapping))

  def on_end_mapping(self) -> None:
    self._frames.pop()

  def on_key(self, text: str) -> bool:
    frame = self._frames[-1]
    frame.key = text
    frame.value[text] = None
    return True

  def on_scalar(self, text: str) -> bool:
    self._attach(parse_scalar(text) if self.typed else text)
    return True

  def on_error(self, message: str, line: int, col: int) -> None:
    kind, _, detail = message.partition(": ")
    self.error = ParseError(kind=kind, detail=detail, line=line, col=col, message=message)


def loads(text: str, typed: bool = False) -> Any:
  """Parse ``text`` and return the document value.

  Raises:
    ParseFault: if the text is not valid for the supported YAML subset.
  """
  builder = TreeBuilder(typed=typed)
  if not YamlParser(text, builder).parse():
    raise ParseFault(builder.error)
  return builder.root


def load(path: Path, typed: bool = False) -> Any:
  return loads(Path(path).read_text(encoding="utf-8"), typed=typed)
