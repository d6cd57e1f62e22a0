"""Callback interface driven by :class:`yamlsax.parser.YamlParser`."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class YamlHandler(ABC):
  """Receives structural events from a parse.

  ``on_key`` and ``on_scalar`` return False to stop the parse early. An early
  stop is not an error: ``on_error`` is not called and ``parse()`` returns
  False.
  """

  @abstractmethod
  def on_start_document(self) -> None: ...

  @abstractmethod
  def on_end_document(self) -> None: ...

  @abstractmethod
  def on_start_sequence(self) -> None: ...

  @abstractmethod
  def on_end_sequence(self) -> None: ...

  @abstractmethod
  def on_start_mapping(self) -> None: ...

  @abstractmethod
  def on_end_mapping(self) -> None: ...

  @abstractmethod
  def on_key(self, text: str) -> bool: ...

  @abstractmethod
  def on_scalar(self, text: str) -> bool: ...

  @abstractmethod
  def on_error(self, message: str, line: int, col: int) -> None: ...


Event = tuple


@dataclass
class EventRecorder(YamlHandler):
  """Handler that keeps every event as a tuple, e.g. ``("key", "name")``.

  When ``stop_on`` is set, a scalar equal to it is recorded and then stops
  the parse.
  """

  stop_on: str | None = None
  events: list[Event] = field(default_factory=list)
  error_happened: bool = False
  early_out: bool = False

  def on_start_document(self) -> None:
    self.events.append(("start_document",))

  def on_end_document(self) -> None:
    self.events.append(("end_document",))

  def on_start_sequence(self) -> None:
    self.events.append(("start_sequence",))

  def on_end_sequence(self) -> None:
    self.events.append(("end_sequence",))

  def on_start_mapping(self) -> None:
    self.events.append(("start_mapping",))

  def on_end_mapping(self) -> None:
    self.events.append(("end_mapping",))

  def on_key(self, text: str) -> bool:
    self.events.append(("key", text))
    return True

  def on_scalar(self, text: str) -> bool:
    self.events.append(("scalar", text))
    if self.stop_on is not None and text == self.stop_on:
      self.early_out = True
      return False
    return True

  def on_error(self, message: str, line: int, col: int) -> None:
    self.error_happened = True
    self.events.append(("error", message, line, col))

  @property
  def errors(self) -> list[Event]:
    return [event for event in self.events if event[0] == "error"]

  def reset(self) -> None:
    self.events.clear()
    self.error_happened = False
    self.early_out = False
