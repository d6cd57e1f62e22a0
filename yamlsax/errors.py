from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal[
  "TabNotAllowed",
  "UnterminatedString",
  "IndentationMismatch",
  "MalformedStructure",
]


@dataclass
class ParseError:
  kind: ErrorKind
  detail: str
  line: int
  col: int
  message: str = ""

  def __post_init__(self) -> None:
    if not self.message:
      self.message = f"{self.kind}: {self.detail}"

  def __str__(self) -> str:
    return f"{self.message} (line {self.line}, col {self.col})"


class ParseFault(Exception):
  """Carries a :class:`ParseError`.

  Inside the parser it becomes a single ``on_error`` call; ``tree.loads``
  raises it to its caller.
  """

  def __init__(self, error: ParseError) -> None:
    super().__init__(str(error))
    self.error = error


class QuotingError(ValueError):
  """A value holds both quote characters and cannot be emitted safely."""
