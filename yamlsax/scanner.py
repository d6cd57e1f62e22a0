"""Character cursor over YAML source text with line/column tracking."""
from __future__ import annotations

from dataclasses import dataclass

from yamlsax.errors import ErrorKind, ParseError, ParseFault

QUOTES = ("'", '"')
LINE_BREAKS = ("\r", "\n")
# Characters that may follow ':' or '-' for them to count as punctuation.
_TERMINATORS = ("", " ", "\r", "\n")


@dataclass
class Scanner:
 text: str
 pos: int = 0
 line: int = 1
 col: int = 1

 def position(self) -> tuple[int, int]:
  return self.line, self.col

 def fault(
  self,
  kind: ErrorKind,
  detail: str,
  line: int | None = None,
  col: int | None = None,
 ) -> ParseFault:
  """Build a fault at the cursor, or at an explicit position."""
  return ParseFault(
   ParseError(
    kind=kind,
    detail=detail,
    line=self.line if line is None else line,
    col=self.col if col is None else col,
   )
  )

 def at_end(self) -> bool:
  return self.pos >= len(self.text)

 def peek(self, offset: int = 0) -> str:
  index = self.pos + offset
  if index >= len(self.text):
   return ""
  return self.text[index]

 def current(self) -> str:
  char = self.peek()
  if char == "\t":
   raise self.fault("TabNotAllowed", "tab characters are not allowed")
  return char

 def advance(self) -> str:
  char = self.current()
  if not char:
   return char
  self.pos += 1
  if char == "\n" or (char == "\r" and self.peek() != "\n"):
   self.line += 1
   self.col = 1
  else:
   self.col += 1
  return char

 def at_line_end(self) -> bool:
  char = self.peek()
  return not char or char in LINE_BREAKS

 def at_comment(self) -> bool:
  return self.peek() == "#"

 def _followed_by(self, char: str) -> bool:
  if self.peek() != char:
   return False
  following = self.peek(1)
  if following == "\t":
   raise self.fault("TabNotAllowed", "tab characters are not allowed", col=self.col + 1)
  return following in _TERMINATORS

 def at_item_marker(self) -> bool:
  return self._followed_by("-")

 def at_separator(self) -> bool:
  return self._followed_by(":")

 def skip_spaces(self) -> int:
  count = 0
  while self.peek() == " ":
   self.advance()
   count += 1
  return count

 def skip_comment(self) -> None:
  if not self.at_comment():
   return
  while not self.at_line_end():
   self.advance()

 def break_line(self) -> None:
  if self.peek() == "\r":
   self.advance()
  if self.peek() == "\n":
   self.advance()

 def finish_line(self) -> None:
  """Consume trailing spaces, an optional comment and the line break."""
  self.skip_spaces()
  self.skip_comment()
  if not self.at_line_end():
   raise self.fault("MalformedStructure", f"unexpected {self.current()!r} after value")
  self.break_line()

 def next_content_line(self) -> int | None:
  """Skip blank and comment-only lines.

  Returns the indentation of the next content line with the cursor on its
  first character, or None once the input is exhausted.
  """
  while not self.at_end():
   indent = self.skip_spaces()
   self.skip_comment()
   if self.at_line_end():
    self.break_line()
    continue
   self.current()
   return indent
  return None

 def _closing_quote(self, start: int) -> int | None:
  text = self.text
  quote = text[start]
  index = start + 1
  while index < len(text):
   char = text[index]
   if char in LINE_BREAKS:
    return None
   if quote == '"' and char == "\\" and index + 1 < len(text) and text[index + 1] not in LINE_BREAKS:
    index += 2
    continue
   if char == quote:
    if quote == "'" and text[index + 1:index + 2] == "'":
     index += 2
     continue
    return index
   index += 1
  return None

 def has_separator(self) -> bool:
  """Look ahead on the current line for a key separator."""
  text = self.text
  index = self.pos
  if self.peek() in QUOTES:
   close = self._closing_quote(index)
   if close is None:
    return False
   index = close + 1
   while text[index:index + 1] == " ":
    index += 1
   return text[index:index + 1] == ":" and text[index + 1:index + 2] in _TERMINATORS
  while index < len(text) and text[index] not in "\r\n#":
   if text[index] == ":" and text[index + 1:index + 2] in _TERMINATORS:
    return True
   index += 1
  return False

 def read_quoted(self) -> str:
  """Read a quoted scalar and return its raw content between the quotes."""
  line, col = self.position()
  quote = self.advance()
  chars: list[str] = []
  while True:
   if self.at_line_end():
    raise self.fault(
     "UnterminatedString", f"missing closing {quote} for quoted scalar", line, col
    )
   char = self.advance()
   if char == quote:
    if quote == "'" and self.peek() == "'":
     chars.append(char)
     chars.append(self.advance())
     continue
    return "".join(chars)
   chars.append(char)
   if quote == '"' and char == "\\" and not self.at_line_end():
    chars.append(self.advance())

 def read_bare_key(self) -> str:
  chars: list[str] = []
  while not self.at_line_end() and not self.at_comment() and not self.at_separator():
   chars.append(self.advance())
  return "".join(chars).rstrip(" ")

 def read_bare_value(self, stops: str = "") -> str:
  chars: list[str] = []
  while not self.at_line_end() and not self.at_comment() and self.peek() not in stops:
   chars.append(self.advance())
  return "".join(chars).rstrip(" ")
