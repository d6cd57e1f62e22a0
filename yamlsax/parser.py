"""Indentation-driven, single pass YAML subset parser.

The parser never builds a tree. It keeps a stack of open block contexts,
each remembering the indentation it was opened at, and reports structure to
a :class:`~yamlsax.handler.YamlHandler` as it goes.

Supported input: block mappings, block sequences (including ``key:`` followed
by ``- item`` lines at the key's own indentation, and ``- key: value``
items), flow sequences on a single line, comments and bare, single-quoted
or double-quoted scalars.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from yamlsax.errors import ParseFault
from yamlsax.handler import YamlHandler
from yamlsax.scanner import QUOTES, Scanner

ContextKind = Literal["mapping", "sequence"]
MAPPING: ContextKind = "mapping"
SEQUENCE: ContextKind = "sequence"


@dataclass
class _Context:
  kind: ContextKind
  indent: int


@dataclass
class _Open:
  """A key or sequence item whose value was left empty on its own line."""

  kind: Literal["key", "item"]
  indent: int


class _EarlyExit(Exception):
  pass


class YamlParser:
  def __init__(self, text: str, handler: YamlHandler) -> None:
    self._scanner = Scanner(text)
    self._handler: YamlHandler | None = handler
    self._stack: list[_Context] = []
    self._open: _Open | None = None
    self._used = False

  def parse(self) -> bool:
    """Run the parse to completion.

    Returns:
      True if the whole input was consumed. False after an error (reported
      once through ``on_error``) or when the handler asked to stop.
    """
    if self._used:
      raise RuntimeError("YamlParser instances are single use")
    self._used = True
    handler = self._handler
    handler.on_start_document()
    try:
      self._parse_document()
    except _EarlyExit:
      return False
    except ParseFault as fault:
      error = fault.error
      handler.on_error(error.message, error.line, error.col)
      return False
    finally:
      self._handler = None
    handler.on_end_document()
    return True

  def _parse_document(self) -> None:
    scanner = self._scanner
    indent = scanner.next_content_line()
    if indent is None:
      return
    if not scanner.at_item_marker() and not scanner.has_separator():
      self._parse_root_node()
      return
    while indent is not None:
      self._parse_line(indent)
      indent = scanner.next_content_line()
    while self._stack:
      self._close()

  def _parse_root_node(self) -> None:
    # A document holding a lone scalar or flow sequence.
    scanner = self._scanner
    if scanner.peek() == "[":
      self._parse_flow()
    else:
      self._emit_scalar(self._read_scalar())
    scanner.finish_line()
    if scanner.next_content_line() is not None:
      raise scanner.fault("MalformedStructure", "unexpected content after document node")

  def _parse_line(self, indent: int) -> None:
    scanner = self._scanner
    is_item = scanner.at_item_marker()
    opened, self._open = self._open, None
    if opened is not None and self._opens_child(opened, indent, is_item):
      self._push(SEQUENCE if is_item else MAPPING, indent)
    elif not self._stack:
      self._push(SEQUENCE if is_item else MAPPING, indent)
    else:
      self._align(indent, is_item)

    if self._stack[-1].kind == MAPPING:
      if is_item:
        raise scanner.fault("MalformedStructure", "sequence item where a mapping key was expected")
      self._parse_entry(indent)
    else:
      if not is_item:
        scanner.current()
        raise scanner.fault("MalformedStructure", "expected '- ' for a sequence item")
      self._parse_item(indent)

  @staticmethod
  def _opens_child(opened: _Open, indent: int, is_item: bool) -> bool:
    if indent > opened.indent:
      return True
    return indent == opened.indent and is_item and opened.kind == "key"

  def _align(self, indent: int, is_item: bool) -> None:
    stack = self._stack
    if indent > stack[-1].indent:
      raise self._scanner.fault("IndentationMismatch", f"unexpected indentation of {indent}")
    while stack and stack[-1].indent > indent:
      self._close()
    # A sequence sharing its owner's indentation ends where the owner's keys resume.
    if (
      not is_item
      and len(stack) > 1
      and stack[-1].kind == SEQUENCE
      and stack[-1].indent == stack[-2].indent == indent
    ):
      self._close()
    if not stack or stack[-1].indent != indent:
      raise self._scanner.fault(
        "IndentationMismatch", f"indentation of {indent} does not match any open block"
      )

  def _parse_entry(self, indent: int) -> None:
    scanner = self._scanner
    if scanner.peek() in QUOTES:
      key = scanner.read_quoted()
    else:
      if scanner.at_separator():
        raise scanner.fault("MalformedStructure", "empty mapping key")
      key = scanner.read_bare_key()
    scanner.skip_spaces()
    if not scanner.at_separator():
      scanner.current()
      raise scanner.fault("MalformedStructure", f"expected ':' after key {key!r}")
    scanner.advance()
    if not self._handler.on_key(key):
      raise _EarlyExit
    self._parse_value(_Open("key", indent))

  def _parse_item(self, indent: int) -> None:
    scanner = self._scanner
    scanner.advance()
    scanner.skip_spaces()
    column = scanner.col - 1
    if scanner.at_item_marker():
      self._push(SEQUENCE, column)
      self._parse_item(column)
    elif scanner.peek() != "[" and not scanner.at_line_end() and scanner.has_separator():
      self._push(MAPPING, column)
      self._parse_entry(column)
    else:
      self._parse_value(_Open("item", indent))

  def _parse_value(self, opened: _Open) -> None:
    scanner = self._scanner
    scanner.skip_spaces()
    if scanner.at_line_end() or scanner.at_comment():
      self._open = opened
    elif scanner.peek() == "[":
      self._parse_flow()
    else:
      self._emit_scalar(self._read_scalar())
    scanner.finish_line()

  def _parse_flow(self) -> None:
    scanner = self._scanner
    line, col = scanner.position()
    scanner.advance()
    self._handler.on_start_sequence()
    while True:
      scanner.skip_spaces()
      if scanner.at_line_end() or scanner.at_comment():
        raise scanner.fault("MalformedStructure", "flow sequence is missing ']'", line, col)
      char = scanner.peek()
      if char == "]":
        scanner.advance()
        break
      if char == ",":
        raise scanner.fault("MalformedStructure", "empty flow sequence entry")
      if char == "[":
        self._parse_flow()
      elif char in QUOTES:
        self._emit_scalar(scanner.read_quoted())
      else:
        self._emit_scalar(scanner.read_bare_value(stops=",]"))
      scanner.skip_spaces()
      if scanner.peek() == ",":
        scanner.advance()
      elif scanner.peek() == "]":
        scanner.advance()
        break
      elif scanner.at_line_end() or scanner.at_comment():
        raise scanner.fault("MalformedStructure", "flow sequence is missing ']'", line, col)
      else:
        scanner.current()
        raise scanner.fault("MalformedStructure", "expected ',' or ']' in flow sequence")
    self._handler.on_end_sequence()

  def _read_scalar(self) -> str:
    scanner = self._scanner
    if scanner.peek() in QUOTES:
      return scanner.read_quoted()
    return scanner.read_bare_value()

  def _emit_scalar(self, text: str) -> None:
    if not self._handler.on_scalar(text):
      raise _EarlyExit

  def _push(self, kind: ContextKind, indent: int) -> None:
    self._stack.append(_Context(kind, indent))
    if kind == MAPPING:
      self._handler.on_start_mapping()
    else:
      self._handler.on_start_sequence()

  def _close(self) -> None:
    context = self._stack.pop()
    if context.kind == MAPPING:
      self._handler.on_end_mapping()
    else:
      self._handler.on_end_sequence()


def parse(text: str, handler: YamlHandler) -> bool:
  """Shorthand for ``YamlParser(text, handler).parse()``."""
  return YamlParser(text, handler).parse()
