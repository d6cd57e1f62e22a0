from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from yamlsax.config import (
  DEFAULT_EXTENSION,
  DEFAULT_FIXTURE_DIR,
  DEFAULT_QUIT_SENTINEL,
  EVENTS,
  LOGS,
  ensure_directories,
  load_settings,
)
from yamlsax.errors import ParseFault
from yamlsax.handler import EventRecorder
from yamlsax.parser import YamlParser
from yamlsax.tree import loads

ROOT = Path(__file__).resolve().parents[2]

_NOW = datetime.now(timezone.utc)
LOG_FILE = LOGS / f"lint-{_NOW.strftime('%Y%m%d-%H%M%S')}.log"

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


def log(line: str) -> None:
  """Log a message to both stdout and the lint log file.

  Args:
    line: Log message
  """
  timestamp = datetime.now(timezone.utc).isoformat()
  message = f"[{timestamp}] {line}"
  print(message)
  LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
  with LOG_FILE.open("a", encoding="utf-8") as handle:
    handle.write(message + "\n")


def append_event(event: dict) -> None:
  """Append an event to the daily event log.

  Args:
    event: Event data dictionary
  """
  now = datetime.now(timezone.utc)
  EVENTS.mkdir(parents=True, exist_ok=True)
  event_file = EVENTS / f"lint-{now.strftime('%Y%m%d')}.jsonl"
  record = {"ts": now.isoformat(), **event}
  with event_file.open("a", encoding="utf-8") as handle:
    handle.write(json.dumps(record, ensure_ascii=False) + "\n")


@dataclass
class Settings:
  fixtures: str = DEFAULT_FIXTURE_DIR
  extension: str = DEFAULT_EXTENSION
  quit_sentinel: str = DEFAULT_QUIT_SENTINEL
  echo_events: bool = True
  crosscheck: bool = False

  @staticmethod
  def _bool_with_default(value: Any, default: bool) -> bool:
    if value is None:
      return default
    if isinstance(value, bool):
      return value
    if isinstance(value, str):
      lowered = value.strip().lower()
      if lowered in _TRUE_STRINGS:
        return True
      if lowered in _FALSE_STRINGS:
        return False
      log(f"Unbekannter Wahrheitswert {value!r}, Default={default}")
      return default
    return bool(value)

  @classmethod
  def load(cls, path: Path | None = None) -> Settings:
    data = load_settings(path)
    return cls(
      fixtures=str(data.get("fixtures") or DEFAULT_FIXTURE_DIR),
      extension=str(data.get("extension") or DEFAULT_EXTENSION),
      quit_sentinel=str(data.get("quit_sentinel") or DEFAULT_QUIT_SENTINEL),
      echo_events=cls._bool_with_default(data.get("echo_events"), True),
      crosscheck=cls._bool_with_default(data.get("crosscheck"), False),
    )


class EchoHandler(EventRecorder):
  """EventRecorder that also logs every event as it arrives."""

  def __init__(self, stop_on: str | None = None, echo: bool = True) -> None:
    super().__init__(stop_on=stop_on)
    self.echo = echo

  def _echo(self, line: str) -> None:
    if self.echo:
      log(line)

  def on_start_document(self) -> None:
    self._echo("onStartDocument")
    super().on_start_document()

  def on_end_document(self) -> None:
    self._echo("onEndDocument")
    super().on_end_document()

  def on_start_sequence(self) -> None:
    self._echo("onStartSequence")
    super().on_start_sequence()

  def on_end_sequence(self) -> None:
    self._echo("onEndSequence")
    super().on_end_sequence()

  def on_start_mapping(self) -> None:
    self._echo("onStartMapping")
    super().on_start_mapping()

  def on_end_mapping(self) -> None:
    self._echo("onEndMapping")
    super().on_end_mapping()

  def on_key(self, text: str) -> bool:
    self._echo(f"key: {text}")
    return super().on_key(text)

  def on_scalar(self, text: str) -> bool:
    self._echo(f"scalar: {text}")
    return super().on_scalar(text)

  def on_error(self, message: str, line: int, col: int) -> None:
    log(f"ERROR: {message} on line {line} col {col}")
    super().on_error(message, line, col)


@dataclass
class FileResult:
  path: Path
  ok: bool
  early_out: bool = False
  error: str | None = None
  mismatch: str | None = None


def iter_fixtures(directory: Path, extension: str) -> Iterable[Path]:
  """Yield files in ``directory`` with the given extension, sorted by name."""
  for path in sorted(directory.iterdir()):
    if path.is_file() and path.suffix == extension:
      yield path


def _normalize(value: Any) -> Any:
  if isinstance(value, dict):
    return {str(key): _normalize(val) for key, val in value.items()}
  if isinstance(value, list):
    return [_normalize(item) for item in value]
  if value is None:
    return ""
  return value


def crosscheck(text: str) -> str | None:
  """Compare the streaming parser's result with PyYAML's BaseLoader.

  Returns:
    None when both agree, otherwise a short description of the difference
  """
  try:
    ours = _normalize(loads(text))
  except ParseFault as exc:
    return f"yamlsax rejected the document: {exc}"
  try:
    reference = _normalize(yaml.load(text, Loader=yaml.BaseLoader))
  except yaml.YAMLError as exc:
    return f"PyYAML rejected the document: {exc}"
  if ours != reference:
    return f"yamlsax={ours!r} PyYAML={reference!r}"
  return None


def check_file(path: Path, settings: Settings) -> FileResult:
  text = path.read_text(encoding="utf-8")
  handler = EchoHandler(stop_on=settings.quit_sentinel, echo=settings.echo_events)
  result = YamlParser(text, handler).parse()
  if handler.early_out:
    return FileResult(path=path, ok=True, early_out=True)
  if not result:
    _, message, line, col = handler.errors[0]
    return FileResult(path=path, ok=False, error=f"{message} on line {line} col {col}")
  if settings.crosscheck:
    mismatch = crosscheck(text)
    if mismatch is not None:
      return FileResult(path=path, ok=False, mismatch=mismatch)
  return FileResult(path=path, ok=True)


def main(argv: list[str] | None = None) -> int:
  parser = argparse.ArgumentParser(description="Parse a directory of YAML fixtures")
  parser.add_argument("directory", nargs="?")
  parser.add_argument("--ext")
  parser.add_argument("--settings")
  parser.add_argument("--quiet", action="store_true", help="do not echo parser events")
  parser.add_argument("--crosscheck", action="store_true", help="compare results with PyYAML")
  args = parser.parse_args(argv)

  ensure_directories()
  settings = Settings.load(Path(args.settings) if args.settings else None)
  if args.ext:
    settings.extension = args.ext
  if args.quiet:
    settings.echo_events = False
  if args.crosscheck:
    settings.crosscheck = True

  directory = Path(args.directory or settings.fixtures)
  if not directory.is_absolute() and not directory.exists():
    directory = ROOT / directory
  if not directory.is_dir():
    log(f"Verzeichnis nicht gefunden: {directory}")
    return 1

  failures = 0
  for path in iter_fixtures(directory, settings.extension):
    log(f"Parse {path.name}")
    result = check_file(path, settings)
    if result.early_out:
      log(f"{path.name}: vorzeitig beendet ({settings.quit_sentinel})")
    elif result.ok:
      log(f"{path.name}: OK")
    else:
      failures += 1
      log(f"{path.name}: FEHLER {result.error or result.mismatch}")
    append_event(
      {
        "type": "lint",
        "file": str(path),
        "ok": result.ok,
        "early_out": result.early_out,
        "error": result.error,
        "mismatch": result.mismatch,
      }
    )

  log(f"Fertig, {failures} Fehler")
  return 0 if failures == 0 else 1


if __name__ == "__main__": # pragma: no cover
  sys.exit(main())
