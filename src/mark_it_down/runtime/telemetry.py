"""Editor logging on top of telelog.

telelog attaches the handlers (rotating log file, terminal stream) to the
``mark_it_down`` logger; every module logs through a child of it. Two record
shapes sit on top of plain log lines:

``record_event(name, ...)``
    one ``event::<name> key=value ...`` line, e.g. a failed save.
``span(name, ...)``
    a timed block, logged once on exit as ``span::<name> <outcome> ms=...``.
    Spans log at DEBUG unless they fail, so the default preset stays silent.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, Optional

import telelog

from mark_it_down.settings import env, env_flag

ROOT_LOGGER = "mark_it_down"
PRESETS = ("quiet", "debug", "console")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class LogOptions:
    """Where editor logs go.

    The Textual screen owns the terminal, so ``terminal`` is off unless the
    core runs headless.
    """

    level: str = "WARNING"
    log_file: str = ""
    terminal: bool = False
    backups: int = 7

    @classmethod
    def from_env(cls) -> "LogOptions":
        backups = env("LOG_BACKUPS")
        return cls(
            level=(env("LOG_LEVEL") or "WARNING").strip().upper(),
            log_file=env("LOG_FILE") or "",
            terminal=env_flag("LOG_TERMINAL", False),
            backups=int(backups) if backups and backups.isdigit() else 7,
        )

    @classmethod
    def for_preset(cls, preset: str) -> "LogOptions":
        base = cls.from_env()
        key = preset.strip().lower()
        if key == "quiet":
            return base
        if key == "debug":
            return replace(base, level="DEBUG", log_file=base.log_file or "mark_it_down.log")
        if key == "console":
            return replace(base, level="INFO", terminal=True)
        raise ValueError(f"Unknown log preset '{preset}', expected one of {PRESETS}")


_ACTIVE: Optional[LogOptions] = None


def configure(
    options: Optional[LogOptions] = None, *, preset: Optional[str] = None
) -> logging.Logger:
    """(Re)attach the editor's handlers; returns the root editor logger."""

    global _ACTIVE
    if options is not None and preset is not None:
        raise ValueError("Provide either `options` or `preset`, not both.")
    if preset is not None:
        options = LogOptions.for_preset(preset)
    elif options is None:
        options = LogOptions.from_env()

    root = telelog.get_logger(
        logging.getLogger(ROOT_LOGGER),
        level=options.level.lower(),
        log_path=options.log_file or None,
        terminal=options.terminal,
        backup_count=options.backups,
    )
    if not root.handlers:
        # without a sink, records would reach logging's stderr fallback
        root.addHandler(logging.NullHandler())
    _ACTIVE = options
    return root


def active_options() -> Optional[LogOptions]:
    return _ACTIVE


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Mapping[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[level.lower()]
    except KeyError as exc:
        raise ValueError(f"Unsupported log level '{level}'.") from exc


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    log = get_logger(logger_name)
    numeric = _level(level)
    if not log.isEnabledFor(numeric):
        return
    if data:
        log.log(numeric, "event::%s %s", name, _pairs(data))
    else:
        log.log(numeric, "event::%s", name)


@dataclass
class SpanHandle:
    """Metadata collector for one :func:`span` block."""

    name: str
    logger: logging.Logger
    metadata: Dict[str, str] = field(default_factory=dict)
    outcome: str = "ok"
    started: float = field(default_factory=time.perf_counter)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        self.outcome = "failed"
        self.metadata["reason"] = reason

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

    def finish(self) -> None:
        level = logging.ERROR if self.outcome == "failed" else logging.DEBUG
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(
            level,
            "span::%s %s ms=%.2f %s",
            self.name,
            self.outcome,
            self.elapsed_ms,
            _pairs(self.metadata),
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block; an exception marks the span failed and propagates.

    ``component=True`` tags the record with ``name``; a string tags it with
    that component instead.
    """

    handle = SpanHandle(name=name, logger=get_logger(logger_name))
    if component:
        handle.add_metadata("component", name if component is True else component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        handle.finish()


configure()

__all__ = [
    "LogOptions",
    "PRESETS",
    "ROOT_LOGGER",
    "SpanHandle",
    "active_options",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
