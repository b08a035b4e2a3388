"""Colored flow logger — ANSI-colored console logging for the pass generation flow.

Color scheme:
    🔵 Blue    — Load
    🟡 Yellow  — Preview / Validate
    🟣 Magenta — Export (card render)
    🟢 Green   — Save / Complete
    🔴 Red     — Errors
    ⚪ Gray    — Details
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Flow Stage Definitions ───────────────────────────────────────────

class FlowStage:
    """Stages of the pass flow with colors and icons."""

    LOAD = ("LOAD", _Colors.BLUE, "🔎")
    PREVIEW = ("PREVIEW", _Colors.YELLOW, "👀")
    VALIDATE = ("VALIDATE", _Colors.YELLOW, "📝")
    EXPORT = ("EXPORT", _Colors.MAGENTA, "🖼️")
    SAVE = ("SAVE", _Colors.GREEN, "💾")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")
    ERROR = ("ERROR", _Colors.RED, "❌")


def _kv(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


# ── FlowLogger ───────────────────────────────────────────────────────

class FlowLogger:
    """Color-coded logger for the pass flow.

    Usage:
        log = FlowLogger("yardpass.flow")
        log.step_start(FlowStage.LOAD, "Fetching saved pass")
        log.step_complete(FlowStage.LOAD, "No pass yet")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_kv(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({_kv(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({_kv(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and end of a step with elapsed time.

        Usage:
            with log.timed_step(FlowStage.EXPORT, "Rendering card"):
                png = await renderer.render_png(card, locked=False)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.2f}s)")
