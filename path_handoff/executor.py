"""Synchronous AppleScript execution through ``osascript``."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from contextlib import contextmanager
from typing import Callable, Iterator

from .config import HandoffConfig

logger = logging.getLogger(__name__)

LOCALE_VARIABLE = "LC_ALL"

ScriptRunner = Callable[[str], str]


class UnsupportedPlatformError(RuntimeError):
    """Raised when AppleScript is requested outside macOS."""


class AppleScriptError(RuntimeError):
    """Raised with the transport's error text when a script fails."""


@contextmanager
def suspended_locale(variable: str = LOCALE_VARIABLE) -> Iterator[None]:
    """Unset ``variable`` for the duration of the block and restore it afterwards.

    ``osascript`` formats its output and error messages according to the
    locale, so it runs with the variable cleared.
    """

    saved = os.environ.pop(variable, None)
    try:
        yield
    finally:
        if saved is None:
            os.environ.pop(variable, None)
        else:
            os.environ[variable] = saved


def run_applescript(script: str, config: HandoffConfig | None = None) -> str:
    """Run ``script`` and return its standard output.

    Any output on standard error counts as failure, including errors the
    script raises itself (``error "No active document"``).
    """

    if sys.platform != "darwin":
        raise UnsupportedPlatformError("macOS only")
    config = config or HandoffConfig.from_env()
    logger.debug("Running AppleScript (%d chars)", len(script))
    with suspended_locale():
        try:
            completed = subprocess.run(
                [config.osascript, "-e", script],
                capture_output=True,
                text=True,
                timeout=config.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise AppleScriptError(f"AppleScript timed out after {exc.timeout} seconds") from exc
    if completed.stderr:
        raise AppleScriptError(completed.stderr)
    return completed.stdout
