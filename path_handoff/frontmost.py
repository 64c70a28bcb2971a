"""Frontmost application inspection for choosing a default source."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import psutil

from .apps import identity_from_frontmost
from .executor import AppleScriptError, ScriptRunner, run_applescript
from .models import FrontmostApplication
from .normalize import MISSING_VALUE

logger = logging.getLogger(__name__)

FRONTMOST_SCRIPT = """
tell application "System Events"
  set frontProc to first application process whose frontmost is true
  set bundleId to ""
  try
    set bundleId to bundle identifier of frontProc
    if bundleId is missing value then set bundleId to ""
  end try
  return (name of frontProc) & linefeed & bundleId & linefeed & ((unix id of frontProc) as text)
end tell
""".strip()


class FrontmostAppProvider:
    """macOS helper that reports which application currently has focus."""

    def __init__(self, *, runner: ScriptRunner | None = None) -> None:
        self._runner = runner or run_applescript
        self._supported = runner is not None or sys.platform == "darwin"
        if not self._supported:
            logger.warning("FrontmostAppProvider currently supports only macOS.")

    def is_supported(self) -> bool:
        return self._supported

    def current(self) -> Optional[FrontmostApplication]:
        if not self.is_supported():
            return None
        try:
            raw = self._runner(FRONTMOST_SCRIPT)
        except AppleScriptError as exc:
            logger.debug("Frontmost application query failed: %s", exc)
            return None
        return self._parse(raw)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _parse(self, raw: str) -> Optional[FrontmostApplication]:
        lines = [line.strip() for line in raw.strip().splitlines()]
        if not lines or not lines[0]:
            return None
        name = lines[0]
        bundle_id = lines[1] if len(lines) > 1 and lines[1] != MISSING_VALUE else ""
        try:
            pid = int(lines[2]) if len(lines) > 2 else 0
        except ValueError:
            pid = 0
        return FrontmostApplication(
            name=name,
            bundle_id=bundle_id,
            pid=pid,
            process_path=self._process_path(pid),
            timestamp=datetime.now(timezone.utc),
            identity=identity_from_frontmost(name, bundle_id or None),
        )

    @staticmethod
    def _process_path(pid: int) -> Optional[Path]:
        if pid <= 0:
            return None
        try:
            exe = psutil.Process(pid).exe()
        except (psutil.AccessDenied, psutil.NoSuchProcess, psutil.ZombieProcess):
            return None
        return Path(exe) if exe else None
