"""Hand a resolved location from a source application to a destination."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import psutil

from .apps import (
    CLIPBOARD,
    AppIdentity,
    display_name,
    is_app_target,
    is_document_app,
    is_document_target,
    is_file_manager,
    is_terminal,
)
from .models import HandoffOutcome
from .resolver import PathResolver, ResolutionError, resolve_open_target

logger = logging.getLogger(__name__)

Opener = Callable[[str, str], None]

APPLICATION_DIRS: Sequence[Path] = (
    Path("/Applications"),
    Path("/System/Applications"),
    Path("/System/Applications/Utilities"),
    Path("~/Applications"),
)

CLOUD_ONLY_MESSAGE = (
    "Document is cloud-only or cannot be mapped. "
    "Save locally or sync in OneDrive to open in Finder or a terminal."
)

# Bundle names differ from the scripting name for a few applications.
_BUNDLE_NAMES = {
    AppIdentity.ITERM: ("iTerm2", "iTerm"),
}

_PROCESS_NAMES = {
    AppIdentity.ITERM: ("iTerm2",),
    AppIdentity.VSCODE: ("Code",),
    AppIdentity.VSCODE_INSIDERS: ("Code - Insiders",),
}


class OpenError(RuntimeError):
    """Raised when ``open -a`` refuses a path or application."""


def open_with_application(path: str, application: str) -> None:
    completed = subprocess.run(
        ["open", "-a", application, path],
        capture_output=True,
        text=True,
        check=False,
    )
    if completed.returncode != 0:
        raise OpenError(completed.stderr.strip() or f"Could not open {path} in {application}")


def find_installed_application(name: str, search_dirs: Optional[Iterable[Path]] = None) -> str:
    """Return the installed bundle name for ``name`` (``iTerm`` may be ``iTerm2``)."""

    candidates = _BUNDLE_NAMES.get(name, (str(name),))
    for directory in search_dirs if search_dirs is not None else APPLICATION_DIRS:
        directory = Path(directory).expanduser()
        for candidate in candidates:
            if (directory / f"{candidate}.app").exists():
                return candidate
    raise ResolutionError(f"{name} not found")


def is_application_running(name: str) -> bool:
    names = {str(name), *_PROCESS_NAMES.get(name, ())}
    for proc in psutil.process_iter(["name"]):
        if proc.info.get("name") in names:
            return True
    return False


class HandoffExecutor:
    """Performs source -> destination hand-offs.

    The actual "open in application" step is delegated to ``opener`` so the
    hand-off logic can run without launching anything.
    """

    def __init__(
        self,
        *,
        resolver: PathResolver | None = None,
        opener: Opener | None = None,
        app_lookup: Callable[[str], str] | None = None,
    ) -> None:
        self.resolver = resolver or PathResolver()
        self.opener = opener or open_with_application
        self.app_lookup = app_lookup or find_installed_application

    def _open(self, path: str, target: AppIdentity) -> HandoffOutcome:
        application = self.app_lookup(target)
        logger.info("Opening %s in %s", path, application)
        self.opener(path.strip(), application)
        return HandoffOutcome(status="done", detail=f"Opened {path} in {display_name(target)}")

    def text_to_application(self, text: str, target: AppIdentity) -> HandoffOutcome:
        return self._open(text or "", target)

    def file_manager_to_application(self, file_manager: AppIdentity, target: AppIdentity) -> HandoffOutcome:
        directory = resolve_open_target(self.resolver.resolve_file_manager_path(file_manager))
        return self._open(directory, target)

    def document_app_to_application(self, app: AppIdentity, target: AppIdentity) -> HandoffOutcome:
        location = self.resolver.resolve_document_path(app)
        if location.is_cloud_only:
            raise ResolutionError(CLOUD_ONLY_MESSAGE)
        if is_document_target(target):
            # Viewers open the document itself, not its folder.
            return self._open(location.resolved_path, target)
        return self._open(resolve_open_target(location.resolved_path), target)

    def terminal_to_file_manager(self, terminal: AppIdentity, file_manager: AppIdentity) -> HandoffOutcome:
        result = self.resolver.hand_off_terminal(terminal, file_manager)
        return HandoffOutcome(status="done", detail=result)

    def hand_off(self, source: str, target: str, *, text: str = "") -> HandoffOutcome:
        """Dispatch on the source family; ``text`` is the clipboard content for ``Clipboard``."""

        if not is_app_target(target):
            raise ValueError(f"Unsupported destination: {target}")
        target = AppIdentity(target)
        if source == CLIPBOARD:
            return self.text_to_application(text, target)
        if is_document_app(source):
            return self.document_app_to_application(AppIdentity(source), target)
        if is_file_manager(source):
            return self.file_manager_to_application(AppIdentity(source), target)
        if is_terminal(source) and is_file_manager(target):
            return self.terminal_to_file_manager(AppIdentity(source), target)
        raise ValueError("Unsupported combination")
