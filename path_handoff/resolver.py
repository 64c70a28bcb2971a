"""Resolve the current location of a source application into a local path."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from .apps import AppIdentity, is_document_app, is_file_manager, is_terminal
from .cloud import map_to_local
from .config import HandoffConfig
from .executor import ScriptRunner, run_applescript
from .models import DocumentLocation
from .normalize import is_probably_url, normalize_result
from .scripts import build_handoff_script, build_script

logger = logging.getLogger(__name__)

CloudMapper = Callable[[str, HandoffConfig], Optional[Path]]


class ResolutionError(RuntimeError):
    """Raised when an application answered but gave no usable path."""


class PathResolver:
    """Runs per-application scripts and turns their output into local paths.

    Each call rebuilds the script and rediscovers sync roots; the resolver
    holds no state between calls.
    """

    def __init__(
        self,
        *,
        runner: ScriptRunner | None = None,
        config: HandoffConfig | None = None,
        mapper: CloudMapper | None = None,
    ) -> None:
        self.config = config or HandoffConfig.from_env()
        self.runner = runner or (lambda script: run_applescript(script, self.config))
        self.mapper = mapper or map_to_local

    def _query(self, identity: AppIdentity) -> str:
        logger.debug("Querying %s for its current path", identity)
        normalized = normalize_result(self.runner(build_script(identity)))
        if not normalized:
            raise ResolutionError(f"{identity} returned an empty path")
        return normalized

    def resolve_file_manager_path(self, identity: AppIdentity) -> str:
        if not is_file_manager(identity):
            raise ValueError(f"{identity} is not a file manager")
        return self._query(AppIdentity(identity))

    def resolve_document_path(self, identity: AppIdentity) -> DocumentLocation:
        if not is_document_app(identity):
            raise ValueError(f"{identity} is not a document application")
        document_path = self._query(AppIdentity(identity))
        if not is_probably_url(document_path):
            return DocumentLocation(document_path=document_path, resolved_path=document_path)
        mapped = self.mapper(document_path, self.config)
        if mapped is None:
            logger.info("No synced copy found for %s", document_path)
        return DocumentLocation(
            document_path=document_path,
            resolved_path=str(mapped) if mapped is not None else "",
        )

    def hand_off_terminal(self, terminal: AppIdentity, file_manager: AppIdentity) -> str:
        """Ask ``terminal`` to open its working directory in ``file_manager``."""

        if not is_terminal(terminal):
            raise ValueError(f"{terminal} is not a terminal")
        if not is_file_manager(file_manager):
            raise ValueError(f"{file_manager} is not a file manager")
        script = build_handoff_script(AppIdentity(terminal), AppIdentity(file_manager))
        return self.runner(script).strip()

    @staticmethod
    def resolve_open_target(path: str) -> str:
        return resolve_open_target(path)


def resolve_open_target(path: str) -> str:
    """Return the folder to open for ``path``: a file's parent, otherwise ``path`` itself."""

    # isfile() reports False for missing or unstat-able paths; the opener
    # surfaces the real error for those.
    if path and os.path.isfile(path):
        return os.path.dirname(path)
    return path


def resolve_file_manager_path(identity: AppIdentity) -> str:
    return PathResolver().resolve_file_manager_path(identity)


def resolve_document_path(identity: AppIdentity) -> DocumentLocation:
    return PathResolver().resolve_document_path(identity)
