"""Value types passed between the resolver, the actions and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .apps import AppIdentity


@dataclass(frozen=True, slots=True)
class DocumentLocation:
    """Where a document application's front document lives.

    ``document_path`` is what the application reported, possibly a cloud URL.
    ``resolved_path`` is a local file path, or ``""`` when a cloud document
    has no synced local copy.
    """

    document_path: str
    resolved_path: str

    @property
    def is_cloud_only(self) -> bool:
        return not self.resolved_path


@dataclass(frozen=True, slots=True)
class FrontmostApplication:
    """The application owning the focused window."""

    name: str
    bundle_id: str
    pid: int
    process_path: Optional[Path]
    timestamp: datetime
    identity: Optional[AppIdentity] = None

    @property
    def app_label(self) -> str:
        if self.name:
            return self.name
        if self.process_path:
            return self.process_path.name
        return "Unknown"


@dataclass(slots=True)
class HandoffOutcome:
    status: str
    detail: str = ""
