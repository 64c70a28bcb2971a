"""Runtime configuration, read from ``PATH_HANDOFF_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_DEFAULT_CLOUD_STORAGE_DIR = Path("~/Library/CloudStorage")


@dataclass(slots=True)
class HandoffConfig:
    """Settings shared by the executor and the cloud path mapper."""

    cloud_storage_dir: Path = _DEFAULT_CLOUD_STORAGE_DIR
    provider_prefix: str = "OneDrive"
    cloud_host_marker: str = "sharepoint.com"
    osascript: str = "osascript"
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "HandoffConfig":
        storage_dir = os.getenv("PATH_HANDOFF_CLOUD_STORAGE_DIR")
        timeout = os.getenv("PATH_HANDOFF_TIMEOUT")
        return cls(
            cloud_storage_dir=Path(storage_dir or _DEFAULT_CLOUD_STORAGE_DIR).expanduser(),
            provider_prefix=os.getenv("PATH_HANDOFF_PROVIDER_PREFIX", "OneDrive"),
            cloud_host_marker=os.getenv("PATH_HANDOFF_CLOUD_HOST", "sharepoint.com"),
            osascript=os.getenv("PATH_HANDOFF_OSASCRIPT", "osascript"),
            timeout=float(timeout) if timeout else None,
        )
