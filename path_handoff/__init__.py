"""Resolve what a macOS application has open and hand that location to another."""

from .actions import HandoffExecutor, find_installed_application, is_application_running
from .apps import (
    APP_TARGETS,
    CLIPBOARD,
    DOCUMENT_APPS,
    DOCUMENT_TARGETS,
    FILE_MANAGERS,
    SOURCES,
    TERMINALS,
    AppIdentity,
    destinations_for,
    display_name,
    identity_from_frontmost,
    is_app_target,
    is_document_app,
    is_document_target,
    is_file_manager,
    is_terminal,
)
from .cloud import discover_sync_roots, map_to_local
from .config import HandoffConfig
from .executor import AppleScriptError, UnsupportedPlatformError, run_applescript
from .frontmost import FrontmostAppProvider
from .models import DocumentLocation, FrontmostApplication, HandoffOutcome
from .normalize import normalize_result
from .resolver import (
    PathResolver,
    ResolutionError,
    resolve_document_path,
    resolve_file_manager_path,
    resolve_open_target,
)
from .scripts import build_handoff_script, build_script

__all__ = [
    "AppIdentity",
    "CLIPBOARD",
    "FILE_MANAGERS",
    "TERMINALS",
    "DOCUMENT_APPS",
    "DOCUMENT_TARGETS",
    "APP_TARGETS",
    "SOURCES",
    "is_file_manager",
    "is_terminal",
    "is_document_app",
    "is_document_target",
    "is_app_target",
    "identity_from_frontmost",
    "display_name",
    "destinations_for",
    "build_script",
    "build_handoff_script",
    "normalize_result",
    "map_to_local",
    "discover_sync_roots",
    "run_applescript",
    "AppleScriptError",
    "UnsupportedPlatformError",
    "HandoffConfig",
    "PathResolver",
    "ResolutionError",
    "resolve_file_manager_path",
    "resolve_document_path",
    "resolve_open_target",
    "DocumentLocation",
    "FrontmostApplication",
    "HandoffOutcome",
    "FrontmostAppProvider",
    "HandoffExecutor",
    "find_installed_application",
    "is_application_running",
]
