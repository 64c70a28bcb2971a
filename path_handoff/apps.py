"""Closed set of supported applications and the families they belong to."""

from __future__ import annotations

from enum import StrEnum
from typing import List, Optional, Tuple


class AppIdentity(StrEnum):
    """Supported application; the value is the name AppleScript addresses."""

    # File managers
    FINDER = "Finder"
    QSPACE_PRO = "QSpace Pro"
    BLOOM = "Bloom"

    # Terminals
    TERMINAL = "Terminal"
    ITERM = "iTerm"
    WARP = "Warp"
    WEZTERM = "WezTerm"
    GHOSTTY = "Ghostty"
    KITTY = "kitty"

    # Document applications
    VSCODE = "Visual Studio Code"
    VSCODE_INSIDERS = "Visual Studio Code - Insiders"
    XCODE = "Xcode"
    XCODE_BETA = "Xcode-beta"
    INTELLIJ_IDEA = "IntelliJ IDEA"
    PYCHARM = "PyCharm"
    WEBSTORM = "WebStorm"
    PHPSTORM = "PhpStorm"
    RUBYMINE = "RubyMine"
    GOLAND = "GoLand"
    CLION = "CLion"
    DATAGRIP = "DataGrip"
    RIDER = "Rider"
    APPCODE = "AppCode"
    SUBLIME_TEXT = "Sublime Text"
    BBEDIT = "BBEdit"
    TEXTEDIT = "TextEdit"
    COTEDITOR = "CotEditor"
    NOVA = "Nova"
    OBSIDIAN = "Obsidian"
    WORD = "Microsoft Word"
    EXCEL = "Microsoft Excel"
    POWERPOINT = "Microsoft PowerPoint"
    PREVIEW = "Preview"
    SKIM = "Skim"
    PDF_EXPERT = "PDF Expert"
    ACROBAT = "Adobe Acrobat"
    ACROBAT_READER = "Adobe Acrobat Reader DC"


CLIPBOARD = "Clipboard"

FILE_MANAGERS: Tuple[AppIdentity, ...] = (
    AppIdentity.FINDER,
    AppIdentity.QSPACE_PRO,
    AppIdentity.BLOOM,
)

TERMINALS: Tuple[AppIdentity, ...] = (
    AppIdentity.TERMINAL,
    AppIdentity.ITERM,
    AppIdentity.WARP,
    AppIdentity.WEZTERM,
    AppIdentity.GHOSTTY,
    AppIdentity.KITTY,
)

JETBRAINS_IDES: Tuple[AppIdentity, ...] = (
    AppIdentity.INTELLIJ_IDEA,
    AppIdentity.PYCHARM,
    AppIdentity.WEBSTORM,
    AppIdentity.PHPSTORM,
    AppIdentity.RUBYMINE,
    AppIdentity.GOLAND,
    AppIdentity.CLION,
    AppIdentity.DATAGRIP,
    AppIdentity.RIDER,
    AppIdentity.APPCODE,
)

DOCUMENT_TARGETS: Tuple[AppIdentity, ...] = (
    AppIdentity.PREVIEW,
    AppIdentity.SKIM,
    AppIdentity.PDF_EXPERT,
    AppIdentity.ACROBAT,
    AppIdentity.ACROBAT_READER,
)

DOCUMENT_APPS: Tuple[AppIdentity, ...] = (
    AppIdentity.VSCODE,
    AppIdentity.VSCODE_INSIDERS,
    AppIdentity.XCODE,
    AppIdentity.XCODE_BETA,
    *JETBRAINS_IDES,
    AppIdentity.SUBLIME_TEXT,
    AppIdentity.BBEDIT,
    AppIdentity.TEXTEDIT,
    AppIdentity.COTEDITOR,
    AppIdentity.NOVA,
    AppIdentity.OBSIDIAN,
    AppIdentity.WORD,
    AppIdentity.EXCEL,
    AppIdentity.POWERPOINT,
    *DOCUMENT_TARGETS,
)

# Everything a location can be handed to.
APP_TARGETS: Tuple[AppIdentity, ...] = FILE_MANAGERS + TERMINALS + DOCUMENT_TARGETS

SOURCES: Tuple[str, ...] = (CLIPBOARD, *FILE_MANAGERS, *TERMINALS, *DOCUMENT_APPS)

_FRONTMOST_BUNDLE_IDS = {
    "com.adobe.Acrobat.Pro": AppIdentity.ACROBAT,
    "net.sourceforge.skim-app.skim": AppIdentity.SKIM,
}

_FRONTMOST_ALIASES = {
    "iTerm2": AppIdentity.ITERM,
    "Code": AppIdentity.VSCODE,
    "Code - Insiders": AppIdentity.VSCODE_INSIDERS,
    "Adobe Acrobat Pro": AppIdentity.ACROBAT,
}

_DISPLAY_NAMES = {
    AppIdentity.ITERM: "iTerm2",
    AppIdentity.VSCODE: "VS Code",
    AppIdentity.VSCODE_INSIDERS: "VS Code - Insiders",
    AppIdentity.ACROBAT_READER: "Adobe Acrobat Reader",
}


def is_file_manager(value: str) -> bool:
    return value in FILE_MANAGERS


def is_terminal(value: str) -> bool:
    return value in TERMINALS


def is_document_app(value: str) -> bool:
    return value in DOCUMENT_APPS


def is_document_target(value: str) -> bool:
    return value in DOCUMENT_TARGETS


def is_app_target(value: str) -> bool:
    return value in APP_TARGETS


def parse_identity(value: str) -> AppIdentity:
    """Look up an identity by its application name, falling back to aliases.

    Raises ``ValueError`` for names outside the supported set.
    """

    try:
        return AppIdentity(value)
    except ValueError:
        alias = _FRONTMOST_ALIASES.get(value)
        if alias is None:
            raise ValueError(f"Unsupported application: {value}") from None
        return alias


def identity_from_frontmost(name: str, bundle_id: Optional[str] = None) -> Optional[AppIdentity]:
    """Map the frontmost process name (and bundle id) onto a supported identity."""

    if bundle_id and bundle_id in _FRONTMOST_BUNDLE_IDS:
        return _FRONTMOST_BUNDLE_IDS[bundle_id]
    if name in _FRONTMOST_ALIASES:
        return _FRONTMOST_ALIASES[name]
    try:
        return AppIdentity(name)
    except ValueError:
        return None


def display_name(value: str) -> str:
    return _DISPLAY_NAMES.get(value, str(value))


def destinations_for(source: str) -> List[AppIdentity]:
    """Return the applications a location taken from ``source`` can be opened in."""

    if source == CLIPBOARD or is_document_app(source):
        targets = [*FILE_MANAGERS, *TERMINALS, *DOCUMENT_TARGETS]
    elif is_file_manager(source):
        targets = [manager for manager in FILE_MANAGERS if manager != source]
        targets.extend(TERMINALS)
    elif is_terminal(source):
        targets = list(FILE_MANAGERS)
    else:
        raise ValueError(f"Unsupported source: {source}")
    return [target for target in targets if target != source]
