"""AppleScript builders that ask each supported application for its current path.

Every identity has exactly one builder in :data:`SCRIPT_BUILDERS`. Builders are
pure: they only interpolate the application name, so scripts are rebuilt on
every call rather than cached.
"""

from __future__ import annotations

from textwrap import dedent
from typing import Callable, Dict

from .apps import JETBRAINS_IDES, TERMINALS, AppIdentity

ScriptBuilder = Callable[[AppIdentity], str]


def _script(body: str) -> str:
    return dedent(body).strip() + "\n"


def _running_guard(app: str) -> str:
    return dedent(
        f"""
        if application "{app}" is not running then
            error "{app} is not running"
        end if
        """
    )


# ----------------------------------------------------------------------
# File managers
# ----------------------------------------------------------------------


def _finder(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            """
            tell application "Finder"
              if (count of Finder windows) = 0 then error "No Finder window open"
              try
                set pathList to POSIX path of (folder of the front window as alias)
                return pathList
              on error
                error "Could not access Finder window path"
              end try
            end tell
            """
        )
    )


def _qspace_pro(app: AppIdentity) -> str:
    # Selection first, then the active pane root, then the window root.
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No {app} window open"

              try
                set sel to selected items of front window
                if (count of sel) > 0 then
                  set fileItem to item 1 of sel
                  try
                    return urlstr of fileItem
                  on error
                    return POSIX path of fileItem
                  end try
                end if
              end try

              try
                set sel to selection of front window
                if (count of sel) > 0 then
                  set fileItem to item 1 of sel
                  try
                    return urlstr of fileItem
                  on error
                    return POSIX path of fileItem
                  end try
                end if
              end try

              try
                set paneRoot to root item of activated pane of front window
                return urlstr of paneRoot
              end try

              try
                set winRoot to root item of front window
                return urlstr of winRoot
              end try

              return missing value
            end tell
            """
        )
    )


def _bloom(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              try
                set winSel to selection of front window
                if (count of winSel) > 0 then
                  set item1 to item 1 of winSel
                  try
                    return POSIX path of item1
                  on error
                    return POSIX path of (item1 as alias)
                  end try
                end if
              on error
                return rootURL of front window
              end try
            end tell
            """
        )
    )


# ----------------------------------------------------------------------
# Terminals
# ----------------------------------------------------------------------


def build_handoff_script(terminal: AppIdentity, file_manager: AppIdentity) -> str:
    """Type ``open -a <file manager> ./`` into the frontmost terminal session."""

    return _script(
        _running_guard(terminal)
        + dedent(
            f"""
            tell application "{file_manager}" to activate
            tell application "{terminal}" to activate
            tell application "System Events"
              keystroke "open -a '{file_manager}' ./"
              key code 76
            end tell
            """
        )
    )


def _terminal(app: AppIdentity) -> str:
    return build_handoff_script(app, AppIdentity.FINDER)


# ----------------------------------------------------------------------
# Document applications
# ----------------------------------------------------------------------


def _vscode(app: AppIdentity) -> str:
    process_name = "Code - Insiders" if app is AppIdentity.VSCODE_INSIDERS else "Code"
    return _script(
        f"""
        tell application "System Events"
          if not (exists process "{process_name}") then error "{app} is not running"
          tell process "{process_name}"
            if (count of windows) = 0 then error "No window open"
            try
              set docPath to value of attribute "AXDocument" of front window
              if docPath is missing value then error "No active document"
              return docPath
            on error
              error "Could not read active document"
            end try
          end tell
        end tell
        """
    )


def _xcode(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No window open"
              set activeDoc to active workspace document
              if activeDoc is missing value then error "No active document"
              set docPath to path of activeDoc
              return POSIX path of docPath
            end tell
            """
        )
    )


def _jetbrains(app: AppIdentity) -> str:
    # No scripting dictionary: take the second " - " field of the window title
    # and drop any trailing "[...]" project marker.
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "System Events"
              tell process "{app}"
                if (count of windows) = 0 then error "No window open"
                set winTitle to name of window 1
              end tell
            end tell

            set pathPart to winTitle
            if winTitle contains " - " then
              set AppleScript's text item delimiters to " - "
              set pathPart to text item 2 of (text items of winTitle)
            end if

            set AppleScript's text item delimiters to ""
            set pathPart to do shell script "echo " & quoted form of pathPart & " | xargs"

            if pathPart contains "[" then
              set AppleScript's text item delimiters to "["
              set pathPart to text item 1 of (text items of pathPart)
              set AppleScript's text item delimiters to ""
              set pathPart to do shell script "echo " & quoted form of pathPart & " | xargs"
            end if

            return pathPart
            """
        )
    )


def _sublime_text(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No window open"
              tell window 1
                if (count of views) = 0 then error "No active document"
                set activeView to view 1
                set docPath to file of activeView
                if docPath is missing value then error "No active document"
                return docPath
              end tell
            end tell
            """
        )
    )


def _bbedit(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No window open"
              set activeDoc to document of window 1
              if activeDoc is missing value then error "No active document"
              if exists file of activeDoc then
                set docPath to file of activeDoc
                return POSIX path of docPath
              end if
              error "No active document"
            end tell
            """
        )
    )


def _textedit(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No window open"
              set activeDoc to document of window 1
              if activeDoc is missing value then error "No active document"
              set docPath to path of activeDoc
              if docPath is missing value then error "No active document"
              return POSIX path of docPath
            end tell
            """
        )
    )


def _coteditor(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "No window open"
              set activeDoc to front document
              if activeDoc is missing value then error "No active document"
              set docPath to path of activeDoc
              if docPath is missing value then error "No active document"
              return POSIX path of docPath
            end tell
            """
        )
    )


def _window_active_document(app: AppIdentity, *, no_window: str, missing_message: str) -> str:
    """Shared by Nova and PDF Expert, which expose ``active document`` per window."""

    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) = 0 then error "{no_window}"
              tell window 1
                set activeDoc to active document
                if activeDoc is missing value then error "{missing_message}"
                set docPath to path of activeDoc
                return POSIX path of docPath
              end tell
            end tell
            """
        )
    )


def _nova(app: AppIdentity) -> str:
    return _window_active_document(app, no_window="No window open", missing_message="No active document")


def _pdf_expert(app: AppIdentity) -> str:
    return _window_active_document(app, no_window="No document open", missing_message="No document open")


def _obsidian(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "System Events"
              tell process "{app}"
                if (count of windows) = 0 then error "No window open"
                set docPath to value of attribute "AXDocument" of window 1
                if docPath is missing value then error "No active document"
                return docPath
              end tell
            end tell
            """
        )
    )


def _word(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if not (exists active document) then error "No active document"
              if (path of active document) is missing value then error "Document not saved"
              set docPath to (path of active document as text) & (name of active document)
              try
                set docAlias to file docPath
                return POSIX path of docAlias
              on error
                return docPath
              end try
            end tell
            """
        )
    )


def _office_container(app: AppIdentity, container: str, noun: str) -> str:
    """Excel and PowerPoint: ``path`` is an HFS folder (or a cloud URL) plus ``name``."""

    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if not (exists active {container}) then error "No active {container}"
              if (path of active {container}) is "" then error "{noun} not saved"
              set docPath to (path of active {container}) & (name of active {container})
              try
                set docAlias to file docPath
                return POSIX path of docAlias
              on error
                return docPath
              end try
            end tell
            """
        )
    )


def _excel(app: AppIdentity) -> str:
    return _office_container(app, "workbook", "Workbook")


def _powerpoint(app: AppIdentity) -> str:
    return _office_container(app, "presentation", "Presentation")


def _preview(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of documents) is 0 then error "No document open"
              set docPath to path of front document
              return POSIX path of docPath
            end tell
            """
        )
    )


def _skim(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if (count of windows) is 0 then error "No document open"
              set activeDoc to document of window 1
              if activeDoc is missing value then error "No document open"
              set docPath to file of activeDoc
              return POSIX path of docPath
            end tell
            """
        )
    )


def _acrobat(app: AppIdentity) -> str:
    return _script(
        _running_guard(app)
        + dedent(
            f"""
            tell application "{app}"
              if not (exists active doc) then error "No document open"
              set docPath to file alias of active doc
              return POSIX path of docPath
            end tell
            """
        )
    )


SCRIPT_BUILDERS: Dict[AppIdentity, ScriptBuilder] = {
    AppIdentity.FINDER: _finder,
    AppIdentity.QSPACE_PRO: _qspace_pro,
    AppIdentity.BLOOM: _bloom,
    **{terminal: _terminal for terminal in TERMINALS},
    AppIdentity.VSCODE: _vscode,
    AppIdentity.VSCODE_INSIDERS: _vscode,
    AppIdentity.XCODE: _xcode,
    AppIdentity.XCODE_BETA: _xcode,
    **{ide: _jetbrains for ide in JETBRAINS_IDES},
    AppIdentity.SUBLIME_TEXT: _sublime_text,
    AppIdentity.BBEDIT: _bbedit,
    AppIdentity.TEXTEDIT: _textedit,
    AppIdentity.COTEDITOR: _coteditor,
    AppIdentity.NOVA: _nova,
    AppIdentity.OBSIDIAN: _obsidian,
    AppIdentity.WORD: _word,
    AppIdentity.EXCEL: _excel,
    AppIdentity.POWERPOINT: _powerpoint,
    AppIdentity.PREVIEW: _preview,
    AppIdentity.SKIM: _skim,
    AppIdentity.PDF_EXPERT: _pdf_expert,
    AppIdentity.ACROBAT: _acrobat,
    AppIdentity.ACROBAT_READER: _acrobat,
}


def build_script(identity: AppIdentity) -> str:
    """Return the AppleScript that reports ``identity``'s current path."""

    return SCRIPT_BUILDERS[AppIdentity(identity)](AppIdentity(identity))
