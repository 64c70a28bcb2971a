"""Tests for the resolution orchestrator."""

from pathlib import Path

import pytest

from path_handoff.apps import AppIdentity
from path_handoff.executor import AppleScriptError
from path_handoff.models import DocumentLocation
from path_handoff.resolver import PathResolver, ResolutionError, resolve_open_target
from path_handoff.scripts import build_handoff_script, build_script

SHAREPOINT_URL = "https://contoso.sharepoint.com/sites/Team/Documents/Reports/Q1.docx"


class TestFileManagerPath:
    def test_runs_the_identity_script(self, make_runner, cloud_config):
        runner = make_runner(output="/Users/me/Projects/\n")
        resolver = PathResolver(runner=runner, config=cloud_config)
        assert resolver.resolve_file_manager_path(AppIdentity.FINDER) == "/Users/me/Projects/"
        assert runner.scripts == [build_script(AppIdentity.FINDER)]

    def test_decodes_file_urls(self, make_runner, cloud_config):
        runner = make_runner(output="file:///Users/me/My%20Files/\n")
        resolver = PathResolver(runner=runner, config=cloud_config)
        assert resolver.resolve_file_manager_path(AppIdentity.QSPACE_PRO) == "/Users/me/My Files/"

    @pytest.mark.parametrize("output", ["", "missing value\n", "   "])
    def test_empty_result_fails(self, make_runner, cloud_config, output):
        resolver = PathResolver(runner=make_runner(output=output), config=cloud_config)
        with pytest.raises(ResolutionError, match="^QSpace Pro returned an empty path$"):
            resolver.resolve_file_manager_path(AppIdentity.QSPACE_PRO)

    def test_script_errors_propagate(self, make_runner, cloud_config):
        error = AppleScriptError("execution error: No Finder window open (-2700)")
        resolver = PathResolver(runner=make_runner(error=error), config=cloud_config)
        with pytest.raises(AppleScriptError) as excinfo:
            resolver.resolve_file_manager_path(AppIdentity.FINDER)
        assert excinfo.value is error

    def test_rejects_other_families(self, make_runner, cloud_config):
        resolver = PathResolver(runner=make_runner(output="/tmp"), config=cloud_config)
        with pytest.raises(ValueError):
            resolver.resolve_file_manager_path(AppIdentity.PREVIEW)


class TestDocumentPath:
    def test_local_document(self, make_runner, cloud_config):
        resolver = PathResolver(runner=make_runner(output="/Users/me/paper.pdf\n"), config=cloud_config)
        location = resolver.resolve_document_path(AppIdentity.PREVIEW)
        assert location == DocumentLocation("/Users/me/paper.pdf", "/Users/me/paper.pdf")
        assert not location.is_cloud_only

    def test_no_document_open_message_is_preserved(self, make_runner, cloud_config):
        message = "0:98: execution error: No document open (-2700)\n"
        resolver = PathResolver(runner=make_runner(error=AppleScriptError(message)), config=cloud_config)
        with pytest.raises(AppleScriptError) as excinfo:
            resolver.resolve_document_path(AppIdentity.PREVIEW)
        assert str(excinfo.value) == message
        assert "No document open" in str(excinfo.value)

    def test_empty_document_path(self, make_runner, cloud_config):
        resolver = PathResolver(runner=make_runner(output="missing value"), config=cloud_config)
        with pytest.raises(ResolutionError, match="Microsoft Word returned an empty path"):
            resolver.resolve_document_path(AppIdentity.WORD)

    def test_cloud_document_without_local_copy(self, make_runner, cloud_storage, cloud_config):
        (cloud_storage / "OneDrive-Contoso").mkdir()
        resolver = PathResolver(runner=make_runner(output=SHAREPOINT_URL + "\n"), config=cloud_config)
        location = resolver.resolve_document_path(AppIdentity.WORD)
        assert location.document_path == SHAREPOINT_URL
        assert location.resolved_path == ""
        assert location.is_cloud_only

    def test_cloud_document_with_local_copy(self, make_runner, cloud_storage, cloud_config):
        local = cloud_storage / "OneDrive-Contoso" / "Documents" / "Reports" / "Q1.docx"
        local.parent.mkdir(parents=True)
        local.write_text("x", encoding="utf-8")
        resolver = PathResolver(runner=make_runner(output=SHAREPOINT_URL), config=cloud_config)
        location = resolver.resolve_document_path(AppIdentity.EXCEL)
        assert location.document_path == SHAREPOINT_URL
        assert location.resolved_path == str(local)

    def test_url_embedded_in_hfs_path_is_mapped(self, make_runner, cloud_config):
        seen = []

        def mapper(url, config):
            seen.append(url)
            return None

        raw = "Macintosh HD:https://contoso.sharepoint.com/Documents/a.docx"
        resolver = PathResolver(runner=make_runner(output=raw), config=cloud_config, mapper=mapper)
        location = resolver.resolve_document_path(AppIdentity.POWERPOINT)
        assert seen == [raw]
        assert location.resolved_path == ""

    def test_local_paths_skip_the_mapper(self, make_runner, cloud_config):
        def mapper(url, config):
            raise AssertionError("mapper should not run")

        resolver = PathResolver(runner=make_runner(output="/tmp/a.txt"), config=cloud_config, mapper=mapper)
        assert resolver.resolve_document_path(AppIdentity.TEXTEDIT).resolved_path == "/tmp/a.txt"

    def test_rejects_file_managers(self, make_runner, cloud_config):
        resolver = PathResolver(runner=make_runner(output="/tmp"), config=cloud_config)
        with pytest.raises(ValueError):
            resolver.resolve_document_path(AppIdentity.FINDER)


class TestTerminalHandoff:
    def test_runs_handoff_script(self, make_runner, cloud_config):
        runner = make_runner(output="\n")
        resolver = PathResolver(runner=runner, config=cloud_config)
        assert resolver.hand_off_terminal(AppIdentity.TERMINAL, AppIdentity.BLOOM) == ""
        assert runner.scripts == [build_handoff_script(AppIdentity.TERMINAL, AppIdentity.BLOOM)]

    def test_requires_terminal_and_file_manager(self, make_runner, cloud_config):
        resolver = PathResolver(runner=make_runner(), config=cloud_config)
        with pytest.raises(ValueError):
            resolver.hand_off_terminal(AppIdentity.FINDER, AppIdentity.FINDER)
        with pytest.raises(ValueError):
            resolver.hand_off_terminal(AppIdentity.TERMINAL, AppIdentity.WARP)


class TestOpenTarget:
    def test_file_resolves_to_parent(self, tmp_path: Path):
        document = tmp_path / "notes.txt"
        document.write_text("x", encoding="utf-8")
        assert resolve_open_target(str(document)) == str(tmp_path)

    def test_directory_is_unchanged(self, tmp_path: Path):
        assert resolve_open_target(str(tmp_path)) == str(tmp_path)

    def test_missing_path_is_unchanged(self, tmp_path: Path):
        missing = str(tmp_path / "missing.txt")
        assert resolve_open_target(missing) == missing

    def test_empty_and_invalid_paths(self):
        assert resolve_open_target("") == ""
        assert resolve_open_target("bad\x00path") == "bad\x00path"

    def test_available_on_resolver(self, tmp_path: Path):
        assert PathResolver.resolve_open_target(str(tmp_path)) == str(tmp_path)
