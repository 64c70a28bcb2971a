"""Tests for frontmost application detection."""

import logging
from pathlib import Path

import pytest

from path_handoff import frontmost
from path_handoff.apps import AppIdentity
from path_handoff.executor import AppleScriptError
from path_handoff.frontmost import FRONTMOST_SCRIPT, FrontmostAppProvider


@pytest.fixture(autouse=True)
def no_process_lookup(monkeypatch):
    def missing(pid):
        raise frontmost.psutil.NoSuchProcess(pid)

    monkeypatch.setattr(frontmost.psutil, "Process", missing)


def test_parses_name_bundle_and_pid(make_runner):
    runner = make_runner(output="iTerm2\ncom.googlecode.iterm2\n4242\n")
    info = FrontmostAppProvider(runner=runner).current()
    assert runner.scripts == [FRONTMOST_SCRIPT]
    assert info.name == "iTerm2"
    assert info.bundle_id == "com.googlecode.iterm2"
    assert info.pid == 4242
    assert info.identity is AppIdentity.ITERM
    assert info.app_label == "iTerm2"


def test_bundle_id_wins_over_name(make_runner):
    runner = make_runner(output="AdobeAcrobat\ncom.adobe.Acrobat.Pro\n12\n")
    assert FrontmostAppProvider(runner=runner).current().identity is AppIdentity.ACROBAT


def test_unsupported_application(make_runner):
    info = FrontmostAppProvider(runner=make_runner(output="Safari\ncom.apple.Safari\n7\n")).current()
    assert info is not None
    assert info.identity is None


def test_missing_bundle_id_and_bad_pid(make_runner):
    info = FrontmostAppProvider(runner=make_runner(output="Finder\n\nabc\n")).current()
    assert info.bundle_id == ""
    assert info.pid == 0
    assert info.identity is AppIdentity.FINDER


def test_script_failure_returns_none(make_runner):
    runner = make_runner(error=AppleScriptError("System Events got an error"))
    assert FrontmostAppProvider(runner=runner).current() is None


def test_empty_output_returns_none(make_runner):
    assert FrontmostAppProvider(runner=make_runner(output="\n")).current() is None


def test_unsupported_platform(monkeypatch):
    monkeypatch.setattr(frontmost.sys, "platform", "linux")
    provider = FrontmostAppProvider()
    assert not provider.is_supported()
    assert provider.current() is None


def test_process_path_from_psutil(monkeypatch):
    class FakeProcess:
        def __init__(self, pid):
            self.pid = pid

        def exe(self):
            return "/Applications/Finder.app/Contents/MacOS/Finder"

    monkeypatch.setattr(frontmost.psutil, "Process", FakeProcess)
    assert FrontmostAppProvider._process_path(1) == Path("/Applications/Finder.app/Contents/MacOS/Finder")
    assert FrontmostAppProvider._process_path(0) is None


def test_script_failure_is_logged_at_debug(make_runner, caplog):
    runner = make_runner(error=AppleScriptError("Not authorized to send Apple events"))
    with caplog.at_level(logging.DEBUG, logger="path_handoff.frontmost"):
        assert FrontmostAppProvider(runner=runner).current() is None
    records = [record for record in caplog.records if record.name == "path_handoff.frontmost"]
    assert [record.levelno for record in records] == [logging.DEBUG]
    assert "Not authorized to send Apple events" in records[0].getMessage()
