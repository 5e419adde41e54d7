"""System tray helper tests."""

from __future__ import annotations

import threading
from pathlib import Path

from PySide6.QtGui import QIcon

from goobox_sync_common.systemtray import TOOLTIP_IDLE, TOOLTIP_SYNC, SystemTrayHelper
from goobox_sync_common.systemtray import helper as tray_helper


def test_noop_without_system_tray(qapp, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: False)
    tray = SystemTrayHelper()

    tray.set_idle()
    tray.set_synchronizing()

    assert tray.tray is None
    assert tray.menu is None


def test_state_changes_update_tooltip_and_status(qapp, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    tray = SystemTrayHelper()

    tray.set_synchronizing()
    assert tray.tray is not None
    assert tray.tray.toolTip() == TOOLTIP_SYNC
    assert tray.action_status.text() == TOOLTIP_SYNC
    assert tray.action_status.isEnabled() is False

    tray.set_idle()
    assert tray.tray.toolTip() == TOOLTIP_IDLE
    assert tray.action_status.text() == TOOLTIP_IDLE
    assert not tray.tray.icon().isNull()


def test_menu_entries(qapp, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    tray = SystemTrayHelper()
    tray.set_idle()

    assert tray.menu is not None
    texts = [action.text() for action in tray.menu.actions() if not action.isSeparator()]
    assert texts == [TOOLTIP_IDLE, "&Open Goobox Folder", "&Quit Goobox"]
    assert tray.tray.contextMenu() is tray.menu


def test_quit_calls_shutdown_listener(qapp, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    calls: list[str] = []
    tray = SystemTrayHelper()
    tray.set_shutdown_listener(lambda: calls.append("shutdown"))
    tray.set_idle()

    tray.action_quit.trigger()

    assert calls == ["shutdown"]
    assert tray.tray.isVisible() is False


def test_quit_without_listener_quits_application(qapp, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    quits: list[bool] = []
    monkeypatch.setattr(tray_helper.QApplication, "quit", lambda: quits.append(True))
    tray = SystemTrayHelper()
    tray.set_idle()

    tray.on_quit()

    assert quits == [True]


def test_open_folder_opens_sync_dir(qapp, monkeypatch, sync_dir) -> None:
    opened: list[str] = []

    class FakeDesktopServices:
        @staticmethod
        def openUrl(url) -> bool:  # noqa: N802
            opened.append(url.toLocalFile())
            return True

    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    monkeypatch.setattr(tray_helper, "QDesktopServices", FakeDesktopServices)
    monkeypatch.setattr(tray_helper, "get_sync_dir", lambda: sync_dir)
    tray = SystemTrayHelper()
    tray.set_idle()

    tray.action_open.trigger()

    assert [Path(p) for p in opened] == [sync_dir]


def test_icons_loaded_from_resource_dir(qapp, monkeypatch, tmp_path) -> None:
    loaded: list[str] = []
    (tmp_path / "tray-idle.png").touch()
    monkeypatch.setenv("GOOBOX_RESOURCE", str(tmp_path))

    def fake_icon(source) -> QIcon:  # type: ignore[no-untyped-def]
        if isinstance(source, str):
            loaded.append(source)
        return QIcon(source)

    monkeypatch.setattr(tray_helper, "QIcon", fake_icon)

    tray_helper._load_icon("tray-idle.png", tray_helper.QColor(0, 0, 0))
    painted = tray_helper._load_icon("tray-sync.png", tray_helper.QColor(0, 0, 0))

    assert loaded == [str(tmp_path / "tray-idle.png")]
    assert not painted.isNull()


def test_state_change_from_worker_thread_runs_on_gui_thread(qapp, qtbot, monkeypatch) -> None:
    monkeypatch.setattr(tray_helper, "_tray_available", lambda: True)
    tray = SystemTrayHelper()

    worker = threading.Thread(target=tray.set_synchronizing)
    worker.start()
    worker.join()
    qtbot.waitUntil(lambda: tray.tray is not None and tray.tray.toolTip() == TOOLTIP_SYNC)

    assert tray.tray.thread() == qapp.thread()
    assert tray.menu is not None
    assert tray.menu.thread() == qapp.thread()
