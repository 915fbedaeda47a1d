"""CLI tests driven through the headless UI."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cm_app.api import AppSettings, SettingsService
from cm_ui import cli
from cm_ui.tui.system.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui

runner = CliRunner()


@pytest.fixture
def ui(tmp_path: Path, data_dir: Path):
    ctx = cli.ctx_store
    ctx.reset()
    headless = HeadlessUI()
    ctx.ui = headless
    ctx.settings_service = SettingsService(config_home=tmp_path / "config")
    ctx.settings = AppSettings(data_dir=data_dir, store_path=tmp_path / "cameras.json")
    yield headless
    ctx.reset()


def _invoke(*args: str):
    return runner.invoke(cli.app, list(args))


def _bundle(path: Path, files: dict[str, str]) -> Path:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    path.write_bytes(buffer.getvalue())
    return path


def _custom_ids() -> list[str]:
    return [entry.id for entry in cli.ctx_store.catalog.entries() if not entry.builtin]


def test_cameras_list(ui: HeadlessUI) -> None:
    result = _invoke("cameras", "list")
    assert result.exit_code == 0
    table = ui.recorded_tables[0].model
    assert table.columns == ["Brand", "Camera", "ID", "Source"]
    assert table.rows == [["Acme", "Acme X100", "example_camera", "built-in"]]


def test_cameras_import_and_delete(ui: HeadlessUI, tmp_path: Path) -> None:
    bundle = _bundle(tmp_path / "nikon.zip", {"menu.csv": "menu\nA\n", "nikon.css": ""})
    result = _invoke("cameras", "import", str(bundle), "--name", "Nikon Z 6")
    assert result.exit_code == 0
    assert ui.recorded_messages[-1].startswith("SUCCESS: Imported Nikon Z 6 as custom-")

    (camera_id,) = _custom_ids()
    ui.next_confirm_response = False
    assert _invoke("cameras", "delete", camera_id).exit_code == 0
    assert ui.recorded_messages[-1] == "INFO: Nothing deleted."

    assert _invoke("cameras", "delete", camera_id, "--yes").exit_code == 0
    assert ui.recorded_messages[-1] == "SUCCESS: Deleted Nikon Z 6"
    assert _custom_ids() == []


def test_cameras_import_rejects_bad_bundle(ui: HeadlessUI, tmp_path: Path) -> None:
    bundle = _bundle(tmp_path / "bad.zip", {"style.css": ""})
    result = _invoke("cameras", "import", str(bundle))
    assert result.exit_code == 1
    assert ui.recorded_messages[-1] == "ERROR: No CSV file found in zip"


def test_builtin_cameras_cannot_be_deleted(ui: HeadlessUI) -> None:
    result = _invoke("cameras", "delete", "example_camera", "--yes")
    assert result.exit_code == 1
    assert ui.recorded_messages[-1] == "ERROR: Built-in cameras cannot be deleted"


def test_cameras_export(ui: HeadlessUI, tmp_path: Path) -> None:
    result = _invoke("cameras", "export", "example_camera", "--output", str(tmp_path))
    assert result.exit_code == 0
    with zipfile.ZipFile(tmp_path / "example_camera.zip") as archive:
        assert sorted(archive.namelist()) == [
            "example_camera.css",
            "example_camera.csv",
            "photo.png",
            "video.png",
        ]


def test_cameras_default_is_saved(ui: HeadlessUI) -> None:
    assert _invoke("cameras", "default", "example_camera").exit_code == 0
    saved = cli.ctx_store.settings_service.load()
    assert saved.default_camera == "example_camera"


def test_unknown_camera_fails(ui: HeadlessUI) -> None:
    result = _invoke("menu", "show", "--camera", "nope")
    assert result.exit_code == 1
    assert ui.recorded_messages[-1] == "ERROR: Unknown camera: nope"


def test_menu_show_prints_tree(ui: HeadlessUI) -> None:
    assert _invoke("menu", "show", "--with-help").exit_code == 0
    text = ui.recorded_renderables[0]
    assert "Acme X100" in text
    assert "Photo (photo)" in text
    assert "Store unprocessed sensor data" in text


def test_menu_search(ui: HeadlessUI) -> None:
    assert _invoke("menu", "search", "iso").exit_code == 0
    assert ui.recorded_tables[0].model.rows == [["1.0", "Exposure > ISO"]]

    assert _invoke("menu", "search", "zzz").exit_code == 0
    assert ui.recorded_messages[-1] == "INFO: No matches for 'zzz'."


def test_menu_help(ui: HeadlessUI) -> None:
    assert _invoke("menu", "help", "0.0.0").exit_code == 0
    assert ui.recorded_messages[-1] == (
        "PANEL: Photo > Image Quality > RAW - Store unprocessed sensor data"
    )
    assert _invoke("menu", "help", "0.0.2").exit_code == 0
    assert ui.recorded_messages[-1].startswith("WARNING: No help for")
    assert _invoke("menu", "help", "9").exit_code == 1


def test_menu_levels(ui: HeadlessUI) -> None:
    assert _invoke("menu", "levels", "0.0").exit_code == 0
    table = ui.recorded_tables[0].model
    assert table.columns == ["Level 0", "Level 1", "Level 2"]
    assert ui.recorded_messages[-1] == "INFO: Photo > Image Quality"


def test_menu_browse(ui: HeadlessUI) -> None:
    ui.next_browse_path = [0, 0, 0]
    assert _invoke("menu", "browse").exit_code == 0
    assert "SUCCESS: 0.0.0: Photo > Image Quality > RAW" in ui.recorded_messages
    assert ui.recorded_messages[-1] == "INFO: Store unprocessed sensor data"

    ui.next_browse_path = None
    assert _invoke("menu", "browse").exit_code == 0
    assert ui.recorded_messages[-1] == "INFO: Browser closed without a selection."


def test_bad_path_is_a_usage_error(ui: HeadlessUI) -> None:
    result = _invoke("menu", "help", "a.b")
    assert result.exit_code == 2


def test_edit_rename_saves_custom_copy(ui: HeadlessUI) -> None:
    result = _invoke("edit", "rename", "4", "System")
    assert result.exit_code == 0
    assert ui.recorded_messages[-2].startswith(
        "INFO: Built-in camera example_camera saved as custom camera custom-"
    )
    (camera_id,) = _custom_ids()
    document = cli.ctx_store.catalog.document(camera_id)
    assert document.tree.child_at(4).label == "System"


def test_edit_add_and_delete(ui: HeadlessUI) -> None:
    assert _invoke("edit", "add-child", "4").exit_code == 0
    assert ui.recorded_messages[-1] == "SUCCESS: Added entry at 4.3"
    (camera_id,) = _custom_ids()

    assert _invoke("edit", "add-sibling", "0.1", "--camera", camera_id).exit_code == 0
    assert ui.recorded_messages[-1] == "SUCCESS: Added entry at 0.3"

    assert _invoke("edit", "delete", "0", "--camera", camera_id, "--yes").exit_code == 0
    assert ui.recorded_messages[-1] == "SUCCESS: Deleted 'Photo'"
    labels = [n.label for n in cli.ctx_store.catalog.document(camera_id).tree.iter_children()]
    assert labels == ["Exposure", "White Balance", "Video", "Setup"]
    assert _custom_ids() == [camera_id]


def test_edit_rejects_root(ui: HeadlessUI) -> None:
    result = _invoke("edit", "delete", "", "--yes")
    assert result.exit_code == 1
    assert ui.recorded_messages[-1].startswith("ERROR:")


@pytest.mark.parametrize(
    "args",
    [
        ("menu", "show"),
        ("menu", "levels"),
        ("menu", "search", "L1"),
        ("menu", "help", "0"),
        ("menu", "browse"),
    ],
)
def test_menu_commands_report_too_deep_menus(ui: HeadlessUI, data_dir: Path, args) -> None:
    row = ",".join(f"L{depth}" for depth in range(70))
    (data_dir / "deep_camera.csv").write_text(f"menu\n{row}\n", encoding="utf-8")
    result = _invoke(*args, "--camera", "deep_camera")
    assert result.exit_code == 1
    assert ui.recorded_messages[-1].startswith("ERROR: Menu row nests deeper than 64 levels")
