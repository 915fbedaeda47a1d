import shutil
from collections import defaultdict
from pathlib import Path

import pytest
from rich.console import Console
from rich.table import Table

from cm_app.api import PACKAGED_DATA_DIR, CameraCatalog, CameraStore

SAMPLE_MENU_CSV = (
    "menu,submenu,item,help\n"
    '"<i name=""photo""/>Photo",Quality,RAW,Unprocessed sensor data\n'
    ",,JPEG,\n"
    ",Size,Large,\n"
    "Setup,Language,,Pick a language\n"
    "Setup,Reset,,\n"
    "camera_menu_config,\n"
    "brand,Acme\n"
    "model,Z1\n"
    "css_file,acme_z1\n"
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_MENU_CSV


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A private copy of the packaged built-in cameras."""
    target = tmp_path / "data"
    shutil.copytree(PACKAGED_DATA_DIR, target)
    return target


@pytest.fixture
def store(tmp_path: Path) -> CameraStore:
    return CameraStore(tmp_path / "store" / "cameras.json")


@pytest.fixture
def catalog(store: CameraStore, data_dir: Path) -> CameraCatalog:
    return CameraCatalog(store, data_dir)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """
    Custom hook to print statistics by marker at the end of the test session.
    """
    _ = (exitstatus, config)
    known_markers = {"unit_common", "unit_menu", "unit_app", "unit_ui"}
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            # Only count the actual test call, or setup skips
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in known_markers:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)
