"""
Pytest fixtures for rustnarrator tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
import yaml

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rustnarrator.ast.sink import ListSink  # noqa: E402
from rustnarrator.narrator import narrate_source  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path) -> Path:
    """Point the config directory at an empty temp dir and clear env overrides."""
    data_path = tmp_path / "rustnarrator_data"
    monkeypatch.setenv("RUSTNARRATOR_DATA_PATH", str(data_path))
    for name in (
        "RUSTNARRATOR_DEBUG",
        "RUSTNARRATOR_LOG_FILE",
        "RUSTNARRATOR_ENCODING",
        "RUSTNARRATOR_MAX_FILE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    return data_path


@pytest.fixture
def write_config(isolated_config: Path) -> Callable[[dict], Path]:
    """Write a config.yaml into the isolated data directory."""

    def _write(config: dict) -> Path:
        isolated_config.mkdir(parents=True, exist_ok=True)
        config_path = isolated_config / "config.yaml"
        config_path.write_text(yaml.safe_dump(config, sort_keys=False))
        return config_path

    return _write


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def narrate() -> Callable[[str], list[str]]:
    """Narrate a Rust snippet and return the emitted lines."""

    def _narrate(source: str) -> list[str]:
        sink = ListSink()
        narrate_source(source, sink)
        return sink.lines

    return _narrate


@pytest.fixture
def sample_rust_file(temp_dir: Path) -> Path:
    """Create a sample Rust file for testing."""
    file_path = temp_dir / "sample.rs"
    file_path.write_text('''
mod util;

// Entry point
fn main() {
    let total = 0;
    let items = vec![1, 2, 3];
    for item in items {
        total += item;
    }
    report(total, "done");
}

fn report(value: i32, label: &str) {
    match value {
        0 => println!("nothing"),
        1..=9 => label.len(),
        _ => value,
    }
}
''')
    return file_path


@pytest.fixture
def broken_rust_file(temp_dir: Path) -> Path:
    """Create a Rust file with mismatched braces."""
    file_path = temp_dir / "broken.rs"
    file_path.write_text("fn main() {\n    let x = 1;\n}}\n")
    return file_path
