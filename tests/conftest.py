import pytest
import yaml
from pathlib import Path
from typing import List, Optional
from ebrake.config.models import EncodeConfiguration
from ebrake.infrastructure.event_bus import EventBus

# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Points $HOME at an empty directory so ~/.ebrake.yaml is never the real one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("EBRAKE_CONFIG", raising=False)
    return home

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def make_config(tmp_path):
    """Returns a factory for EncodeConfiguration rooted in tmp_path."""
    def _make(**overrides) -> EncodeConfiguration:
        values = {
            "source_root": tmp_path / "source",
            "target_root": tmp_path / "target",
            "encoder_command": "HandBrakeCLI",
            "encoder_option_tokens": ("--encoder", "x264"),
        }
        values.update(overrides)
        return EncodeConfiguration(**values)
    return _make

@pytest.fixture
def config_yaml_path(tmp_path):
    """Creates a temporary YAML config file using the original key names."""
    conf_file = tmp_path / "ebrake.yaml"
    content = {
        'handBrakeCommand': 'HandBrakeCLI',
        'handBrakeOptions': '--encoder x265 --quality 22',
        'sourceExtensions': ['.mkv', '.avi'],
        'targetExtensions': '.m4v',
    }
    with open(conf_file, 'w') as f:
        yaml.dump(content, f)
    return conf_file

# ============================================================================
# EventBus Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    """Returns a fresh EventBus instance."""
    return EventBus()

@pytest.fixture
def recorded_events(event_bus):
    """Collects every event published on event_bus."""
    from ebrake.domain.events import Event
    events = []
    event_bus.subscribe(Event, events.append)
    return events

# ============================================================================
# Process Launcher Fixtures
# ============================================================================

class RecordingLauncher:
    """Fake launcher: records commands instead of spawning processes.

    ``returncodes`` are consumed one per launch (0 once exhausted). With
    ``create_output`` the value after ``-o`` is written, like a real encoder.
    """

    def __init__(self, returncodes: Optional[List[int]] = None, create_output: bool = False):
        self.commands: List[List[str]] = []
        self.returncodes = list(returncodes or [])
        self.create_output = create_output

    def launch(self, cmd: List[str]) -> int:
        self.commands.append(list(cmd))
        code = self.returncodes.pop(0) if self.returncodes else 0
        if code == 0 and self.create_output:
            Path(cmd[cmd.index("-o") + 1]).write_text("encoded")
        return code

@pytest.fixture
def launcher():
    return RecordingLauncher()

@pytest.fixture
def launcher_factory():
    """Returns the RecordingLauncher class for tests that need custom exit codes."""
    return RecordingLauncher

# ============================================================================
# File System Fixtures
# ============================================================================

@pytest.fixture
def source_tree(tmp_path):
    """Source tree with a/movie.mkv, a/notes.txt and b/clip.avi."""
    source = tmp_path / "source"
    (source / "a").mkdir(parents=True)
    (source / "b").mkdir()
    (source / "a" / "movie.mkv").write_bytes(b"mkv data")
    (source / "a" / "notes.txt").write_text("not a video")
    (source / "b" / "clip.avi").write_bytes(b"avi data")
    return source

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
