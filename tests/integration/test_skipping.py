import sys
import pytest
from pathlib import Path
from ebrake.domain.errors import EncodeError
from ebrake.infrastructure.file_scanner import FileScanner
from ebrake.infrastructure.launcher import SubprocessLauncher
from ebrake.pipeline.executor import EncodeExecutor
from ebrake.pipeline.orchestrator import Orchestrator
from ebrake.pipeline.planner import BatchPlanner

pytestmark = pytest.mark.integration

# Stand-in encoder: copies the -i file to the -o path, or exits 1 for names containing "broken"
FAKE_ENCODER = (
    "import shutil, sys\n"
    "args = sys.argv[1:]\n"
    "src = args[args.index('-i') + 1]\n"
    "dst = args[args.index('-o') + 1]\n"
    "if 'broken' in src:\n"
    "    print('cannot decode ' + src, file=sys.stderr)\n"
    "    sys.exit(1)\n"
    "shutil.copyfile(src, dst)\n"
)


def build_orchestrator(config, event_bus, launcher):
    return Orchestrator(
        config=config,
        event_bus=event_bus,
        file_scanner=FileScanner(config.recognized_extensions),
        planner=BatchPlanner(config, event_bus),
        executor=EncodeExecutor(config, launcher, event_bus),
    )


@pytest.fixture
def python_encoder_config(make_config):
    return make_config(encoder_command=sys.executable, encoder_option_tokens=("-c", FAKE_ENCODER))


def test_second_run_is_idempotent(make_config, event_bus, launcher_factory, source_tree):
    config = make_config()

    first = launcher_factory(create_output=True)
    build_orchestrator(config, event_bus, first).run()
    assert len(first.commands) == 2

    second = launcher_factory(create_output=True)
    summary = build_orchestrator(config, event_bus, second).run()
    assert second.commands == []
    assert summary.jobs_planned == 0
    assert summary.skipped == 2


def test_real_process_encodes_tree(python_encoder_config, event_bus, source_tree, tmp_path):
    summary = build_orchestrator(python_encoder_config, event_bus, SubprocessLauncher()).run()

    assert summary.encoded == 2
    assert (tmp_path / "target" / "a" / "movie.mp4").read_bytes() == b"mkv data"
    assert (tmp_path / "target" / "b" / "clip.mp4").read_bytes() == b"avi data"
    assert not (tmp_path / "target" / "a" / "notes.mp4").exists()


def test_real_process_failure_stops_batch(python_encoder_config, event_bus, tmp_path):
    source = tmp_path / "source"
    source.mkdir()
    (source / "a_broken.mkv").write_bytes(b"x")
    (source / "b_fine.mkv").write_bytes(b"y")

    with pytest.raises(EncodeError) as exc_info:
        build_orchestrator(python_encoder_config, event_bus, SubprocessLauncher()).run()

    assert exc_info.value.returncode == 1
    assert exc_info.value.source_path == source / "a_broken.mkv"
    assert not (tmp_path / "target" / "b_fine.mp4").exists()
