import os
from pathlib import Path
from typing import Iterable, Iterator
from ebrake.domain.errors import DiscoveryError


def file_extension(name: str) -> str:
    """Returns the extension of the final path component, dot included.

    The extension starts at the last '.' of the name, so ``.mkv`` yields
    ``.mkv`` and ``movie.tar.gz`` yields ``.gz``. Names without a dot yield ''.
    """
    name = os.path.basename(name)
    idx = name.rfind(".")
    if idx < 0:
        return ""
    return name[idx:]


class FileScanner:
    """Recursively scans a directory tree for video files by extension."""

    def __init__(self, extensions: Iterable[str]):
        # Matching is case-sensitive: '.MKV' and '.mkv' are different extensions
        self.extensions = frozenset(extensions)

    def is_video_file(self, name: str) -> bool:
        return file_extension(name) in self.extensions

    def scan(self, root_dir: Path) -> Iterator[Path]:
        """Walks ``root_dir`` depth-first and yields matching file paths.

        Entries of a directory are visited in sorted name order, files and
        subdirectories interleaved, so ``a.mkv, b/x.mkv, c.mkv`` come out in
        that order. Symlinks are not followed.

        Raises DiscoveryError on the first entry that cannot be read.
        """
        yield from self._walk(str(root_dir), root_dir)

    def _walk(self, directory: str, root_dir: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as err:
            raise DiscoveryError(
                f"Failed to walk source directory {root_dir}: {err.filename or directory}: {err.strerror or err}"
            ) from err

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as err:
                raise DiscoveryError(
                    f"Failed to walk source directory {root_dir}: {entry.path}: {err.strerror or err}"
                ) from err

            if is_dir:
                yield from self._walk(entry.path, root_dir)
            elif self.is_video_file(entry.name):
                yield Path(entry.path)
