"""List the regular files below a directory, newest first."""

from __future__ import annotations

import argparse
import os
import time
from dataclasses import dataclass
from typing import Iterable, TextIO


@dataclass(frozen=True)
class FileEntry:
    """A regular file and its last modification time in whole seconds."""

    mtime: int
    path: str


def _walk(directory: str, entries: list[FileEntry]) -> None:
    with os.scandir(directory) as listing:
        for item in listing:
            if item.is_symlink():
                continue
            full_path = os.path.join(directory, item.name)
            if item.is_file(follow_symlinks=False):
                try:
                    stat = item.stat(follow_symlinks=False)
                except OSError:
                    continue
                entries.append(FileEntry(int(stat.st_mtime), full_path))
            elif item.is_dir(follow_symlinks=False):
                _walk(full_path, entries)


def collect_files(path: str | os.PathLike) -> list[FileEntry]:
    """Walk ``path`` recursively, skipping symbolic links; newest files first."""
    entries: list[FileEntry] = []
    _walk(os.fspath(path), entries)
    entries.sort(key=lambda entry: (-entry.mtime, entry.path))
    return entries


def format_entry(entry: FileEntry) -> str:
    """One report line: local time, epoch seconds and path."""
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(entry.mtime))
    return f"{stamp} time = {entry.mtime} dirPath = {entry.path}"


def write_report(entries: Iterable[FileEntry], stream: TextIO) -> None:
    """Write one formatted line per entry to ``stream``."""
    for entry in entries:
        stream.write(format_entry(entry) + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List files by modification time.")
    parser.add_argument("path", nargs="?", default=".")
    parser.add_argument("-o", "--output", default="filesinfo.txt")
    args = parser.parse_args(argv)

    entries = collect_files(args.path)
    with open(args.output, "w", encoding="utf-8") as outfile:
        for entry in entries:
            line = format_entry(entry)
            print(line)
            outfile.write(line + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())