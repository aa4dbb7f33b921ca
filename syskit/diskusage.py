"""Report the size, free and available space of a file system."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass

KB = 1024.0
MB = 1048576.0
GB = 1073741824.0


@dataclass(frozen=True)
class DiskUsage:
    """Block counts of a file system as reported by the kernel."""

    block_size: int
    blocks: int
    free_blocks: int
    available_blocks: int

    @property
    def total_bytes(self) -> int:
        return self.block_size * self.blocks

    @property
    def free_bytes(self) -> int:
        return self.block_size * self.free_blocks

    @property
    def available_bytes(self) -> int:
        return self.block_size * self.available_blocks


def disk_usage(path: str | os.PathLike = "/home") -> DiskUsage:
    """Read the block counts of the file system holding ``path``."""
    info = os.statvfs(path)
    return DiskUsage(
        block_size=info.f_frsize or info.f_bsize,
        blocks=info.f_blocks,
        free_blocks=info.f_bfree,
        available_blocks=info.f_bavail,
    )


def format_report(usage: DiskUsage) -> str:
    """Render the usage as the text report, one figure group per line."""
    total = usage.total_bytes
    free = usage.free_bytes
    available = usage.available_bytes
    return "\n".join(
        [
            f"Blocks: {usage.blocks}",
            f"Total_size = {total} B = {total / KB:f} KB = {total / MB:f} MB"
            f" = {total / GB:f} GB",
            f"Disk_free = {free / MB:f} MB = {free / GB:f} GB",
            f"Disk_available = {available / MB:f} MB = {available / GB:f} GB",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show disk usage of a file system.")
    parser.add_argument("path", nargs="?", default="/home")
    args = parser.parse_args(argv)
    print(format_report(disk_usage(args.path)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())