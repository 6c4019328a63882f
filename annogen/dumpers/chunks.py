"""Size-bounded chunk files for dumper output."""

from __future__ import annotations

from pathlib import Path
from typing import List


class ChunkWriter:
    """Buffers rendered declarations and spills them into numbered files.

    Each file starts with ``header``. A piece that would push a non-empty
    buffer past ``threshold`` bytes is written to the next file instead; a
    single piece larger than the threshold gets a file of its own.
    """

    def __init__(self, output_dir: Path, prefix: str, header: str, threshold: int) -> None:
        if threshold <= 0:
            raise ValueError("chunk threshold must be positive")
        self.output_dir = Path(output_dir)
        self.prefix = prefix
        self.header = header
        self.threshold = threshold
        self.files: List[Path] = []
        self._parts: List[str] = []
        self._size = len(header.encode("utf-8"))

    @property
    def pending(self) -> bool:
        return bool(self._parts)

    def append(self, piece: str) -> None:
        size = len(piece.encode("utf-8"))
        if self._parts and self._size + size > self.threshold:
            self.flush()
        self._parts.append(piece)
        self._size += size
        if self._size > self.threshold:
            self.flush()

    def flush(self) -> Path:
        """Write the buffer to the next numbered file and reset it."""
        path = self.output_dir / f"{self.prefix}_dump_{len(self.files)}.lua"
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(self.header)
            handle.writelines(self._parts)
        self.files.append(path)
        self._parts = []
        self._size = len(self.header.encode("utf-8"))
        return path

    def close(self) -> List[Path]:
        """Flush what is left; an empty run still produces one header-only file."""
        if self._parts or not self.files:
            self.flush()
        return list(self.files)


__all__ = ["ChunkWriter"]
