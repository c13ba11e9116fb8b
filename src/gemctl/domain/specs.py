"""GemSpec — metadata for an installed or cached gem directory.

A gem directory is named after the gem and may carry a ``gem.toml``::

    name = "rack"
    version = "3.0.8"
    summary = "A modular web server interface"
    licenses = ["MIT"]
    homepage = "https://github.com/rack/rack"

Executables live in ``exe/`` inside the gem directory.
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

SPEC_FILENAME = "gem.toml"
EXE_DIRNAME = "exe"
UNKNOWN_VERSION = "0"
_KEY_WIDTH = 8


class GemSpec(BaseModel):
    """Metadata for a single gem directory."""

    model_config = {"frozen": True}

    name: str
    version: str = UNKNOWN_VERSION
    summary: str = ""
    licenses: tuple[str, ...] = ()
    homepage: str = ""
    path: Path
    executables: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def full_name(self) -> str:
        return f"{self.name}-{self.version}"

    @property
    def bin_dir(self) -> Path:
        return self.path / EXE_DIRNAME

    @classmethod
    def from_directory(cls, path: Path) -> GemSpec:
        """Load a spec from *path*, falling back to the directory name.

        Raises:
            ValueError: If ``gem.toml`` exists but is not valid TOML.
        """
        data: dict[str, object] = {}
        spec_file = path / SPEC_FILENAME
        if spec_file.is_file():
            try:
                data = tomllib.loads(spec_file.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid gem metadata in {spec_file}: {exc}"
                raise ValueError(msg) from exc

        licenses = data.get("licenses") or data.get("license") or ()
        if isinstance(licenses, str):
            licenses = (licenses,)

        exe_dir = path / EXE_DIRNAME
        executables: tuple[str, ...] = ()
        if exe_dir.is_dir():
            executables = tuple(sorted(p.name for p in exe_dir.iterdir() if p.is_file()))

        return cls(
            name=str(data.get("name") or path.name),
            version=str(data.get("version") or UNKNOWN_VERSION),
            summary=str(data.get("summary") or ""),
            licenses=tuple(str(lic) for lic in licenses),
            homepage=str(data.get("homepage") or ""),
            path=path,
            executables=executables,
        )


def version_key(version: str) -> tuple[tuple[int, str], ...]:
    """Sort key for dotted versions: numeric segments compare numerically.

    Prerelease segments (``1.0.0.rc1``, ``2.0.beta``) sort before the
    release they precede.
    """
    key: list[tuple[int, str]] = []
    for segment in re.split(r"[.\-]", version):
        if segment.isdigit():
            key.append((int(segment), ""))
        else:
            key.append((-1, segment))
    # Pad so "2.0.0" outranks "2.0.0.rc1" and "1.0" equals "1.0.0".
    key.extend([(0, "")] * (_KEY_WIDTH - len(key)))
    return tuple(key)


def is_prerelease(version: str) -> bool:
    return any(not seg.isdigit() for seg in re.split(r"[.\-]", version) if seg)
