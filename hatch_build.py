"""Hatchling build hook that records the git commit inside the package."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO_PATH = "redit/_build_info.py"


class CustomBuildHook(BuildHookInterface):
    """Writes redit/_build_info.py and ships it as a build artifact."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        commit = self._git(["rev-parse", "HEAD"], root)
        date = self._git(["show", "-s", "--format=%cI", "HEAD"], root)
        (root / BUILD_INFO_PATH).write_text(
            "# Generated by hatch_build.py; do not edit.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )
        build_data.setdefault("artifacts", []).append(BUILD_INFO_PATH)

    @staticmethod
    def _git(args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd))
        except (subprocess.CalledProcessError, FileNotFoundError, OSError):
            # No git, or not a checkout (sdist build)
            return None
        return out.decode().strip() or None
