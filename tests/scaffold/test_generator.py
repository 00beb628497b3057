"""Tests for base app generators.

``NextAppGenerator`` is exercised with the current Python interpreter as
a stand-in command, so no Node.js is needed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from nextmfe.scaffold.generator import AppGenerator, BareDirectoryGenerator, GenerationFailure, NextAppGenerator


def test_command_substitutes_name() -> None:
    generator = NextAppGenerator(["npx", "create-next-app@latest", "{name}", "--typescript"])
    assert generator.command_for("cart") == ["npx", "create-next-app@latest", "cart", "--typescript"]


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        NextAppGenerator([])


def test_generators_satisfy_protocol() -> None:
    assert isinstance(NextAppGenerator(["true"]), AppGenerator)
    assert isinstance(BareDirectoryGenerator(), AppGenerator)


async def test_next_app_generator_success(tmp_path: Path) -> None:
    script = "import pathlib, sys; pathlib.Path(sys.argv[1]).mkdir()"
    generator = NextAppGenerator([sys.executable, "-c", script, "{name}"])

    await generator.generate("cart", tmp_path)

    assert (tmp_path / "cart").is_dir()


async def test_next_app_generator_nonzero_exit(tmp_path: Path) -> None:
    generator = NextAppGenerator([sys.executable, "-c", "raise SystemExit(3)"])

    with pytest.raises(GenerationFailure, match="status 3") as exc_info:
        await generator.generate("cart", tmp_path)

    assert exc_info.value.app_name == "cart"


async def test_next_app_generator_missing_executable(tmp_path: Path) -> None:
    generator = NextAppGenerator(["definitely-not-a-real-command-xyz", "{name}"])

    with pytest.raises(GenerationFailure, match="could not run"):
        await generator.generate("cart", tmp_path)


async def test_bare_directory_generator(tmp_path: Path) -> None:
    await BareDirectoryGenerator().generate("cart", tmp_path)
    assert (tmp_path / "cart").is_dir()

    with pytest.raises(GenerationFailure):
        await BareDirectoryGenerator().generate("cart", tmp_path)
