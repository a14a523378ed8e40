"""
Tests for writing externs and checking them with the Closure Compiler.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from webidl_to_closure_externs.pipeline.config import ClosureCheckConfig, OutputConfig, OutputMode
from webidl_to_closure_externs.pipeline.errors import ClosureCheckError
from webidl_to_closure_externs.pipeline.output import AtomicWriter, ClosureChecker


class TestAtomicWriter:
    def test_write_creates_file(self, tmp_path):
        path = tmp_path / "out" / "webgpu.js"
        AtomicWriter().write(path, "function GPU() {}\n")
        assert path.read_text() == "function GPU() {}\n"
        # No temporary files left behind
        assert [p.name for p in path.parent.iterdir()] == ["webgpu.js"]

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "webgpu.js"
        path.write_text("old")
        AtomicWriter(OutputConfig(mode=OutputMode.FORCE)).write(path, "new")
        assert path.read_text() == "new"

    def test_error_if_exists(self, tmp_path):
        path = tmp_path / "webgpu.js"
        path.write_text("old")
        with pytest.raises(FileExistsError):
            AtomicWriter(OutputConfig(mode=OutputMode.ERROR_IF_EXISTS)).write(path, "new")
        assert path.read_text() == "old"

    def test_non_atomic_write(self, tmp_path):
        path = tmp_path / "webgpu.js"
        AtomicWriter(OutputConfig(atomic_write=False)).write(path, "content")
        assert path.read_text() == "content"


class TestClosureChecker:
    def test_build_command(self):
        checker = ClosureChecker(ClosureCheckConfig(command=["npx", "google-closure-compiler"]))
        assert checker.build_command(Path("/tmp/webgpu.js")) == [
            "npx",
            "google-closure-compiler",
            "--warning_level=VERBOSE",
            "--jscomp_error=*",
            "--js=/tmp/webgpu.js",
            "--js_output_file=/dev/null",
        ]

    def test_check_passes(self, monkeypatch):
        calls = []

        def fake_run(command, check):
            calls.append(command)
            return subprocess.CompletedProcess(command, 0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        ClosureChecker(ClosureCheckConfig()).check(Path("webgpu.js"))
        assert calls[0][-2] == "--js=webgpu.js"

    def test_check_fails_on_exit_code(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", lambda command, check: subprocess.CompletedProcess(command, 1))
        with pytest.raises(ClosureCheckError, match="exit code 1"):
            ClosureChecker(ClosureCheckConfig()).check(Path("webgpu.js"))

    def test_missing_compiler(self, monkeypatch):
        def missing(command, check):
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(ClosureCheckError, match="Could not run"):
            ClosureChecker(ClosureCheckConfig(command=["no-such-compiler"])).check(Path("webgpu.js"))
