"""Tests for argument translation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from jailbot.mounts import MountRegistry
from jailbot.translator import ArgumentTranslator, Translation, get_container_path, translate


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    """Resolved ``docs`` directory holding a.txt and b.txt."""
    docs_dir = tmp_path.resolve() / "docs"
    docs_dir.mkdir()
    (docs_dir / "a.txt").write_text("a")
    (docs_dir / "b.txt").write_text("b")
    return docs_dir


class TestGetContainerPath:
    """Tests for get_container_path function."""

    def test_basename_under_workspace(self) -> None:
        assert get_container_path("/home/u/proj") == "/workspace/proj"

    def test_trailing_slash(self) -> None:
        assert get_container_path("/home/u/proj/") == "/workspace/proj"

    def test_host_root_has_no_target(self) -> None:
        assert get_container_path("/") is None
        assert get_container_path("//") is None

    def test_custom_workspace(self) -> None:
        assert get_container_path("/home/u/proj", "/work") == "/work/proj"


class TestTranslateFiles:
    """File arguments mount their parent directory."""

    def test_file(self, docs: Path) -> None:
        result = translate([str(docs / "a.txt")])
        assert result.mount_specs == [f"type=bind,source={docs},target=/workspace/docs"]
        assert result.container_args == ["/workspace/docs/a.txt"]

    def test_two_files_same_directory(self, docs: Path) -> None:
        result = translate(["cat", str(docs / "a.txt"), str(docs / "b.txt")])
        assert len(result.mount_specs) == 1
        assert result.container_args == ["cat", "/workspace/docs/a.txt", "/workspace/docs/b.txt"]

    def test_relative_file(self, docs: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(docs)
        result = translate(["./a.txt", "../docs/b.txt"])
        assert result.container_args == ["/workspace/docs/a.txt", "/workspace/docs/b.txt"]
        assert len(result.mount_specs) == 1

    def test_tilde_file(self, home: Path) -> None:
        (home / "notes.txt").write_text("x")
        result = translate(["~/notes.txt"])
        assert result.container_args == [f"/workspace/{home.name}/notes.txt"]
        assert result.mount_specs == [
            f"type=bind,source={home.resolve()},target=/workspace/{home.name}"
        ]

    def test_file_with_spaces(self, tmp_path: Path) -> None:
        spaced = tmp_path.resolve() / "path with spaces"
        spaced.mkdir()
        (spaced / "file.txt").write_text("x")
        result = translate([str(spaced / "file.txt")])
        assert result.container_args == ["/workspace/path with spaces/file.txt"]

    def test_file_in_workdir_mount_uses_existing_target(self, docs: Path) -> None:
        translator = ArgumentTranslator()
        assert translator.mount_workdir(str(docs)) is True
        result = translator.translate([str(docs / "a.txt")])
        assert result.container_args == ["/workspace/a.txt"]
        assert result.mount_specs == [f"type=bind,source={docs},target=/workspace"]

    def test_file_with_comma_in_parent(self, tmp_path: Path) -> None:
        odd = tmp_path.resolve() / "a,b"
        odd.mkdir()
        (odd / "f.txt").write_text("x")
        token = str(odd / "f.txt")
        result = translate([token])
        assert result.container_args == [token]
        assert result.mount_specs == []

    @pytest.mark.parametrize("dirname", ['say "hi"', "two\nlines"])
    def test_file_with_csv_breaking_parent(self, tmp_path: Path, dirname: str) -> None:
        odd = tmp_path.resolve() / dirname
        odd.mkdir()
        (odd / "f.txt").write_text("x")
        token = str(odd / "f.txt")
        result = translate(["cat", token])
        assert result.container_args == ["cat", token]
        assert result.mount_specs == []

    def test_symlinked_file_mounts_real_parent(self, tmp_path: Path) -> None:
        real_dir = tmp_path.resolve() / "real"
        real_dir.mkdir()
        (real_dir / "real_file.txt").write_text("x")
        link = tmp_path.resolve() / "link.txt"
        link.symlink_to(real_dir / "real_file.txt")
        result = translate([str(link)])
        assert result.container_args == ["/workspace/real/real_file.txt"]


class TestTranslateDirectories:
    """Directory arguments are mounted directly."""

    def test_directory(self, tmp_path: Path) -> None:
        proj = tmp_path.resolve() / "proj"
        proj.mkdir()
        result = translate([str(proj)])
        assert result.mount_specs == [f"type=bind,source={proj},target=/workspace/proj"]
        assert result.container_args == ["/workspace/proj"]

    def test_duplicate_directory_keeps_original_token(self, tmp_path: Path) -> None:
        proj = tmp_path.resolve() / "proj"
        proj.mkdir()
        result = translate([str(proj), str(proj)])
        assert result.container_args == ["/workspace/proj", str(proj)]
        assert len(result.mount_specs) == 1

    def test_dot_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        proj = tmp_path.resolve() / "proj"
        proj.mkdir()
        monkeypatch.chdir(proj)
        result = translate(["ls", "."])
        assert result.container_args == ["ls", "/workspace/proj"]

    def test_directory_after_file_inside_it(self, docs: Path) -> None:
        """The file already mounted the directory, so the token stays as typed."""
        result = translate([str(docs / "a.txt"), str(docs)])
        assert result.container_args == ["/workspace/docs/a.txt", str(docs)]


class TestTranslatePassthrough:
    """Tokens that are passed through unmounted."""

    def test_nonexistent_path(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="jailbot"):
            result = translate(["/no/such/file"])
        assert result.mount_specs == []
        assert result.container_args == ["/no/such/file"]
        assert "does not exist" in caplog.text

    def test_workspace_path(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="jailbot"):
            result = translate(["/workspace/test"])
        assert result.container_args == ["/workspace/test"]
        assert result.mount_specs == []
        assert "Skipping container workdir path" in caplog.text

    def test_escaped_path(self, docs: Path) -> None:
        result = translate(["\\" + str(docs / "a.txt")])
        assert result.container_args == [str(docs / "a.txt")]
        assert result.mount_specs == []

    def test_escaped_home(self) -> None:
        result = translate(["\\~/.config/app.toml"])
        assert result.container_args == ["/root/.config/app.toml"]
        assert result.mount_specs == []

    def test_scoped_package(self) -> None:
        result = translate(["npx", "@babel/core"])
        assert result.container_args == ["npx", "@babel/core"]
        assert result.mount_specs == []

    def test_url(self) -> None:
        result = translate(["curl", "http://example.com/file.txt"])
        assert result.container_args == ["curl", "http://example.com/file.txt"]
        assert result.mount_specs == []

    def test_shell_metacharacters(self) -> None:
        token = '"; id; echo "'
        assert translate([token]).container_args == [token]

    def test_empty_token_kept(self) -> None:
        assert translate(["echo", "", "x"]).container_args == ["echo", "", "x"]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs mkfifo")
    def test_fifo(self, tmp_path: Path) -> None:
        fifo = tmp_path.resolve() / "pipe"
        os.mkfifo(fifo)
        result = translate([str(fifo)])
        assert result.container_args == [str(fifo)]
        assert result.mount_specs == []


class TestTranslateOrdering:
    """Output order mirrors input order."""

    def test_order_preserved(self, docs: Path, tmp_path: Path) -> None:
        proj = tmp_path.resolve() / "proj"
        proj.mkdir()
        tokens = ["grep", "-r", str(docs / "b.txt"), "/missing/x", str(proj)]
        result = translate(tokens)
        assert len(result.container_args) == len(tokens)
        assert result.container_args == [
            "grep",
            "-r",
            "/workspace/docs/b.txt",
            "/missing/x",
            "/workspace/proj",
        ]
        assert result.mount_specs == [
            f"type=bind,source={docs},target=/workspace/docs",
            f"type=bind,source={proj},target=/workspace/proj",
        ]

    def test_shared_registry(self, docs: Path) -> None:
        registry = MountRegistry()
        registry.add("/etc/hosts", "/etc/hosts", read_only=True)
        result = translate([str(docs / "a.txt")], registry)
        assert result.mount_specs[0] == "type=bind,source=/etc/hosts,target=/etc/hosts,readonly"
        assert len(result.mount_specs) == 2

    def test_empty_command(self) -> None:
        assert translate([]) == Translation()


class TestMountWorkdir:
    """Tests for ArgumentTranslator.mount_workdir."""

    def test_directory(self, tmp_path: Path) -> None:
        translator = ArgumentTranslator()
        assert translator.mount_workdir(str(tmp_path)) is True
        assert translator.registry.specs == [
            f"type=bind,source={tmp_path.resolve()},target=/workspace"
        ]

    def test_tilde(self, home: Path) -> None:
        translator = ArgumentTranslator()
        (home / "work").mkdir()
        assert translator.mount_workdir("~/work") is True
        assert translator.registry.contains(str(home.resolve() / "work"))

    def test_empty(self) -> None:
        assert ArgumentTranslator().mount_workdir("") is False

    def test_missing(self) -> None:
        assert ArgumentTranslator().mount_workdir("/no/such/dir") is False

    def test_file_rejected(self, docs: Path) -> None:
        translator = ArgumentTranslator()
        assert translator.mount_workdir(str(docs / "a.txt")) is False
        assert len(translator.registry) == 0

    def test_workspace_rejected(self) -> None:
        assert ArgumentTranslator().mount_workdir("/workspace/sub") is False


class TestTranslateHostRoot:
    """The host root never lands on the workspace root."""

    def test_root_directory_passed_through(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="jailbot"):
            result = translate(["ls", "/"])
        assert result.container_args == ["ls", "/"]
        assert result.mount_specs == []
        assert "host root" in caplog.text

    def test_root_with_workdir_keeps_single_mount(self, tmp_path: Path) -> None:
        translator = ArgumentTranslator()
        translator.mount_workdir(str(tmp_path))
        result = translator.translate(["ls", "/"])
        assert result.container_args == ["ls", "/"]
        assert result.mount_specs == [f"type=bind,source={tmp_path.resolve()},target=/workspace"]

    def test_file_at_root_level_passed_through(self) -> None:
        translator = ArgumentTranslator()
        assert translator._translate_file("/notes.txt", "/notes.txt") == "/notes.txt"
        assert len(translator.registry) == 0

    def test_file_at_root_level_uses_existing_mount(self) -> None:
        registry = MountRegistry()
        registry.add("/", "/workspace")
        translator = ArgumentTranslator(registry)
        assert translator._translate_file("/notes.txt", "/notes.txt") == "/workspace/notes.txt"
        assert len(registry) == 1
