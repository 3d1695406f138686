"""Tests for concatenating and cleaning up chunk files."""

import subprocess
from unittest.mock import MagicMock

import pytest

from longtts import audio
from longtts.audio import (
    CONCAT_LIST_NAME,
    combine_audio_files,
    find_ffmpeg,
    remove_tmp_files,
    write_concat_list,
)
from longtts.errors import CombineError, FfmpegNotFoundError


def _parts(tmp_path, count):
    parts = []
    for i in range(1, count + 1):
        part = tmp_path / f"tmp_1_chunk{i:06d}.flac"
        part.write_bytes(f"part{i}".encode())
        parts.append(part)
    return parts


def test_find_ffmpeg_missing(monkeypatch):
    monkeypatch.setattr(audio.shutil, "which", lambda name: None)
    with pytest.raises(FfmpegNotFoundError):
        find_ffmpeg()


def test_write_concat_list_keeps_order_and_escapes_quotes(tmp_path):
    first = tmp_path / "a.flac"
    second = tmp_path / "it's.flac"

    list_path = write_concat_list([first, second], tmp_path / CONCAT_LIST_NAME)

    lines = list_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == f"file '{first.resolve()}'"
    assert lines[1] == "file '" + str(second.resolve()).replace("'", "'\\''") + "'"


def test_single_part_is_copied_without_ffmpeg(tmp_path, monkeypatch):
    monkeypatch.setattr(audio.shutil, "which", lambda name: None)
    run = MagicMock()
    monkeypatch.setattr(audio.subprocess, "run", run)
    (part,) = _parts(tmp_path, 1)

    out = combine_audio_files([part], tmp_path / "book.flac")

    assert out.read_bytes() == b"part1"
    assert part.exists()
    run.assert_not_called()


def test_multiple_parts_use_ffmpeg_concat_copy(tmp_path, monkeypatch):
    monkeypatch.setattr(audio.shutil, "which", lambda name: "/usr/bin/ffmpeg")
    run = MagicMock()
    monkeypatch.setattr(audio.subprocess, "run", run)
    parts = _parts(tmp_path, 3)
    output = tmp_path / "book.flac"

    combine_audio_files(parts, output)

    cmd = run.call_args[0][0]
    assert cmd[0] == "/usr/bin/ffmpeg"
    assert cmd[cmd.index("-f") + 1] == "concat"
    assert cmd[cmd.index("-c") + 1] == "copy"
    assert cmd[-1] == str(output)
    assert run.call_args[1]["check"] is True

    listed = (tmp_path / CONCAT_LIST_NAME).read_text(encoding="utf-8").splitlines()
    assert listed == [f"file '{p.resolve()}'" for p in parts]


def test_ffmpeg_failure_raises_combine_error(tmp_path, monkeypatch):
    monkeypatch.setattr(audio.shutil, "which", lambda name: "/usr/bin/ffmpeg")
    error = subprocess.CalledProcessError(1, ["ffmpeg"], stderr="Invalid data found\n")
    monkeypatch.setattr(audio.subprocess, "run", MagicMock(side_effect=error))

    with pytest.raises(CombineError, match="Invalid data found"):
        combine_audio_files(_parts(tmp_path, 2), tmp_path / "book.flac")


def test_combine_requires_parts(tmp_path):
    with pytest.raises(CombineError):
        combine_audio_files([], tmp_path / "book.flac")


def test_remove_tmp_files_only_touches_this_run(tmp_path):
    parts = _parts(tmp_path, 2)
    (tmp_path / CONCAT_LIST_NAME).write_text("file 'x'\n")
    output = tmp_path / "book.flac"
    output.write_bytes(b"combined")
    stale = tmp_path / "tmp_0_chunk000001.flac"
    stale.write_bytes(b"old run")

    removed = remove_tmp_files(parts, tmp_path)

    assert removed == 3
    assert not any(p.exists() for p in parts)
    assert not (tmp_path / CONCAT_LIST_NAME).exists()
    assert output.exists()
    assert stale.exists()


def test_remove_tmp_files_tolerates_missing_files(tmp_path):
    parts = _parts(tmp_path, 1)
    parts[0].unlink()
    assert remove_tmp_files(parts, tmp_path) == 0
