"""
Audio module for longtts package.

Concatenates chunk files with ffmpeg and removes them afterwards.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List

from .errors import CombineError, FfmpegNotFoundError

logger = logging.getLogger(__name__)

CONCAT_LIST_NAME = "concat.txt"


def find_ffmpeg() -> str:
    """Return the ffmpeg executable path, or raise FfmpegNotFoundError."""
    path = shutil.which("ffmpeg")
    if not path:
        raise FfmpegNotFoundError()
    return path


def _quote(path: Path) -> str:
    # concat demuxer quoting: ' becomes '\''
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_list(parts: List[Path], list_path: Path) -> Path:
    """Write the ffmpeg concat-demuxer list for parts, in order."""
    lines = [f"file {_quote(Path(p).resolve())}" for p in parts]
    list_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return list_path


def combine_audio_files(parts: List[Path], output_path: Path) -> Path:
    """
    Concatenate parts, in order, into output_path without re-encoding.

    A single part is copied into place and ffmpeg is not needed.

    Raises:
        FfmpegNotFoundError: if more than one part and ffmpeg is missing
        CombineError: if ffmpeg exits with an error
    """
    if not parts:
        raise CombineError("No audio chunks to combine")

    if len(parts) == 1:
        logger.debug("Single chunk, copying %s to %s", parts[0], output_path)
        shutil.copyfile(parts[0], output_path)
        return output_path

    ffmpeg = find_ffmpeg()
    list_path = write_concat_list(parts, output_path.parent / CONCAT_LIST_NAME)
    cmd = [
        ffmpeg,
        "-hide_banner", "-loglevel", "error", "-nostats",
        "-y", "-f", "concat", "-safe", "0",
        "-i", str(list_path),
        "-c", "copy",
        str(output_path),
    ]
    logger.debug("Running %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        raise CombineError(
            f"ffmpeg failed with exit code {e.returncode}: {(e.stderr or '').strip()}"
        ) from e
    return output_path


def remove_tmp_files(parts: List[Path], output_dir: Path) -> int:
    """Delete this run's chunk files and the concat list. Returns how many were removed."""
    removed = 0
    for path in [*parts, output_dir / CONCAT_LIST_NAME]:
        try:
            Path(path).unlink()
            removed += 1
        except FileNotFoundError:
            continue
    logger.debug("Removed %d temporary files from %s", removed, output_dir)
    return removed
