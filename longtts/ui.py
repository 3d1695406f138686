"""
UI module for longtts package.

Contains the shared console, the request spinner, and audio playback.
"""

import logging
import shutil
import subprocess
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

logger = logging.getLogger(__name__)

console = Console()

# Braille frames, same cycle as the classic ⡿⣟⣯⣷ spinner
SPINNER_NAME = "dots2"

# (executable, extra args) in order of preference per platform
_MAC_PLAYERS = [
    ("afplay", []),
    ("ffplay", ["-nodisp", "-autoexit", "-loglevel", "quiet"]),
    ("mpv", ["--no-video", "--really-quiet"]),
    ("vlc", ["--intf", "dummy", "--play-and-exit", "--quiet"]),
]
_LINUX_PLAYERS = [
    ("ffplay", ["-nodisp", "-autoexit", "-loglevel", "quiet"]),
    ("mpv", ["--no-video", "--really-quiet"]),
    ("vlc", ["--intf", "dummy", "--play-and-exit", "--quiet"]),
    ("mplayer", ["-really-quiet"]),
]
# Format-specific fallbacks for bare Linux systems
_LINUX_FALLBACKS = [
    ({"mp3", "aac", "opus"}, "mpg123", ["-q"]),
    ({"wav"}, "aplay", []),
    (None, "paplay", []),
    (None, "play", ["-q"]),
]


def green_text(text) -> str:
    """Wrap text in console markup that renders it green."""
    return f"[bright_green]{escape(str(text))}[/bright_green]"


@contextmanager
def spinner(description: str):
    """
    Show a transient spinner with elapsed time while the body runs.

    Yields:
        The Progress instance driving the spinner.
    """
    with Progress(
        SpinnerColumn(SPINNER_NAME),
        TextColumn("{task.description}"),
        TimeElapsedColumn(),
        transient=True,
        console=console,
    ) as progress:
        task = progress.add_task(description, total=None)
        try:
            yield progress
        finally:
            progress.stop_task(task)


def _first_available(candidates, audio_path: Path) -> Optional[List[str]]:
    for exe, extra in candidates:
        if shutil.which(exe):
            return [exe, *extra, str(audio_path)]
    return None


def select_player_cmd(audio_path: Path, platform: Optional[str] = None) -> Optional[List[str]]:
    """Return a command that plays audio_path on macOS/Linux, or None if no player is found."""
    platform = platform or sys.platform

    if platform == "darwin":
        return _first_available(_MAC_PLAYERS, audio_path)

    if platform.startswith("linux"):
        cmd = _first_available(_LINUX_PLAYERS, audio_path)
        if cmd:
            return cmd
        ext = audio_path.suffix.lower().lstrip(".")
        for formats, exe, extra in _LINUX_FALLBACKS:
            if (formats is None or ext in formats) and shutil.which(exe):
                return [exe, *extra, str(audio_path)]
        return None

    # Windows is not supported for playback
    return None


def play_audio_file(audio_path: Path) -> int:
    """
    Play an audio file using the first available system player.

    Returns:
        Return code from the player (0 for success, 1 if no player was found)
    """
    cmd = select_player_cmd(audio_path)
    if not cmd:
        console.print("No suitable audio player found for your OS/path. Skipping playback.")
        return 1

    logger.debug("Playing %s with %s", audio_path, cmd[0])
    with spinner(f"Playing {audio_path.name}…"):
        proc = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        while proc.poll() is None:
            time.sleep(0.15)
    return proc.returncode or 0
