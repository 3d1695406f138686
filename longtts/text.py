"""
Text module for longtts package.

Reads the input file and packs its lines into chunks that fit one TTS request.
"""

import logging
from pathlib import Path
from typing import Callable, List

import regex as re
import tiktoken

from .errors import ChunkTooLongError, EmptyInputError, InputFileError

logger = logging.getLogger(__name__)

# The speech endpoint rejects longer inputs (its hard cap is 4096)
MAX_INPUT_CHARS = 4000

FALLBACK_ENCODING = "o200k_base"

MARKDOWN_SUFFIXES = {".md", ".markdown"}

Counter = Callable[[str], int]


# ----------------------------
# Reading
# ----------------------------
def strip_markdown(raw: str) -> str:
    """Remove Markdown markup so only narratable text is left."""
    txt = re.sub(r"```.*?```", "", raw, flags=re.DOTALL)
    txt = re.sub(r"`([^`]*)`", r"\1", txt)
    txt = re.sub(r"!\[.*?\]\(.*?\)", "", txt)
    txt = re.sub(r"\[([^\]]+)\]\((?:[^)]+)\)", r"\1", txt)
    txt = re.sub(r"^\s{0,3}#{1,6}\s*", "", txt, flags=re.MULTILINE)
    txt = re.sub(r"^\s{0,3}[-*+]\s+", "", txt, flags=re.MULTILINE)
    txt = re.sub(r"^\s{0,3}\d+\.\s+", "", txt, flags=re.MULTILINE)
    txt = re.sub(r"[ \t]{2,}", " ", txt)
    return txt.strip()


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def read_text_file(path: Path, strip_md: bool = False) -> List[str]:
    """
    Read a UTF-8 text file and return its lines.

    Args:
        path: Input file
        strip_md: Strip Markdown markup before splitting into lines

    Raises:
        InputFileError: if the file does not exist or cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise InputFileError(f"Input file not found: {path}")
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputFileError(f"Input file is not valid UTF-8: {path} ({e})") from e

    if strip_md:
        raw = strip_markdown(raw)
    lines = raw.splitlines()
    logger.debug("Read %d lines (%d chars) from %s", len(lines), len(raw), path)
    return lines


# ----------------------------
# Counting
# ----------------------------
def char_counter(text: str) -> int:
    return len(text)


def _load_encoding(model: str):
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        logger.debug("No tiktoken mapping for %s, using %s", model, FALLBACK_ENCODING)
        return tiktoken.get_encoding(FALLBACK_ENCODING)


def token_counter(model: str) -> Counter:
    """
    Return a callable counting tiktoken tokens for the given model.

    tiktoken fetches its BPE file on first use; if that fails (offline,
    proxy, corrupt cache) sizes are counted in characters instead.
    """
    try:
        encoding = _load_encoding(model)
    except (OSError, ValueError) as e:
        logger.warning("Could not load tiktoken encoding for %s (%s); counting characters instead", model, e)
        return char_counter

    def count(text: str) -> int:
        return len(encoding.encode(text, disallowed_special=()))

    return count


# ----------------------------
# Chunking
# ----------------------------
def chunk_text(lines: List[str], max_tokens: int, count: Counter = char_counter) -> List[List[str]]:
    """
    Greedily pack lines, in order, into chunks of at most max_tokens.

    Blank lines are dropped. A line that alone exceeds the budget becomes
    its own chunk; lines are never split.
    """
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be positive, got {max_tokens}")

    chunks: List[List[str]] = []
    current: List[str] = []
    current_count = 0

    for line in lines:
        line = line.strip()
        if not line:
            continue
        line_count = count(line)
        if current and current_count + line_count > max_tokens:
            chunks.append(current)
            current, current_count = [], 0
        current.append(line)
        current_count += line_count

    if current:
        chunks.append(current)
    return chunks


def chunk_to_text(chunk: List[str]) -> str:
    """The request input for a chunk: its lines joined by single spaces."""
    return " ".join(chunk)


def validate_chunks(chunks: List[List[str]], limit: int = MAX_INPUT_CHARS) -> None:
    """
    Check every chunk fits a single request.

    Raises:
        EmptyInputError: if there are no chunks at all
        ChunkTooLongError: for the first chunk whose text exceeds limit
    """
    if not chunks:
        raise EmptyInputError("Input file contains no text to narrate")
    for i, chunk in enumerate(chunks, start=1):
        length = len(chunk_to_text(chunk))
        if length > limit:
            raise ChunkTooLongError(i, length, limit)
