"""
CLI module for longtts package.

Contains command-line argument parsing and main application logic.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from openai import OpenAI, OpenAIError

from .audio import combine_audio_files, find_ffmpeg, remove_tmp_files
from .config import (
    DEFAULT_AUDIO_FORMAT,
    DEFAULT_MAX_TOKENS,
    configure_logging,
    default_tts_model,
    default_voice,
    load_environment,
    resolve_api_key,
)
from .errors import LongTTSError, OutputDirError
from .model import AUDIO_FORMATS, KNOWN_TTS_MODELS, KNOWN_VOICES, generate_audio_files
from .text import (
    char_counter,
    chunk_text,
    chunk_to_text,
    is_markdown,
    read_text_file,
    token_counter,
    validate_chunks,
)
from .ui import console, green_text, play_audio_file

logger = logging.getLogger(__name__)

EXIT_API_ERROR = 6


# ----------------------------
# CLI setup
# ----------------------------
def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="longtts",
        description="Generate audio files from text using OpenAI TTS.",
    )
    parser.add_argument("input_file", nargs="?", help="Input text file name.")
    parser.add_argument("-m", "--model", default=default_tts_model(), choices=KNOWN_TTS_MODELS,
                        help="TTS model to use.")
    parser.add_argument("-v", "--voice", default=default_voice(), choices=KNOWN_VOICES,
                        help="Voice to use for TTS.")
    parser.add_argument("--apikey", help="OpenAI API key (defaults to OPENAI_API_KEY).")
    parser.add_argument("--audio-format", default=DEFAULT_AUDIO_FORMAT, choices=AUDIO_FORMATS,
                        help="Audio format of chunks and output (default: flac).")

    parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS,
                        help="Budget per chunk, counted as --count-by (default: 500).")
    parser.add_argument("--count-by", default="tokens", choices=["tokens", "chars"],
                        help="Measure chunk size in tokens (tiktoken) or characters.")
    parser.add_argument("--speed", type=float, default=1.0,
                        help="Speech speed (0.25-4.0, default: 1.0).")
    parser.add_argument("--instructions",
                        help="Additional voice instructions (ignored for tts-1/tts-1-hd models).")
    parser.add_argument("--strip-markdown", action="store_true",
                        help="Strip Markdown markup first (automatic for .md files).")

    parser.add_argument("--output-dir",
                        help="Working/output directory (default: ./<input file stem>).")
    parser.add_argument("--keep-chunks", action="store_true",
                        help="Keep the temporary chunk files after combining.")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print how the text would be chunked and exit.")
    parser.add_argument("--list-voices", action="store_true",
                        help="Print the known voice names and exit.")
    parser.add_argument("--play-audio", action="store_true",
                        help="Play the combined audio afterwards (macOS/Linux only).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    return parser


def validate_args(args) -> None:
    """Validate command-line arguments."""
    if not (0.25 <= args.speed <= 4.0):
        raise ValueError(f"Speed must be between 0.25 and 4.0, got {args.speed}")
    if args.max_tokens < 1:
        raise ValueError(f"--max-tokens must be at least 1, got {args.max_tokens}")
    # Defaults from OPENAI_TTS_MODEL/OPENAI_TTS_VOICE bypass argparse choices
    if args.model not in KNOWN_TTS_MODELS:
        raise ValueError(f"Unknown TTS model {args.model!r}; choose from {', '.join(KNOWN_TTS_MODELS)}")
    if args.voice not in KNOWN_VOICES:
        raise ValueError(f"Unknown voice {args.voice!r}; choose from {', '.join(KNOWN_VOICES)}")
    if not args.list_voices and not args.input_file:
        raise ValueError("input_file is required unless using --list-voices")


# ----------------------------
# Pipeline
# ----------------------------
def load_chunks(args) -> List[List[str]]:
    """Read the input file and split it into validated chunks."""
    input_path = Path(args.input_file)
    strip_md = args.strip_markdown or is_markdown(input_path)
    lines = read_text_file(input_path, strip_md=strip_md)

    count = token_counter(args.model) if args.count_by == "tokens" else char_counter
    chunks = chunk_text(lines, args.max_tokens, count)
    validate_chunks(chunks)
    logger.info("Split %s into %d chunks", input_path, len(chunks))
    return chunks


def print_plan(chunks: List[List[str]]) -> None:
    console.print(f"Split into {len(chunks)} chunks:")
    for i, chunk in enumerate(chunks, start=1):
        text = chunk_to_text(chunk)
        console.print(f"  {i:>4}: {len(chunk)} lines, {len(text)} chars")


def resolve_output_dir(explicit: Optional[str], stem: str) -> Path:
    """
    Working directory for this run: --output-dir, else ./<stem>.

    An extensionless input sitting in the current directory has the same
    name as its default folder; <stem>_audio is used then.
    """
    if explicit:
        output_dir = Path(explicit)
        if output_dir.exists() and not output_dir.is_dir():
            raise OutputDirError(f"Output path exists and is not a directory: {output_dir}")
        return output_dir

    output_dir = Path(stem)
    if output_dir.exists() and not output_dir.is_dir():
        output_dir = Path(f"{stem}_audio")
        if output_dir.exists() and not output_dir.is_dir():
            raise OutputDirError(f"Cannot create working folder, a file is in the way: {output_dir}")
    return output_dir


def run(args) -> Optional[Path]:
    """Run the whole narration pipeline; returns the combined file, or None for --dry-run."""
    chunks = load_chunks(args)
    if args.dry_run:
        print_plan(chunks)
        return None

    api_key = resolve_api_key(args.apikey)
    if len(chunks) > 1:
        # Fail before spending API calls
        find_ffmpeg()

    stem = Path(args.input_file).stem
    output_dir = resolve_output_dir(args.output_dir, stem)
    console.print(f"Now create a folder called {green_text(output_dir)} for you.")
    output_dir.mkdir(parents=True, exist_ok=True)

    client = OpenAI(api_key=api_key)
    parts = generate_audio_files(
        client=client,
        chunks=chunks,
        output_dir=output_dir,
        audio_format=args.audio_format,
        tts_model=args.model,
        voice=args.voice,
        speed=args.speed,
        instructions=args.instructions,
    )

    console.print(
        f"Chunk {args.audio_format} files are already in [ {green_text(output_dir)} ] "
        "for ffmpeg to combine.\n"
    )
    output_path = output_dir / f"{stem}.{args.audio_format}"
    combine_audio_files(parts, output_path)

    if not args.keep_chunks:
        remove_tmp_files(parts, output_dir)

    console.print(f"\nThe file [ {green_text(output_path)} ] is ready for you.\n")
    return output_path


# ----------------------------
# Main application logic
# ----------------------------
def main(argv: Optional[List[str]] = None):
    """Main entry point for the longtts CLI application."""
    load_environment()

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args.verbose)

    if args.list_voices:
        print("Known voice names (availability may vary by model):")
        for v in KNOWN_VOICES:
            print(f" - {v}")
        return

    try:
        output_path = run(args)
    except LongTTSError as e:
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)
    except OpenAIError as e:
        print(f"OpenAI TTS request failed: {e}", file=sys.stderr)
        sys.exit(EXIT_API_ERROR)

    if output_path and args.play_audio:
        play_audio_file(output_path)
