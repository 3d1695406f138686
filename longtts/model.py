"""
Model module for longtts package.

Contains the model/voice catalogs and per-chunk audio generation.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from openai import OpenAI

from .text import chunk_to_text
from .ui import console, green_text, spinner

logger = logging.getLogger(__name__)

# ----------------------------
# Constants and catalogs
# ----------------------------
KNOWN_VOICES = [
    "alloy", "ash", "ballad", "coral", "echo", "fable",
    "nova", "onyx", "sage", "shimmer", "verse",
]

KNOWN_TTS_MODELS = ["tts-1-hd", "tts-1", "gpt-4o-mini-tts"]

# Models that reject the instructions parameter
NO_INSTRUCTIONS_MODELS = {"tts-1", "tts-1-hd"}

AUDIO_FORMATS = ["flac", "mp3", "wav", "opus", "aac"]

CHUNK_PREFIX = "tmp"


def chunk_file_name(stamp: str, index: int, audio_format: str) -> str:
    """Temporary file name for the 1-based chunk index of one run."""
    return f"{CHUNK_PREFIX}_{stamp}_chunk{index:06d}.{audio_format}"


# ----------------------------
# Audio synthesis
# ----------------------------
def synthesize_tts(
    client: OpenAI,
    text: str,
    out_path: Path,
    audio_format: str,
    tts_model: str,
    voice: str,
    speed: float = 1.0,
    instructions: Optional[str] = None,
):
    """
    Synthesize text to speech with one streaming request and write it to out_path.

    Args:
        client: OpenAI client instance
        text: Text to synthesize
        out_path: Output file path
        audio_format: API response format (flac, mp3, wav, opus, aac)
        tts_model: TTS model to use
        voice: Voice name
        speed: Speech speed (0.25-4.0, default 1.0)
        instructions: Voice instructions (ignored for tts-1/tts-1-hd)
    """
    tts_params = {
        "model": tts_model,
        "voice": voice,
        "input": text,
        "response_format": audio_format,
        "speed": speed,
    }
    if instructions and tts_model not in NO_INSTRUCTIONS_MODELS:
        tts_params["instructions"] = instructions

    with client.audio.speech.with_streaming_response.create(**tts_params) as response:
        response.stream_to_file(out_path)


def generate_audio_files(
    client: OpenAI,
    chunks: List[List[str]],
    output_dir: Path,
    audio_format: str,
    tts_model: str,
    voice: str,
    speed: float = 1.0,
    instructions: Optional[str] = None,
    stamp: Optional[str] = None,
) -> List[Path]:
    """
    Synthesize each chunk, in order, into its own temporary file in output_dir.

    Returns:
        The written files, in chunk order.
    """
    stamp = stamp or str(int(time.time()))
    total = len(chunks)
    parts: List[Path] = []

    for i, chunk in enumerate(chunks, start=1):
        text = chunk_to_text(chunk)
        out_path = output_dir / chunk_file_name(stamp, i, audio_format)
        logger.debug("Chunk %d/%d: %d chars -> %s", i, total, len(text), out_path)

        with spinner(f"Synthesizing chunk {i}/{total}..."):
            synthesize_tts(
                client=client,
                text=text,
                out_path=out_path,
                audio_format=audio_format,
                tts_model=tts_model,
                voice=voice,
                speed=speed,
                instructions=instructions,
            )

        parts.append(out_path)
        console.print(f"A {audio_format} file saved as {green_text(out_path)}")

    return parts
