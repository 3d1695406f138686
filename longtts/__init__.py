"""
longtts - long text to spoken audio using OpenAI TTS.

A CLI utility that splits a text file into request-sized chunks, narrates
each chunk with OpenAI's text-to-speech API, and joins the pieces into a
single audio file.
"""

__version__ = "0.1.0"

from .model import synthesize_tts, generate_audio_files
from .text import chunk_text, read_text_file
from .audio import combine_audio_files
from .cli import main

__all__ = [
    "synthesize_tts",
    "generate_audio_files",
    "chunk_text",
    "read_text_file",
    "combine_audio_files",
    "main",
]
