"""
Errors module for longtts package.

Each error carries the process exit code the CLI reports it with.
"""


class LongTTSError(Exception):
    """Base class for errors raised by longtts."""

    exit_code = 1


class InputFileError(LongTTSError):
    exit_code = 2


class EmptyInputError(InputFileError):
    pass


class MissingApiKeyError(LongTTSError):
    exit_code = 3

    def __init__(self):
        super().__init__(
            "Missing OPENAI_API_KEY (pass --apikey, or set it in your environment or .env)."
        )


class ChunkTooLongError(LongTTSError):
    exit_code = 4

    def __init__(self, index: int, length: int, limit: int):
        self.index = index
        self.length = length
        self.limit = limit
        super().__init__(
            f"Chunk {index} is {length} characters, more than {limit}; please make it shorter"
        )


class FfmpegNotFoundError(LongTTSError):
    exit_code = 5

    def __init__(self):
        super().__init__("FFmpeg executable not found in system PATH")


class CombineError(LongTTSError):
    exit_code = 5


class OutputDirError(LongTTSError):
    exit_code = 2
