import logging
import math
from typing import List

logger = logging.getLogger(__name__)

SENTENCE_ENDINGS = ".!?"


class InvalidArgument(ValueError):
    """Raised when the maximum chunk size is not a positive integer."""


def _validate_size(max_size) -> int:
    # bool is an int subclass; True would silently mean a size of 1
    if isinstance(max_size, bool) or not isinstance(max_size, int):
        raise InvalidArgument(f"max_size must be an integer, got {type(max_size).__name__}")
    if max_size <= 0:
        raise InvalidArgument(f"max_size must be positive, got {max_size}")
    return max_size


def _find_break_point(remaining: str, max_size: int) -> int:
    """Pick where the next chunk ends inside ``remaining[:max_size]``.

    Boundaries are tried in a fixed order and the first one past its
    threshold wins: sentence, paragraph, line, word, then a hard cut.
    """
    window = remaining[:max_size]

    last_sentence = max(window.rfind(mark) for mark in SENTENCE_ENDINGS)
    if last_sentence != -1 and last_sentence > max_size // 2:
        return last_sentence + 1

    last_paragraph = window.rfind("\n\n")
    if last_paragraph != -1 and last_paragraph > max_size // 3:
        return last_paragraph + 2

    last_newline = window.rfind("\n")
    if last_newline != -1 and last_newline > max_size // 3:
        return last_newline + 1

    last_space = window.rfind(" ")
    if last_space != -1 and last_space > max_size // 2:
        return last_space + 1

    return max_size


def split_text(text: str, max_size: int) -> List[str]:
    """
    Split text into trimmed chunks of at most ``max_size`` characters.

    Args:
        text (str): Text to be split
        max_size (int): Maximum characters per chunk

    Returns:
        List[str]: Chunks in input order (empty for blank input)

    Raises:
        InvalidArgument: If max_size is not a positive integer
    """
    max_size = _validate_size(max_size)

    remaining = text.strip()
    if not remaining:
        return []
    if len(remaining) <= max_size:
        return [remaining]

    chunks = []
    while len(remaining) > max_size:
        break_point = _find_break_point(remaining, max_size)
        chunks.append(remaining[:break_point].strip())
        remaining = remaining[break_point:].strip()

    if remaining:
        chunks.append(remaining)

    logger.debug("Split %d characters into %d chunks (max_size=%d)", len(text), len(chunks), max_size)
    return chunks


class TextChunker:
    """Splits text into paste-sized chunks at natural boundaries."""

    def __init__(self, chunk_size: int = 3000):
        """
        Initialize the chunker.

        Args:
            chunk_size (int): Maximum size of each chunk in characters
        """
        self.chunk_size = _validate_size(chunk_size)

    def chunk_text(self, text: str) -> List[str]:
        """Split text using the configured chunk size."""
        return split_text(text, self.chunk_size)

    def estimate_chunks(self, text: str) -> int:
        """Rough part count before splitting, assuming every chunk is full."""
        if not text:
            return 0
        return math.ceil(len(text) / self.chunk_size)
