"""TextSplitter - split large text into parts that fit size-limited chat inputs.

Frontends:
 - ``textsplitter split``: print numbered parts for stdin or a file.
 - ``textsplitter tui``: interactive terminal UI.
 - ``textsplitter serve``: local web page.
"""

__version__ = "0.1.0"

from textsplitter.chunking import InvalidArgument, TextChunker, split_text  # noqa: E402

__all__ = ["InvalidArgument", "TextChunker", "split_text", "__version__"]
