from __future__ import annotations

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional

from .errors import BrainfuckError
from .interpreter import Interpreter
from .lexer import lex


def init_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("bytetape")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _to_input_bytes(data: str) -> bytes:
    # Raises UnicodeEncodeError for characters that do not fit in a cell.
    return data.encode("latin-1")


class _TextStream:
    """Byte view of a text stream that has no binary buffer (e.g. StringIO)."""

    def __init__(self, stream) -> None:
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size).encode("latin-1")

    def write(self, data: bytes) -> int:
        return self._stream.write(data.decode("latin-1"))

    def flush(self) -> None:
        self._stream.flush()


def _binary_stream(stream) -> BinaryIO:
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer
    return _TextStream(stream)  # type: ignore[return-value]


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a Brainfuck program")
    parser.add_argument("source", help="Path to the Brainfuck source file")
    parser.add_argument(
        "--input",
        help="Input string supplied to the program (default: read from stdin)",
        default=None,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log lexing and execution details to stderr",
    )
    args = parser.parse_args(argv)
    init_logging(args.verbose)

    try:
        source_text = _read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.input is None:
        input_stream = _binary_stream(sys.stdin)
    else:
        try:
            input_stream = io.BytesIO(_to_input_bytes(args.input))
        except UnicodeEncodeError:
            print("Error: --input characters must be in the range U+0000-U+00FF", file=sys.stderr)
            return 1

    try:
        program = lex(source_text)
        interpreter = Interpreter(
            program,
            input_stream=input_stream,
            output_stream=_binary_stream(sys.stdout),
        )
        interpreter.run()
    except BrainfuckError as exc:
        sys.stdout.flush()
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
