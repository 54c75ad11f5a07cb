from __future__ import annotations

import io
from typing import Iterable

from .errors import (
    BrainfuckError,
    ExecutionError,
    InputExhausted,
    StructuralError,
    TapeBoundsError,
    UnbalancedLoop,
)
from .interpreter import TAPE_LENGTH, Interpreter
from .lexer import Instruction, LexedProgram, build_jump_table, lex, tokenize


def run_source(source: Iterable[str], input_data: bytes = b"") -> bytes:
    """Lex and run ``source`` against ``input_data``, returning the output bytes."""
    program = lex(source)
    output = io.BytesIO()
    interpreter = Interpreter(program, input_stream=io.BytesIO(input_data), output_stream=output)
    interpreter.run()
    return output.getvalue()


__all__ = [
    "BrainfuckError",
    "ExecutionError",
    "InputExhausted",
    "Instruction",
    "Interpreter",
    "LexedProgram",
    "StructuralError",
    "TAPE_LENGTH",
    "TapeBoundsError",
    "UnbalancedLoop",
    "build_jump_table",
    "lex",
    "run_source",
    "tokenize",
]
