from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import BinaryIO

from .errors import InputExhausted, TapeBoundsError
from .lexer import Instruction, LexedProgram

logger = logging.getLogger(__name__)

TAPE_LENGTH = 30000
CELL_MODULUS = 256
# Bytes at or above this value are not valid single-byte characters.
_OUTPUT_LIMIT = 0x80


def _default_input() -> BinaryIO:
    return sys.stdin.buffer


def _default_output() -> BinaryIO:
    return sys.stdout.buffer


@dataclass
class Interpreter:
    """Executes a lexed program against a zeroed 30000-cell byte tape.

    Input is read one byte at a time from ``input_stream`` and each output
    instruction writes a single byte to ``output_stream``. Runs are
    unbounded: a program that never leaves a loop never returns.
    """

    program: LexedProgram
    input_stream: BinaryIO = field(default_factory=_default_input, repr=False)
    output_stream: BinaryIO = field(default_factory=_default_output, repr=False)

    tape: bytearray = field(init=False, repr=False)
    instruction_pointer: int = field(init=False)
    data_pointer: int = field(init=False)
    steps: int = field(init=False)

    def __post_init__(self) -> None:
        self.tape = bytearray(TAPE_LENGTH)
        self.instruction_pointer = 0
        self.data_pointer = 0
        self.steps = 0

    def is_finished(self) -> bool:
        return self.instruction_pointer >= len(self.program)

    def run(self) -> None:
        logger.debug("Starting run of %d instructions", len(self.program))
        instructions = self.program.instructions
        code_length = len(instructions)
        while self.instruction_pointer < code_length:
            command = instructions[self.instruction_pointer]
            self.instruction_pointer = self._execute_instruction(
                command, self.instruction_pointer
            )
            self.steps += 1
        logger.debug("Run finished after %d steps", self.steps)

    def _execute_instruction(self, command: Instruction, pc: int) -> int:
        new_pc = pc + 1
        if command is Instruction.MOVE_RIGHT:
            if self.data_pointer + 1 >= TAPE_LENGTH:
                raise TapeBoundsError(self.data_pointer + 1, pc)
            self.data_pointer += 1
        elif command is Instruction.MOVE_LEFT:
            if self.data_pointer == 0:
                raise TapeBoundsError(-1, pc)
            self.data_pointer -= 1
        elif command is Instruction.INCREMENT:
            self.tape[self.data_pointer] = (self.tape[self.data_pointer] + 1) % CELL_MODULUS
        elif command is Instruction.DECREMENT:
            self.tape[self.data_pointer] = (self.tape[self.data_pointer] - 1) % CELL_MODULUS
        elif command is Instruction.OUTPUT:
            self._emit(self.tape[self.data_pointer])
        elif command is Instruction.INPUT:
            data = self.input_stream.read(1)
            if not data:
                raise InputExhausted(pc)
            self.tape[self.data_pointer] = data[0]
        elif command is Instruction.LOOP_OPEN:
            if self.tape[self.data_pointer] == 0:
                new_pc = self.program.jump_table[pc] + 1
        elif command is Instruction.LOOP_CLOSE:
            if self.tape[self.data_pointer] != 0:
                new_pc = self.program.jump_table[pc] + 1
        return new_pc

    def _emit(self, value: int) -> None:
        if value >= _OUTPUT_LIMIT:
            return
        self.output_stream.write(bytes((value,)))
        flush = getattr(self.output_stream, "flush", None)
        if flush is not None:
            flush()


__all__ = ["CELL_MODULUS", "Interpreter", "TAPE_LENGTH"]
