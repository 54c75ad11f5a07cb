from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import UnbalancedLoop

logger = logging.getLogger(__name__)


class Instruction(str, Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Instruction"]:
        return _BY_SYMBOL.get(symbol)


_BY_SYMBOL: Dict[str, Instruction] = {item.value: item for item in Instruction}

SYMBOLS = frozenset(_BY_SYMBOL)


@dataclass(frozen=True)
class LexedProgram:
    """Instruction sequence plus its pre-resolved loop targets."""

    instructions: Tuple[Instruction, ...]
    jump_table: Mapping[int, int]

    def __len__(self) -> int:
        return len(self.instructions)

    def to_source(self) -> str:
        return "".join(instruction.value for instruction in self.instructions)


def tokenize(source: Iterable[str]) -> Tuple[Instruction, ...]:
    # Anything that is not one of the eight symbols is a comment.
    instructions: List[Instruction] = []
    for char in source:
        instruction = _BY_SYMBOL.get(char)
        if instruction is not None:
            instructions.append(instruction)
    return tuple(instructions)


def build_jump_table(instructions: Sequence[Instruction]) -> Mapping[int, int]:
    jump_table: Dict[int, int] = {}
    stack: List[int] = []
    for index, instruction in enumerate(instructions):
        if instruction is Instruction.LOOP_OPEN:
            stack.append(index)
        elif instruction is Instruction.LOOP_CLOSE:
            if not stack:
                raise UnbalancedLoop("]", index)
            start = stack.pop()
            jump_table[start] = index
            jump_table[index] = start
    if stack:
        raise UnbalancedLoop("[", stack.pop())
    return MappingProxyType(jump_table)


def lex(source: Iterable[str]) -> LexedProgram:
    instructions = tokenize(source)
    jump_table = build_jump_table(instructions)
    logger.debug(
        "Lexed %d instructions with %d loops", len(instructions), len(jump_table) // 2
    )
    return LexedProgram(instructions=instructions, jump_table=jump_table)


__all__ = [
    "Instruction",
    "LexedProgram",
    "SYMBOLS",
    "build_jump_table",
    "lex",
    "tokenize",
]
