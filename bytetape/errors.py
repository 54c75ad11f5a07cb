from __future__ import annotations


class BrainfuckError(Exception):
    """Base class for every condition reported by the interpreter core."""


class StructuralError(BrainfuckError):
    """The program text cannot be turned into a runnable program."""


class UnbalancedLoop(StructuralError):
    def __init__(self, symbol: str, position: int) -> None:
        self.symbol = symbol
        self.position = position
        super().__init__(f"Unmatched '{symbol}' at instruction {position}")


class ExecutionError(BrainfuckError):
    """Raised while a program is running; aborts the run immediately."""

    def __init__(self, message: str, instruction_pointer: int) -> None:
        self.instruction_pointer = instruction_pointer
        super().__init__(message)


class TapeBoundsError(ExecutionError):
    def __init__(self, data_pointer: int, instruction_pointer: int) -> None:
        self.data_pointer = data_pointer
        super().__init__(
            f"Data pointer moved outside the tape (to {data_pointer}) "
            f"at instruction {instruction_pointer}",
            instruction_pointer,
        )


class InputExhausted(ExecutionError):
    def __init__(self, instruction_pointer: int) -> None:
        super().__init__(
            f"Input exhausted at instruction {instruction_pointer}",
            instruction_pointer,
        )


__all__ = [
    "BrainfuckError",
    "ExecutionError",
    "InputExhausted",
    "StructuralError",
    "TapeBoundsError",
    "UnbalancedLoop",
]
