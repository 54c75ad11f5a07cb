from __future__ import annotations

import io
from typing import List

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, field_validator

from bytetape.errors import ExecutionError, StructuralError
from bytetape.interpreter import Interpreter
from bytetape.lexer import LexedProgram, lex


class LexRequest(BaseModel):
    code: str = ""


class LexResponse(BaseModel):
    instructions: str
    length: int
    jump_table: List[List[int]]


class RunRequest(BaseModel):
    code: str = ""
    input: str = ""

    @field_validator("input")
    @classmethod
    def validate_input(cls, value: str) -> str:
        if any(ord(ch) > 0xFF for ch in value):
            raise ValueError("input characters must be in the range U+0000-U+00FF")
        return value


class RunResponse(BaseModel):
    output: str
    output_bytes: List[int]
    steps: int


def _lex_or_422(code: str) -> LexedProgram:
    try:
        return lex(code)
    except StructuralError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


def _loop_pairs(program: LexedProgram) -> List[List[int]]:
    return sorted([start, end] for start, end in program.jump_table.items() if start < end)


def create_app() -> FastAPI:
    app = FastAPI(title="bytetape API", version="0.1.0")

    @app.post("/api/lex", response_model=LexResponse)
    def lex_program(payload: LexRequest) -> LexResponse:
        program = _lex_or_422(payload.code)
        return LexResponse(
            instructions=program.to_source(),
            length=len(program),
            jump_table=_loop_pairs(program),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_program(payload: RunRequest) -> RunResponse:
        program = _lex_or_422(payload.code)
        output = io.BytesIO()
        interpreter = Interpreter(
            program,
            input_stream=io.BytesIO(payload.input.encode("latin-1")),
            output_stream=output,
        )
        try:
            interpreter.run()
        except ExecutionError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc

        data = output.getvalue()
        return RunResponse(
            output=data.decode("latin-1"),
            output_bytes=list(data),
            steps=interpreter.steps,
        )

    return app


__all__ = ["create_app"]
