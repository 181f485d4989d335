from __future__ import annotations
from typing import List
from .alphabet import OPS, unary
from .resolver import ResolvedProgram, resolve

COMMENT = ";"

def encode_instruction(ins) -> str:
    return unary(ins.operand) + OPS[ins.opcode].suffix

def _comment_lines(text: str) -> List[str]:
    return [f"{COMMENT} {line}".rstrip() for line in text.split("\n")]

def encode(program, comments: bool=True, compact: bool=False) -> str:
    """Render a program as 1# text.

    Build-time streams are resolved first. ``compact`` yields the bare
    instruction string on one line, without comments.
    """
    if not isinstance(program, ResolvedProgram):
        program = resolve(program)
    if compact:
        return "".join(encode_instruction(ins) for ins in program)
    out: List[str] = []
    for i, ins in enumerate(program):
        if comments:
            for text in program.comments.get(i): out.extend(_comment_lines(text))
        out.append(encode_instruction(ins))
    if comments:
        for text in program.comments.get(len(program)): out.extend(_comment_lines(text))
    return "\n".join(out)
