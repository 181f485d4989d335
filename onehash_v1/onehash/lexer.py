from __future__ import annotations
from dataclasses import dataclass
from typing import List
from .alphabet import ONE, HASH, OPS
from .emitter import COMMENT
from .ir import WriteOne, WriteHash, Case, ForwardJump, BackwardJump
from .lineage import Annotations
from .resolver import ResolvedProgram

BY_OPCODE = {
    "WRITE_ONE": WriteOne,
    "WRITE_HASH": WriteHash,
    "JUMP_FORWARD": ForwardJump,
    "JUMP_BACKWARD": BackwardJump,
    "CASE": Case,
}

@dataclass
class Tok:
    kind: str
    text: str
    start: int
    end: int

def lex(src: str) -> List[Tok]:
    i = 0
    out: List[Tok] = []
    while i < len(src):
        ch = src[i]
        if ch.isspace():
            i += 1; continue
        if ch == ONE or ch == HASH:
            j = i+1
            while j < len(src) and src[j] == ch:
                j += 1
            out.append(Tok("ONES" if ch == ONE else "HASHES", src[i:j], i, j)); i = j; continue
        if ch == COMMENT:
            j = i
            while j < len(src) and src[j] != "\n":
                j += 1
            text = src[i+1:j]
            if text.startswith(" "): text = text[1:]
            out.append(Tok("COMMENT", text, i, j)); i = j; continue
        raise SyntaxError(f"Unknown char {ch!r} at {i}")
    out.append(Tok("EOF", "", len(src), len(src)))
    return out

def decode(src: str) -> ResolvedProgram:
    toks = lex(src)
    code = []
    notes = []
    i = 0
    while toks[i].kind != "EOF":
        t = toks[i]
        if t.kind == "COMMENT":
            notes.append((len(code), t.text)); i += 1; continue
        if t.kind != "ONES":
            raise SyntaxError(f"Expected a run of {ONE!r} at {t.start}, got {t.text!r}")
        h = toks[i+1]
        if h.kind != "HASHES":
            raise SyntaxError(f"Expected a run of {HASH!r} at {h.start}")
        k = len(h.text)
        if k not in OPS:
            raise SyntaxError(f"No instruction has {k} {HASH!r} symbols (at {h.start})")
        code.append(BY_OPCODE[OPS[k].name](len(t.text)))
        i += 2
    return ResolvedProgram(tuple(code), Annotations.collect(notes))
