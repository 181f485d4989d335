from __future__ import annotations
from dataclasses import dataclass
from typing import Union

class RegisterIndexError(ValueError): pass

def check_register(r) -> int:
    # registers are numbered from 1, matching the unary encoding
    if isinstance(r, bool) or not isinstance(r, int):
        raise RegisterIndexError(f"Register index must be an int, got {r!r}")
    if r < 1:
        raise RegisterIndexError(f"Register index must be >= 1, got {r}")
    return r

@dataclass(frozen=True)
class Label:
    name: str
    def __str__(self) -> str:
        return self.name

# --- instructions present in both build-time and resolved programs ---

@dataclass(frozen=True)
class WriteOne:
    register: int
    opcode = "WRITE_ONE"
    def __post_init__(self): check_register(self.register)
    @property
    def operand(self) -> int: return self.register

@dataclass(frozen=True)
class WriteHash:
    register: int
    opcode = "WRITE_HASH"
    def __post_init__(self): check_register(self.register)
    @property
    def operand(self) -> int: return self.register

@dataclass(frozen=True)
class Case:
    register: int
    opcode = "CASE"
    def __post_init__(self): check_register(self.register)
    @property
    def operand(self) -> int: return self.register

# --- build-time only ---

@dataclass(frozen=True)
class LabelMarker:
    label: Label

@dataclass(frozen=True)
class Jump:
    label: Label

@dataclass(frozen=True)
class Comment:
    text: str

@dataclass(frozen=True)
class Nop:
    pass

# --- resolved only ---

@dataclass(frozen=True)
class ForwardJump:
    distance: int
    opcode = "JUMP_FORWARD"
    def __post_init__(self):
        if self.distance < 1: raise ValueError(f"Jump distance must be >= 1, got {self.distance}")
    @property
    def operand(self) -> int: return self.distance

@dataclass(frozen=True)
class BackwardJump:
    distance: int
    opcode = "JUMP_BACKWARD"
    def __post_init__(self):
        if self.distance < 1: raise ValueError(f"Jump distance must be >= 1, got {self.distance}")
    @property
    def operand(self) -> int: return self.distance

Concrete = Union[WriteOne, WriteHash, Case, ForwardJump, BackwardJump]
Instruction = Union[WriteOne, WriteHash, Case, LabelMarker, Jump, Comment, Nop, ForwardJump, BackwardJump]

CONCRETE = (WriteOne, WriteHash, Case, ForwardJump, BackwardJump)
INSTRUCTIONS = CONCRETE + (LabelMarker, Jump, Comment, Nop)
