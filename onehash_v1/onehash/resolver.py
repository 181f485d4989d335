from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple, Union
from .builder import DuplicateLabelError
from .ir import (
    LabelMarker, Jump, Comment, Nop, ForwardJump, BackwardJump,
    CONCRETE, Concrete,
)
from .lineage import Annotations

log = logging.getLogger(__name__)

class UnresolvedLabelError(Exception): pass
class ZeroDistanceJumpError(Exception): pass

@dataclass(frozen=True)
class ResolvedProgram:
    instructions: Tuple[Concrete, ...]
    comments: Annotations = field(default_factory=Annotations)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Concrete]:
        return iter(self.instructions)

    def stream(self) -> List:
        """Flatten back into an instruction list with comments inline."""
        out: List = []
        for i, ins in enumerate(self.instructions):
            out.extend(Comment(t) for t in self.comments.get(i))
            out.append(ins)
        out.extend(Comment(t) for t in self.comments.get(len(self.instructions)))
        return out

def _positions(code) -> Dict[str, int]:
    # Markers, comments and nops occupy no slot in the resolved numbering.
    targets: Dict[str, int] = {}
    pc = 0
    for ins in code:
        if isinstance(ins, LabelMarker):
            name = ins.label.name
            if name in targets:
                raise DuplicateLabelError(f"Label {name!r} is bound more than once")
            targets[name] = pc
        elif isinstance(ins, (Comment, Nop)):
            continue
        elif isinstance(ins, Jump) or isinstance(ins, CONCRETE):
            pc += 1
        else:
            raise TypeError(f"Not an instruction: {ins!r}")
    return targets

def resolve(program: Union[ResolvedProgram, Iterable]) -> ResolvedProgram:
    if isinstance(program, ResolvedProgram):
        program = program.stream()
    code = tuple(program)

    # Pass 1: label positions
    targets = _positions(code)
    missing = sorted({ins.label.name for ins in code if isinstance(ins, Jump)} - set(targets))
    if missing:
        raise UnresolvedLabelError(f"Jump to unbound label(s): {', '.join(missing)}")

    # Pass 2: offsets
    out: List[Concrete] = []
    notes = []
    for ins in code:
        if isinstance(ins, (LabelMarker, Nop)):
            continue
        if isinstance(ins, Comment):
            notes.append((len(out), ins.text))
            continue
        if isinstance(ins, Jump):
            p = len(out); q = targets[ins.label.name]
            if q > p:
                out.append(ForwardJump(q - p))
            elif q < p:
                out.append(BackwardJump(p - q))
            else:
                raise ZeroDistanceJumpError(f"Jump to {ins.label.name!r} targets itself at {p}")
            continue
        out.append(ins)

    log.debug("resolved %d build-time instructions into %d (%d labels)", len(code), len(out), len(targets))
    return ResolvedProgram(tuple(out), Annotations.collect(notes))
