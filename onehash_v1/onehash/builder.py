from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator, List, Set, Tuple
from .ir import (
    Label, WriteOne, WriteHash, Case, LabelMarker, Jump, Comment, Nop,
    INSTRUCTIONS, check_register,
)

log = logging.getLogger(__name__)

DEFAULT_FIRST_SCRATCH = 100

class DuplicateLabelError(Exception): pass
class BuilderClosedError(Exception): pass

class Builder:
    """Single-owner context that accumulates one build-time program.

    Label names are allocated from a counter local to the instance, so two
    builders never interfere and every session produces the same names.
    """

    def __init__(self, first_scratch: int = DEFAULT_FIRST_SCRATCH):
        self._code: List = []
        self._next_label = 0
        self._bound: Set[str] = set()
        self._closed = False
        self.first_scratch = check_register(first_scratch)
        self._scratch_top = first_scratch
        self._scratch_free: List[int] = []
        self._scratch_live: List[int] = []

    @property
    def instructions(self) -> Tuple:
        return tuple(self._code)

    @property
    def labels_bound(self) -> frozenset:
        return frozenset(self._bound)

    def __len__(self) -> int:
        return len(self._code)

    # -- primitives --

    def _check_open(self):
        if self._closed:
            raise BuilderClosedError("Builder already finished")

    def emit(self, ins):
        self._check_open()
        if not isinstance(ins, INSTRUCTIONS):
            raise TypeError(f"Not an instruction: {ins!r}")
        if isinstance(ins, LabelMarker):
            # a name may be bound once, however the marker arrives
            if ins.label.name in self._bound:
                raise DuplicateLabelError(f"Label {ins.label.name!r} is already bound")
            self._bound.add(ins.label.name)
        self._code.append(ins)
        return ins

    def fresh_label(self, hint: str = "L") -> Label:
        self._check_open()
        if not hint or hint[-1].isdigit():
            raise ValueError(f"Label hint must be non-empty and not end in a digit, got {hint!r}")
        label = Label(f"{hint}{self._next_label}")
        self._next_label += 1
        return label

    def bind_label(self, label: Label) -> None:
        self.emit(LabelMarker(label))
        log.debug("bound %s at build position %d", label.name, len(self._code) - 1)

    def jump_to(self, label: Label) -> None:
        self.emit(Jump(label))

    # -- conveniences --

    def write_one(self, r: int) -> None: self.emit(WriteOne(check_register(r)))
    def write_hash(self, r: int) -> None: self.emit(WriteHash(check_register(r)))
    def case(self, r: int) -> None: self.emit(Case(check_register(r)))
    def comment(self, text: str) -> None: self.emit(Comment(str(text)))
    def nop(self) -> None: self.emit(Nop())

    @contextmanager
    def scratch(self) -> Iterator[int]:
        """Lend a scratch register for the duration of a ``with`` block.

        Leases nest as a stack: the lowest free register is handed out and
        returned to the pool on exit, so no two live leases share one. The
        caller must leave the register empty before releasing it.
        """
        if self._scratch_free:
            self._scratch_free.sort()
            r = self._scratch_free.pop(0)
        else:
            r = self._scratch_top; self._scratch_top += 1
        self._scratch_live.append(r)
        log.debug("scratch register %d leased", r)
        try:
            yield r
        finally:
            self._scratch_live.remove(r)
            self._scratch_free.append(r)
            log.debug("scratch register %d released", r)

    @property
    def scratch_live(self) -> Tuple[int, ...]:
        return tuple(self._scratch_live)

    def finish(self) -> Tuple:
        code = self.instructions
        self._closed = True
        log.debug("finished program: %d instructions, %d labels", len(code), len(self._bound))
        return code
