from __future__ import annotations
from .alphabet import ONE, HASH
from .builder import Builder
from .combinators import loop_, while_
from .ir import check_register

def write(b: Builder, r: int, text: str) -> None:
    check_register(r)
    b.comment(f"write {text!r} to R{r}")
    for ch in text:
        if ch == ONE: b.write_one(r)
        elif ch == HASH: b.write_hash(r)
        else: raise ValueError(f"Symbol {ch!r} is not in the alphabet")

def clear(b: Builder, r: int) -> None:
    b.comment(f"clear R{r}")
    while_(b, r, None)

def _distinct(*regs):
    for r in regs: check_register(r)
    if len(set(regs)) != len(regs):
        raise ValueError(f"Registers must be distinct: {regs}")

def move(b: Builder, src: int, dst: int) -> None:
    """Append the contents of ``src`` to ``dst``, leaving ``src`` empty."""
    _distinct(src, dst)
    b.comment(f"move R{src} -> R{dst}")
    loop_(b, src, lambda: b.write_one(dst), lambda: b.write_hash(dst))

def copy(b: Builder, src: int, dst: int) -> None:
    """Append the contents of ``src`` to ``dst``; ``src`` is restored."""
    _distinct(src, dst)
    with b.scratch() as t:
        _distinct(src, dst, t)
        b.comment(f"copy R{src} -> R{dst} via R{t}")
        def one():
            b.write_one(dst); b.write_one(t)
        def hash_():
            b.write_hash(dst); b.write_hash(t)
        loop_(b, src, one, hash_)
        move(b, t, src)

def swap(b: Builder, x: int, y: int) -> None:
    _distinct(x, y)
    with b.scratch() as t:
        _distinct(x, y, t)
        b.comment(f"swap R{x} <-> R{y} via R{t}")
        move(b, x, t)
        move(b, y, x)
        move(b, t, y)

def reverse(b: Builder, r: int) -> None:
    # Each symbol is prepended to the accumulator by writing it into an
    # empty register and appending the accumulator after it.
    check_register(r)
    with b.scratch() as acc, b.scratch() as tmp:
        _distinct(r, acc, tmp)
        b.comment(f"reverse R{r} via R{acc}, R{tmp}")
        def prepend(write_symbol):
            def action():
                write_symbol(tmp)
                move(b, acc, tmp)
                move(b, tmp, acc)
            return action
        loop_(b, r, prepend(b.write_one), prepend(b.write_hash))
        move(b, acc, r)

PROGRAMS = {
    "write": write,
    "clear": clear,
    "move": move,
    "copy": copy,
    "swap": swap,
    "reverse": reverse,
}
