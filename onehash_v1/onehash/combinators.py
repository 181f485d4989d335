"""Structured control flow lowered onto the builder primitives.

Every combinator takes the builder it emits into as its first argument and
touches it only through ``fresh_label``, ``bind_label``, ``jump_to`` and
``emit``. Body actions are zero-argument callables (or ``None`` for an
empty body) that emit their own instructions when called.
"""
from __future__ import annotations
from typing import Callable, Optional
from .builder import Builder
from .ir import Case, check_register

Action = Optional[Callable[[], object]]

def _run(action: Action):
    return action() if action is not None else None

def with_labels(b: Builder, body: Callable[[Callable[[], None], Callable[[], None]], object]):
    """Emit ``body`` between a start and an end label.

    Both labels are allocated before the body runs, so the body can jump
    backwards to the start or forwards past the end.
    """
    start = b.fresh_label("start")
    end = b.fresh_label("end")
    b.bind_label(start)
    result = body(lambda: b.jump_to(start), lambda: b.jump_to(end))
    b.bind_label(end)
    return result

def cases(b: Builder, r: int, on_empty: Action, on_one: Action, on_hash: Action) -> None:
    # Case skips 1, 2 or 3 instructions, so the jump table must follow it directly.
    b.emit(Case(check_register(r)))
    l_empty = b.fresh_label("case_empty")
    l_one = b.fresh_label("case_one")
    l_hash = b.fresh_label("case_hash")
    post = b.fresh_label("case_end")
    b.jump_to(l_empty)
    b.jump_to(l_one)
    b.jump_to(l_hash)
    b.jump_to(post)
    b.bind_label(l_empty); _run(on_empty); b.jump_to(post)
    b.bind_label(l_one); _run(on_one); b.jump_to(post)
    b.bind_label(l_hash); _run(on_hash)
    b.bind_label(post)

def loop(b: Builder, r: int, on_one, on_hash) -> None:
    """Consume ``r`` symbol by symbol until it is empty.

    ``on_one`` and ``on_hash`` are called as ``action(continue_, break_)``
    where both hooks emit a jump: back to the dispatch, or out of the loop.
    Falling off the end of a branch continues with the next symbol.
    """
    check_register(r)
    def body(jump_continue, jump_break):
        def one():
            if on_one is not None: on_one(jump_continue, jump_break)
            jump_continue()
        def hash_():
            if on_hash is not None: on_hash(jump_continue, jump_break)
            jump_continue()
        cases(b, r, jump_break, one, hash_)
    with_labels(b, body)

def loop_(b: Builder, r: int, on_one: Action, on_hash: Action) -> None:
    loop(b, r, lambda _c, _b: _run(on_one), lambda _c, _b: _run(on_hash))

def while_(b: Builder, r: int, body: Action) -> None:
    """Run ``body`` once per symbol of ``r``, discarding the symbol first."""
    check_register(r)
    def block(jump_start, jump_end):
        cases(b, r, jump_end, None, None)
        _run(body)
        jump_start()
    with_labels(b, block)
