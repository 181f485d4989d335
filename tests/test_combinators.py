import pytest

from onehash.builder import Builder
from onehash.combinators import with_labels, cases, loop, loop_, while_
from onehash.ir import Label, LabelMarker, Jump, Case, WriteOne, WriteHash, ForwardJump
from onehash.resolver import resolve


def dispatch(b, r=3):
    cases(b, r, lambda: b.write_one(1), lambda: b.write_one(2), lambda: b.write_one(4))


def test_cases_layout():
    b = Builder()
    cases(b, 3, lambda: b.write_one(1), lambda: b.write_one(2), lambda: b.write_hash(3))
    e, o, h, post = (Label(n) for n in ("case_empty0", "case_one1", "case_hash2", "case_end3"))
    assert b.instructions == (
        Case(3), Jump(e), Jump(o), Jump(h), Jump(post),
        LabelMarker(e), WriteOne(1), Jump(post),
        LabelMarker(o), WriteOne(2), Jump(post),
        LabelMarker(h), WriteHash(3),
        LabelMarker(post),
    )
    assert resolve(b.finish()).instructions == (
        Case(3), ForwardJump(4), ForwardJump(5), ForwardJump(6), ForwardJump(6),
        WriteOne(1), ForwardJump(4),
        WriteOne(2), ForwardJump(2),
        WriteHash(3),
    )


@pytest.mark.parametrize("start,expected", [
    ("", {1: "1"}),
    ("1#", {2: "1", 3: "#"}),
    ("#1", {4: "1", 3: "1"}),
    ("11", {2: "1", 3: "1"}),
])
def test_cases_runs_one_branch_and_consumes_one_symbol(machine, start, expected):
    b = Builder()
    dispatch(b)
    assert machine(b.finish(), {3: start}) == expected


def test_with_labels_binds_around_body():
    b = Builder()
    seen = []
    def body(jump_start, jump_end):
        seen.extend(b.instructions)
        jump_end()
        b.write_one(1)
        jump_start()
        return "done"
    assert with_labels(b, body) == "done"
    start, end = Label("start0"), Label("end1")
    assert seen == [LabelMarker(start)]
    assert b.instructions == (LabelMarker(start), Jump(end), WriteOne(1), Jump(start), LabelMarker(end))


def test_with_labels_nested_blocks_get_unique_names():
    b = Builder()
    with_labels(b, lambda s, e: with_labels(b, lambda s2, e2: (e(), e2())))
    names = [ins.label.name for ins in b.instructions if isinstance(ins, LabelMarker)]
    assert names == ["start0", "start2", "end3", "end1"]
    assert len(resolve(b.finish())) == 2


def test_loop_runs_branches_in_order(machine):
    b = Builder()
    loop(b, 1, lambda c, k: b.write_one(2), lambda c, k: b.write_hash(2))
    assert machine(b.finish(), {1: "11#"}) == {2: "11#"}


def test_loop_counts_branch_runs(machine):
    b = Builder()
    loop(b, 1, lambda c, k: b.write_one(2), lambda c, k: b.write_one(3))
    assert machine(b.finish(), {1: "11#"}) == {2: "11", 3: "1"}


def test_loop_on_empty_register_runs_nothing(machine):
    b = Builder()
    loop(b, 1, lambda c, k: b.write_one(2), lambda c, k: b.write_one(3))
    assert machine(b.finish(), {}) == {}


def test_loop_break_exits_early(machine):
    b = Builder()
    def on_hash(cont, brk):
        brk()
    loop(b, 1, lambda c, k: b.write_one(2), on_hash)
    assert machine(b.finish(), {1: "1#11"}) == {1: "11", 2: "1"}


def test_loop_continue_skips_rest_of_branch(machine):
    b = Builder()
    def on_one(cont, brk):
        b.write_one(2)
        cont()
        b.write_one(3)
    loop(b, 1, on_one, None)
    assert machine(b.finish(), {1: "1#1"}) == {2: "11"}


def test_loop_prime_ignores_hooks(machine):
    b = Builder()
    loop_(b, 1, lambda: b.write_one(2), None)
    assert machine(b.finish(), {1: "#1#1"}) == {2: "11"}


def test_while_discards_each_symbol(machine):
    b = Builder()
    while_(b, 1, lambda: b.write_one(2))
    assert machine(b.finish(), {1: "1#1"}) == {2: "111"}
    b = Builder()
    while_(b, 1, lambda: b.write_one(2))
    assert machine(b.finish(), {}) == {}


def test_combinators_validate_register():
    b = Builder()
    from onehash.ir import RegisterIndexError
    with pytest.raises(RegisterIndexError):
        cases(b, 0, None, None, None)
    with pytest.raises(RegisterIndexError):
        while_(b, -2, None)
