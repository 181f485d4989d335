import pytest

from onehash.builder import Builder
from onehash.emitter import encode
from onehash.ir import WriteOne, WriteHash, Case, ForwardJump, BackwardJump
from onehash.lexer import decode
from onehash.resolver import ResolvedProgram


class MachineError(Exception):
    pass


def run_program(program, registers=None, fuel=100000):
    """Reference 1# machine: runs a program against a register file.

    ``program`` may be 1# text, a resolved program or a build-time stream;
    anything but text goes through the encoder and decoder first so the
    whole pipeline is exercised. Returns the final registers with empty
    ones dropped.
    """
    if not isinstance(program, str):
        program = encode(program)
    code = decode(program).instructions
    regs = {k: v for k, v in (registers or {}).items()}
    pc = 0
    while pc != len(code):
        if not 0 <= pc < len(code):
            raise MachineError(f"pc {pc} left the program (length {len(code)})")
        fuel -= 1
        if fuel < 0:
            raise MachineError("out of fuel")
        ins = code[pc]
        if isinstance(ins, WriteOne):
            regs[ins.register] = regs.get(ins.register, "") + "1"; pc += 1
        elif isinstance(ins, WriteHash):
            regs[ins.register] = regs.get(ins.register, "") + "#"; pc += 1
        elif isinstance(ins, ForwardJump):
            pc += ins.distance
        elif isinstance(ins, BackwardJump):
            pc -= ins.distance
        elif isinstance(ins, Case):
            s = regs.get(ins.register, "")
            if not s:
                pc += 1
            else:
                regs[ins.register] = s[1:]
                pc += 2 if s[0] == "1" else 3
        else:
            raise MachineError(f"unexpected instruction {ins!r}")
    return {k: v for k, v in regs.items() if v}


@pytest.fixture
def machine():
    return run_program


@pytest.fixture
def builder():
    return Builder()
