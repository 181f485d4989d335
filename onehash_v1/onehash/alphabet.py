from __future__ import annotations

ONE = "1"
HASH = "#"

def unary(n: int, symbol: str=ONE) -> str:
    if n < 1:
        raise ValueError("unary runs must be at least one symbol long")
    return symbol * n

class Opcode:
    __slots__ = ("name", "code")
    def __init__(self, name: str, code: int):
        self.name = name; self.code = code
    def __repr__(self) -> str:
        return f"Opcode({self.name}={self.code})"
    @property
    def suffix(self) -> str:
        return unary(self.code, HASH)

class OpcodeTable:
    def __init__(self):
        self.by_name = {}
        self.by_code = {}
    def add(self, name: str, code: int):
        if name in self.by_name or code in self.by_code:
            raise ValueError("Duplicate opcode")
        oc = Opcode(name, code)
        self.by_name[name] = oc; self.by_code[code] = oc
        return oc
    def __getitem__(self, key):
        return self.by_name[key] if isinstance(key, str) else self.by_code[key]
    def __contains__(self, key):
        return key in (self.by_name if isinstance(key, str) else self.by_code)

# Opcode number == length of the trailing run of HASH symbols.
OPS = OpcodeTable()

OPS.add("WRITE_ONE", 1)       # 1^n #      append ONE to register n
OPS.add("WRITE_HASH", 2)      # 1^n ##     append HASH to register n
OPS.add("JUMP_FORWARD", 3)    # 1^n ###    pc += n
OPS.add("JUMP_BACKWARD", 4)   # 1^n ####   pc -= n
OPS.add("CASE", 5)            # 1^n #####  empty: +1, ONE: +2, HASH: +3
