from __future__ import annotations
from typing import Dict, Iterable, Set
from .ir import LabelMarker, Jump, Comment, Nop, WriteOne, WriteHash, Case

class VerifyError(Exception): pass

DEFAULT_BUDGETS = {"INSTRUCTIONS": 100_000, "REGISTER": 10_000}

def verify(code: Iterable, budgets: Dict[str,int] = None) -> Dict[str,int]:
    """Check a build-time stream against size budgets and label structure.

    Returns a summary of what was counted. Every problem found is reported
    in one ``VerifyError``.
    """
    limits = dict(DEFAULT_BUDGETS)
    limits.update(budgets or {})

    bound: Set[str] = set()
    referenced: Set[str] = set()
    registers: Set[int] = set()
    errors = []
    size = jumps = comments = 0

    for ins in code:
        if isinstance(ins, LabelMarker):
            name = ins.label.name
            if name in bound: errors.append(f"label {name!r} bound twice")
            bound.add(name)
        elif isinstance(ins, Comment):
            comments += 1
        elif isinstance(ins, Nop):
            pass
        else:
            size += 1
            if isinstance(ins, Jump):
                jumps += 1; referenced.add(ins.label.name)
            elif isinstance(ins, (WriteOne, WriteHash, Case)):
                registers.add(ins.register)

    for name in sorted(referenced - bound):
        errors.append(f"jump to unbound label {name!r}")
    if size > limits.get("INSTRUCTIONS", 1e9):
        errors.append(f"INSTRUCTIONS budget exceeded: {size} > {limits['INSTRUCTIONS']}")
    top = max(registers, default=0)
    if top > limits.get("REGISTER", 1e9):
        errors.append(f"REGISTER budget exceeded: R{top} > R{limits['REGISTER']}")
    if errors:
        raise VerifyError("; ".join(errors))

    return {"instructions": size, "jumps": jumps, "labels": len(bound),
            "registers": len(registers), "comments": comments}
