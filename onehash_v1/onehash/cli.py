from __future__ import annotations
import argparse, importlib, inspect, json, logging, sys
from .builder import Builder, DuplicateLabelError, DEFAULT_FIRST_SCRATCH
from .emitter import encode
from .ir import RegisterIndexError
from .lexer import decode
from .programs import PROGRAMS
from .resolver import resolve, UnresolvedLabelError, ZeroDistanceJumpError
from .verifier import verify, VerifyError, DEFAULT_BUDGETS

log = logging.getLogger("onehash")

ERRORS = (
    (DuplicateLabelError, "label"),
    (UnresolvedLabelError, "label"),
    (ZeroDistanceJumpError, "label"),
    (RegisterIndexError, "register"),
    (VerifyError, "verify"),
    (SyntaxError, "syntax"),
    (ValueError, "value"),
)

def read_file(p):
    with open(p, "r", encoding="utf-8") as f:
        return f.read()

def write_file(p, s):
    with open(p, "w", encoding="utf-8") as f:
        f.write(s)

def load_config(path):
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must hold a JSON object")
    log.debug("loaded config %s", path)
    return cfg

def find_program(name):
    if name in PROGRAMS:
        return PROGRAMS[name]
    if ":" in name:
        mod, _, attr = name.partition(":")
        return getattr(importlib.import_module(mod), attr)
    raise SystemExit(f"Unknown program {name!r}; choose one of {', '.join(PROGRAMS)} or module:function")

def _arg(s):
    return int(s) if s.lstrip("-").isdigit() else s

def coerce_args(fn, args):
    # annotated params decide; unannotated ones guess from the text
    params = list(inspect.signature(fn).parameters.values())[1:]
    out = []
    for i, a in enumerate(args):
        kind = params[i].annotation if i < len(params) else inspect.Parameter.empty
        if kind in (int, "int"):
            out.append(int(a))
        elif kind in (str, "str"):
            out.append(a)
        else:
            out.append(_arg(a))
    return out

def build(name, args, first_scratch=DEFAULT_FIRST_SCRATCH):
    b = Builder(first_scratch=first_scratch)
    fn = find_program(name)
    fn(b, *coerce_args(fn, args))
    return b.finish()

def disasm(program) -> str:
    out = []
    for i, ins in enumerate(program):
        for text in program.comments.get(i):
            out.append(f"      ; {text}")
        if ins.opcode == "JUMP_FORWARD":
            row = f"-> {i + ins.distance:04d}"
        elif ins.opcode == "JUMP_BACKWARD":
            row = f"<- {i - ins.distance:04d}"
        else:
            row = f"R{ins.register}"
        out.append(f"{i:04d}  {ins.opcode:<13} {row}")
    for text in program.comments.get(len(program)):
        out.append(f"      ; {text}")
    return "\n".join(out)

def main(argv=None):
    ap = argparse.ArgumentParser(prog="onehash", description="Generate 1# programs from structured combinators")
    ap.add_argument("--verbose", action="store_true", help="Verbose logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("compile", help="Build a library program (or module:function) and print its 1# text")
    c.add_argument("program")
    c.add_argument("args", nargs="*")
    c.add_argument("--verify", action="store_true")
    c.add_argument("--disasm", action="store_true")
    c.add_argument("--compact", action="store_true", help="One line of pure 1#, no comments")
    c.add_argument("--no-comments", action="store_true")
    c.add_argument("--first-scratch", type=int, default=None)
    c.add_argument("--config", help="JSON config with 'budgets' and 'first_scratch'")
    c.add_argument("--out", help="Write the program to a file")

    d = sub.add_parser("disasm", help="List an encoded 1# program")
    d.add_argument("src")

    sub.add_parser("list", help="List library programs")

    args = ap.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.cmd == "compile":
            cfg = load_config(args.config)
            first = args.first_scratch if args.first_scratch is not None else cfg.get("first_scratch", DEFAULT_FIRST_SCRATCH)
            code = build(args.program, args.args, first_scratch=first)
            if args.verify:
                budgets = dict(DEFAULT_BUDGETS); budgets.update(cfg.get("budgets", {}))
                stats = verify(code, budgets)
                log.info("verified: %s", stats)
            program = resolve(code)
            if args.disasm:
                text = disasm(program)
            else:
                text = encode(program, comments=not args.no_comments, compact=args.compact)
            if args.out:
                write_file(args.out, text + "\n")
            else:
                print(text)
        elif args.cmd == "disasm":
            print(disasm(decode(read_file(args.src))))
        elif args.cmd == "list":
            for name, fn in PROGRAMS.items():
                doc = (fn.__doc__ or "").strip().splitlines()
                print(f"{name:<8} {doc[0] if doc else ''}")
    except tuple(e for e, _ in ERRORS) as e:
        kind = next(k for cls, k in ERRORS if isinstance(e, cls))
        print(f"[{kind} error] {e}", file=sys.stderr); sys.exit(2)

if __name__ == "__main__":
    main()
