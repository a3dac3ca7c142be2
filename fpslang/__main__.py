"""CLI entry point for the FPS Lang interpreter.

Usage:
    python -m fpslang [-v|-vv|-vvv] <program_file>
    python -m fpslang [-v...] --emit-ast <program_file>
    python -m fpslang [-v...] --ast <ast_json_file>
    python -m fpslang --frames <program_file>
    python -m fpslang [-v...] --repl

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .fps file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --frames      Print the frame plan of a .fps file as JSON without running it
  -r, --repl    Start an interactive prompt

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero: frame boundaries and flushes at -v, scope
and window changes at -vv, conditions and loop bounds at -vvv.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj, frames_to_obj
from .errors import FpsError, InvariantViolation, ParseError
from .interpreter import Interpreter
from .parser import parse_program

PROMPT = 'fps> '
QUIT = '\\q'


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> Program:
    try:
        return parse_program(source)
    except ParseError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def load_ast(path: Path) -> Program:
    try:
        program = ast_from_obj(json.loads(read_source(path)))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        print(f"Runtime error: invalid AST file {path}: {e!r}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(program, Program):
        print(f"Runtime error: invalid AST file {path}: top-level node is not a Program", file=sys.stderr)
        sys.exit(1)
    return program


def execute(program: Program, debug_level: int):
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(program)
    except FpsError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except InvariantViolation as e:
        print(f"Internal error: {e}", file=sys.stderr)
        sys.exit(2)


def repl(debug_level: int = 0, stdin: Optional[TextIO] = None) -> None:
    """Read-eval loop; each line is a whole program and state carries over."""
    stdin = stdin or sys.stdin
    print("REPL for FPS Lang")
    print("-----------------")
    print(f"Type '{QUIT}' or press Ctrl+D to exit")
    interpreter = Interpreter(debug_level=debug_level)
    try:
        while True:
            print(PROMPT, end='', flush=True)
            line = stdin.readline()
            if not line:
                break
            line = line.rstrip()
            if line == QUIT:
                break
            if not line:
                continue
            try:
                interpreter.interpret(parse_program(line))
            except (ParseError, FpsError) as e:
                print(f"Error: {e}", file=sys.stderr)
    finally:
        interpreter.close()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="FPS Lang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='FPS_FILE', help='emit AST JSON for the given .fps file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--frames', metavar='FPS_FILE', help='print the frame plan of the given .fps file as JSON')
    group.add_argument('-r', '--repl', action='store_true', help='start an interactive prompt')
    parser.add_argument('program', nargs='?', help='FPS program file (.fps) to execute')
    args = parser.parse_args(argv)

    if args.repl:
        repl(debug_level=args.v)
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(read_source(program_file))
        obj = ast_to_obj(program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        execute(load_ast(Path(args.ast)), args.v)
        return

    # Frame plan only; loop bounds are still evaluated
    if args.frames:
        program = parse_or_exit(read_source(Path(args.frames)))
        interpreter = Interpreter(debug_level=args.v)
        try:
            frames = interpreter.allocate(program.body)
        except FpsError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            sys.exit(1)
        finally:
            interpreter.close()
        print(json.dumps(frames_to_obj(frames), ensure_ascii=False, indent=2))
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast/--frames/--repl')
    program = parse_or_exit(read_source(Path(args.program)))
    execute(program, args.v)


if __name__ == '__main__':
    main()
