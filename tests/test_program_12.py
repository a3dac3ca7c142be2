from pathlib import Path
from fpslang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_12_arithmetic(capsys):
    with open(EXAMPLES / 'program_12.fps', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['FPS 1 -> 3.5', 'FPS 1 -> 13', 'FPS 1 -> -7', 'FPS 1 -> 18']
