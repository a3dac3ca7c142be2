from pathlib import Path
from fpslang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_value_formatting(capsys):
    with open(EXAMPLES / 'program_3.fps', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'FPS 1 -> hello',
        'FPS 1 -> true',
        'FPS 1 -> false',
        'FPS 1 -> Null',
    ]
