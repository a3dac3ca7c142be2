from pathlib import Path
from fpslang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_window_replay(capsys):
    with open(EXAMPLES / 'program_7.fps', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    frames = interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['FPS 3 -> 1', 'FPS 4 -> 2', 'FPS 5 -> 3']
    # frame 2 belongs to the empty window opened by the first marker
    assert frames[2] == []
