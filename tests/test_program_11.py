from pathlib import Path
from fpslang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_loop_in_later_window(capsys):
    """Test program 11: a loop opened in the window [1, 3).

    With a window that no longer ends at the first tick the expansion is
    end + end * N - 1, so 0..2 (N = 1) stretches the window to [1, 5).
    """
    with open(EXAMPLES / 'program_11.fps', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['FPS 2 -> tick', 'FPS 3 -> tick', 'FPS 4 -> tick', 'FPS 5 -> tick']
