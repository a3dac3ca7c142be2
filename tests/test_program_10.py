from pathlib import Path

import pytest

from fpslang.errors import FpsError
from fpslang.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_missing_frame_end(capsys):
    with open(EXAMPLES / 'program_10.fps', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(FpsError) as excinfo:
        interp.run(ast)
    assert excinfo.value.err.name == 'MissingFrameEnd'
    # allocation fails before any frame runs
    assert capsys.readouterr().out == ''
