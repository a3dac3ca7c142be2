import io

import pytest

from fpslang.ast import (
    Assign, Binary, Block, ExprStmt, FrameEnd, FrameMarker, ForStmt, Ignore,
    Literal, Logical, PrintStmt, VarDecl, Variable, WhileStmt, Comment,
)
from fpslang.errors import FpsError, InvariantViolation
from fpslang.interpreter import Interpreter, parse_program, run_program
from fpslang.types import NULL, RangeVal


def expr(source: str):
    """Parse a single expression statement and return its expression."""
    return parse_program(source + ';').body[0].expr


def test_assignment_returns_new_value():
    interp = Interpreter()
    interp.execute(VarDecl('a', Literal(1.0)))
    assert interp.evaluate(expr('a = a + 1')) == 2.0
    assert interp.evaluate(expr('a')) == 2.0


def test_declaration_defaults_to_null():
    interp = Interpreter()
    interp.execute(VarDecl('a'))
    assert interp.environment.get('a') == NULL


def test_ignore_evaluates_to_null():
    interp = Interpreter()
    assert interp.evaluate(Ignore()) == NULL


def test_and_short_circuits():
    interp = Interpreter()
    interp.execute(VarDecl('hit', Literal(False)))
    result = interp.evaluate(Logical(Literal(False), '&&', Assign('hit', Literal(True))))
    assert result is False
    assert interp.environment.get('hit') is False


def test_or_short_circuits():
    interp = Interpreter()
    interp.execute(VarDecl('hit', Literal(False)))
    result = interp.evaluate(Logical(Literal('left'), '||', Assign('hit', Literal(True))))
    assert result == 'left'
    assert interp.environment.get('hit') is False


def test_logical_returns_operand_values():
    interp = Interpreter()
    assert interp.evaluate(expr('1 && "yes"')) == 'yes'
    assert interp.evaluate(expr('0 || ""')) == ''


def test_binary_dispatches_on_runtime_kinds():
    interp = Interpreter()
    interp.execute(VarDecl('s', Literal('a')))
    with pytest.raises(FpsError) as excinfo:
        interp.evaluate(Binary(Variable('s'), '+', Literal(1.0)))
    assert excinfo.value.err.name == 'InvalidOperation'
    with pytest.raises(FpsError) as excinfo:
        interp.evaluate(expr('1 / 0'))
    assert excinfo.value.err.name == 'DivisionByZero'


def test_precedence_and_grouping():
    interp = Interpreter()
    assert interp.evaluate(expr('1 + 2 * 3')) == 7.0
    assert interp.evaluate(expr('(1 + 2) * 3')) == 9.0
    assert interp.evaluate(expr('10 - 4 - 3')) == 3.0
    assert interp.evaluate(expr('!(1 < 2)')) is False


def test_block_scope_does_not_leak():
    interp = Interpreter()
    interp.execute(Block([VarDecl('inner', Literal(1.0))]))
    with pytest.raises(FpsError) as excinfo:
        interp.evaluate(Variable('inner'))
    assert excinfo.value.err.name == 'NotDeclared'


def test_block_scope_restored_after_error():
    interp = Interpreter()
    with pytest.raises(FpsError):
        interp.execute(Block([VarDecl('inner', Literal(1.0)), ExprStmt(Variable('missing'))]))
    assert interp.environment.depth == 1
    # the failed block's binding is gone, so declaring it at the root works
    interp.execute(VarDecl('inner', Literal(2.0)))


def test_print_is_tagged_with_current_frame():
    out = io.StringIO()
    interp = Interpreter(out=out)
    interp.current_frame = 7
    interp.execute(PrintStmt(Literal(2.0)))
    assert out.getvalue() == 'FPS 7 -> 2\n'


def test_timeline_statements_are_noops_in_a_frame():
    interp = Interpreter()
    interp.execute(FrameMarker(2))
    interp.execute(FrameEnd())
    interp.execute(Comment('note'))
    assert interp.environment.values == {}


def test_loops_reaching_a_frame_are_invariant_violations():
    interp = Interpreter()
    with pytest.raises(InvariantViolation):
        interp.execute(ForStmt(Literal(RangeVal(0, 2)), Block([])))
    with pytest.raises(InvariantViolation):
        interp.execute(WhileStmt(Literal(True), Block([])))


def test_invariant_violation_is_not_a_user_error():
    assert not issubclass(InvariantViolation, FpsError)


def test_declarations_persist_across_frames():
    out = io.StringIO()
    run_program('let a = 1; # a = a + 1; # print(a); ##', out=out)
    assert out.getvalue() == 'FPS 3 -> 2\n'


def test_redeclaring_on_a_replayed_frame_fails():
    # a declaration replayed on two frames hits the same root scope twice
    with pytest.raises(FpsError) as excinfo:
        run_program('#2 let a = 1; ##', out=io.StringIO())
    assert excinfo.value.err.name == 'AlreadyDeclared'


def test_reference_program():
    out = io.StringIO()
    run_program('let a = 1; #2 a = a + 1; # print(a); ##', out=out)
    assert out.getvalue() == 'FPS 4 -> 3\n'


def test_negative_zero_and_small_numbers_print_in_decimal():
    out = io.StringIO()
    run_program('print -0; print 0.0000001; ##', out=out)
    assert out.getvalue() == 'FPS 1 -> -0\nFPS 1 -> 0.0000001\n'


def test_comment_between_operands():
    out = io.StringIO()
    run_program('let a = 1 // one\n + 2;\nprint a; ##', out=out)
    assert out.getvalue() == 'FPS 1 -> 3\n'
