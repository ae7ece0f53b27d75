from lox.ast import (
    Assign, Binary, Ternary, Grouping, Literal, Unary, Variable,
    Expression, Print, Var, Block,
)
from lox.errors import ErrorReporter
from lox.parser import parse_program
from lox.tokens import TokenType


def parse_ok(source):
    reporter = ErrorReporter()
    statements = parse_program(source, reporter)
    assert not reporter.had_error, reporter.diagnostics
    return statements


def parse_expr(source):
    statements = parse_ok(source + ';')
    assert isinstance(statements[0], Expression)
    return statements[0].expression


def test_statement_count_matches_top_level_declarations():
    statements = parse_ok('var a = 1; print a; { var b; b = 2; } a;')
    assert [type(s) for s in statements] == [Var, Print, Block, Expression]
    block = statements[2]
    assert [type(s) for s in block.statements] == [Var, Expression]


def test_var_without_initializer():
    stmt = parse_ok('var x;')[0]
    assert stmt.name.lexeme == 'x'
    assert stmt.initializer is None


def test_binary_is_left_associative():
    expr = parse_expr('1 - 2 - 3')
    assert isinstance(expr, Binary)
    assert expr.operator.type == TokenType.MINUS
    assert isinstance(expr.left, Binary)
    assert expr.right == Literal(3.0)


def test_precedence_factor_over_term():
    expr = parse_expr('1 + 2 * 3')
    assert expr.operator.type == TokenType.PLUS
    assert expr.left == Literal(1.0)
    assert isinstance(expr.right, Binary)
    assert expr.right.operator.type == TokenType.STAR


def test_comparison_binds_tighter_than_equality():
    expr = parse_expr('1 < 2 == true')
    assert expr.operator.type == TokenType.EQUAL_EQUAL
    assert expr.left.operator.type == TokenType.LESS


def test_unary_nesting():
    expr = parse_expr('!-x')
    assert isinstance(expr, Unary)
    assert expr.operator.type == TokenType.BANG
    assert isinstance(expr.right, Unary)
    assert isinstance(expr.right.right, Variable)


def test_ternary_is_right_associative():
    expr = parse_expr('a ? b : c ? d : e')
    assert isinstance(expr, Ternary)
    assert isinstance(expr.condition, Variable)
    assert isinstance(expr.else_branch, Ternary)


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == 'b'


def test_comma_builds_sequence():
    expr = parse_expr('a, b, c')
    assert isinstance(expr, Binary)
    assert expr.operator.type == TokenType.COMMA
    assert isinstance(expr.right, Variable)
    assert expr.right.name.lexeme == 'c'
    assert expr.left.operator.type == TokenType.COMMA


def test_grouping_and_literals():
    expr = parse_expr('(nil)')
    assert expr == Grouping(Literal(None))
    assert parse_expr('true') == Literal(True)
    assert parse_expr('false') == Literal(False)
    assert parse_expr('"s"') == Literal('s')


def test_invalid_assignment_target_is_reported_not_thrown():
    reporter = ErrorReporter()
    statements = parse_program('(a) = 1; print 2;', reporter)
    assert reporter.had_error
    assert reporter.diagnostics == ["[line 1] Error at '=': Invalid assignment target."]
    # parsing went on with the rest of the program
    assert [type(s) for s in statements] == [Expression, Print]


def test_missing_semicolon_reports_at_token():
    reporter = ErrorReporter()
    parse_program('print 1\nprint 2;', reporter)
    assert reporter.diagnostics == ["[line 2] Error at 'print': Expect ';' after value."]


def test_error_at_end():
    reporter = ErrorReporter()
    parse_program('print', reporter)
    assert reporter.diagnostics == ['[line 1] Error at end: Expect expression.']


def test_synchronizes_to_next_statement():
    reporter = ErrorReporter()
    statements = parse_program('var = 1; print 1 +; var ok = 2; print ok;', reporter)
    assert len(reporter.diagnostics) == 2
    assert [type(s) for s in statements] == [Var, Print]
    assert statements[0].name.lexeme == 'ok'


def test_error_inside_block_keeps_rest_of_block():
    reporter = ErrorReporter()
    statements = parse_program('{ print ; print 2; }', reporter)
    assert reporter.had_error
    assert len(statements) == 1
    assert [type(s) for s in statements[0].statements] == [Print]


def test_unclosed_block():
    reporter = ErrorReporter()
    statements = parse_program('{ var a = 1;', reporter)
    assert reporter.diagnostics == ["[line 1] Error at end: Expect '}' after block."]
    assert statements == []


def test_ternary_missing_colon():
    reporter = ErrorReporter()
    parse_program('true ? 1;', reporter)
    assert reporter.diagnostics == [
        "[line 1] Error at ';': Expect ':' after then branch of conditional expression."
    ]


def test_nesting_too_deep_recovers_at_next_statement():
    reporter = ErrorReporter()
    statements = parse_program('print ' + '(' * 5000 + '1' + ')' * 5000 + ';\nprint 2;', reporter)
    assert len(reporter.diagnostics) == 1
    assert reporter.diagnostics[0].endswith('Expression nested too deeply.')
    assert statements == [Print(Literal(2.0))]
