"""
Тесты для Parser (infix → postfix)

Проверяет:
1. Приоритет и ассоциативность операторов
2. Скобки и функции (маркер функции эмитируется при закрытии скобки)
3. Унарный знак
4. ParseError: несбалансированные скобки, пропущенные операнды/операторы
5. Свойства: длина программы, идемпотентность, try_parse
"""

import pytest

from src.core.expression import (
    ApplyBinaryOp,
    ApplyFunction,
    ApplyUnaryOp,
    ExpressionParser,
    LexError,
    ParseError,
    PostfixProgram,
    PushConst,
    PushVariable,
    TokenKind,
    parse,
    tokenize,
    try_parse,
)


def rpn(text: str) -> str:
    return parse(text).to_text()


# =============================================================================
# ПРИОРИТЕТ И АССОЦИАТИВНОСТЬ
# =============================================================================


class TestPrecedence:
    """Тесты приоритета и ассоциативности"""

    def test_simple_sum(self) -> None:
        """x+1 → x 1 +"""
        assert rpn("x+1") == "x 1.0 +"

    def test_multiplication_before_addition(self) -> None:
        """2*x+3 → 2 x * 3 +"""
        assert rpn("2*x+3") == "2.0 x * 3.0 +"
        assert rpn("3+2*x") == "3.0 2.0 x * +"

    def test_power_before_multiplication(self) -> None:
        """2*x^2 → 2 x 2 ^ *"""
        assert rpn("2*x^2") == "2.0 x 2.0 ^ *"

    def test_subtraction_left_associative(self) -> None:
        """x-1-1 = (x-1)-1"""
        assert rpn("x-1-1") == "x 1.0 - 1.0 -"

    def test_division_left_associative(self) -> None:
        """x/2/2 = (x/2)/2"""
        assert rpn("x/2/2") == "x 2.0 / 2.0 /"

    def test_power_right_associative(self) -> None:
        """2^3^2 = 2^(3^2)"""
        assert rpn("2^3^2") == "2.0 3.0 2.0 ^ ^"

    def test_full_polynomial(self) -> None:
        """x^2 + 2*x + 1"""
        assert rpn("x^2 + 2*x + 1") == "x 2.0 ^ 2.0 x * + 1.0 +"

    def test_instructions_are_typed(self) -> None:
        """Программа состоит из типизированных инструкций"""
        program = parse("2*x")
        assert program.instructions == (PushConst(2.0), PushVariable("x"), ApplyBinaryOp("*"))


# =============================================================================
# СКОБКИ И ФУНКЦИИ
# =============================================================================


class TestGroupingAndFunctions:
    """Тесты скобок и функций"""

    def test_parentheses_override_precedence(self) -> None:
        """(x+1)*2 → x 1 + 2 *"""
        assert rpn("(x+1)*2") == "x 1.0 + 2.0 *"

    def test_nested_parentheses(self) -> None:
        """((x))"""
        assert rpn("((x))") == "x"

    def test_function_emitted_after_argument(self) -> None:
        """sin(x) → x sin"""
        assert rpn("sin(x)") == "x sin"

    def test_function_then_power(self) -> None:
        """sin(x)^2: функция применяется до возведения в степень"""
        assert rpn("sin(x)^2") == "x sin 2.0 ^"

    def test_function_argument_expression(self) -> None:
        """sqrt(1-x^2)"""
        assert rpn("sqrt(1-x^2)") == "1.0 x 2.0 ^ - sqrt"

    def test_nested_functions(self) -> None:
        """exp(sin(x))"""
        assert rpn("exp(sin(x))") == "x sin exp"

    def test_function_inside_product(self) -> None:
        """2*cos(x)+1"""
        assert rpn("2*cos(x)+1") == "2.0 x cos * 1.0 +"
        assert parse("2*cos(x)+1").instructions[2] == ApplyFunction("cos")

    def test_constants_as_literals(self) -> None:
        """pi разрешается в литерал"""
        program = parse("pi*x")
        assert isinstance(program.instructions[0], PushConst)


# =============================================================================
# УНАРНЫЙ ЗНАК
# =============================================================================


class TestUnarySign:
    """Тесты унарных + и -"""

    def test_leading_minus(self) -> None:
        """-x → x neg"""
        assert rpn("-x") == "x neg"
        assert parse("-x").instructions[-1] == ApplyUnaryOp("-")

    def test_leading_plus(self) -> None:
        """+x → x pos"""
        assert rpn("+x") == "x pos"

    def test_minus_binds_weaker_than_power(self) -> None:
        """-x^2 = -(x^2)"""
        assert rpn("-x^2") == "x 2.0 ^ neg"

    def test_minus_binds_stronger_than_product(self) -> None:
        """-2*x = (-2)*x"""
        assert rpn("-2*x") == "2.0 neg x *"

    def test_negative_exponent(self) -> None:
        """2^-x"""
        assert rpn("2^-x") == "2.0 x neg ^"

    def test_minus_after_parenthesis(self) -> None:
        """(-x+1)"""
        assert rpn("(-x+1)") == "x neg 1.0 +"

    def test_double_minus(self) -> None:
        """--x"""
        assert rpn("--x") == "x neg neg"

    def test_minus_before_function(self) -> None:
        """-sin(x)"""
        assert rpn("-sin(x)") == "x sin neg"

    def test_binary_minus_after_operand(self) -> None:
        """x-1 — бинарный минус"""
        assert parse("x-1").instructions[-1] == ApplyBinaryOp("-")


# =============================================================================
# ОШИБКИ РАЗБОРА
# =============================================================================


class TestParseErrors:
    """Тесты ParseError"""

    def test_missing_closing_parenthesis(self) -> None:
        """(x+1 → missing closing parenthesis"""
        with pytest.raises(ParseError, match="missing closing parenthesis") as exc_info:
            parse("(x+1")
        assert exc_info.value.reason == ParseError.MISSING_CLOSING_PAREN

    def test_extra_closing_parenthesis(self) -> None:
        """x+1) → extra closing parenthesis"""
        with pytest.raises(ParseError, match="extra closing parenthesis") as exc_info:
            parse("x+1)")
        assert exc_info.value.reason == ParseError.EXTRA_CLOSING_PAREN
        assert exc_info.value.position == 3

    def test_first_defect_reported(self) -> None:
        """)( — первым обнаруживается лишняя закрывающая скобка"""
        with pytest.raises(ParseError) as exc_info:
            parse(")x(")
        assert exc_info.value.reason == ParseError.EXTRA_CLOSING_PAREN

    def test_empty_expression(self) -> None:
        """Пустая строка"""
        with pytest.raises(ParseError) as exc_info:
            parse("   ")
        assert exc_info.value.reason == ParseError.EMPTY_EXPRESSION

    def test_implicit_multiplication_rejected(self) -> None:
        """2x → missing operator"""
        with pytest.raises(ParseError, match="use '\\*' for multiplication") as exc_info:
            parse("2x")
        assert exc_info.value.reason == ParseError.MISSING_OPERATOR
        assert exc_info.value.position == 1

    @pytest.mark.parametrize("text", ["(x)(x)", "2 x", "2(x)", "x sin(x)"])
    def test_adjacent_operands_rejected(self, text: str) -> None:
        """Соседние операнды без оператора → missing operator"""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert exc_info.value.reason == ParseError.MISSING_OPERATOR

    def test_function_without_parentheses(self) -> None:
        """sin x → function requires '('"""
        with pytest.raises(ParseError) as exc_info:
            parse("sin x")
        assert exc_info.value.reason == ParseError.FUNCTION_WITHOUT_PARENS

    @pytest.mark.parametrize("text", ["*2", "x+", "x*/2", "()", "sin()", "x+(*2)"])
    def test_missing_operand(self, text: str) -> None:
        """Оператор без операнда"""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert exc_info.value.reason == ParseError.MISSING_OPERAND

    def test_lex_error_propagates(self) -> None:
        """Ошибка tokenizer'а не маскируется"""
        with pytest.raises(LexError):
            parse("x # 2")


# =============================================================================
# СВОЙСТВА
# =============================================================================


class TestProgramProperties:
    """Свойства скомпилированной программы"""

    @pytest.mark.parametrize(
        "text",
        ["x", "x+1", "2*x^2 + 3*x - 1", "sin(x)^2 + cos(x)^2", "sqrt(1-x^2)", "(((x)))*2"],
    )
    def test_length_equals_operands_plus_operators(self, text: str) -> None:
        """Скобки не попадают в программу: длина = операнды + операторы + функции"""
        tokens = tokenize(text)
        expected = sum(
            1 for t in tokens if t.kind not in (TokenKind.LPAREN, TokenKind.RPAREN)
        )
        assert len(parse(text)) == expected

    def test_parse_is_idempotent(self) -> None:
        """Повторный разбор даёт равную программу"""
        assert parse("x^2 + sin(x)") == parse("x^2 + sin(x)")

    def test_source_kept_but_not_compared(self) -> None:
        """Исходный текст сохраняется, но не участвует в сравнении"""
        assert parse("x+1").source == "x+1"
        assert parse("x+1") == parse("x + 1")

    def test_parse_from_tokens(self) -> None:
        """Парсер принимает готовую последовательность токенов"""
        program = ExpressionParser().parse(tokenize("x*2"))
        assert program.to_text() == "x 2.0 *"

    def test_program_iterable(self) -> None:
        """PostfixProgram итерируется по инструкциям"""
        assert list(parse("x+1")) == [PushVariable("x"), PushConst(1.0), ApplyBinaryOp("+")]
        assert isinstance(parse("x"), PostfixProgram)


class TestTryParse:
    """Тесты try_parse"""

    def test_success(self) -> None:
        """Успех: (program, None)"""
        program, error = try_parse("x+1")
        assert error is None
        assert program.to_text() == "x 1.0 +"

    def test_parse_failure(self) -> None:
        """Ошибка разбора: (None, сообщение)"""
        program, error = try_parse("(x+1")
        assert program is None
        assert "missing closing parenthesis" in error

    def test_lex_failure(self) -> None:
        """Ошибка tokenizer'а: (None, сообщение)"""
        program, error = try_parse("x @ 2")
        assert program is None
        assert error
