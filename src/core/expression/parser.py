"""
Parser — преобразование infix → postfix (shunting-yard)

Алгоритм:
- NUMBER / VARIABLE / CONSTANT → push-инструкция сразу в выход
  (константы уже разрешены в float на этапе tokenize)
- FUNCTION → маркер функции на стек; эмитируется при закрытии её скобки,
  т.е. после полного вывода аргумента (функция = унарный postfix-оператор,
  привязанный к явной группе скобок)
- Бинарный оператор → выталкивать операторы со строго большим приоритетом
  или с равным приоритетом при левоассоциативном текущем; затем push
- Унарный знак (+/- в позиции операнда) → push без выталкивания
- "(" → маркер области; ")" → вывод до маркера, снятие маркера, затем
  вывод маркера функции, лежащего непосредственно под ним
- Конец ввода → вывод остатка стека

Ошибки (ParseError, первый структурный дефект в порядке чтения):
- extra closing parenthesis: глубина скобок стала отрицательной
- missing closing parenthesis: положительная глубина в конце
- empty expression / missing operand / missing operator / function requires '('
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from src.core.expression.errors import ExpressionError, ParseError
from src.core.expression.program import (
    ApplyBinaryOp,
    ApplyFunction,
    ApplyUnaryOp,
    Instruction,
    PostfixProgram,
    PushConst,
    PushVariable,
)
from src.core.expression.symbols import DEFAULT_SYMBOLS, OperatorSpec, SymbolTable
from src.core.expression.tokens import Token, TokenKind
from src.core.expression.tokenizer import tokenize


# =============================================================================
# ЭЛЕМЕНТЫ СТЕКА ОПЕРАТОРОВ
# =============================================================================


@dataclass(frozen=True)
class _OperatorEntry:
    spec: OperatorSpec
    unary: bool
    position: int

    def emit(self) -> Instruction:
        if self.unary:
            return ApplyUnaryOp(self.spec.symbol)
        return ApplyBinaryOp(self.spec.symbol)


@dataclass(frozen=True)
class _ParenEntry:
    position: int


@dataclass(frozen=True)
class _FunctionEntry:
    name: str
    position: int


_StackEntry = Union[_OperatorEntry, _ParenEntry, _FunctionEntry]


# =============================================================================
# PARSER
# =============================================================================


class ExpressionParser:
    """
    Shunting-yard parser над фиксированной таблицей символов.

    Stateless между вызовами: каждый parse() создаёт собственные стек и выход,
    поэтому один экземпляр безопасно переиспользуется.
    """

    def __init__(self, symbols: SymbolTable = DEFAULT_SYMBOLS):
        self.symbols = symbols

    def parse(self, source: Union[str, Sequence[Token]]) -> PostfixProgram:
        """
        Компиляция выражения в PostfixProgram.

        Args:
            source: Исходная строка или уже готовая последовательность токенов

        Returns:
            PostfixProgram (инвариант одного значения на стеке гарантирован)

        Raises:
            LexError: Если source — строка с нераспознанным символом
            ParseError: Первый структурный дефект выражения
        """
        if isinstance(source, str):
            text = source
            tokens = tokenize(source, self.symbols)
        else:
            tokens = list(source)
            text = " ".join(token.text for token in tokens)

        if not tokens:
            raise ParseError(ParseError.EMPTY_EXPRESSION, "Empty expression")

        output: list[Instruction] = []
        stack: list[_StackEntry] = []
        depth = 0
        expect_operand = True

        for index, token in enumerate(tokens):
            if token.is_operand:
                if not expect_operand:
                    raise self._missing_operator(token)
                output.append(self._push_instruction(token))
                expect_operand = False

            elif token.kind == TokenKind.FUNCTION:
                if not expect_operand:
                    raise self._missing_operator(token)
                following = tokens[index + 1] if index + 1 < len(tokens) else None
                if following is None or following.kind != TokenKind.LPAREN:
                    raise ParseError(
                        ParseError.FUNCTION_WITHOUT_PARENS,
                        f"Function '{token.text}' at position {token.position} "
                        f"must be followed by '('",
                        token.position,
                    )
                stack.append(_FunctionEntry(token.text, token.position))

            elif token.kind == TokenKind.OPERATOR:
                if expect_operand:
                    # Унарный знак: начало, после "(" или после другого оператора
                    unary_spec = self.symbols.unary_operators.get(token.text)
                    if unary_spec is None:
                        raise ParseError(
                            ParseError.MISSING_OPERAND,
                            f"Operator '{token.text}' at position {token.position} "
                            f"is missing its left operand",
                            token.position,
                        )
                    stack.append(_OperatorEntry(unary_spec, True, token.position))
                    continue
                spec = self.symbols.operators[token.text]
                self._pop_higher_precedence(spec, stack, output)
                stack.append(_OperatorEntry(spec, False, token.position))
                expect_operand = True

            elif token.kind == TokenKind.LPAREN:
                if not expect_operand:
                    raise self._missing_operator(token)
                stack.append(_ParenEntry(token.position))
                depth += 1

            elif token.kind == TokenKind.RPAREN:
                depth -= 1
                if depth < 0:
                    raise ParseError(
                        ParseError.EXTRA_CLOSING_PAREN,
                        f"Unbalanced parentheses: extra closing parenthesis ')' at position "
                        f"{token.position}",
                        token.position,
                    )
                if expect_operand:
                    raise ParseError(
                        ParseError.MISSING_OPERAND,
                        f"Missing operand before ')' at position {token.position}",
                        token.position,
                    )
                self._close_group(stack, output)

        if expect_operand:
            raise ParseError(
                ParseError.MISSING_OPERAND,
                "Unexpected end of expression: operand expected",
            )
        if depth > 0:
            raise ParseError(
                ParseError.MISSING_CLOSING_PAREN,
                "Unbalanced parentheses: missing closing parenthesis ')'",
            )

        while stack:
            entry = stack.pop()
            if isinstance(entry, _ParenEntry):
                # Недостижимо при depth == 0; оставлено как защита инварианта
                raise ParseError(
                    ParseError.MISSING_CLOSING_PAREN,
                    "Unbalanced parentheses in expression",
                    entry.position,
                )
            output.append(self._emit(entry))

        return PostfixProgram(instructions=tuple(output), source=text)

    # -- Приватные ---------------------------------------------------------

    def _push_instruction(self, token: Token) -> Instruction:
        if token.kind == TokenKind.VARIABLE:
            return PushVariable(self.symbols.variable)
        # NUMBER и CONSTANT: значение разрешено tokenizer'ом
        return PushConst(float(token.value))

    @staticmethod
    def _emit(entry: _StackEntry) -> Instruction:
        if isinstance(entry, _FunctionEntry):
            return ApplyFunction(entry.name)
        return entry.emit()

    @staticmethod
    def _pop_higher_precedence(
        current: OperatorSpec,
        stack: list[_StackEntry],
        output: list[Instruction],
    ) -> None:
        while stack:
            top = stack[-1]
            if not isinstance(top, _OperatorEntry):
                break
            if top.spec.precedence > current.precedence or (
                top.spec.precedence == current.precedence
                and current.is_left_associative
            ):
                output.append(top.emit())
                stack.pop()
            else:
                break

    def _close_group(self, stack: list[_StackEntry], output: list[Instruction]) -> None:
        while stack and not isinstance(stack[-1], _ParenEntry):
            output.append(self._emit(stack.pop()))

        # depth >= 0 гарантирует наличие маркера "("
        stack.pop()

        if stack and isinstance(stack[-1], _FunctionEntry):
            output.append(ApplyFunction(stack.pop().name))

    @staticmethod
    def _missing_operator(token: Token) -> ParseError:
        return ParseError(
            ParseError.MISSING_OPERATOR,
            f"Missing operator before '{token.text}' at position {token.position} "
            f"(use '*' for multiplication, e.g. 2*x)",
            token.position,
        )


def parse(
    source: Union[str, Sequence[Token]],
    symbols: SymbolTable = DEFAULT_SYMBOLS,
) -> PostfixProgram:
    """
    Компиляция infix-выражения в PostfixProgram.

    Examples:
        >>> parse("2*x+3").to_text()
        '2.0 x * 3.0 +'
        >>> parse("sin(x)^2").to_text()
        'x sin 2.0 ^'
    """
    return ExpressionParser(symbols).parse(source)


def try_parse(
    source: str, symbols: SymbolTable = DEFAULT_SYMBOLS
) -> tuple[Optional[PostfixProgram], Optional[str]]:
    """
    Компиляция без исключения.

    Returns:
        (program, None) при успехе или (None, описание ошибки) при LexError/ParseError
    """
    try:
        return (parse(source, symbols), None)
    except ExpressionError as e:
        return (None, e.message)
