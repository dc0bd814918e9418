"""
Tokenizer — разбиение исходной строки на токены

Правила:
- Число: цифры и не более одной десятичной точки; точка поглощается только
  если за ней сразу следует цифра (".5" — число, "3." — ошибка на ".")
- Идентификатор: непрерывная последовательность букв, нормализуется в нижний
  регистр и классифицируется по SymbolTable (переменная, константа, функция)
- Пробельные символы отбрасываются
- Остальные символы должны быть операторами или скобками, иначе LexError
"""

from typing import Final

from src.core.expression.errors import LexError
from src.core.expression.symbols import DEFAULT_SYMBOLS, SymbolTable
from src.core.expression.tokens import Token, TokenKind

_DECIMAL_POINT: Final[str] = "."


def _is_digit(c: str) -> bool:
    # str.isdigit() принимает "²" и прочие не-ASCII цифры, которые float() не разбирает
    return "0" <= c <= "9"


def _starts_number(text: str, i: int) -> bool:
    c = text[i]
    if _is_digit(c):
        return True
    return c == _DECIMAL_POINT and i + 1 < len(text) and _is_digit(text[i + 1])


def _scan_number(text: str, start: int) -> int:
    """Возвращает индекс за концом числового литерала, начинающегося в start."""
    i = start
    seen_point = False
    while i < len(text):
        c = text[i]
        if _is_digit(c):
            i += 1
        elif (
            c == _DECIMAL_POINT
            and not seen_point
            and i + 1 < len(text)
            and _is_digit(text[i + 1])
        ):
            seen_point = True
            i += 1
        else:
            break
    return i


def _classify_identifier(name: str, position: int, symbols: SymbolTable) -> Token:
    lowered = name.lower()
    if symbols.is_variable(lowered):
        return Token(TokenKind.VARIABLE, lowered, position)
    if symbols.is_constant(lowered):
        return Token(TokenKind.CONSTANT, lowered, position, symbols.constant(lowered))
    if symbols.is_function(lowered):
        return Token(TokenKind.FUNCTION, lowered, position)
    raise LexError(
        f"Unknown identifier '{name}' at position {position}",
        position=position,
        character=name,
    )


def tokenize(text: str, symbols: SymbolTable = DEFAULT_SYMBOLS) -> list[Token]:
    """
    Разбиение выражения на токены.

    Args:
        text: Исходное выражение (ASCII, идентификаторы регистронезависимы)
        symbols: Таблица символов (default: DEFAULT_SYMBOLS)

    Returns:
        Список токенов в порядке появления в тексте

    Raises:
        LexError: Нераспознанный символ или неизвестный идентификатор

    Examples:
        >>> [t.text for t in tokenize("2*x + 3.5")]
        ['2', '*', 'x', '+', '3.5']
        >>> [t.kind.value for t in tokenize("sin(PI)")]
        ['function', 'lparen', 'constant', 'rparen']
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        c = text[i]

        if c.isspace():
            i += 1
            continue

        if _starts_number(text, i):
            end = _scan_number(text, i)
            literal = text[i:end]
            tokens.append(Token(TokenKind.NUMBER, literal, i, float(literal)))
            i = end
            continue

        # isascii: "é" и прочие не-ASCII буквы не являются частью грамматики
        if c.isascii() and c.isalpha():
            end = i
            while end < n and text[end].isascii() and text[end].isalpha():
                end += 1
            tokens.append(_classify_identifier(text[i:end], i, symbols))
            i = end
            continue

        if c == "(":
            tokens.append(Token(TokenKind.LPAREN, c, i))
        elif c == ")":
            tokens.append(Token(TokenKind.RPAREN, c, i))
        elif symbols.is_operator(c):
            tokens.append(Token(TokenKind.OPERATOR, c, i))
        else:
            raise LexError(
                f"Unrecognized character '{c}' at position {i}",
                position=i,
                character=c,
            )
        i += 1

    return tokens
