"""
Token — лексическая единица выражения

Immutable модель; последовательность токенов упорядочена по позиции в исходном тексте.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(str, Enum):
    """Класс лексической единицы"""

    NUMBER = "number"
    VARIABLE = "variable"
    CONSTANT = "constant"
    FUNCTION = "function"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"


@dataclass(frozen=True)
class Token:
    """
    Лексическая единица.

    kind: класс токена
    text: нормализованный текст (идентификаторы в нижнем регистре)
    position: индекс первого символа в исходной строке
    value: числовое значение для NUMBER и CONSTANT, иначе None
    """

    kind: TokenKind
    text: str
    position: int
    value: Optional[float] = None

    @property
    def is_operand(self) -> bool:
        """NUMBER, VARIABLE или CONSTANT — токен, который сразу становится push-инструкцией."""
        return self.kind in (TokenKind.NUMBER, TokenKind.VARIABLE, TokenKind.CONSTANT)

    def __str__(self) -> str:
        return self.text
