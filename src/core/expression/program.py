"""
Postfix Program — линейная программа стековой машины

Инструкции (immutable, tagged variants):
- PushConst(value): положить литерал
- PushVariable(): положить значение переменной x
- ApplyBinaryOp(symbol): снять два значения (правое первым), положить результат
- ApplyUnaryOp(symbol): снять одно значение, применить унарный знак
- ApplyFunction(name): снять одно значение, применить функцию

ИНВАРИАНТ: выполнение программы с пустого стека оставляет ровно одно значение
тогда и только тогда, когда исходное выражение синтаксически корректно и непусто.
Инвариант устанавливается parser'ом один раз; evaluator его не перепроверяет.
"""

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class PushConst:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class PushVariable:
    name: str = "x"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ApplyBinaryOp:
    symbol: str

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class ApplyUnaryOp:
    symbol: str

    def __str__(self) -> str:
        # "neg"/"pos" отличают унарный знак от бинарного в текстовой записи
        return "neg" if self.symbol == "-" else "pos"


@dataclass(frozen=True)
class ApplyFunction:
    name: str

    def __str__(self) -> str:
        return self.name


Instruction = Union[PushConst, PushVariable, ApplyBinaryOp, ApplyUnaryOp, ApplyFunction]


@dataclass(frozen=True)
class PostfixProgram:
    """
    Скомпилированное выражение.

    instructions: последовательность инструкций в порядке выполнения
    source: исходный инфиксный текст (для диагностики; в сравнении не участвует)
    """

    instructions: tuple[Instruction, ...]
    source: str = field(default="", compare=False)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def to_text(self) -> str:
        """
        Обратная польская запись через пробел.

        Examples:
            >>> from src.core.expression.parser import parse
            >>> parse("x^2 + 1").to_text()
            'x 2.0 ^ 1.0 +'
        """
        return " ".join(str(instruction) for instruction in self.instructions)
