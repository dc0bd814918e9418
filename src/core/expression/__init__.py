"""
Expression engine — tokenizer, shunting-yard parser и postfix evaluator.

Поток данных: text → tokenize → parse → PostfixProgram → evaluate(program, x)
"""

from src.core.expression.errors import (
    EvalError,
    EvalErrorKind,
    EvaluationError,
    ExpressionError,
    LexError,
    ParseError,
)
from src.core.expression.evaluator import Evaluation, Evaluator, evaluate, evaluate_or_raise
from src.core.expression.parser import ExpressionParser, parse, try_parse
from src.core.expression.program import (
    ApplyBinaryOp,
    ApplyFunction,
    ApplyUnaryOp,
    Instruction,
    PostfixProgram,
    PushConst,
    PushVariable,
)
from src.core.expression.symbols import (
    DEFAULT_SYMBOLS,
    Associativity,
    FunctionSpec,
    OperatorSpec,
    SymbolTable,
)
from src.core.expression.tokenizer import tokenize
from src.core.expression.tokens import Token, TokenKind

__all__ = [
    # Errors
    "ExpressionError",
    "LexError",
    "ParseError",
    "EvalError",
    "EvalErrorKind",
    "EvaluationError",
    # Symbols
    "DEFAULT_SYMBOLS",
    "Associativity",
    "FunctionSpec",
    "OperatorSpec",
    "SymbolTable",
    # Tokens
    "Token",
    "TokenKind",
    "tokenize",
    # Program
    "Instruction",
    "PostfixProgram",
    "PushConst",
    "PushVariable",
    "ApplyBinaryOp",
    "ApplyUnaryOp",
    "ApplyFunction",
    # Parser
    "ExpressionParser",
    "parse",
    "try_parse",
    # Evaluator
    "Evaluation",
    "Evaluator",
    "evaluate",
    "evaluate_or_raise",
]
