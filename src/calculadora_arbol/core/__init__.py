"""
Módulo core con la lógica principal de la calculadora.
Contiene los operadores, el árbol de expresiones y la sesión.
"""

from .operators import Operand, UnaryOperator, BinaryOperator, OperatorRegistry
from .expression_tree import ExpressionNode, format_number
from .calculator import Calculator

__all__ = [
    'Operand', 'UnaryOperator', 'BinaryOperator', 'OperatorRegistry',
    'ExpressionNode', 'format_number', 'Calculator',
]
