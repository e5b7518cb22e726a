"""
Operadores de la calculadora y registro inmutable de símbolos.

Cada operador es un objeto de valor inmutable. Los nodos del árbol guardan
el operador por valor, nunca una referencia compartida y mutable.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional


PLACEHOLDER = "_"   # Glifo para valores aún no definidos


# ============================================================================
# TIPOS DE OPERADOR
# Variante cerrada: Operand | UnaryOperator | BinaryOperator
# ============================================================================
@dataclass(frozen=True)
class Operand:
    """Valor hoja del árbol. value=None indica un hueco pendiente de entrada."""
    value: Optional[float] = None

    @property
    def arity(self):
        return 0

    def __str__(self):
        return PLACEHOLDER if self.value is None else f"{self.value}"


@dataclass(frozen=True)
class UnaryOperator:
    """Operador de un argumento. La función puede devolver None (error de dominio)."""
    symbol: str
    function: Callable[[float], Optional[float]]

    @property
    def arity(self):
        return 1

    def __str__(self):
        return self.symbol


@dataclass(frozen=True)
class BinaryOperator:
    """
    Operador de dos argumentos.

    La función recibe (valor_derecho, valor_izquierdo): el hijo derecho es
    el primer argumento formal. Resta y división se registran con ese orden.
    """
    symbol: str
    function: Callable[[float, float], Optional[float]]

    @property
    def arity(self):
        return 2

    def __str__(self):
        return self.symbol


# ============================================================================
# FUNCIONES REGISTRADAS
# ============================================================================
def _add(right, left):
    return left + right


def _subtract(right, left):
    return left - right


def _multiply(right, left):
    return left * right


def _divide(right, left):
    # División por cero: resultado ausente, nunca excepción
    return left / right if right != 0 else None


def _square_root(value):
    return math.sqrt(value) if value >= 0 else None


# ============================================================================
# CLASE: OperatorRegistry
# Propósito: Mapa inmutable símbolo -> operador, creado una vez al arrancar
# ============================================================================
class OperatorRegistry:
    """
    Registro de operadores conocidos.

    Símbolos canónicos: + − × ÷ √
    Alias de teclado:   - * /  (resuelven a la misma entrada)
    """

    def __init__(self, operators=None, aliases=None):
        if operators is None:
            operators = default_operators()
        if aliases is None:
            aliases = DEFAULT_ALIASES

        table = {op.symbol: op for op in operators}
        for alias, canonical in aliases.items():
            if canonical in table:
                table[alias] = table[canonical]

        self._canonical = tuple(op.symbol for op in operators)
        self._operators = MappingProxyType(table)

    def lookup(self, symbol):
        """Devuelve el operador registrado para el símbolo o None si no existe."""
        return self._operators.get(symbol)

    def symbols(self):
        """Símbolos canónicos en orden de registro (sin alias)."""
        return list(self._canonical)

    def __contains__(self, symbol):
        return symbol in self._operators


def default_operators():
    return [
        BinaryOperator("+", _add),
        BinaryOperator("−", _subtract),
        BinaryOperator("×", _multiply),
        BinaryOperator("÷", _divide),
        UnaryOperator("√", _square_root),
    ]


DEFAULT_ALIASES = {
    "-": "−",
    "*": "×",
    "/": "÷",
}
