"""
Árbol de expresiones editable pulsación a pulsación.

Este módulo contiene la clase ExpressionNode: un nodo que puede estar vacío,
guardar un operando, o un operador unario/binario con sus hijos. El árbol se
puede representar y evaluar en cualquier momento, aunque esté incompleto.
"""

import math

from .operators import PLACEHOLDER, Operand, UnaryOperator, BinaryOperator


MISSING_SIDE = "?"   # Lado ausente de un operador binario
EXACT_LIMIT = 1e16   # A partir de aquí un float entero ya no es exacto


def format_number(value):
    """
    Formatea un número para el display.

    Returns:
        str: "3" para 3.0, "3.5" para 3.5, "_" si value es None,
        notación científica ("9.99999999998e+23") desde 1e16
    """
    if value is None:
        return PLACEHOLDER
    value = float(value)
    if value.is_integer() and abs(value) < EXACT_LIMIT:
        return str(int(value))
    return repr(value)


# ============================================================================
# CLASE: ExpressionNode
# Propósito: Nodo del árbol de expresiones de la calculadora
# Responsabilidades:
#   - Representarse como texto legible ("(3+4)", "√9", "(5÷?)")
#   - Evaluarse recursivamente (None si falta algún operando)
#   - Localizar la hoja editable (búsqueda en profundidad, derecha primero)
#   - Injertar operandos y operadores durante la construcción incremental
# ============================================================================
class ExpressionNode:
    """
    Nodo del árbol de expresiones.

    Estados posibles:
        - op=None: hoja vacía pendiente de definir
        - Operand: hoja con valor (o hueco si value=None), nunca tiene hijos
        - UnaryOperator: usa solo `left`
        - BinaryOperator: usa `left` y `right`; `right` se evalúa primero y
          es el primer argumento de la función del operador

    Cada nodo es dueño exclusivo de sus hijos: no hay nodos compartidos ni ciclos.
    """

    def __init__(self, op=None, left=None, right=None):
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self):
        return f"ExpressionNode({self.render()!r})"

    def __str__(self):
        return self.render()

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------
    def is_leaf(self):
        """True si el nodo está vacío o guarda un operando."""
        return self.op is None or isinstance(self.op, Operand)

    def is_complete(self):
        if self.op is None:
            return False
        if isinstance(self.op, UnaryOperator):
            return self.left is not None
        if isinstance(self.op, BinaryOperator):
            return self.left is not None and self.right is not None
        return True

    def evaluate(self):
        """
        Evalúa el subárbol.

        Returns:
            float | None: None si falta algún operando, el valor no está definido
            o el operador falla (división por cero, raíz de negativo)
        """
        if self.op is None:
            return None
        if isinstance(self.op, Operand):
            return self.op.value

        if isinstance(self.op, UnaryOperator):
            if self.left is None:
                return None
            operand = self.left.evaluate()
            if operand is None:
                return None
            return _finite(self.op.function(operand))

        if self.left is None or self.right is None:
            return None
        # Orden de evaluación: derecho primero, pasado como primer argumento
        right_value = self.right.evaluate()
        if right_value is None:
            return None
        left_value = self.left.evaluate()
        if left_value is None:
            return None
        return _finite(self.op.function(right_value, left_value))

    def render(self):
        if self.op is None:
            return PLACEHOLDER

        if isinstance(self.op, Operand):
            return format_number(self.op.value)

        symbol = self.op.symbol
        if isinstance(self.op, UnaryOperator):
            if self.left is None:
                return symbol
            return symbol + self.left.render()

        if self.left is None:
            return "(" + MISSING_SIDE + symbol + MISSING_SIDE + ")"
        right = self.right.render() if self.right is not None else MISSING_SIDE
        return "(" + self.left.render() + symbol + right + ")"

    def find_editable_leaf(self):
        """
        Busca la hoja que editaría la siguiente pulsación.

        Recorrido en profundidad con prioridad a la derecha: el último hueco
        abierto por el usuario. Devuelve None si el nodo es un operador sin hijos.
        """
        if self.is_leaf():
            return self
        if self.right is not None:
            return self.right.find_editable_leaf()
        if self.left is not None:
            return self.left.find_editable_leaf()
        return None

    # ------------------------------------------------------------------
    # Mutaciones
    # ------------------------------------------------------------------
    def set_operand_value(self, value):
        """
        Sobrescribe el valor si el nodo es una hoja; en otro caso no hace nada.

        Returns:
            float | None: evaluación del subárbol tras el cambio
        """
        if self.is_leaf():
            self.op = Operand(value)
        return self.evaluate()

    def graft_operand(self, node):
        """
        Injerta un subárbol como operando de este nodo.

        Orden de la regla:
            1. Nodo vacío: absorbe el subárbol entrante (se convierte en él)
            2. `left` libre: se asigna a `left`
            3. `right` libre (solo binarios): se asigna a `right`
            4. Sin huecos libres: se descarta lo anterior y se absorbe el subárbol

        Returns:
            float | None: evaluación del hijo afectado (o de este nodo si absorbe)
        """
        if self.op is None:
            self._absorb(node)
            return self.evaluate()

        slots = self.op.arity
        if slots >= 1 and self.left is None:
            self.left = node
            return self.left.evaluate()
        if slots >= 2 and self.right is None:
            self.right = node
            return self.right.evaluate()

        # Demasiados operandos: reinicia el nodo con el subárbol entrante
        self._absorb(node)
        return self.evaluate()

    def graft_operator(self, op):
        """
        Asigna un operador solo si el nodo aún no tiene ninguno.

        Returns:
            str | None: símbolo asignado, o None si el nodo ya estaba definido
        """
        if self.op is None and op is not None:
            self.op = op
            return str(op)
        return None

    def copy(self):
        """Copia profunda e independiente del subárbol (los operadores son inmutables)."""
        return ExpressionNode(
            self.op,
            self.left.copy() if self.left is not None else None,
            self.right.copy() if self.right is not None else None,
        )

    def _absorb(self, node):
        self.op = node.op
        self.left = node.left
        self.right = node.right


def _finite(result):
    # inf / nan no se muestran: se tratan como resultado ausente
    if result is None or not math.isfinite(result):
        return None
    return result
