"""
Sesión de la calculadora de árbol de expresiones.

Este módulo contiene la clase Calculator que recibe las pulsaciones del
teclado (dígitos, punto, signo, operadores, memoria) y mantiene un árbol de
expresiones que se puede mostrar y evaluar tras cada pulsación.
"""

import math

from calculadora_arbol.config.settings import CalculatorConfig
from .expression_tree import ExpressionNode, format_number
from .operators import PLACEHOLDER, Operand, OperatorRegistry


MEMORY_SLOTS = 10   # Ranuras M0-M9


def parse_number(text):
    """
    Convierte el texto del buffer en número.

    Returns:
        float | None: None si el texto no es un número ("", "-", ".")
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


# ============================================================================
# CLASE: Calculator
# Propósito: Sesión de calculadora con construcción incremental del árbol
# Responsabilidades:
#   - Mantener el árbol activo y el buffer de entrada sincronizados
#   - Injertar operandos y operadores según la pulsación
#   - Re-enraizar el árbol cuando se pulsa un operador tras una expresión completa
#   - Gestionar el banco de memoria (M0-M9) con copias independientes
#   - Proyectar el estado en textos para el display
# ============================================================================
class Calculator:
    """
    Calculadora de teclado basada en un árbol de expresiones.

    Modelo de operación:
        1. Dígito sin buffer activo → se injerta una hoja nueva en el árbol
        2. Dígitos siguientes → se acumulan en el buffer y actualizan esa hoja
        3. Operador → cierra el buffer; si el árbol está completo se re-enraiza
           (el árbol actual pasa a ser el hijo izquierdo del operador)
        4. La expresión y el resultado se pueden leer en cualquier momento

    Variables de estado:
        - tree: raíz del árbol activo
        - memory: ranuras con copias de árboles completos
        - input_buffer: texto del número que se está tecleando (None si no hay)

    Invariante: si el buffer contiene un número válido, la hoja editable del
    árbol guarda exactamente ese número.
    """

    def __init__(self, config=None, registry=None):
        """Inicializa calculadora en estado vacío."""
        self.config = config if config else CalculatorConfig()
        self.registry = registry if registry else OperatorRegistry()
        self.tree = ExpressionNode()                      # Raíz vacía
        self.memory = [None] * MEMORY_SLOTS               # Banco de memoria
        self.input_buffer = None                          # Número en edición

    # ====================================================================
    # BUFFER DE ENTRADA
    # ====================================================================
    def _set_buffer(self, text):
        self.input_buffer = text
        if text is None:
            return
        leaf = self.tree.find_editable_leaf()
        if leaf is not None:
            leaf.set_operand_value(parse_number(text))

    def _clear_buffer(self):
        self.input_buffer = None

    def append_digit(self, text):
        """
        Añade texto (dígito o punto) al número en edición.

        Returns:
            str | None: buffer resultante, None si se alcanzó el límite

        Comportamiento:
            - Sin buffer activo: se injerta una hoja nueva en la posición editable
            - Con buffer: se concatena y se recalcula el valor de la hoja editable
        """
        if self.input_buffer is None:
            self.tree.graft_operand(ExpressionNode(Operand(parse_number(text))))
            self._set_buffer(text)
            return self.input_buffer

        if len(self.input_buffer) >= self.config.max_input_length:
            return None
        self._set_buffer(self.input_buffer + text)
        return self.input_buffer

    def press_dot(self):
        """Añade punto decimal. Devuelve None si el número ya tiene uno."""
        if self.input_buffer is not None and "." in self.input_buffer:
            return None
        return self.append_digit(".")

    def press_negate(self):
        """
        Alterna el signo "-" al inicio del buffer.

        Sin buffer activo abre una hoja vacía, igual que al teclear un dígito,
        y el buffer empieza como "-".
        """
        if self.input_buffer is None:
            self.tree.graft_operand(ExpressionNode(Operand()))
            self._set_buffer("-")
        elif self.input_buffer.startswith("-"):
            self._set_buffer(self.input_buffer[1:])
        else:
            self._set_buffer("-" + self.input_buffer)
        return self.input_buffer

    # ====================================================================
    # OPERADORES Y CONTROL
    # ====================================================================
    def press_operator(self, symbol):
        """
        Aplica un operador al árbol.

        Args:
            symbol (str): Símbolo del operador ("+", "−", "×", "÷", "√" o alias)

        Returns:
            str | None: símbolo aplicado, None si la pulsación se ignora

        Casos:
            - Árbol vacío: el operador se asigna a la raíz
            - Árbol evaluable: nueva raíz con el operador, árbol actual a la izquierda
            - Árbol incompleto o no evaluable: se ignora
        """
        self._clear_buffer()

        op = self.registry.lookup(symbol)
        if op is None:
            return None

        if self.tree.op is None:
            return self.tree.graft_operator(op)

        if self.tree.evaluate() is None:
            return None

        new_root = ExpressionNode(op)
        new_root.graft_operand(self.tree)
        self.tree = new_root
        return str(op)

    def press_enter(self):
        """Termina el número en edición sin modificar el árbol."""
        self._clear_buffer()

    def press_delete(self):
        """Descarta el árbol activo. La memoria no se modifica."""
        self.tree = ExpressionNode()
        self._clear_buffer()

    def set_operand(self, tree):
        """
        Injerta un árbol externo (p.ej. recuperado de memoria) en el árbol activo.

        Returns:
            float | None: evaluación del subárbol injertado
        """
        self._clear_buffer()
        return self.tree.graft_operand(tree)

    # ====================================================================
    # MEMORIA
    # ====================================================================
    def _valid_slot(self, slot):
        if isinstance(slot, int) and 0 <= slot < len(self.memory):
            return True
        self._log(f"⚠ Ranura de memoria inválida: {slot}")
        return False

    def _log(self, message):
        if self.config.verbose:
            print(message)

    def memory_add(self, slot):
        """
        Guarda una copia independiente del árbol si está completo.

        Returns:
            bool: True si se guardó algo en la ranura
        """
        if not self._valid_slot(slot):
            return False
        if self.tree.is_complete():
            self.memory[slot] = self.tree.copy()
            self._log(f"M{slot}: Añadido {self.memory[slot]}")
            return True
        self._log(f"M{slot}: Nada añadido")
        return False

    def memory_recall(self, slot):
        """
        Recupera una copia del árbol guardado en la ranura.

        Returns:
            ExpressionNode | None: None si la ranura está vacía
        """
        if not self._valid_slot(slot):
            return None
        stored = self.memory[slot]
        if stored is None:
            self._log(f"M{slot}: Vacío")
            return None
        self._log(f"M{slot}: Encontrado {stored}")
        return stored.copy()

    def memory_clear(self, slot):
        """
        Vacía la ranura. Siempre tiene éxito.

        Returns:
            bool: True si la ranura tenía algo guardado
        """
        if not self._valid_slot(slot):
            return False
        had_value = self.memory[slot] is not None
        self.memory[slot] = None
        self._log(f"M{slot}: Borrado" if had_value else f"M{slot}: Vacío")
        return had_value

    def occupied_slots(self):
        return [i for i, tree in enumerate(self.memory) if tree is not None]

    # ====================================================================
    # DISPLAY
    # ====================================================================
    def current_expression_text(self):
        """Expresión del árbol activo, p.ej. "((3+4)×2)"."""
        return self.tree.render()

    def current_result_text(self):
        """Resultado de evaluar el árbol, o "_" si no se puede evaluar."""
        return format_number(self.tree.evaluate())

    def current_input_buffer_text(self):
        """Texto tecleado del número actual, o "_" si no hay."""
        return self.input_buffer if self.input_buffer else PLACEHOLDER
