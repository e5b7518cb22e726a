"""
Interfaz de usuario y renderizado.

Este módulo contiene la clase UIRenderer que dibuja el display de la
calculadora (expresión, número en edición, resultado y memoria) sobre un
frame de OpenCV.
"""

import time

import cv2
import numpy as np

from calculadora_arbol.config.settings import CalculatorConfig


MEMORY_MODE_LABELS = {
    "add": "M+",
    "recall": "MR",
    "clear": "MC",
}


# ============================================================================
class UIRenderer:
    """
    Renderizador de interfaz gráfica para la calculadora de teclado.

    Componentes visuales:
        1. Display principal: expresión, número en edición y resultado
        2. Indicadores de memoria M0-M9 y modo de memoria activo
        3. Guía lateral: mapa de teclas
        4. Feedback: mensajes temporales de confirmación/error
    """

    def __init__(self, width, height, config=None):
        """
        Inicializa el renderizador con dimensiones de la ventana.

        Args:
            width (int): Ancho de la ventana en píxeles
            height (int): Alto de la ventana en píxeles
            config (CalculatorConfig): Configuración (opcional)
        """
        self.width = width
        self.height = height
        self.config = config if config else CalculatorConfig()
        self.feedback_msg = ""               # Mensaje de feedback actual
        self.feedback_timer = 0              # Frames restantes para mostrar feedback
        self.feedback_color = (0, 255, 0)   # Color del feedback

    def new_frame(self):
        """Crea un frame BGR vacío del tamaño de la ventana."""
        return np.full((self.height, self.width, 3), 20, dtype=np.uint8)

    def show_feedback(self, msg, color=(0, 255, 0), duration=None):
        """
        Muestra mensaje de feedback temporal.

        Args:
            msg (str): Mensaje a mostrar
            color (tuple): Color BGR del mensaje
            duration (int): Duración en frames (por defecto config.feedback_duration)
        """
        self.feedback_msg = msg
        self.feedback_color = color
        self.feedback_timer = duration if duration is not None else self.config.feedback_duration

    def draw_display(self, img, calc):
        """
        Dibuja el display principal de la calculadora.

        Args:
            img (np.array): Imagen sobre la cual dibujar
            calc (Calculator): Sesión con el estado actual

        Líneas del display:
            1. Expresión del árbol ("((3+4)×2)"), en gris
            2. Número en edición (grande), blanco; "_" si no hay
            3. Resultado: verde si se puede evaluar, rojo si no
        """
        x, y, w, h = 30, 30, self.width - 60, 240

        overlay = img.copy()
        cv2.rectangle(overlay, (x, y), (x + w, y + h), (35, 35, 35), -1)
        cv2.addWeighted(overlay, 0.92, img, 0.08, 0, img)
        cv2.rectangle(img, (x, y), (x + w, y + h), (100, 200, 255), 4)

        # Los símbolos − × ÷ √ no existen en las fuentes Hershey de OpenCV
        expr = _ascii(calc.current_expression_text())
        cv2.putText(img, expr, (x + 20, y + 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.9, (180, 180, 180), 2)

        buffer_text = calc.current_input_buffer_text()
        font_scale = 2.5 if len(buffer_text) < 8 else 1.8
        cv2.putText(img, buffer_text, (x + 20, y + 140),
                    cv2.FONT_HERSHEY_DUPLEX, font_scale, (255, 255, 255), 3)

        # Cursor parpadeante mientras se edita un número
        if calc.input_buffer is not None and int(time.time() * 2) % 2 == 0:
            text_w = cv2.getTextSize(buffer_text, cv2.FONT_HERSHEY_DUPLEX, font_scale, 3)[0][0]
            cx = x + 30 + text_w
            cv2.line(img, (cx, y + 100), (cx, y + 145), (0, 255, 0), 4)

        result = calc.current_result_text()
        color = (100, 100, 255) if result == "_" else (100, 255, 100)
        cv2.putText(img, "= " + result, (x + 20, y + 210),
                    cv2.FONT_HERSHEY_DUPLEX, 1.4, color, 2)

    def draw_memory(self, img, calc, memory_mode=None):
        """
        Dibuja los indicadores de memoria.

        Args:
            img (np.array): Imagen sobre la cual dibujar
            calc (Calculator): Sesión con el banco de memoria
            memory_mode (str): "add" | "recall" | "clear" si hay modo armado
        """
        x, y = 30, 300
        occupied = set(calc.occupied_slots())
        for slot in range(len(calc.memory)):
            cx = x + slot * 60
            color = (0, 200, 255) if slot in occupied else (90, 90, 90)
            cv2.rectangle(img, (cx, y), (cx + 50, y + 36), color, 2)
            cv2.putText(img, f"M{slot}", (cx + 8, y + 26),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)

        if memory_mode:
            label = MEMORY_MODE_LABELS.get(memory_mode, memory_mode)
            cv2.putText(img, f"{label}: elija ranura 0-9", (x, y + 75),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 255), 2)

    def draw_guide(self, img):
        if not self.config.show_key_guide:
            return

        x, y = self.width - 300, 300
        guide = [
            "TECLAS",
            "  0-9 .  numeros",
            "  n      cambiar signo",
            "  + - * /  operadores",
            "  s      raiz cuadrada",
            "  Enter =  terminar numero",
            "  Retroceso  borrar todo",
            "  m r c  M+ MR MC",
            "  q Esc  salir | v voz",
        ]

        cy = y
        for label in guide:
            if not label.startswith(" "):
                cv2.putText(img, label, (x, cy),
                            cv2.FONT_HERSHEY_DUPLEX, 0.7, (100, 200, 255), 2)
            else:
                cv2.putText(img, label, (x, cy),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (200, 200, 200), 1)
            cy += 24

    def draw_feedback(self, img):
        """
        Dibuja mensaje de feedback temporal en la parte inferior de la pantalla.

        Desaparece con fade-out a medida que se agota feedback_timer.
        """
        if self.feedback_timer > 0:
            self.feedback_timer -= 1
            alpha = min(self.feedback_timer / 20.0, 1.0)

            x, y = 40, self.height - 40

            overlay = img.copy()
            cv2.rectangle(overlay, (x - 20, y - 45), (x + 520, y + 12), (40, 40, 40), -1)
            cv2.addWeighted(overlay, alpha * 0.88, img, 1 - alpha * 0.88, 0, img)

            color = tuple(int(c * alpha) for c in self.feedback_color)
            cv2.putText(img, _ascii(self.feedback_msg), (x, y),
                        cv2.FONT_HERSHEY_DUPLEX, 1.2, color, 2)


_ASCII_SYMBOLS = str.maketrans({"−": "-", "×": "x", "÷": "/", "√": "sqrt"})


def _ascii(text):
    return text.translate(_ASCII_SYMBOLS)
