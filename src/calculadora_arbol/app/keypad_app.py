"""
Aplicación principal que integra todos los componentes.

Este módulo contiene la clase KeypadCalculatorApp: traduce las teclas del
teclado de la calculadora en eventos de la sesión, gestiona el modo memoria
y coordina display y voz.
"""

import cv2

from calculadora_arbol.config.settings import CalculatorConfig
from calculadora_arbol.core.calculator import Calculator
from calculadora_arbol.ui.renderer import UIRenderer
from calculadora_arbol.voice.feedback import VoiceFeedback


OPERATOR_KEYS = {
    "add": "+",
    "subtract": "−",
    "multiply": "×",
    "divide": "÷",
    "sqrt": "√",
}

MEMORY_KEYS = {
    "mem_add": "add",
    "mem_recall": "recall",
    "mem_clear": "clear",
}

WINDOW_NAME = "Calculadora de arbol"


# ============================================================================
class KeypadCalculatorApp:
    """
    Aplicación de calculadora con teclado.

    Arquitectura:
        - Calculator: sesión con el árbol de expresiones y la memoria
        - UIRenderer: renderizado del display con OpenCV
        - VoiceFeedback: anuncios por voz
        - KeypadCalculatorApp: coordinador y loop principal

    Modo memoria:
        - M+ / MR / MC arman el modo; la siguiente tecla numérica elige la ranura
        - Mientras está armado se ignoran punto, signo, operadores y Enter
        - Borrar siempre desarma el modo y vacía el árbol
    """

    def __init__(self, config=None, calc=None, voice=None, ui=None):
        """
        Inicializa la aplicación.

        Args:
            config (CalculatorConfig): Configuración (opcional)
            calc (Calculator): Sesión a usar (opcional, una nueva por defecto)
            voice (VoiceFeedback): Sistema de voz (opcional)
            ui (UIRenderer): Renderizador (opcional)
        """
        self.config = config if config else CalculatorConfig()
        self.calc = calc if calc else Calculator(self.config)
        self.voice = voice if voice else VoiceFeedback(self.config)
        self.ui = ui if ui else UIRenderer(self.config.window_width,
                                           self.config.window_height,
                                           self.config)
        self.memory_mode = None     # "add" | "recall" | "clear" | None

    def process(self, key_id):
        """
        Procesa una tecla del teclado de la calculadora.

        Args:
            key_id (str): ID de la tecla (ej: "num_5", "add", "enter", "mem_add")

        Returns:
            bool: True si la tecla modificó el estado, False si se ignoró

        Feedback:
            - Verde: dígitos y operadores aplicados
            - Cian: resultado y memoria
            - Rojo: borrado o pulsación ignorada
        """
        # ====================================================================
        # BORRAR: siempre disponible, desarma el modo memoria
        # ====================================================================
        if key_id == "delete":
            self.memory_mode = None
            self.calc.press_delete()
            self.ui.show_feedback("TODO BORRADO", (255, 50, 50))
            self.voice.speak("todo borrado")
            return True

        # ====================================================================
        # NÚMEROS (0-9): dígito o ranura de memoria
        # ====================================================================
        if key_id.startswith("num_"):
            digit = int(key_id.split("_")[1])
            if self.memory_mode is not None:
                return self._process_memory(digit)
            if self.calc.append_digit(str(digit)) is None:
                self.ui.show_feedback("LIMITE DE DIGITOS", (255, 50, 50))
                return False
            self.ui.show_feedback(f"OK {digit}", (100, 255, 100))
            self.voice.speak_number(digit)
            return True

        if self.memory_mode is not None:
            return False

        # ====================================================================
        # MEMORIA: armar modo M+ / MR / MC
        # ====================================================================
        if key_id in MEMORY_KEYS:
            self.memory_mode = MEMORY_KEYS[key_id]
            self.ui.show_feedback("ELIJA RANURA 0-9", (0, 255, 255))
            return True

        # ====================================================================
        # PUNTO DECIMAL Y SIGNO
        # ====================================================================
        if key_id == "dot":
            if self.calc.press_dot() is None:
                return False
            self.ui.show_feedback("OK .", (100, 255, 100))
            self.voice.speak("coma")
            return True

        if key_id == "negate":
            self.calc.press_negate()
            self.ui.show_feedback("+/- SIGNO", (255, 150, 0))
            self.voice.speak("cambio de signo")
            return True

        # ====================================================================
        # OPERADORES
        # ====================================================================
        if key_id in OPERATOR_KEYS:
            symbol = OPERATOR_KEYS[key_id]
            if self.calc.press_operator(symbol) is None:
                self.ui.show_feedback("EXPRESION INCOMPLETA", (255, 50, 50))
                return False
            self.ui.show_feedback(f"{symbol} {key_id.upper()}", (0, 255, 0))
            self.voice.speak_operation(symbol)
            return True

        # ====================================================================
        # ENTER: termina el número y anuncia el resultado
        # ====================================================================
        if key_id == "enter":
            self.calc.press_enter()
            result = self.calc.current_result_text()
            self.ui.show_feedback(f"= {result}", (0, 255, 255), 60)
            self.voice.speak_result(result)
            return True

        return False

    def _process_memory(self, slot):
        """Ejecuta la operación de memoria armada sobre la ranura elegida."""
        mode = self.memory_mode
        self.memory_mode = None

        if mode == "add":
            if not self.calc.memory_add(slot):
                self.ui.show_feedback(f"M{slot}: EXPRESION INCOMPLETA", (255, 50, 50))
                return False
            self.ui.show_feedback(f"M{slot} GUARDADO", (0, 255, 255))
            self.voice.speak_memory("guardada", slot)
            return True

        if mode == "recall":
            tree = self.calc.memory_recall(slot)
            if tree is None:
                self.ui.show_feedback(f"M{slot} VACIA", (255, 50, 50))
                return False
            self.calc.set_operand(tree)
            self.ui.show_feedback(f"M{slot} RECUPERADO", (0, 255, 255))
            self.voice.speak_memory("recuperada", slot)
            return True

        self.calc.memory_clear(slot)
        self.ui.show_feedback(f"M{slot} BORRADO", (0, 255, 255))
        self.voice.speak_memory("borrada", slot)
        return True

    def toggle_voice(self):
        """
        Activa o desactiva el feedback por voz.

        Al activarla se anuncia "voz activada"; si el motor no existía se crea
        en ese momento. Devuelve el estado final (False si el motor no arranca).
        """
        self.config.voice_enabled = not self.config.voice_enabled
        if self.config.voice_enabled:
            self.voice.speak("voz activada")
        status = "ACTIVADA" if self.config.voice_enabled else "DESACTIVADA"
        print(f"🔊 Voz: {status}")
        self.ui.show_feedback(f"VOZ {status}", (0, 255, 255), 60)
        return self.config.voice_enabled

    def draw(self, frame):
        """Dibuja todos los componentes del display sobre el frame."""
        self.ui.draw_display(frame, self.calc)
        self.ui.draw_memory(frame, self.calc, self.memory_mode)
        self.ui.draw_guide(frame)
        self.ui.draw_feedback(frame)
        return frame

    def run(self):
        """
        Bucle principal de la aplicación.

        Ciclo de ejecución:
            1. Crear frame vacío y dibujar el display
            2. Mostrar frame y leer tecla (cv2.waitKey)
            3. Traducir la tecla con config.key_map y procesarla
            4. Repetir hasta ESC o 'q'
        """
        print("\n" + "="*70)
        print("CALCULADORA DE ARBOL DE EXPRESIONES")
        print("="*70)
        print("\nNumeros: 0-9 y '.'  |  Signo: n")
        print("Operadores: + - * /  |  Raiz: s")
        print("Enter o '=': terminar numero  |  Retroceso: borrar todo")
        print("Memoria: m (M+), r (MR), c (MC) seguido de la ranura 0-9")
        if self.config.voice_enabled:
            print("\n🔊 FEEDBACK POR VOZ: Activado")
        print("\nPresiona ESC o 'q' para salir, 'v' para activar/desactivar voz")
        print("="*70 + "\n")

        cv2.namedWindow(WINDOW_NAME)

        while True:
            frame = self.draw(self.ui.new_frame())
            cv2.imshow(WINDOW_NAME, frame)

            key = cv2.waitKey(30)
            if key == -1:
                continue
            key &= 0xFF

            # ESC o 'q' para salir
            if key == 27 or key == ord('q'):
                break

            # 'v' para activar/desactivar voz
            if key == ord('v'):
                self.toggle_voice()
                continue

            key_id = self.config.key_for(key)
            if key_id:
                self.process(key_id)

        cv2.destroyAllWindows()
        print("\nOK Aplicacion cerrada correctamente")
