"""
Sistema de feedback por voz usando pyttsx3.

Este módulo anuncia en voz alta las pulsaciones y resultados de la
calculadora, ejecutándose en un hilo aparte para no bloquear la interfaz.
"""

import threading
from collections import deque

import pyttsx3


# Nombres hablados de los operadores (símbolos canónicos y alias de teclado)
OPERATIONS_ES = {
    "+": "más",
    "−": "menos",
    "-": "menos",
    "×": "por",
    "*": "por",
    "÷": "dividido entre",
    "/": "dividido entre",
    "√": "raíz cuadrada",
}

NUMBERS_ES = {
    0: "cero", 1: "uno", 2: "dos", 3: "tres", 4: "cuatro",
    5: "cinco", 6: "seis", 7: "siete", 8: "ocho", 9: "nueve"
}


# ============================================================================
# CLASE: VoiceFeedback
# Propósito: Síntesis de voz para feedback auditivo
# Responsabilidades:
#   - Sintetizar texto a voz en el idioma configurado
#   - Ejecutar en hilo separado para no bloquear el display
#   - Gestionar cola de mensajes para evitar solapamiento
# ============================================================================
class VoiceFeedback:
    """
    Sistema de feedback por voz usando pyttsx3.

    Características:
        - Ejecución asíncrona (un hilo daemon por ráfaga de mensajes)
        - Cola acotada (los mensajes más antiguos se descartan)
        - Si el motor no arranca, la voz se desactiva sin error
    """

    def __init__(self, config, engine=None):
        """
        Inicializa el motor de síntesis de voz.

        Args:
            config (CalculatorConfig): Configuración de la calculadora
            engine: Motor ya creado (opcional); por defecto pyttsx3.init()
        """
        self.config = config
        self.engine = engine
        self.is_speaking = False
        self.worker = None
        self.message_queue = deque(maxlen=5)  # Cola de máximo 5 mensajes
        self._lock = threading.Lock()

        if self.engine is None and self.config.voice_enabled:
            self._init_engine()
        else:
            self._configure_engine()

    def _init_engine(self):
        """
        Crea el motor pyttsx3 y lo configura.

        Se llama al arrancar con voz activada, o en el primer mensaje si la voz
        se activa más tarde (tecla 'v'). Si falla, la voz se desactiva.
        """
        try:
            self.engine = pyttsx3.init()
            print("✓ Sistema de voz inicializado correctamente")
        except Exception as e:
            print(f"⚠ Advertencia: No se pudo inicializar el sistema de voz: {e}")
            self.config.voice_enabled = False
            return
        self._configure_engine()

    def _configure_engine(self):
        """Aplica volumen, velocidad y busca una voz del idioma configurado."""
        if not self.engine:
            return

        try:
            self.engine.setProperty('volume', self.config.voice_volume)
            self.engine.setProperty('rate', self.config.voice_rate)

            language = self.config.voice_language.lower()
            for voice in self.engine.getProperty('voices') or []:
                languages = [str(lang).lower() for lang in getattr(voice, 'languages', [])]
                if language in voice.id.lower() or any(language in lang for lang in languages):
                    self.engine.setProperty('voice', voice.id)
                    print(f"✓ Voz seleccionada: {voice.name}")
                    return
            print(f"⚠ No se encontró voz para '{language}'. Usando voz predeterminada.")
        except Exception as e:
            print(f"⚠ Error al configurar voz: {e}")

    def speak(self, text):
        """
        Encola un mensaje y arranca el hilo de reproducción si está parado.

        Args:
            text (str): Texto a sintetizar
        """
        if not self.config.voice_enabled:
            return
        if self.engine is None:
            self._init_engine()
            if self.engine is None:
                return

        with self._lock:
            self.message_queue.append(text)
            if self.is_speaking:
                return
            self.is_speaking = True

        self.worker = threading.Thread(target=self._process_queue, daemon=True)
        self.worker.start()

    def _process_queue(self):
        """Procesa la cola de mensajes uno por uno."""
        while True:
            with self._lock:
                if not self.message_queue:
                    self.is_speaking = False
                    return
                message = self.message_queue.popleft()
            try:
                self.engine.say(message)
                self.engine.runAndWait()
            except Exception as e:
                print(f"⚠ Error al reproducir voz: {e}")

    def speak_number(self, number):
        """Pronuncia un dígito (0-9) en español."""
        self.speak(NUMBERS_ES.get(number, str(number)))

    def speak_operation(self, operation):
        """Pronuncia el nombre de un operador (+, −, ×, ÷, √)."""
        self.speak(OPERATIONS_ES.get(operation, operation))

    def speak_result(self, result):
        """
        Pronuncia el resultado de la expresión.

        Args:
            result (str): Texto del resultado ("7", "3.5" o "_" si no hay)
        """
        if result == "_":
            self.speak("sin resultado")
            return
        result_text = str(result).replace('-', 'menos ').replace('.', ' coma ')
        self.speak(f"igual a {result_text}")

    def speak_memory(self, action, slot):
        """Anuncia una operación de memoria ("guardado", "recuperado", "borrado")."""
        self.speak(f"memoria {slot} {action}")
