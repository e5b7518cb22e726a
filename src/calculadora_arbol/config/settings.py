"""
Configuración de la calculadora de teclado.

Este módulo contiene la configuración centralizada: voz, display, límites de entrada,
mapa de teclas y diagnóstico. Se puede cargar y guardar como JSON.
"""

import json
from pathlib import Path


# Teclas físicas -> identificadores del teclado de la calculadora
DEFAULT_KEY_MAP = {
    **{str(d): f"num_{d}" for d in range(10)},
    ".": "dot",
    "n": "negate",
    "+": "add",
    "-": "subtract",
    "*": "multiply",
    "/": "divide",
    "s": "sqrt",
    "=": "enter",
    "\r": "enter",
    "\x08": "delete",
    "\x7f": "delete",
    "m": "mem_add",
    "r": "mem_recall",
    "c": "mem_clear",
}


# ============================================================================
# CLASE: CalculatorConfig
# Propósito: Configuración de la calculadora y de sus colaboradores
# Responsabilidades:
#   - Almacenar preferencias de voz (volumen, velocidad, idioma)
#   - Definir límites del display y del buffer de entrada
#   - Mapear teclas físicas a teclas de la calculadora
#   - Cargar/guardar preferencias en JSON
# ============================================================================
class CalculatorConfig:
    """
    Configuración de la calculadora.

    Opciones disponibles:
        - Feedback por voz configurable (volumen, velocidad, idioma)
        - Tamaño de ventana y límite de caracteres del display
        - Mensajes de diagnóstico en consola (verbose)
    """

    def __init__(self):
        """Inicializa configuración con valores por defecto."""
        # ====================================================================
        # CONFIGURACIÓN DE VOZ
        # ====================================================================
        self.voice_enabled = True           # Activar/desactivar feedback por voz
        self.voice_volume = 0.8             # Volumen (0.0-1.0)
        self.voice_rate = 150               # Velocidad de habla (palabras por minuto)
        self.voice_language = 'es'          # Idioma ('es', 'en', etc.)

        # ====================================================================
        # CALCULADORA
        # ====================================================================
        self.max_input_length = 12          # Caracteres máximos en el buffer
        self.verbose = False                # Diagnóstico de memoria en consola

        # ====================================================================
        # DISPLAY
        # ====================================================================
        self.window_width = 960
        self.window_height = 540
        self.show_key_guide = True          # Mostrar leyenda de teclas
        self.feedback_duration = 40         # Frames que dura un mensaje

        self.key_map = dict(DEFAULT_KEY_MAP)

    def key_for(self, key_code):
        """
        Traduce un código de tecla (cv2.waitKey) a identificador de teclado.

        Returns:
            str | None: p.ej. "num_5", "add"; None si la tecla no está mapeada
        """
        if key_code is None or key_code < 0 or key_code > 0x10FFFF:
            return None
        return self.key_map.get(chr(key_code))

    def to_dict(self):
        return dict(vars(self))

    def to_json(self, path):
        """Guarda la configuración. Devuelve True si se pudo escribir."""
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=4, ensure_ascii=False)
            return True
        except OSError as e:
            print(f"⚠ No se pudo guardar la configuración: {e}")
            return False

    @classmethod
    def from_json(cls, path):
        """
        Carga configuración desde JSON sobre los valores por defecto.

        Claves desconocidas y valores de tipo distinto al del valor por defecto
        se ignoran (con aviso). Si el archivo no existe o no es JSON válido se
        devuelven los valores por defecto.
        """
        config = cls()
        try:
            with open(Path(path), 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return config

        if not isinstance(settings, dict):
            return config

        for key, value in settings.items():
            if not hasattr(config, key):
                continue
            if not _same_type(getattr(config, key), value):
                print(f"⚠ Valor ignorado para '{key}': {value!r}")
                continue
            setattr(config, key, value)
        return config


def _same_type(default, value):
    # bool es subclase de int: se comprueba antes
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(default, bool) and isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    if isinstance(default, dict):
        return isinstance(value, dict) and all(isinstance(v, str) for v in value.values())
    return isinstance(value, type(default))
