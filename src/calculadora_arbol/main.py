"""
Punto de entrada de la calculadora de árbol de expresiones.

Ejecución:
    python -m calculadora_arbol [--config config.json] [--no-voice] [--verbose]
"""

import argparse
import traceback

from calculadora_arbol.app.keypad_app import KeypadCalculatorApp
from calculadora_arbol.config.settings import CalculatorConfig


def build_config(argv=None):
    """Construye la configuración a partir de los argumentos de línea de comandos."""
    ap = argparse.ArgumentParser(description="Calculadora de arbol de expresiones")
    ap.add_argument("--config", help="archivo JSON de configuración")
    ap.add_argument("--no-voice", action="store_true", help="desactivar feedback por voz")
    ap.add_argument("--verbose", action="store_true", help="diagnóstico de memoria en consola")
    args = ap.parse_args(argv)

    config = CalculatorConfig.from_json(args.config) if args.config else CalculatorConfig()
    if args.no_voice:
        config.voice_enabled = False
    if args.verbose:
        config.verbose = True
    return config


def main(argv=None):
    """
    Crea la aplicación y ejecuta el bucle principal.

    Manejo de errores:
        - KeyboardInterrupt (Ctrl+C): cierre ordenado
        - Exception general: muestra el traceback completo
    """
    try:
        app = KeypadCalculatorApp(build_config(argv))
        app.run()
    except KeyboardInterrupt:
        print("\nInterrumpido por el usuario")
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()


# ============================================================================
# PUNTO DE ENTRADA PRINCIPAL
# ============================================================================
if __name__ == "__main__":
    main()
