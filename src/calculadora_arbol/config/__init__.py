"""
Módulo de configuración de la calculadora.
Contiene preferencias de voz, display, memoria y teclado.
"""

from .settings import CalculatorConfig

__all__ = ['CalculatorConfig']
