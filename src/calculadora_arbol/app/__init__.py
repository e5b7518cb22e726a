"""
Módulo de la aplicación principal.
Contiene el coordinador que traduce teclas en eventos de la calculadora.
"""

from .keypad_app import KeypadCalculatorApp

__all__ = ['KeypadCalculatorApp']
