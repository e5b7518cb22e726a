"""
Módulo de interfaz de usuario.
Contiene el renderizador del display de la calculadora.
"""

from .renderer import UIRenderer

__all__ = ['UIRenderer']
