"""
Módulo de síntesis de voz.
Anuncia pulsaciones y resultados de la calculadora.
"""

from .feedback import VoiceFeedback

__all__ = ['VoiceFeedback']
