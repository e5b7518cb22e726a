import pytest

from calculadora_arbol.config.settings import CalculatorConfig
from calculadora_arbol.core.calculator import Calculator


class FakeVoice:
    """Sustituto de VoiceFeedback que registra lo que se habría dicho."""

    def __init__(self):
        self.spoken = []

    def speak(self, text):
        self.spoken.append(text)

    def speak_number(self, number):
        self.spoken.append(("number", number))

    def speak_operation(self, operation):
        self.spoken.append(("operation", operation))

    def speak_result(self, result):
        self.spoken.append(("result", result))

    def speak_memory(self, action, slot):
        self.spoken.append(("memory", action, slot))


@pytest.fixture
def config():
    config = CalculatorConfig()
    config.voice_enabled = False
    return config


@pytest.fixture
def calc(config):
    return Calculator(config)


@pytest.fixture
def fake_voice():
    return FakeVoice()


@pytest.fixture
def type_keys():
    """Teclea dígitos y operadores: los símbolos registrados se tratan como operadores."""
    def press(calc, *keys):
        for key in keys:
            if key == "=":
                calc.press_enter()
            elif calc.registry.lookup(key) is not None:
                calc.press_operator(key)
            else:
                calc.append_digit(key)
    return press
