import pytest

from calculadora_arbol.core.calculator import Calculator, parse_number
from calculadora_arbol.config.settings import CalculatorConfig


def test_initial_state(calc):
    assert calc.current_expression_text() == "_"
    assert calc.current_result_text() == "_"
    assert calc.current_input_buffer_text() == "_"
    assert calc.memory == [None] * 10


@pytest.mark.parametrize("keys, text", [
    (["3"], "3"),
    (["4", "2"], "42"),
    (["3", ".", "5"], "3.5"),
    (["0", "0", "7"], "7"),
    (["1", "2", ".", "0"], "12"),
])
def test_number_then_enter_renders_number(calc, type_keys, keys, text):
    type_keys(calc, *keys)
    calc.press_enter()
    assert calc.current_expression_text() == text
    assert calc.current_result_text() == text
    assert calc.current_input_buffer_text() == "_"


def test_addition(calc, type_keys):
    type_keys(calc, "3", "+", "4")
    assert calc.current_expression_text() == "(3+4)"
    assert calc.current_result_text() == "7"
    assert calc.current_input_buffer_text() == "4"


def test_subtraction_and_division_keep_operand_order(calc, type_keys):
    type_keys(calc, "9", "−", "4")
    assert calc.current_result_text() == "5"

    calc.press_delete()
    type_keys(calc, "8", "÷", "2")
    assert calc.current_result_text() == "4"

    calc.press_delete()
    type_keys(calc, "1", "÷", "4")
    assert calc.current_result_text() == "0.25"


def test_divide_by_zero_shows_placeholder(calc, type_keys):
    type_keys(calc, "5", "÷", "0")
    assert calc.current_expression_text() == "(5÷0)"
    assert calc.current_result_text() == "_"


def test_operator_after_complete_expression_reroots(calc, type_keys):
    type_keys(calc, "3", "+", "4", "×", "2")
    assert calc.current_expression_text() == "((3+4)×2)"
    assert calc.current_result_text() == "14"


def test_multi_digit_operands(calc, type_keys):
    type_keys(calc, "1", "2", "−", "3", "0")
    assert calc.current_expression_text() == "(12−30)"
    assert calc.current_result_text() == "-18"


def test_operator_on_incomplete_expression_is_ignored(calc, type_keys):
    type_keys(calc, "3", "+")
    assert calc.press_operator("×") is None
    assert calc.current_expression_text() == "(3+?)"


def test_operator_on_unevaluable_expression_is_ignored(calc, type_keys):
    type_keys(calc, "5", "÷", "0")
    assert calc.press_operator("+") is None
    assert calc.current_expression_text() == "(5÷0)"


def test_unknown_operator_is_ignored(calc, type_keys):
    type_keys(calc, "5")
    assert calc.press_operator("%") is None
    assert calc.current_expression_text() == "5"
    # El buffer se cierra igualmente
    assert calc.input_buffer is None


def test_operator_on_empty_tree(calc, type_keys):
    assert calc.press_operator("+") == "+"
    assert calc.current_expression_text() == "(?+?)"
    type_keys(calc, "3", "=", "4")
    assert calc.current_expression_text() == "(3+4)"
    assert calc.current_result_text() == "7"


def test_square_root(calc, type_keys):
    type_keys(calc, "√", "9")
    assert calc.current_expression_text() == "√9"
    assert calc.current_result_text() == "3"

    calc.press_delete()
    type_keys(calc, "1", "6", "√")
    assert calc.current_expression_text() == "√16"
    assert calc.current_result_text() == "4"


def test_square_root_of_negative(calc):
    calc.press_operator("√")
    calc.press_negate()
    calc.append_digit("4")
    assert calc.current_expression_text() == "√-4"
    assert calc.current_result_text() == "_"


def test_keyboard_aliases(calc, type_keys):
    type_keys(calc, "6", "*", "7")
    assert calc.current_expression_text() == "(6×7)"
    assert calc.current_result_text() == "42"


def test_dot_is_idempotent(calc):
    calc.append_digit("3")
    assert calc.press_dot() == "3."
    assert calc.press_dot() is None
    assert calc.current_input_buffer_text() == "3."
    calc.append_digit("5")
    assert calc.current_result_text() == "3.5"


def test_dot_alone_leaves_operand_unset(calc):
    assert calc.press_dot() == "."
    assert calc.current_expression_text() == "_"
    assert calc.current_result_text() == "_"
    calc.append_digit("5")
    assert calc.current_result_text() == "0.5"


def test_negate_is_self_inverse(calc, type_keys):
    type_keys(calc, "1", "2")
    assert calc.press_negate() == "-12"
    assert calc.current_result_text() == "-12"
    assert calc.press_negate() == "12"
    assert calc.current_result_text() == "12"


def test_negate_without_buffer_opens_operand(calc, type_keys):
    type_keys(calc, "3", "+")
    assert calc.press_negate() == "-"
    assert calc.current_expression_text() == "(3+_)"
    calc.append_digit("5")
    assert calc.current_expression_text() == "(3+-5)"
    assert calc.current_result_text() == "-2"
    # El operando izquierdo no se toca
    assert calc.tree.left.evaluate() == 3


def test_buffer_matches_editable_leaf(calc, type_keys):
    for key in ["3", ".", "2", "+", "1", "5"]:
        type_keys(calc, key)
        number = parse_number(calc.input_buffer) if calc.input_buffer else None
        if number is not None:
            assert calc.tree.find_editable_leaf().evaluate() == number


def test_editable_leaf_always_found(calc):
    events = [
        lambda: calc.append_digit("3"),
        lambda: calc.press_operator("+"),
        lambda: calc.append_digit("4"),
        calc.press_negate,
        calc.press_dot,
        lambda: calc.press_operator("×"),
        lambda: calc.append_digit("2"),
        calc.press_enter,
        lambda: calc.press_operator("√"),
        calc.press_delete,
    ]
    for event in events:
        event()
        assert calc.tree.find_editable_leaf() is not None


def test_input_length_limit():
    config = CalculatorConfig()
    config.max_input_length = 4
    calc = Calculator(config)
    for digit in "1234":
        assert calc.append_digit(digit) is not None
    assert calc.append_digit("5") is None
    assert calc.current_input_buffer_text() == "1234"


def test_digit_after_enter_on_complete_tree_replaces_it(calc, type_keys):
    type_keys(calc, "3", "+", "4", "=", "5")
    assert calc.current_expression_text() == "5"
    assert calc.tree.left is None and calc.tree.right is None


def test_delete_keeps_memory(calc, type_keys):
    type_keys(calc, "3", "+", "4")
    assert calc.memory_add(0)
    calc.press_delete()
    assert calc.current_expression_text() == "_"
    assert calc.current_input_buffer_text() == "_"
    assert calc.occupied_slots() == [0]


def test_memory_round_trip(calc, type_keys):
    type_keys(calc, "3", "+", "4")
    assert calc.memory_add(0)
    calc.press_delete()
    recalled = calc.memory_recall(0)
    assert recalled.render() == "(3+4)"
    assert recalled.evaluate() == 7


def test_memory_snapshot_is_independent_of_live_tree(calc, type_keys):
    type_keys(calc, "3", "+", "4")
    calc.memory_add(2)
    type_keys(calc, "5")
    assert calc.current_expression_text() == "(3+45)"
    assert calc.memory_recall(2).render() == "(3+4)"


def test_recalled_tree_does_not_alias_memory(calc, type_keys):
    type_keys(calc, "3", "+", "4")
    calc.memory_add(0)
    calc.press_delete()
    type_keys(calc, "2", "×")
    assert calc.set_operand(calc.memory_recall(0)) == 7
    assert calc.current_expression_text() == "(2×(3+4))"
    assert calc.current_result_text() == "14"

    calc.tree.find_editable_leaf().set_operand_value(10.0)
    assert calc.current_expression_text() == "(2×(3+10))"
    assert calc.memory_recall(0).render() == "(3+4)"


def test_set_operand_closes_buffer(calc, type_keys):
    type_keys(calc, "9", "+", "4")
    calc.memory_add(1)
    calc.press_delete()
    type_keys(calc, "1", "−")
    calc.set_operand(calc.memory_recall(1))
    assert calc.input_buffer is None
    assert calc.current_result_text() == "-12"


def test_memory_add_requires_complete_tree(calc, type_keys):
    assert not calc.memory_add(0)
    type_keys(calc, "3", "+")
    assert not calc.memory_add(1)
    assert calc.memory[1] is None


def test_memory_recall_empty_slot(calc):
    assert calc.memory_recall(5) is None


def test_memory_clear(calc, type_keys):
    type_keys(calc, "8")
    calc.memory_add(3)
    assert calc.memory_clear(3) is True
    assert calc.memory_recall(3) is None
    assert calc.memory_clear(3) is False


@pytest.mark.parametrize("slot", [-1, 10, "1", None])
def test_invalid_memory_slot(calc, type_keys, slot):
    type_keys(calc, "8")
    assert calc.memory_add(slot) is False
    assert calc.memory_recall(slot) is None
    assert calc.memory_clear(slot) is False


def test_verbose_memory_diagnostics(capsys, type_keys):
    config = CalculatorConfig()
    config.verbose = True
    calc = Calculator(config)
    type_keys(calc, "3", "+", "4")
    calc.memory_add(0)
    calc.memory_recall(3)
    calc.memory_clear(0)
    out = capsys.readouterr().out
    assert "M0: Añadido (3+4)" in out
    assert "M3: Vacío" in out
    assert "M0: Borrado" in out


def test_quiet_by_default(capsys, calc):
    calc.memory_recall(0)
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("text, value", [
    ("42", 42.0),
    ("-3.5", -3.5),
    ("5.", 5.0),
    (".", None),
    ("-", None),
    ("", None),
    ("inf", None),
])
def test_parse_number(text, value):
    assert parse_number(text) == value


def test_huge_result_uses_scientific_notation(calc, type_keys):
    type_keys(calc, *"999999999999", "×", *"999999999999")
    assert calc.current_result_text() == repr(999999999999.0 * 999999999999.0)
    assert "e+23" in calc.current_result_text()
