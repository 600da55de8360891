import pytest

from base_converter import NumberSystem
from calculator_controller import CalculatorController
from config import Settings
from keypad import CalculatorMode


@pytest.fixture
def controller():
    return CalculatorController()


def _type(controller, *keys):
    for key in keys:
        controller.press(key)
    return controller.state


def test_typing_and_evaluating(controller):
    state = _type(controller, "1", "+", "2", "=")
    assert state.expression == "1+2"
    assert state.result == "3"
    assert controller.history[0].expression == "1+2"


def test_evaluation_auto_closes_expression(controller):
    state = _type(controller, "sqrt(", "9", "=")
    assert state.expression == "sqrt(9)"
    assert state.result == "3"


def test_error_keeps_expression_and_next_key_restarts(controller):
    state = _type(controller, "1", "/", "=")
    assert state.result == "Error"
    assert state.expression == "1/"
    assert controller.history == []
    state = controller.press("5")
    assert state.expression == "5"
    assert state.result == ""


def test_equals_on_empty_expression_is_noop(controller):
    before = controller.state
    assert controller.press("=") == before


def test_clear_and_backspace(controller):
    state = _type(controller, "1", "2", "3", "Backspace")
    assert state.expression == "12"
    state = _type(controller, "=", "AC")
    assert state.expression == ""
    assert state.result == ""


def test_c_clears_expression_except_in_base_mode(controller):
    controller.set_mode(CalculatorMode.BASIC)
    assert _type(controller, "4", "C").expression == ""
    controller.set_mode(CalculatorMode.BASE)
    controller.set_number_system(NumberSystem.HEX)
    assert _type(controller, "1", "C").expression == "1C"


def test_base_mode_evaluation(controller):
    controller.set_mode(CalculatorMode.BASE)
    controller.set_number_system(NumberSystem.HEX)
    state = _type(controller, "F", "F", "+", "1", "=")
    assert state.result == "100"
    assert state.expression == "FF+1"


def test_switching_system_keeps_expression(controller):
    _type(controller, "1", "0")
    state = controller.set_number_system(NumberSystem.BIN)
    assert state.expression == "10"
    assert controller.press("=").result == "10"


def test_toggles(controller):
    assert controller.press("2nd").is_second
    assert any(desc.key == "asin(" for desc in controller.keys)
    state = controller.press("Deg")
    assert not state.is_radians
    assert controller.engine.angle_mode == "deg"
    assert _type(controller, "5", "±").expression == "-5"
    assert controller.press("±").expression == "5"


def test_precision_is_clamped(controller):
    assert controller.set_precision(100).precision == 64
    assert controller.set_precision(1).precision == 2


def test_panels_and_logarithm_modal(controller):
    assert controller.press("history").open_panel == "history"
    assert controller.press("history").open_panel is None
    assert controller.press("logModal").open_panel == "log"
    state = controller.insert_logarithm("log2(")
    assert state.expression == "log2("
    assert state.open_panel is None
    with pytest.raises(ValueError):
        controller.insert_logarithm("log3(")
    with pytest.raises(ValueError):
        controller.toggle_panel("help")


def test_history_selection_and_clearing(controller):
    _type(controller, "2", "*", "3", "=", "AC")
    entry = controller.history[0]
    state = controller.select_history(entry)
    assert state.expression == "2*3"
    assert state.result == "6"
    controller.clear_history()
    assert controller.history == []


def test_settings_are_applied():
    controller = CalculatorController(settings=Settings(precision=8, angle_mode="deg"))
    assert controller.state.precision == 8
    assert not controller.state.is_radians
    assert controller.engine.angle_mode == "deg"
    with pytest.raises(ValueError):
        CalculatorController(settings=Settings(precision=100))


def test_control_keys_after_error_do_not_restart(controller):
    _type(controller, "1", "/", "=")
    state = controller.press("Backspace")
    assert state.expression == "1"
    assert state.result == ""
    _type(controller, "/", "=")
    state = controller.press("AC")
    assert state.expression == ""
    assert state.result == ""


def test_equals_after_error_keeps_failed_expression(controller):
    _type(controller, "1", "/", "=")
    state = controller.press("=")
    assert state.expression == "1/"
    assert state.result == "Error"


def test_clear_key_after_error_clears_outside_base_mode(controller):
    controller.set_mode(CalculatorMode.BASIC)
    _type(controller, "1", "/", "=")
    state = controller.press("C")
    assert state.expression == ""
    assert state.result == ""


def test_clear_key_after_error_is_a_digit_in_base_mode(controller):
    controller.set_mode(CalculatorMode.BASE)
    controller.set_number_system(NumberSystem.HEX)
    _type(controller, "1", "+", "=")
    state = controller.press("C")
    assert state.expression == "C"
    assert state.result == ""


def test_sign_toggle_after_error_edits_expression(controller):
    controller.set_mode(CalculatorMode.BASE)
    _type(controller, "1", "+", "=")
    assert controller.state.result == "Error"
    state = controller.press("±")
    assert state.expression == "-1+"
    assert state.result == ""
