import pytest

from photowall.controller.input import InputNormalizer
from photowall.model.state import InputState

from conftest import FakeOrientationSource


@pytest.fixture
def state():
    return InputState()


@pytest.fixture
def normalizer(state):
    return InputNormalizer(state, 800, 600)


def test_mouse_hover_is_centre_relative(normalizer, state):
    assert normalizer.pointer_move(600, 150, "mouse")
    assert (state.mouse_x, state.mouse_y) == (0.5, -0.5)


def test_mouse_hover_is_not_clamped(normalizer, state):
    normalizer.pointer_move(1000, 300, "mouse")
    assert state.mouse_x == 1.5
    assert state.mouse_y == 0.0


def test_drag_pans_from_start_target(normalizer, state):
    state.target_x = 0.2
    state.target_y = -0.1
    normalizer.pointer_down(100, 100)
    assert state.pointer_down
    assert (state.drag_start_target_x, state.drag_start_target_y) == (0.2, -0.1)

    normalizer.pointer_move(300, 130, "touch")
    assert state.mouse_x == pytest.approx(0.7)
    assert state.mouse_y == pytest.approx(0.0)


def test_drag_is_clamped(normalizer, state):
    normalizer.pointer_down(400, 300)
    normalizer.pointer_move(2000, -2000, "mouse")
    assert (state.mouse_x, state.mouse_y) == (1.0, -1.0)


def test_touch_without_press_is_ignored(normalizer, state):
    assert not normalizer.pointer_move(700, 500, "touch")
    assert (state.mouse_x, state.mouse_y) == (0.0, 0.0)


def test_pointer_up_returns_to_hover(normalizer, state):
    normalizer.pointer_down(400, 300)
    normalizer.pointer_up()
    assert not state.pointer_down
    normalizer.pointer_move(400, 450, "mouse")
    assert state.mouse_y == 0.5


def test_pointer_cancel_ends_drag(normalizer, state):
    normalizer.pointer_down(400, 300)
    normalizer.pointer_cancel()
    assert not state.pointer_down


def test_capture_failure_is_ignored(state):
    released = []

    def capture(_pointer_id):
        raise RuntimeError("capture not supported")

    normalizer = InputNormalizer(state, 800, 600, capture_pointer=capture, release_pointer=released.append)
    normalizer.pointer_down(10, 10, pointer_id=3)
    assert state.pointer_down
    normalizer.pointer_move(410, 10, "mouse")
    assert state.mouse_x == pytest.approx(1.0)
    normalizer.pointer_up()
    assert released == [3]


def test_resize_changes_normalization(normalizer, state):
    normalizer.resize(400, 200)
    normalizer.pointer_move(400, 200, "mouse")
    assert (state.mouse_x, state.mouse_y) == (1.0, 1.0)


def test_degenerate_resize_is_ignored(normalizer):
    normalizer.resize(0, 600)
    assert (normalizer.width, normalizer.height) == (800, 600)


def test_header_follows_pointer(normalizer, state):
    normalizer.pointer_move(600, 150, "mouse")
    assert state.header.rotation_x == 15.0
    assert state.header.rotation_y == 15.0
    assert state.header.translate_z == 12.5


def test_orientation_ignored_until_gyro_enabled(normalizer, state):
    assert not normalizer.orientation(30.0, 10.0)
    assert state.mouse_x == 0.0


def test_gyro_without_source_stays_off(normalizer, state):
    assert not normalizer.enable_gyro()
    assert not state.gyro_enabled


def test_unavailable_source_stays_off(normalizer, state):
    assert not normalizer.enable_gyro(FakeOrientationSource(available=False))
    assert not state.gyro_enabled


def test_gyro_overrides_pointer(normalizer, state):
    source = FakeOrientationSource()
    assert normalizer.enable_gyro(source)
    assert state.gyro_enabled

    source.emit(90.0, -22.5)
    assert (state.mouse_x, state.mouse_y) == (1.0, -0.5)

    assert not normalizer.pointer_move(0, 0, "mouse")
    assert (state.mouse_x, state.mouse_y) == (1.0, -0.5)

    # Press and release still work
    normalizer.pointer_down(0, 0)
    assert state.pointer_down
    normalizer.pointer_up()


def test_missing_readings_count_as_zero(normalizer, state):
    source = FakeOrientationSource()
    normalizer.enable_gyro(source)
    source.emit(None, 45.0)
    assert (state.mouse_x, state.mouse_y) == (0.0, 1.0)


def test_enable_gyro_twice_subscribes_once(normalizer):
    source = FakeOrientationSource()
    normalizer.enable_gyro(source)
    assert normalizer.enable_gyro(source)
    assert len(source.handlers) == 1


def test_permission_granted_later(normalizer, state):
    source = FakeOrientationSource(requires_permission=True)
    assert normalizer.enable_gyro(source)
    assert not state.gyro_enabled

    source.permission_callbacks[0](True)
    assert state.gyro_enabled
    assert len(source.handlers) == 1


def test_permission_denied_is_silent(normalizer, state):
    source = FakeOrientationSource(requires_permission=True)
    normalizer.enable_gyro(source)
    source.permission_callbacks[0](False)
    assert not state.gyro_enabled
    assert source.handlers == []


def test_permission_request_error_is_silent(normalizer, state):
    source = FakeOrientationSource(requires_permission=True)

    def failing_request(_on_result):
        raise RuntimeError("not allowed")

    source.request_permission = failing_request
    assert normalizer.enable_gyro(source)
    assert not state.gyro_enabled


def test_g_key_toggles_gyro(state):
    source = FakeOrientationSource()
    normalizer = InputNormalizer(state, 800, 600, orientation_source=source)
    normalizer.key_press("x")
    assert not state.gyro_enabled
    normalizer.key_press("G")
    assert state.gyro_enabled
