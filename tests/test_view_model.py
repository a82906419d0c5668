import gzip

import numpy as np
from PySide6.QtCore import QThread
import pytest

from config import ViewerConfig
from models import VolumeHeader, ZoomState
from rendering import surface_to_array
from tests.helpers import gray_volume, nifti_bytes
from viewmodels import FileLoadWorker, MainViewModel


@pytest.fixture
def view_model(app):
    return MainViewModel()


@pytest.fixture
def signals(view_model):
    """Record emitted signals by name."""
    seen = []
    view_model.surface_changed.connect(lambda: seen.append("surface"))
    view_model.volume_loaded.connect(lambda: seen.append("volume"))
    view_model.slice_changed.connect(lambda i: seen.append(("slice", i)))
    view_model.zoom_changed.connect(lambda on: seen.append(("zoom", on)))
    return seen


def test_initial_state(view_model):
    assert not view_model.app_state.loaded
    assert view_model.get_slice_range() == (0, 100)
    assert view_model.surface.width() == 512
    assert view_model.surface.height() == 512
    assert not view_model.render()


def test_custom_canvas_size(app):
    view_model = MainViewModel(ViewerConfig(canvas_width=64, canvas_height=32, default_slider_max=7))
    assert (view_model.surface.width(), view_model.surface.height()) == (64, 32)
    assert view_model.get_slice_range() == (0, 7)


def test_load_resets_slice_to_middle(view_model, signals, ramp_volume):
    assert view_model.load_bytes(nifti_bytes(ramp_volume))
    assert view_model.app_state.slice_index == 5
    assert view_model.get_slice_range() == (0, 9)
    assert ("slice", 5) in signals
    assert signals.count("surface") == 1
    assert signals.count("volume") == 1


def test_load_accepts_gzip_bytes(view_model, ramp_volume):
    assert view_model.load_bytes(gzip.compress(nifti_bytes(ramp_volume)))
    assert view_model.app_state.header.slice_count == 10


def test_non_nifti_leaves_state_unchanged(view_model, signals, ramp_volume):
    view_model.load_bytes(nifti_bytes(ramp_volume))
    header = view_model.app_state.header
    image = view_model.app_state.image
    signals.clear()

    assert not view_model.load_bytes(b"definitely not a volume" * 30)
    assert view_model.app_state.header is header
    assert view_model.app_state.image is image
    assert signals == []


def test_non_nifti_before_any_load(view_model, signals):
    assert not view_model.load_bytes(bytes(1000))
    assert view_model.app_state.header is None
    assert view_model.app_state.image is None
    assert signals == []


def test_rendered_slice_uses_low_byte(view_model):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    pixels = surface_to_array(view_model.surface)
    index = view_model.app_state.slice_index
    np.testing.assert_array_equal(pixels[:8, :8, 0], volume[index])
    assert (pixels[:8, :8, 3] == 255).all()
    assert (pixels[8:, :, :3] == 0).all()


def test_int16_values_are_truncated(view_model):
    volume = np.full((2, 2, 2), 300)
    view_model.load_bytes(nifti_bytes(volume, np.int16))
    assert tuple(surface_to_array(view_model.surface)[0, 0]) == (0x2C, 0x2C, 0x2C, 0xFF)


def test_set_slice_clamps_and_rerenders(view_model, signals):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    signals.clear()

    view_model.set_slice(99)
    assert view_model.app_state.slice_index == 3
    assert signals == [("slice", 3), "surface"]
    np.testing.assert_array_equal(surface_to_array(view_model.surface)[:8, :8, 0], volume[3])

    signals.clear()
    view_model.set_slice(3)
    assert signals == []


def test_render_is_idempotent(view_model):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    view_model.toggle_zoom()
    view_model.pointer_down(1, 1)
    view_model.pointer_move(6, 5)
    view_model.pointer_up()
    first = surface_to_array(view_model.surface)
    assert view_model.render()
    assert view_model.render()
    np.testing.assert_array_equal(surface_to_array(view_model.surface), first)


def test_zoom_magnifies_selection(view_model):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    index = view_model.app_state.slice_index
    view_model.toggle_zoom()
    view_model.pointer_down(8, 8)
    view_model.pointer_move(0, 0)
    view_model.pointer_up()

    assert view_model.zoom_selector.state is ZoomState.ZOOMED
    pixels = surface_to_array(view_model.surface)
    # 8x8 像素拉伸到 512x512，每个体素占 64x64
    assert pixels[0, 0, 0] == volume[index, 0, 0]
    assert pixels[511, 511, 0] == volume[index, 7, 7]
    assert pixels[64, 128, 0] == volume[index, 1, 2]


def test_zoom_reapplies_on_slice_change(view_model):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    view_model.toggle_zoom()
    view_model.pointer_down(0, 0)
    view_model.pointer_move(8, 8)
    view_model.pointer_up()

    view_model.set_slice(0)
    pixels = surface_to_array(view_model.surface)
    assert pixels[511, 511, 0] == volume[0, 7, 7]


def test_dragging_renders_base_slice(view_model):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    view_model.toggle_zoom()
    view_model.pointer_down(0, 0)
    view_model.pointer_move(8, 8)
    pixels = surface_to_array(view_model.surface)
    assert (pixels[8:, :, :3] == 0).all()


def test_toggle_off_restores_base_slice(view_model, signals):
    volume = gray_volume()
    view_model.load_bytes(nifti_bytes(volume, np.uint8))
    base = surface_to_array(view_model.surface)
    assert view_model.toggle_zoom() is True
    view_model.pointer_down(0, 0)
    view_model.pointer_move(4, 4)
    view_model.pointer_up()
    signals.clear()

    assert view_model.toggle_zoom() is False
    assert view_model.zoom_selector.selection is None
    assert signals == [("zoom", False), "surface"]
    # 放大后的画布被原始切片覆盖回左上角，其余区域仍是放大时的内容
    np.testing.assert_array_equal(surface_to_array(view_model.surface)[:8, :8], base[:8, :8])


def test_pointer_ignored_without_zoom(view_model, signals):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    signals.clear()
    view_model.pointer_down(0, 0)
    view_model.pointer_move(5, 5)
    view_model.pointer_up()
    assert view_model.zoom_selector.selection is None
    assert signals == []


def test_new_file_clears_selection(view_model, ramp_volume):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    view_model.toggle_zoom()
    view_model.pointer_down(0, 0)
    view_model.pointer_move(4, 4)
    view_model.pointer_up()

    view_model.load_bytes(nifti_bytes(ramp_volume))
    assert view_model.zoom_selector.selection is None
    assert view_model.zoom_selector.state is ZoomState.ARMED


def test_unsupported_datatype_keeps_previous_frame(view_model, signals):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    before = surface_to_array(view_model.surface)
    signals.clear()

    view_model.app_state.header = VolumeHeader(dims=(3, 8, 8, 4, 1, 1, 1, 1), datatype_code=1024, bitpix=64)
    assert not view_model.render()
    assert signals == []
    np.testing.assert_array_equal(surface_to_array(view_model.surface), before)


def test_truncated_image_is_not_drawn(view_model, signals):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    before = surface_to_array(view_model.surface)
    signals.clear()

    view_model.app_state.image = view_model.app_state.image[:100]
    assert not view_model.render()
    assert signals == []
    np.testing.assert_array_equal(surface_to_array(view_model.surface), before)


def test_stale_load_is_discarded(view_model, ramp_volume):
    first = view_model.begin_load()
    second = view_model.begin_load()
    assert view_model.finish_load(second, nifti_bytes(gray_volume(), np.uint8))
    assert not view_model.finish_load(first, nifti_bytes(ramp_volume))
    assert view_model.app_state.header.slice_count == 4


def test_worker_hands_over_file_bytes_untouched(app, tmp_path, ramp_volume):
    data = gzip.compress(nifti_bytes(ramp_volume))
    path = tmp_path / "volume.nii.gz"
    path.write_bytes(data)
    received = []
    worker = FileLoadWorker(path, 3)
    worker.loaded.connect(lambda seq, payload: received.append((seq, payload)))
    worker.run()
    assert received == [(3, data)]


def test_worker_reports_missing_file(app, tmp_path):
    failures = []
    worker = FileLoadWorker(tmp_path / "missing.nii", 1)
    worker.failed.connect(lambda seq, message: failures.append(seq))
    worker.run()
    assert failures == [1]


def read_through_worker(path, sequence):
    payloads = []
    worker = FileLoadWorker(path, sequence)
    worker.loaded.connect(lambda seq, payload: payloads.append(payload))
    worker.run()
    return payloads[0]


def test_doubly_gzipped_file_is_ignored(view_model, signals, tmp_path, ramp_volume):
    path = tmp_path / "volume.nii.gz.gz"
    path.write_bytes(gzip.compress(gzip.compress(nifti_bytes(ramp_volume))))
    sequence = view_model.begin_load()

    assert not view_model.finish_load(sequence, read_through_worker(path, sequence))
    assert view_model.app_state.header is None
    assert view_model.app_state.image is None
    assert signals == []


def test_doubly_gzipped_file_keeps_loaded_volume(view_model, tmp_path, ramp_volume):
    view_model.load_bytes(nifti_bytes(gray_volume(), np.uint8))
    header = view_model.app_state.header
    image = view_model.app_state.image
    path = tmp_path / "volume.nii.gz.gz"
    path.write_bytes(gzip.compress(gzip.compress(nifti_bytes(ramp_volume))))
    sequence = view_model.begin_load()

    assert not view_model.finish_load(sequence, read_through_worker(path, sequence))
    assert view_model.app_state.header is header
    assert view_model.app_state.image is image


def test_gzipped_file_loads_through_worker(view_model, tmp_path, ramp_volume):
    path = tmp_path / "volume.nii.gz"
    path.write_bytes(gzip.compress(nifti_bytes(ramp_volume)))
    sequence = view_model.begin_load()
    assert view_model.finish_load(sequence, read_through_worker(path, sequence))
    assert view_model.app_state.header.slice_count == 10


def test_open_file_keeps_only_latest_load(app, view_model, tmp_path, ramp_volume):
    first = tmp_path / "first.nii"
    first.write_bytes(nifti_bytes(ramp_volume))
    second = tmp_path / "second.nii.gz"
    second.write_bytes(gzip.compress(nifti_bytes(gray_volume(), np.uint8)))

    view_model.open_file(first)
    assert view_model.open_file(second) == 2
    for worker in list(view_model._workers):
        assert worker.wait(5000)
    # loaded / finished 经排队连接送回 GUI 线程
    for _ in range(100):
        app.processEvents()
        if view_model.app_state.header is not None and not view_model._workers:
            break
        QThread.msleep(10)

    assert view_model.app_state.header.slice_count == 4
    assert view_model.app_state.slice_index == 2
    assert view_model._workers == []


def test_unsupported_datatype_reported_once_per_load(view_model):
    messages = []
    view_model.status_message.connect(messages.append)
    volume = np.zeros((3, 4, 4))
    assert view_model.load_bytes(nifti_bytes(volume, np.complex64))
    assert view_model.app_state.header.datatype_code == 32
    unsupported = [m for m in messages if "32" in m and "不支持" in m]
    assert len(unsupported) == 1

    messages.clear()
    view_model.set_slice(0)
    view_model.set_slice(2)
    view_model.toggle_zoom()
    view_model.pointer_down(0, 0)
    view_model.pointer_move(3, 3)
    view_model.pointer_up()
    assert messages == []
