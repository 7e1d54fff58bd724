from concurrent.futures import wait

import pytest
from PIL import Image

from dotpfp.config import CANVAS_SIZE, WATERMARK_PATH
from dotpfp.services.watermark_service import WatermarkService


# ---- placement ----
def test_placement_sits_in_bottom_right_corner():
    left, top, right, bottom = WatermarkService.placement(CANVAS_SIZE)
    logo_size = round(0.15 * CANVAS_SIZE)
    padding = round(0.04 * CANVAS_SIZE)
    for low, high in ((left, right), (top, bottom)):
        assert CANVAS_SIZE - logo_size - padding <= low
        assert high <= CANVAS_SIZE - padding
    assert (left, top, right, bottom) == (486, 486, 576, 576)


# ---- compositing ----
def test_full_opacity_paints_logo_inside_box_only(watermark):
    canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (255, 255, 255, 255))
    out = WatermarkService.composite(canvas, watermark, 1.0)
    assert out.getpixel((531, 531)) == (200, 30, 30, 255)
    assert out.getpixel((480, 480)) == (255, 255, 255, 255)
    assert out.getpixel((590, 590)) == (255, 255, 255, 255)


def test_partial_opacity_blends_with_canvas(watermark):
    canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (255, 255, 255, 255))
    r, g, b, a = WatermarkService.composite(canvas, watermark, 0.5).getpixel((531, 531))
    assert a == 255
    assert r == pytest.approx(228, abs=2)
    assert g == pytest.approx(142, abs=2)


def test_zero_opacity_leaves_canvas_untouched(watermark):
    canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (10, 20, 30, 255))
    out = WatermarkService.composite(canvas, watermark, 0.0)
    assert out.tobytes() == canvas.tobytes()
    assert out is not canvas


def test_composite_does_not_mutate_input(watermark):
    canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (255, 255, 255, 255))
    WatermarkService.composite(canvas, watermark, 1.0)
    assert canvas.getpixel((531, 531)) == (255, 255, 255, 255)


# ---- loading ----
def test_packaged_asset_exists():
    assert WATERMARK_PATH.is_file()


def test_watermark_absent_until_load_completes(tmp_path, watermark, executor):
    path = tmp_path / "logo.png"
    watermark.save(path)
    service = WatermarkService(path, executor=executor)

    assert service.current() is None
    service.start_loading()
    assert not service.is_settled()
    assert service.current() is None

    executor.run_all()
    assert service.is_settled()
    loaded = service.current()
    assert loaded.mode == "RGBA"
    assert loaded.size == (64, 64)


def test_start_loading_is_single_shot(tmp_path, watermark, executor):
    path = tmp_path / "logo.png"
    watermark.save(path)
    service = WatermarkService(path, executor=executor)
    assert service.start_loading() is service.start_loading()
    assert len(executor.pending) == 1


def test_default_executor_loads_packaged_asset():
    service = WatermarkService()
    future = service.start_loading()
    assert future.result(timeout=10).mode == "RGBA"
    assert service.current() is not None


def test_failed_load_counts_as_absent(tmp_path):
    service = WatermarkService(tmp_path / "missing.png")
    future = service.start_loading()
    wait([future], timeout=10)
    assert service.is_settled()
    assert service.current() is None
