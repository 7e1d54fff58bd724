import pytest
from PIL import Image

from dotpfp.services.image_service import ImageService


def test_load_png_as_rgba(tmp_path, gradient_image):
    path = tmp_path / "face.png"
    gradient_image.save(path)
    data = ImageService().load_image(path)
    assert data.mode == "RGBA"
    assert (data.width, data.height) == (320, 240)
    assert data.pil_image.size == (320, 240)
    assert data.size_bytes == path.stat().st_size
    assert data.path == path


def test_load_jpeg_is_converted(tmp_path, solid_image):
    path = tmp_path / "face.jpg"
    solid_image((90, 90, 90), size=(40, 30)).save(path, format="JPEG")
    data = ImageService().load_image(str(path))
    assert data.mode == "RGBA"
    assert (data.width, data.height) == (40, 30)


def test_animated_gif_uses_first_frame(tmp_path):
    path = tmp_path / "anim.gif"
    frames = [Image.new("RGB", (16, 16), color) for color in ((0, 0, 0), (255, 255, 255))]
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100)
    data = ImageService().load_image(path)
    assert data.pil_image.getpixel((8, 8))[:3] == (0, 0, 0)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path / "nope.png")


def test_directory_is_not_a_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ImageService().load_image(tmp_path)


def test_garbage_file_raises_value_error(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(ValueError):
        ImageService().load_image(path)
