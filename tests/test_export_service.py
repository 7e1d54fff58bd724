import io
from urllib.parse import parse_qs, urlsplit

from PIL import Image

from dotpfp.config import DOWNLOAD_FILENAME, SHARE_CAPTION, SHARE_URL
from dotpfp.services.export_service import ExportService


def _canvas():
    return Image.new("RGBA", (600, 600), (255, 255, 255, 255))


def test_png_bytes_decode_back_to_same_canvas():
    canvas = _canvas()
    data = ExportService().to_png_bytes(canvas)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "PNG"
        assert decoded.convert("RGBA").tobytes() == canvas.tobytes()


def test_save_into_directory_uses_download_name(tmp_path):
    saved = ExportService().save_png(_canvas(), tmp_path)
    assert saved == tmp_path / DOWNLOAD_FILENAME
    assert saved.read_bytes().startswith(b"\x89PNG")


def test_save_to_explicit_path(tmp_path):
    target = tmp_path / "me.png"
    assert ExportService().save_png(_canvas(), target) == target
    assert target.exists()


def test_share_url_escapes_like_encode_uri_component():
    url = ExportService().share_url("a b&c (x)!", "https://genlayer.ai/?q=1")
    assert url == (
        "https://twitter.com/intent/tweet"
        "?text=a%20b%26c%20(x)!"
        "&url=https%3A%2F%2Fgenlayer.ai%2F%3Fq%3D1"
    )


def test_default_share_url_carries_caption_and_site():
    url = ExportService().share_url()
    query = parse_qs(urlsplit(url).query)
    assert query["text"] == [SHARE_CAPTION]
    assert query["url"] == [SHARE_URL]
    assert "%F0%9F%A7%AC" in url


def test_share_opens_intent_with_opener():
    opened = []
    intent = ExportService().share(opener=opened.append)
    assert opened == [intent]
    assert intent.startswith("https://twitter.com/intent/tweet?text=")
