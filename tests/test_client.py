import base64
from io import BytesIO
from unittest.mock import MagicMock

import pytest
import requests
from PIL import Image

from foodprint.client import ImageError, ProxyClient, ProxyError, decode_data_url, encode_image
from foodprint.schemas import AnalysisType

IMAGE = "data:image/jpeg;base64,/9j/4AAQ"


def image_bytes(fmt: str) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 4), (120, 200, 80)).save(buf, format=fmt)
    return buf.getvalue()


def response(status: int, payload=None, text: str | None = None):
    r = MagicMock()
    r.status_code = status
    r.ok = 200 <= status < 300
    if payload is None:
        r.json.side_effect = ValueError(text or "no json")
    else:
        r.json.return_value = payload
    return r


class TestEncodeImage:
    @pytest.mark.parametrize("fmt, mime", [("JPEG", "image/jpeg"), ("PNG", "image/png")])
    def test_data_url(self, fmt, mime):
        data = image_bytes(fmt)
        url = encode_image(data)
        assert url.startswith(f"data:{mime};base64,")
        assert decode_data_url(url) == data

    def test_not_an_image(self):
        with pytest.raises(ImageError):
            encode_image(b"definitely not a picture", "meal.jpg")

    def test_empty(self):
        with pytest.raises(ImageError):
            encode_image(b"")

    def test_decode_garbage(self):
        with pytest.raises(ImageError):
            decode_data_url("data:image/png;base64,***")


class TestProxyClient:
    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture
    def proxy(self, session):
        return ProxyClient("http://proxy.test/", timeout=12, session=session)

    def test_analyze_food(self, proxy, session, food_reply):
        session.post.return_value = response(200, {"result": food_reply})

        assert proxy.analyze(IMAGE) == food_reply
        session.post.assert_called_once_with(
            "http://proxy.test/analyze-food",
            json={"imageBase64": IMAGE, "analysisType": "food"},
            timeout=12,
        )

    def test_analyze_waste_sends_context(self, proxy, session, waste_reply, food_reply):
        session.post.return_value = response(200, {"result": waste_reply})

        proxy.analyze(IMAGE, AnalysisType.WASTE, meal_context=food_reply)

        body = session.post.call_args.kwargs["json"]
        assert body["analysisType"] == "waste"
        assert body["mealContext"] == food_reply

    def test_server_error_message(self, proxy, session):
        session.post.return_value = response(429, {"error": "Rate limit exceeded. Please try again in a moment."})
        with pytest.raises(ProxyError) as exc:
            proxy.analyze(IMAGE)
        assert exc.value.status == 429
        assert exc.value.message.startswith("Rate limit exceeded")

    def test_server_error_without_json(self, proxy, session):
        session.post.return_value = response(502, text="Bad Gateway")
        with pytest.raises(ProxyError, match="502"):
            proxy.analyze(IMAGE)

    def test_ok_without_result(self, proxy, session):
        session.post.return_value = response(200, {"status": "ok"})
        with pytest.raises(ProxyError, match="no result"):
            proxy.analyze(IMAGE)

    def test_unreachable(self, proxy, session):
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ProxyError, match="Could not reach"):
            proxy.analyze(IMAGE)

    def test_health(self, proxy, session):
        session.get.return_value = response(200, {"ok": True, "model": "m"})
        assert proxy.health() == {"ok": True, "model": "m"}

    def test_health_down(self, proxy, session):
        session.get.side_effect = requests.ConnectionError("refused")
        assert proxy.health() is None
