# foodprint/client.py — talks to the analyze proxy from the UI side
import base64
import logging
from io import BytesIO
from typing import Any, Dict, Optional

import requests
from PIL import Image, UnidentifiedImageError

from .schemas import AnalysisType

logger = logging.getLogger(__name__)

FORMAT_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "HEIF": "image/heic",
}


class ImageError(ValueError):
    pass


class ProxyError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


def _mime_from_name(name: str) -> str:
    name = (name or "").lower()
    if name.endswith(".png"): return "image/png"
    if name.endswith(".webp"): return "image/webp"
    if name.endswith(".heic") or name.endswith(".heif"): return "image/heic"
    return "image/jpeg"


def encode_image(data: bytes, filename: Optional[str] = None) -> str:
    """Check the bytes are an image and return them as a data URL."""
    if not data:
        raise ImageError("No image provided")
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageError("Invalid image file") from e

    mime = FORMAT_MIME.get(fmt or "") or _mime_from_name(filename or "")
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{b64}"


def decode_data_url(url: str) -> bytes:
    """Raw image bytes back out of a data URL (for previews)."""
    _, _, payload = (url or "").partition("base64,")
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise ImageError("Invalid image data") from e


class ProxyClient:
    def __init__(self, base_url: str, timeout: float = 60.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def health(self) -> Optional[Dict[str, Any]]:
        try:
            r = self.session.get(f"{self.base_url}/health", timeout=5)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("[client] proxy health check failed: %r", e)
            return None

    def analyze(
        self,
        image_url: str,
        analysis_type: AnalysisType = AnalysisType.FOOD,
        meal_context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"imageBase64": image_url, "analysisType": analysis_type.value}
        if meal_context:
            body["mealContext"] = meal_context

        try:
            r = self.session.post(f"{self.base_url}/analyze-food", json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("[client] proxy unreachable: %r", e)
            raise ProxyError("Could not reach the analysis service") from e

        try:
            data = r.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not r.ok or "error" in data:
            message = data.get("error")
            raise ProxyError(message or f"Analysis failed ({r.status_code})", status=r.status_code)

        result = data.get("result")
        if not isinstance(result, dict):
            raise ProxyError("Analysis service returned no result", status=r.status_code)
        return result
