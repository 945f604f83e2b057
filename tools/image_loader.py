"""Load generated outfit images into a base64 form the vision collaborator accepts."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote_to_bytes, urlparse

import requests

from tools.observability import instrument_call

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"


class InvalidImageURLError(ValueError):
    """Raised when the image reference is not a data URL, HTTP(S) URL or existing file."""


class ImageFetchError(RuntimeError):
    """Raised when the image cannot be retrieved or decoded."""


@dataclass(frozen=True)
class EncodedImage:
    """Base64 image payload plus its MIME type."""

    data: str
    mime_type: str = DEFAULT_MIME_TYPE

    def as_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def _decode_data_url(image_url: str) -> EncodedImage:
    header, sep, body = image_url[len("data:"):].partition(",")
    if not sep:
        raise InvalidImageURLError("data URL is missing its payload")
    params = header.split(";")
    mime_type = params[0] or DEFAULT_MIME_TYPE
    if "base64" in params[1:]:
        try:
            base64.b64decode(body, validate=True)
        except binascii.Error as exc:
            raise ImageFetchError("data URL payload is not valid base64") from exc
        return EncodedImage(data=body, mime_type=mime_type)
    return EncodedImage(data=base64.b64encode(unquote_to_bytes(body)).decode("ascii"), mime_type=mime_type)


def _mime_from_response(response: requests.Response, url: str) -> str:
    content_type = response.headers.get("Content-Type", "").split(";")[0].strip()
    if content_type.startswith("image/"):
        return content_type
    guessed, _ = mimetypes.guess_type(url)
    return guessed or DEFAULT_MIME_TYPE


def _fetch_remote(url: str, timeout: Optional[float]) -> EncodedImage:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise ImageFetchError(f"Network error fetching image: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.warning("Non-success status fetching image", extra={"status_code": response.status_code})
        raise ImageFetchError(f"Failed to fetch image: HTTP {response.status_code}")
    if not response.content:
        raise ImageFetchError("Image response was empty")

    return EncodedImage(
        data=base64.b64encode(response.content).decode("ascii"),
        mime_type=_mime_from_response(response, url),
    )


def _read_local(path: Path) -> EncodedImage:
    guessed, _ = mimetypes.guess_type(path.name)
    return EncodedImage(
        data=base64.b64encode(path.read_bytes()).decode("ascii"),
        mime_type=guessed or DEFAULT_MIME_TYPE,
    )


@instrument_call("image.load")
def load_image(image_url: str, timeout: Optional[float] = 10.0) -> EncodedImage:
    """Return ``image_url`` as base64.

    Accepts ``data:`` URLs, HTTP(S) URLs and paths to local files.

    Raises:
        InvalidImageURLError: If the reference is none of the supported forms.
        ImageFetchError: For network failures, non-2xx responses or bad payloads.
    """

    if not image_url:
        raise InvalidImageURLError("image reference is empty")
    if image_url.startswith("data:"):
        return _decode_data_url(image_url)

    parsed = urlparse(image_url)
    if parsed.scheme in {"http", "https"}:
        if not parsed.netloc:
            raise InvalidImageURLError(f"Unsupported or invalid URL: {image_url}")
        return _fetch_remote(image_url, timeout)

    path = Path(parsed.path if parsed.scheme == "file" else image_url)
    if parsed.scheme in {"", "file"} and path.is_file():
        return _read_local(path)
    raise InvalidImageURLError(f"Unsupported or invalid image reference: {image_url}")


__all__ = ["EncodedImage", "ImageFetchError", "InvalidImageURLError", "load_image"]
