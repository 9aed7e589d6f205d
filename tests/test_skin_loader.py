"""
Tests for the skin loader. Network access is mocked.
"""

import base64
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import numpy as np
import pytest
import requests
from PIL import Image

from skin2statue.errors import ErrorCode, NetworkError, SkinFormatError, SkinLoadError
from skin2statue.skin_loader import SkinLoader

from skins import slim_skin, uniform_skin


def png_bytes(img):
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def fake_response(content=b"", payload=None):
    response = mock.Mock()
    response.content = content
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestValidation(unittest.TestCase):

    def test_rgba_conversion(self):
        img = Image.new("RGB", (64, 64), (10, 20, 30))
        out = SkinLoader.validate_and_process(img)
        assert out.mode == "RGBA"
        assert out.getpixel((0, 0)) == (10, 20, 30, 255)

    def test_hd_accepted(self):
        img = Image.new("RGBA", (128, 128))
        assert SkinLoader.validate_and_process(img).size == (128, 128)

    def test_legacy_upgrade(self):
        img = Image.new("RGBA", (64, 32), (0, 0, 0, 0))
        img.putpixel((0, 20), (255, 0, 0, 255))   # right leg, left edge
        img.putpixel((40, 20), (0, 255, 0, 255))  # right arm, left edge
        out = SkinLoader.validate_and_process(img)

        assert out.size == (64, 64)
        # mirrored onto the left limbs
        assert out.getpixel((31, 52)) == (255, 0, 0, 255)
        assert out.getpixel((47, 52)) == (0, 255, 0, 255)

    def test_unsupported_size(self):
        with pytest.raises(SkinFormatError) as info:
            SkinLoader.validate_and_process(Image.new("RGBA", (50, 50)))
        assert info.value.error_code == ErrorCode.SKIN_INVALID_FORMAT

    def test_detect_model(self):
        assert SkinLoader.detect_model(Image.fromarray(slim_skin())) == "slim"
        assert SkinLoader.detect_model(Image.fromarray(uniform_skin())) == "classic"


class TestLoading(unittest.TestCase):

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "steve.png"
            Image.fromarray(uniform_skin()).save(path)
            img = SkinLoader.load_skin(str(path))
        assert img.size == (64, 64)
        assert np.array(img)[0, 0].tolist() == [200, 55, 55, 255]

    def test_unreadable_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.png"
            path.write_bytes(b"not a png")
            with pytest.raises(SkinLoadError):
                SkinLoader.load_skin(str(path))

    def test_invalid_source(self):
        with pytest.raises(SkinLoadError) as info:
            SkinLoader.load_skin("not a valid source!")
        assert info.value.error_code == ErrorCode.SKIN_NOT_FOUND

    def test_load_from_url(self):
        content = png_bytes(Image.new("RGBA", (64, 64), (1, 2, 3, 255)))
        with mock.patch("skin2statue.skin_loader.requests.get", return_value=fake_response(content)) as get:
            img = SkinLoader.load_skin("https://example.com/skin.png")
        get.assert_called_once()
        assert img.getpixel((5, 5)) == (1, 2, 3, 255)

    def test_network_failure(self):
        error = requests.ConnectionError("offline")
        with mock.patch("skin2statue.skin_loader.requests.get", side_effect=error):
            with pytest.raises(NetworkError) as info:
                SkinLoader.load_skin("https://example.com/skin.png")
        assert info.value.error_code == ErrorCode.NETWORK_CONNECTION_FAILED

    def test_timeout(self):
        with mock.patch("skin2statue.skin_loader.requests.get", side_effect=requests.Timeout()):
            with pytest.raises(NetworkError) as info:
                SkinLoader.load_skin("https://example.com/skin.png")
        assert info.value.error_code == ErrorCode.NETWORK_TIMEOUT

    def test_load_from_username(self):
        textures = {"textures": {"SKIN": {"url": "https://textures.example.com/abc"}}}
        encoded = base64.b64encode(json.dumps(textures).encode("utf-8")).decode("ascii")
        responses = [
            fake_response(payload={"id": "uuid-1", "name": "Steve"}),
            fake_response(payload={"properties": [{"name": "textures", "value": encoded}]}),
            fake_response(png_bytes(Image.new("RGBA", (64, 64), (9, 9, 9, 255)))),
        ]
        with mock.patch("skin2statue.skin_loader.requests.get", side_effect=responses) as get:
            img = SkinLoader.load_skin("Steve")

        urls = [call.args[0] for call in get.call_args_list]
        assert urls[0].endswith("/Steve")
        assert urls[1].endswith("/uuid-1")
        assert urls[2] == "https://textures.example.com/abc"
        assert img.getpixel((0, 0)) == (9, 9, 9, 255)

    def test_unknown_username(self):
        with mock.patch("skin2statue.skin_loader.requests.get", return_value=fake_response(payload={})):
            with pytest.raises(SkinLoadError) as info:
                SkinLoader.load_skin("Nobody_123")
        assert info.value.error_code == ErrorCode.SKIN_NOT_FOUND
