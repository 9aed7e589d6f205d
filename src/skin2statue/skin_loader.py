import base64
import io
import json
import logging
import os
import re

import numpy as np
import requests
from PIL import Image

from .errors import ErrorCode, NetworkError, SkinFormatError, SkinLoadError
from .geometry.voxelizer import BASE_TEXTURE_SIZE, detect_slim

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,16}$")
REQUEST_TIMEOUT = 10


class SkinLoader:
    MOJANG_PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{}"
    MOJANG_SESSION_URL = "https://sessionserver.mojang.com/session/minecraft/profile/{}"

    @staticmethod
    def load_skin(source: str) -> Image.Image:
        """
        Loads a skin from a file path, URL, or Minecraft username.
        The result is always RGBA and square.
        """
        if os.path.exists(source):
            return SkinLoader._load_from_file(source)
        elif source.startswith("http://") or source.startswith("https://"):
            return SkinLoader._load_from_url(source)
        elif USERNAME_PATTERN.match(source):
            return SkinLoader._load_from_username(source)
        else:
            raise SkinLoadError(f"Invalid skin source: {source}", ErrorCode.SKIN_NOT_FOUND)

    @staticmethod
    def _load_from_file(path: str) -> Image.Image:
        try:
            img = Image.open(path)
            img.load()
        except OSError as e:
            raise SkinLoadError(f"Failed to load skin from file: {e}") from e
        return SkinLoader.validate_and_process(img)

    @staticmethod
    def _fetch(url: str) -> requests.Response:
        try:
            response = requests.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.Timeout as e:
            raise NetworkError(f"Request timed out: {url}", ErrorCode.NETWORK_TIMEOUT) from e
        except requests.RequestException as e:
            raise NetworkError(f"Request failed for {url}: {e}") from e
        return response

    @staticmethod
    def _load_from_url(url: str) -> Image.Image:
        response = SkinLoader._fetch(url)
        try:
            img = Image.open(io.BytesIO(response.content))
            img.load()
        except OSError as e:
            raise SkinLoadError(f"Failed to load skin from URL: {e}") from e
        return SkinLoader.validate_and_process(img)

    @staticmethod
    def _load_from_username(username: str) -> Image.Image:
        # 1. Get UUID
        data = SkinLoader._fetch(SkinLoader.MOJANG_PROFILE_URL.format(username)).json()
        uuid = data.get("id")
        if not uuid:
            raise SkinLoadError(f"User not found: {username}", ErrorCode.SKIN_NOT_FOUND)

        # 2. Get profile, which carries the skin URL in a base64 property
        data = SkinLoader._fetch(SkinLoader.MOJANG_SESSION_URL.format(uuid)).json()
        texture_data = None
        for prop in data.get("properties", []):
            if prop.get("name") == "textures":
                texture_data = prop.get("value")
                break
        if not texture_data:
            raise SkinLoadError(f"No texture data found for '{username}'", ErrorCode.SKIN_API_FAILED)

        try:
            texture_json = json.loads(base64.b64decode(texture_data).decode("utf-8"))
        except ValueError as e:
            raise SkinLoadError(f"Malformed texture data for '{username}': {e}", ErrorCode.SKIN_API_FAILED) from e

        skin_url = texture_json.get("textures", {}).get("SKIN", {}).get("url")
        if not skin_url:
            raise SkinLoadError(f"No skin URL found for '{username}'", ErrorCode.SKIN_API_FAILED)

        logger.debug("Resolved skin for %s: %s", username, skin_url)
        return SkinLoader._load_from_url(skin_url)

    @staticmethod
    def validate_and_process(img: Image.Image) -> Image.Image:
        """
        Converts to RGBA and checks dimensions.
        Legacy 64x32 skins are upgraded to 64x64.
        """
        if img.mode != "RGBA":
            img = img.convert("RGBA")

        width, height = img.size

        if width == height and width >= BASE_TEXTURE_SIZE and width % BASE_TEXTURE_SIZE == 0:
            return img
        elif width == BASE_TEXTURE_SIZE and height == BASE_TEXTURE_SIZE // 2:
            logger.info("Detected 64x32 skin, converting to 64x64 (legacy format)")
            return SkinLoader._upgrade_legacy(img)
        else:
            raise SkinFormatError(
                f"Unsupported skin dimensions: {width}x{height}. Must be 64x32 or a square multiple of 64."
            )

    @staticmethod
    def _upgrade_legacy(img: Image.Image) -> Image.Image:
        new_img = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
        new_img.paste(img, (0, 0))

        # Legacy skins only have right limbs; mirror them onto the left ones
        right_leg = img.crop((0, 16, 16, 32))
        new_img.paste(right_leg.transpose(Image.Transpose.FLIP_LEFT_RIGHT), (16, 48))

        right_arm = img.crop((40, 16, 56, 32))
        new_img.paste(right_arm.transpose(Image.Transpose.FLIP_LEFT_RIGHT), (32, 48))

        # Second layer areas below y=32 did not exist and stay transparent
        return new_img

    @staticmethod
    def detect_model(img: Image.Image) -> str:
        """Returns "slim" (Alex arms) or "classic" (Steve arms)."""
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return "slim" if detect_slim(np.array(img)) else "classic"
