"""投稿画像のJPEGエンコード"""
import io
from typing import Union

from PIL import Image, UnidentifiedImageError

from ....shared.exceptions.errors import ImageEncodingError

ImageInput = Union[bytes, Image.Image]


def encode_jpeg(image: ImageInput, quality: int = 80) -> bytes:
    """
    画像をJPEGバイト列に変換する

    Args:
        image: 画像のバイト列（任意の形式）またはPILのImage
        quality: JPEG品質（1〜95）

    Returns:
        bytes: JPEGデータ

    Raises:
        ImageEncodingError: 画像として読み込めない、またはエンコードに失敗した場合
    """
    try:
        if isinstance(image, (bytes, bytearray)):
            if not image:
                raise ImageEncodingError("Image data is empty")
            image = Image.open(io.BytesIO(image))
            image.load()
        elif not isinstance(image, Image.Image):
            raise ImageEncodingError(f"Unsupported image type: {type(image).__name__}")

        # JPEGはアルファチャンネル・パレットを扱えない
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality)
        return buffer.getvalue()

    except ImageEncodingError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageEncodingError(f"Failed to encode image as JPEG: {e}") from e
