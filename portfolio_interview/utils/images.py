from __future__ import annotations

from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError


class ImageProcessingError(ValueError):
	pass


def scaled_size(width: int, height: int, max_side: int) -> tuple[int, int]:
	"""Scale so the longest side is at most max_side, keeping the aspect ratio."""
	if width >= height:
		if width > max_side:
			return max_side, max(1, round(height * max_side / width))
	elif height > max_side:
		return max(1, round(width * max_side / height)), max_side
	return width, height


def resize_and_compress(data: bytes, max_side: int = 800, quality: int = 60) -> bytes:
	"""Downscale an image and re-encode it as JPEG.

	EXIF orientation is applied first so phone photos keep their rotation.
	Transparent images are flattened onto white.
	"""
	try:
		image = Image.open(BytesIO(data))
		image.load()
	except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
		raise ImageProcessingError(f"Unreadable image: {exc}") from exc

	image = ImageOps.exif_transpose(image)
	if image.mode in ("RGBA", "LA", "P"):
		rgba = image.convert("RGBA")
		background = Image.new("RGB", rgba.size, (255, 255, 255))
		background.paste(rgba, mask=rgba.getchannel("A"))
		image = background
	elif image.mode != "RGB":
		image = image.convert("RGB")

	target = scaled_size(image.width, image.height, max_side)
	if target != image.size:
		image = image.resize(target, Image.LANCZOS)

	out = BytesIO()
	image.save(out, format="JPEG", quality=quality, optimize=True)
	return out.getvalue()


def size_mb(data: bytes) -> float:
	return len(data) / (1024 * 1024)
