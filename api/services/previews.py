from __future__ import annotations

from pathlib import Path

from PIL import Image


def generate_preview(image_path: Path, preview_dir: Path, max_width: int = 512) -> str:
	preview_dir.mkdir(parents=True, exist_ok=True)
	with Image.open(image_path) as img:
		if img.mode != "RGB":
			img = img.convert("RGB")
		if img.width > max_width:
			r = max_width / float(img.width)
			img = img.resize((max_width, max(1, int(img.height * r))), Image.Resampling.LANCZOS)
		out_path = preview_dir / (image_path.stem + ".jpg")
		img.save(out_path, format="JPEG", quality=85, optimize=True)
	return str(out_path)
