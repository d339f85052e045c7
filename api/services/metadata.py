from __future__ import annotations

import json
import logging
import struct
from pathlib import Path
from typing import Any, Dict, List, Optional

from PIL import Image
import piexif

from api.services.image_utils import apply_exif_orientation, read_orientation

logger = logging.getLogger(__name__)


def _bytes_to_str(v: Any) -> Optional[str]:
	if v is None:
		return None
	if isinstance(v, bytes):
		return v.decode("utf-8", errors="ignore").strip("\x00 ") or None
	return str(v)


def _exif_fields(p: Path) -> Dict[str, Any]:
	"""Capture time and orientation from EXIF; empty for formats piexif cannot read."""
	try:
		ex = piexif.load(str(p))
	except (ValueError, struct.error) as e:
		logger.debug("No EXIF for %s: %s", p.name, e)
		return {}
	exif = ex.get("Exif", {})
	zeroth = ex.get("0th", {})
	dt = exif.get(piexif.ExifIFD.DateTimeOriginal) or zeroth.get(piexif.ImageIFD.DateTime)
	return {
		"orientation": zeroth.get(piexif.ImageIFD.Orientation),
		"datetime_original": _bytes_to_str(dt),
	}


def extract_metadata(saved_paths: List[Path]) -> Dict[str, Any]:
	records: List[Dict[str, Any]] = []
	for p in saved_paths:
		p = Path(p)
		with Image.open(p) as img:
			exif = img.getexif()
			fmt = img.format
			oriented = apply_exif_orientation(img, exif)
			info: Dict[str, Any] = {
				"filename": p.name,
				"width": oriented.width,
				"height": oriented.height,
				"mode": img.mode,
				"format": fmt,
				"orientation": read_orientation(exif),
				"datetime_original": None,
			}
		for key, value in _exif_fields(p).items():
			if value is not None:
				info[key] = value
		records.append(info)
	return {"images": records}


def write_metadata_json(metadata: Dict[str, Any], out_path: Path) -> str:
	out_path.parent.mkdir(parents=True, exist_ok=True)
	with out_path.open("w", encoding="utf-8") as f:
		json.dump(metadata, f, indent=2)
	return str(out_path)
