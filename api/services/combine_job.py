from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List
from api import settings
from api.services.codec import decode, encode
from api.services.combine_pipeline import SizePolicy, combine, resolve_output_path
from api.services.metadata import extract_metadata, write_metadata_json
from api.services.normalization import Resample
from api.services.previews import generate_preview
from api.services.status_store import write_status

logger = logging.getLogger(__name__)


def run_combine_job(
	job_id: str,
	files_meta: List[Dict[str, Any]],
	output_name: str,
	policy: SizePolicy,
	resample: Resample,
) -> None:
	try:
		# 1) Save both uploads to <input>/<job_id>/ ; prefixes keep equal filenames apart
		write_status(job_id, {"job_id": job_id, "status": "saving", "step": "Save Images"})
		in_dir = Path(settings.INPUT_DIR) / job_id
		in_dir.mkdir(parents=True, exist_ok=True)
		saved = []
		for label, fm in zip(("a", "b"), files_meta):
			p = in_dir / f"{label}_{Path(fm['filename']).name}"
			with p.open("wb") as f:
				f.write(fm["data"])
			saved.append(p)

		# 2) Source metadata
		write_status(job_id, {"job_id": job_id, "status": "metadata", "step": "Extract Metadata"})
		metadata = extract_metadata(saved)
		metadata_path = write_metadata_json(metadata, in_dir / "metadata.json")

		# 3) Decode, normalize, interleave, encode
		write_status(job_id, {
			"job_id": job_id,
			"status": "combining",
			"step": "Combine Images",
			"metadata": metadata_path,
		})
		a = decode(saved[0])
		b = decode(saved[1])
		result = combine(a, b, policy=policy, box=settings.FIXED_BOX, resample=resample)
		out_path = resolve_output_path(output_name, Path(settings.RESULTS_DIR) / job_id)
		encode(result.image, out_path)
		summary = {
			"job_id": job_id,
			"metadata": metadata_path,
			"source_sizes": [list(a.size), list(b.size)],
			"common_size": list(result.common_size),
			"policy": result.policy.value,
			"resample": Resample(resample).value,
			"output": str(out_path),
		}

		# 4) Preview
		write_status(job_id, {**summary, "status": "previewing", "step": "Generate Preview"})
		preview = generate_preview(out_path, Path(settings.PREVIEW_DIR) / job_id, settings.PREVIEW_MAX_WIDTH)

		# 5) Complete
		write_status(job_id, {**summary, "status": "completed", "step": "Done", "preview": preview})
		logger.info("Job %s completed: %s", job_id, out_path)
	except Exception as e:
		logger.exception("Job %s failed", job_id)
		write_status(job_id, {"job_id": job_id, "status": "error", "error": str(e)})
