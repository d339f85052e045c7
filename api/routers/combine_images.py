from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional
import uuid

from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from api import settings
from api.services.combine_job import run_combine_job
from api.services.combine_pipeline import SizePolicy, validate_output_name
from api.services.normalization import Resample
from api.services.status_store import read_status, write_status


router = APIRouter(prefix="/combine", tags=["combine"])


def _slugify(text: str) -> str:
	return "".join(ch if (ch.isalnum() or ch in ("-", "_")) else "-" for ch in text).strip("-_").lower()


@router.post("/upload", summary="Upload two images and start background interleaving")
async def upload(
	background_tasks: BackgroundTasks,
	image_a: UploadFile = File(...),
	image_b: UploadFile = File(...),
	output_name: str = Form("combined.png"),
	policy: Optional[SizePolicy] = Form(None),
	resample: Optional[Resample] = Form(None),
):
	policy = policy or settings.SIZE_POLICY
	resample = resample or settings.RESAMPLE
	try:
		name = validate_output_name(output_name)
	except ValueError as e:
		raise HTTPException(status_code=422, detail=str(e))
	files_meta = []
	for f, fallback in ((image_a, "image_a.png"), (image_b, "image_b.png")):
		data = await f.read()
		files_meta.append({"filename": f.filename or fallback, "data": data})
	# Human-readable job_id: "<output_stem>_<ddmmyyyy>_<short uuid>"
	stem = _slugify(Path(name).stem) or "job"
	date_str = datetime.now().strftime("%d%m%Y")
	job_id = f"{stem}_{date_str}_{uuid.uuid4().hex[:8]}"
	write_status(job_id, {"job_id": job_id, "status": "queued", "step": "Queued"})
	background_tasks.add_task(run_combine_job, job_id, files_meta, name, policy, resample)
	return {
		"job_id": job_id,
		"status": "queued",
		"policy": policy.value,
		"resample": resample.value,
		"filenames": [m["filename"] for m in files_meta],
		"status_endpoint": f"/combine/status/{job_id}",
		"result_endpoint": f"/combine/result/{job_id}",
	}


@router.get("/status/{job_id}", summary="Get job status")
def status(job_id: str):
	return read_status(job_id)


@router.get("/result/{job_id}", summary="Get job results")
def result(job_id: str):
	data = read_status(job_id)
	if data.get("status") != "completed":
		return {"job_id": job_id, "status": data.get("status"), "message": "not completed yet"}
	return {
		"job_id": job_id,
		"metadata": data.get("metadata"),
		"source_sizes": data.get("source_sizes", []),
		"common_size": data.get("common_size"),
		"policy": data.get("policy"),
		"resample": data.get("resample"),
		"output": data.get("output"),
		"preview": data.get("preview"),
		"image_endpoint": f"/combine/result/{job_id}/image",
	}


@router.get("/result/{job_id}/image", summary="Download the combined PNG")
def result_image(job_id: str):
	data = read_status(job_id)
	output = data.get("output")
	if data.get("status") != "completed" or not output or not Path(output).is_file():
		raise HTTPException(status_code=404, detail="combined image not available")
	return FileResponse(output, media_type="image/png", filename=Path(output).name)
