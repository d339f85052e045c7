import os
from pathlib import Path

from dotenv import load_dotenv

from api.services.combine_pipeline import SizePolicy
from api.services.image_utils import parse_size
from api.services.normalization import Resample

# Load environment variables
load_dotenv()

OUTPUT_DIR = Path(os.getenv("COMBINER_OUTPUT_DIR", "images"))
INPUT_DIR = Path(os.getenv("COMBINER_INPUT_DIR", "api/input"))
RESULTS_DIR = Path(os.getenv("COMBINER_RESULTS_DIR", "api/combined"))
PREVIEW_DIR = Path(os.getenv("COMBINER_PREVIEW_DIR", "api/previews"))
JOBS_DIR = Path(os.getenv("COMBINER_JOBS_DIR", "jobs"))

FIXED_BOX = parse_size(os.getenv("COMBINER_FIXED_BOX", "400x300"))
SIZE_POLICY = SizePolicy(os.getenv("COMBINER_SIZE_POLICY", "raw_minimum"))
RESAMPLE = Resample(os.getenv("COMBINER_RESAMPLE", "bilinear"))
PREVIEW_MAX_WIDTH = int(os.getenv("COMBINER_PREVIEW_MAX_WIDTH", "512"))

CORS_ORIGINS = [o.strip() for o in os.getenv("COMBINER_CORS_ORIGINS", "*").split(",") if o.strip()]
API_HOST = os.getenv("COMBINER_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("COMBINER_API_PORT", "8000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'
