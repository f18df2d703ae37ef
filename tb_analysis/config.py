from pathlib import Path
from datetime import datetime

BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = BASE_DIR / "data"
DEFAULT_RAW_CSV = DATA_DIR / "who_sample.csv"
DEFAULT_OUTPUT_DIR = BASE_DIR / "outputs"

def make_output_dir(base: Path) -> Path:
    ts = datetime.now().strftime("%Y%m%d")
    out = base / ts
    out.mkdir(parents=True, exist_ok=True)
    (out / "tables").mkdir(exist_ok=True)
    (out / "figures").mkdir(exist_ok=True)
    (out / "logs").mkdir(exist_ok=True)
    return out
