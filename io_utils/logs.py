import logging
from pathlib import Path


def setup_logging(output_dir: Path, level: int = logging.INFO) -> None:
    """Configure simple file and console logging."""
    output_dir.mkdir(parents=True, exist_ok=True)
    log_path = output_dir / "run.log"
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path, mode="w"),
        ],
        force=True,
    )
