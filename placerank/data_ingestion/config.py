"""
Configuration for the catalog import.
"""

from dataclasses import dataclass
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class IngestionConfig:
    source_path: Path = _PACKAGE_DIR.parent / "Reseñas.json"
    processed_data_dir: Path = _PACKAGE_DIR / "data" / "processed"
    processed_filename: str = "lugares.csv"
    food_type_question: str = "Tipo de comida"

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
