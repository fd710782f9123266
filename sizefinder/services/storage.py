import json
import os
from typing import Optional

from ..config import settings
from ..schemas.size import UserMeasurements


STORAGE_KEY = "measurements"


class MeasurementStore:
    """Keeps the last measurements a shopper entered, as one JSON record under a fixed key."""

    def __init__(self, storage_dir: str | None = None) -> None:
        self.storage_dir = storage_dir or settings.storage_dir

    @property
    def path(self) -> str:
        return os.path.join(self.storage_dir, f"{STORAGE_KEY}.json")

    def load(self) -> Optional[UserMeasurements]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return UserMeasurements.model_validate(data.get(STORAGE_KEY) or {})

    def save(self, measurements: UserMeasurements) -> None:
        os.makedirs(self.storage_dir, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({STORAGE_KEY: measurements.model_dump()}, f)
        os.replace(tmp_path, self.path)
