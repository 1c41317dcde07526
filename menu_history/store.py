"""
Persistent storage for the meal history
One JSON document per storage key
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from common.errors import StorageError
from menu_history.models import MealDataset


def key_to_filename(key: str) -> str:
    """Turn a storage key like "daily:meals:v2" into a safe file name"""
    return re.sub(r'[^\w.-]', '_', key) + '.json'


class MealStore:
    """
    Reads and writes the MealDataset stored under a fixed key

    Writes go to a temporary file that then replaces the target, so a
    reader sees either the previous document or the new one.
    """

    def __init__(self, data_dir: Union[str, Path], key: str):
        self.data_dir = Path(data_dir)
        self.key = key
        self.path = self.data_dir / key_to_filename(key)

    def load(self) -> Optional[MealDataset]:
        """
        Load the stored dataset

        Returns:
            MealDataset, or None if nothing has been stored yet

        Raises:
            StorageError: If the file cannot be read or is not a valid dataset
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return MealDataset.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            raise StorageError(f"Could not load {self.key} from {self.path}: {e}") from e

    def save(self, dataset: MealDataset):
        """
        Replace the stored dataset

        Raises:
            StorageError: If the file cannot be written
        """
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix='.tmp-', suffix='.json')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(dataset.to_dict(), f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not save {self.key} to {self.path}: {e}") from e
