"""JSON Storage - Persistence for the diet plan, goals and food catalog.

This module handles all file I/O for the application document.
All I/O is contained here; business logic is in the core module.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from ..core.models import ExportBundle


logger = logging.getLogger(__name__)


def _default_data_file() -> Path:
    return Path(os.environ.get("MEALPLAN_DATA_FILE", "~/.mealplan/data.json")).expanduser()


@dataclass
class StorageConfig:
    """Configuration for JSON storage.

    Attributes:
        path: Location of the application document
        indent: JSON indentation (None for compact output)
    """

    path: Path = field(default_factory=_default_data_file)
    indent: int | None = 2


class JsonFileStorage:
    """Whole-document storage of the export bundle in one JSON file.

    Document structure (same as the application export):
        {
            "dailyDietLogs": { "YYYY-MM-DD": { "breakfast": [...], ... } },
            "dietPlan": { "breakfast": [...], ... },
            "nutritionGoals": { calories, protein, carbs, fat },
            "foodDatabase": [ ... ],
            ...workout data carried through unchanged...
        }
    """

    def __init__(self, config: StorageConfig | None = None) -> None:
        """Initialize storage.

        Args:
            config: Storage configuration
        """
        self.config = config or StorageConfig()

    @property
    def path(self) -> Path:
        return self.config.path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ExportBundle | None:
        """Read the stored document.

        A missing file yields an empty default bundle. Any date key present
        in dailyDietLogs is an explicit day, even if all its meals are empty.

        Returns:
            ExportBundle, or None if the document could not be read or is invalid
        """
        if not self.exists():
            logger.info("No stored document at %s, starting empty", self.path)
            return ExportBundle()

        logger.debug("Loading document from %s", self.path)
        try:
            raw = self.path.read_text(encoding="utf-8")
            return ExportBundle.model_validate(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error("Failed to load document %s: %s", self.path, str(e))
            return None

    def save(self, bundle: ExportBundle) -> bool:
        """Write the whole document, replacing the previous one.

        The new content goes to a sibling temp file first and is then moved
        into place, so a failed write leaves the old document intact.

        Args:
            bundle: The document to save

        Returns:
            True if successful
        """
        logger.info(
            "Saving document to %s (%d explicit days)", self.path, len(bundle.daily_diet_logs)
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(bundle.to_document(), ensure_ascii=False, indent=self.config.indent)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save document: %s", str(e))
            return False
