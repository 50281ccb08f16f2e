"""JSON-file history of generated images, grouped by generator session.

Layout of ``imageHistory.json``::

    {"<generatorId>": {"images": [{"id": 1, "filename": ..., ...}, ...]}, ...}

Every operation re-reads the file and writes it back under ``file_lock`` so
concurrent generation requests (and processes) never lose each other's
updates.
"""

import os
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter

from xibo_server.models.image import GeneratorHistory, ImageRecord
from xibo_server.utils.config import get_settings
from xibo_server.utils.file_lock import file_lock

History = dict[str, GeneratorHistory]
_HISTORY_ADAPTER = TypeAdapter(History)


class GeneratorNotFoundError(KeyError):
    def __init__(self, generator_id: str):
        super().__init__(generator_id)
        self.generator_id = generator_id

    def __str__(self) -> str:
        return f"Generator {self.generator_id} not found"


class ImageHistoryStore:
    def __init__(self, path: Path, image_dir: Path):
        self.path = path
        self.image_dir = image_dir

    def _load(self) -> History:
        if not self.path.exists():
            return {}
        return _HISTORY_ADAPTER.validate_json(self.path.read_bytes())

    def _save(self, history: History) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".json.tmp")
        tmp_path.write_bytes(_HISTORY_ADAPTER.dump_json(history, indent=2))
        os.replace(tmp_path, self.path)

    def _delete_files(self, images: list[ImageRecord]) -> list[str]:
        removed: list[str] = []
        for image in images:
            image_path = self.image_dir / image.filename
            try:
                image_path.unlink(missing_ok=True)
                removed.append(image.filename)
            except OSError as e:
                logger.warning(f"Failed to delete image file {image_path}: {e}")
        return removed

    def start_new_generation(self, generator_id: str) -> str:
        """Reset ``generator_id``, deleting the image files it produced before."""
        with file_lock(self.path):
            history = self._load()
            previous = history.get(generator_id)
            if previous is not None:
                logger.info(f"Cleaning up previous images for generator {generator_id}")
                self._delete_files(previous.images)
            history[generator_id] = GeneratorHistory()
            self._save(history)
        return generator_id

    def add_image(
        self,
        generator_id: str,
        *,
        filename: str,
        prompt: str,
        aspect_ratio: str,
        width: int,
        height: int,
    ) -> ImageRecord:
        with file_lock(self.path):
            history = self._load()
            generator = history.setdefault(generator_id, GeneratorHistory())
            record = ImageRecord(
                id=len(generator.images) + 1,
                filename=filename,
                prompt=prompt,
                aspectRatio=aspect_ratio,
                width=width,
                height=height,
                createdAt=datetime.now(UTC).isoformat(),
            )
            generator.images.append(record)
            self._save(history)
        logger.info(f"Recorded image {record.id} for generator {generator_id}")
        return record

    def get_history(self, generator_id: str) -> GeneratorHistory:
        with file_lock(self.path):
            history = self._load()
        if generator_id not in history:
            raise GeneratorNotFoundError(generator_id)
        return history[generator_id]

    def get_all_history(self) -> History:
        with file_lock(self.path):
            return self._load()

    def end_generation(self, generator_id: str, is_success: bool = False) -> list[str]:
        """Close a session. On success only ``generator_id``'s images survive.

        Sessions that never produced an image are dropped either way.

        Returns the file names that were deleted.
        """
        with file_lock(self.path):
            history = self._load()
            if generator_id not in history:
                raise GeneratorNotFoundError(generator_id)
            removed: list[str] = []
            if is_success:
                for other_id, generator in history.items():
                    if other_id != generator_id:
                        removed.extend(self._delete_files(generator.images))
                history = {generator_id: history[generator_id]}
            self._save({gid: gen for gid, gen in history.items() if gen.images})
        return removed


def get_image_history_store() -> ImageHistoryStore:
    settings = get_settings()
    return ImageHistoryStore(settings.image_history_path, settings.generated_dir)


def dump_history(history: History) -> dict:
    return _HISTORY_ADAPTER.dump_python(history, mode="json")
