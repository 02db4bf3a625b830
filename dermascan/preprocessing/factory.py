from pathlib import Path

from dermascan.config.settings import Settings
from dermascan.preprocessing.base import BaseImagePreprocessor
from dermascan.preprocessing.pillow_adapter import PillowImagePreprocessor


class ImagePreprocessorFactory:
    """Creates the configured image preprocessor."""

    ADAPTERS: dict[str, type[PillowImagePreprocessor]] = {
        "pillow": PillowImagePreprocessor,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseImagePreprocessor:
        engine = settings.image_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown image engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        tmp_dir = Path(settings.image_tmp_dir) if settings.image_tmp_dir else None
        return adapter_cls(quality=settings.image_quality, tmp_dir=tmp_dir)
