import logging

import pytest
from PIL import Image

from fade.models.image_model import ImageData
from fade.utils.logger import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_logger():
    """Снимает обработчики, установленные `configure_logger` во время теста."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_image():
    """Фабрика однотонных изображений в памяти."""
    def _make(color, size=(4, 3), mode="RGB"):
        return ImageData.from_pil(Image.new(mode, size, color))
    return _make


@pytest.fixture
def write_png(tmp_path):
    """Фабрика однотонных PNG-файлов во временном каталоге."""
    def _write(name, color, size=(4, 3), mode="RGB"):
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return path
    return _write
