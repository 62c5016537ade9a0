import pytest
from PIL import Image

from fade.models.errors import ConfigurationError, InputError
from fade.models.image_model import ImageData
from fade.services.validation_service import ValidationResult, ValidationService


@pytest.fixture
def validator():
    return ValidationService()


def test_result_success_and_failure():
    assert ValidationResult.success().ok
    failure = ValidationResult.failure(ConfigurationError("bad"))
    assert not failure.ok
    with pytest.raises(ConfigurationError, match="bad"):
        failure.raise_for_error()


def test_matching_images_pass(validator, make_image):
    result = validator.validate_images([make_image((0, 0, 0), size=(10, 10)), make_image((1, 1, 1), size=(10, 10))])
    assert result.ok
    result.raise_for_error()


def test_dimension_mismatch_is_rejected(validator, make_image):
    result = validator.validate_images([make_image((0, 0, 0), size=(10, 10)), make_image((0, 0, 0), size=(10, 11))])

    assert isinstance(result.error, ConfigurationError)
    assert "10 x 11" in str(result.error)


def test_single_image_is_rejected(validator, make_image):
    result = validator.validate_images([make_image((0, 0, 0))])
    assert isinstance(result.error, ConfigurationError)


def test_mixed_modes_with_same_size_pass(validator, make_image):
    result = validator.validate_images([make_image((0, 0, 0)), make_image((0, 0, 0, 0), mode="RGBA")])
    assert result.ok


@pytest.mark.parametrize("size", [(65536, 1), (1, 65536)])
def test_oversized_image_is_rejected(validator, size):
    big = ImageData.from_pil(Image.new("L", size))
    other = ImageData.from_pil(Image.new("L", size))

    assert isinstance(validator.validate_limits([big]).error, ConfigurationError)
    assert isinstance(validator.validate_images([big, other]).error, ConfigurationError)


def test_limit_accepts_maximum_dimension(validator):
    edge = ImageData.from_pil(Image.new("L", (65535, 1)))
    assert validator.validate_limits([edge]).ok


def test_missing_path_is_rejected(validator, tmp_path):
    result = validator.validate_paths([tmp_path / "nope.png"])
    assert isinstance(result.error, InputError)


def test_directory_path_is_rejected(validator, tmp_path):
    result = validator.validate_paths([tmp_path])
    assert isinstance(result.error, InputError)


def test_empty_path_list_is_rejected(validator):
    assert isinstance(validator.validate_paths([]).error, ConfigurationError)


def test_single_path_is_rejected(validator, write_png):
    result = validator.validate_paths([write_png("a.png", (0, 0, 0))])
    assert isinstance(result.error, ConfigurationError)


def test_existing_files_pass(validator, write_png):
    assert validator.validate_paths([write_png("a.png", (0, 0, 0)), write_png("b.png", (9, 9, 9))]).ok
