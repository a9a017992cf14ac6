"""Image service implementations that decide whether a camera image shows a cat."""

import random
from typing import Callable, Iterable, Optional, Tuple

from ..config.defaults import SYSTEM_CONSTANTS
from ..exceptions import ConfigurationError, ImageServiceError
from ..models.config import SecurityConfig
from .interfaces import ImageServiceInterface, NDArray
from ..logging_config import get_logger

logger = get_logger("image_service")

LabelDetector = Callable[[NDArray], Iterable[Tuple[str, float]]]


class FakeImageService(ImageServiceInterface):
    """Guesses whether an image displays a cat."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: NDArray, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5


class LabelImageService(ImageServiceInterface):
    """Adapts a label detector to the cat predicate.

    The detector returns ``(label, confidence)`` pairs for an image, with
    confidence in percent. The image contains a cat when any label
    mentioning "cat" reaches the requested threshold.
    """

    def __init__(self, label_detector: LabelDetector,
                 cat_label: str = SYSTEM_CONSTANTS["CAT_LABEL"]):
        self.label_detector = label_detector
        self.cat_label = cat_label.lower()

    def image_contains_cat(self, image: NDArray, confidence_threshold: float) -> bool:
        try:
            labels = list(self.label_detector(image))
        except Exception as e:
            logger.error(f"Label detection failed: {e}")
            raise ImageServiceError(f"Label detection failed: {e}") from e

        for label, confidence in labels:
            if self.cat_label in label.lower() and confidence >= confidence_threshold:
                logger.debug(f"Matched label {label!r} at {confidence:.1f}%")
                return True
        return False


def create_image_service(config: SecurityConfig,
                         label_detector: Optional[LabelDetector] = None) -> ImageServiceInterface:
    """Build the image service selected by the configuration.

    A label detector, when given, takes precedence over the configured type.
    """
    if label_detector is not None:
        return LabelImageService(label_detector)

    if config.image_service_type == "fake":
        logger.warning("Using fake image service - cat detection results are random")
        return FakeImageService(seed=config.image_service_seed)

    raise ConfigurationError(f"Unknown image service type: {config.image_service_type}")
