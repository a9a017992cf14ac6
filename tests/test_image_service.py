"""Unit tests for image services and image loading."""

import io
import unittest
from unittest.mock import Mock
import sys
import os

import numpy as np
from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint.exceptions import ConfigurationError, ImageServiceError
from catpoint.models.config import SecurityConfig
from catpoint.services.image_service import (
    FakeImageService,
    LabelImageService,
    create_image_service
)
from catpoint.utils import load_image


class TestFakeImageService(unittest.TestCase):
    """Test cases for FakeImageService."""

    def setUp(self):
        """Set up test fixtures."""
        self.image = np.zeros((4, 4, 3), dtype=np.uint8)

    def test_returns_bool(self):
        service = FakeImageService()
        self.assertIsInstance(service.image_contains_cat(self.image, 50.0), bool)

    def test_seeded_results_repeat(self):
        """Two services with the same seed give the same answers."""
        first = FakeImageService(seed=42)
        second = FakeImageService(seed=42)

        results_first = [first.image_contains_cat(self.image, 50.0) for _ in range(20)]
        results_second = [second.image_contains_cat(self.image, 50.0) for _ in range(20)]

        self.assertEqual(results_first, results_second)

    def test_both_outcomes_occur(self):
        service = FakeImageService(seed=7)
        results = {service.image_contains_cat(self.image, 50.0) for _ in range(100)}
        self.assertEqual(results, {True, False})


class TestLabelImageService(unittest.TestCase):
    """Test cases for LabelImageService."""

    def setUp(self):
        """Set up test fixtures."""
        self.image = np.zeros((4, 4, 3), dtype=np.uint8)
        self.detector = Mock()
        self.service = LabelImageService(self.detector)

    def test_cat_label_above_threshold(self):
        self.detector.return_value = [("Furniture", 90.0), ("Cat", 75.5)]
        self.assertTrue(self.service.image_contains_cat(self.image, 50.0))
        self.detector.assert_called_once_with(self.image)

    def test_cat_label_at_threshold(self):
        self.detector.return_value = [("cat", 50.0)]
        self.assertTrue(self.service.image_contains_cat(self.image, 50.0))

    def test_cat_label_below_threshold(self):
        self.detector.return_value = [("Cat", 49.9)]
        self.assertFalse(self.service.image_contains_cat(self.image, 50.0))

    def test_label_containing_cat(self):
        """Labels such as "Wildcat" count as cats."""
        self.detector.return_value = [("Wildcat", 80.0)]
        self.assertTrue(self.service.image_contains_cat(self.image, 50.0))

    def test_no_cat_labels(self):
        self.detector.return_value = [("Dog", 99.0), ("Person", 88.0)]
        self.assertFalse(self.service.image_contains_cat(self.image, 50.0))

    def test_no_labels(self):
        self.detector.return_value = []
        self.assertFalse(self.service.image_contains_cat(self.image, 50.0))

    def test_detector_failure_raises_image_service_error(self):
        self.detector.side_effect = RuntimeError("model missing")
        with self.assertRaises(ImageServiceError):
            self.service.image_contains_cat(self.image, 50.0)


class TestCreateImageService(unittest.TestCase):
    """Test cases for the image service factory."""

    def test_fake_service(self):
        service = create_image_service(SecurityConfig(image_service_type="fake"))
        self.assertIsInstance(service, FakeImageService)

    def test_label_detector_takes_precedence(self):
        service = create_image_service(SecurityConfig(), label_detector=lambda image: [])
        self.assertIsInstance(service, LabelImageService)

    def test_unknown_service_type(self):
        with self.assertRaises(ConfigurationError):
            create_image_service(SecurityConfig(image_service_type="cloud"))


class TestLoadImage(unittest.TestCase):
    """Test cases for decoding uploaded images."""

    def _png_bytes(self, mode='RGB', size=(8, 6)):
        buffer = io.BytesIO()
        Image.new(mode, size, color=0).save(buffer, format='PNG')
        return buffer.getvalue()

    def test_load_from_bytes(self):
        image = load_image(self._png_bytes())
        self.assertIsInstance(image, np.ndarray)
        self.assertEqual(image.shape, (6, 8, 3))

    def test_grayscale_converted_to_rgb(self):
        image = load_image(self._png_bytes(mode='L'))
        self.assertEqual(image.shape, (6, 8, 3))

    def test_invalid_bytes(self):
        with self.assertRaises(ValueError):
            load_image(b"not an image")


if __name__ == '__main__':
    unittest.main()
