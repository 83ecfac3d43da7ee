"""
Tests for ConfigService
"""

import pytest

from services.impl.config_service import ConfigService
from services.pipeline_orchestrator import DEFAULT_CONFIG_PATH


class TestConfigService:
    """Loading and reading configuration"""

    def test_bundled_config_defaults(self):
        config = ConfigService(DEFAULT_CONFIG_PATH)

        assert config.getQrBackend() == "zxing"
        assert config.getQrUpscaleTargetSize() == 800
        assert config.getQrSimilarityThreshold() == 50
        assert config.getQrGridSize() == 4
        assert config.getQrTargetCodeCount() == 2
        assert config.getOcrBackend() == "tesseract"
        assert config.getOcrContrastAmount() == 0.3
        assert config.getOcrOrientations() == [0]
        assert config.getMaxFileSizeMb() == 10
        assert ".heic" in config.getSupportedFormats()
        assert config.isDebugEnabled() is False

    def test_dot_notation(self, configFile):
        config = ConfigService(configFile({"s1_qr_scan": {"gridSize": 3}}))

        assert config.get("s1_qr_scan.gridSize") == 3
        assert config.get("s1_qr_scan.missing", "fallback") == "fallback"
        assert config.get("s1_qr_scan.gridSize.deeper", 7) == 7

    def test_service_section(self, configFile):
        config = ConfigService(configFile({"s1_qr_scan": {"gridSize": 3}}))

        assert config.getServiceConfig("s1_qr_scan")["gridSize"] == 3
        assert config.getServiceConfig("no_such_section") == {}

    def test_false_values_are_not_defaults(self, configFile):
        config = ConfigService(configFile({"s2_ocr": {"enabled": False}}))
        assert config.isOcrEnabled() is False

    def test_orientations_when_enabled(self, configFile):
        config = ConfigService(configFile({"s2_ocr": {"tryOrientations": True}}))
        assert config.getOcrOrientations() == [0, 90, 180, 270]

    def test_orientations_not_multiple_of_90_dropped(self, configFile):
        config = ConfigService(configFile({
            "s2_ocr": {"tryOrientations": True, "orientations": [0, 45, 90, "x", True]}
        }))
        assert config.getOcrOrientations() == [0, 90]

    def test_all_invalid_orientations_fall_back_to_upright(self, configFile):
        config = ConfigService(configFile({
            "s2_ocr": {"tryOrientations": True, "orientations": [45, 30.5]}
        }))
        assert config.getOcrOrientations() == [0]

    def test_backend_names_lowercased(self, configFile):
        config = ConfigService(configFile({"s1_qr_scan": {"backend": "PyZbar"}}))
        assert config.getQrBackend() == "pyzbar"

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuntimeError):
            ConfigService(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuntimeError):
            ConfigService(str(path))

    def test_debug_toggle(self, configFile):
        config = ConfigService(configFile())
        config.setDebugEnabled(True)
        assert config.isDebugEnabled() is True
