import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch

from yamlsax import config


class TestConfig(unittest.TestCase):
    def test_load_yaml_empty_file_is_empty_dict(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "settings.yml"
            path.write_text("# nothing configured\n")
            self.assertEqual(config.load_yaml(path), {})

    def test_load_yaml_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "settings.yml"
            path.write_text("- just\n- a list\n")
            with self.assertRaises(ValueError):
                config.load_yaml(path)

    def test_user_settings_take_precedence(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            user_dir = Path(tmp_dir)
            (user_dir / "settings.yml").write_text("extension: .yml\n")
            with patch("yamlsax.config.CONFIG", user_dir):
                self.assertEqual(config.get_settings_path(), user_dir / "settings.yml")
                self.assertEqual(config.load_settings(), {"extension": ".yml"})

    def test_repo_default_settings(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with patch("yamlsax.config.CONFIG", Path(tmp_dir)):
                path = config.get_settings_path()
        self.assertEqual(path.parts[-2:], ("config", "settings.yml"))
        self.assertTrue(path.exists())
        settings = config.load_settings(path)
        self.assertEqual(settings["quit_sentinel"], config.DEFAULT_QUIT_SENTINEL)
        self.assertEqual(settings["extension"], config.DEFAULT_EXTENSION)

    def test_load_settings_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            self.assertEqual(config.load_settings(Path(tmp_dir) / "absent.yml"), {})

    def test_ensure_directories(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            root = Path(tmp_dir)
            with (
                patch("yamlsax.config.STATE", root / "state"),
                patch("yamlsax.config.CONFIG", root / "config"),
                patch("yamlsax.config.LOGS", root / "state" / "logs"),
                patch("yamlsax.config.EVENTS", root / "state" / "events"),
            ):
                config.ensure_directories()
            self.assertTrue((root / "state" / "logs").is_dir())
            self.assertTrue((root / "config").is_dir())


if __name__ == "__main__":
    unittest.main()
