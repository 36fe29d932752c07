"""Unit tests for settings persistence."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from wrapedit.settings import EditorSettings, SettingsStore, validate_setting


class TestSettingsStore(unittest.TestCase):
    """Test settings persistence functionality."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.store = SettingsStore(self.temp_dir)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults_without_file(self):
        self.assertEqual(self.store.load(), EditorSettings())

    def test_save_and_load(self):
        settings = EditorSettings(width=40, pref_rows=10, font_name="Courier", font_size=10)
        self.assertTrue(self.store.save(settings))
        self.assertTrue(self.store.settings_file.exists())
        self.assertFalse(self.store.settings_file.with_suffix('.tmp').exists())

        loaded = SettingsStore(self.temp_dir).load()
        self.assertEqual(loaded, settings)

    def test_load_is_cached(self):
        first = self.store.load()
        self.store.settings_file.write_text(json.dumps({"width": 30}), encoding='utf-8')
        self.assertIs(self.store.load(), first)
        self.store.clear_cache()
        self.assertEqual(self.store.load().width, 30)

    def test_corrupt_file_gives_defaults(self):
        self.store.settings_file.write_text("{not json", encoding='utf-8')
        with self.assertLogs('wrapedit.settings', level='WARNING'):
            loaded = self.store.load()
        self.assertEqual(loaded, EditorSettings())

    def test_non_dict_file_gives_defaults(self):
        self.store.settings_file.write_text("[1, 2]", encoding='utf-8')
        with self.assertLogs('wrapedit.settings', level='WARNING'):
            self.assertEqual(self.store.load(), EditorSettings())

    def test_invalid_values_are_skipped(self):
        data = {"width": 0, "font_name": "Courier", "unknown": 1}
        self.store.settings_file.write_text(json.dumps(data), encoding='utf-8')
        with self.assertLogs('wrapedit.settings', level='WARNING'):
            loaded = self.store.load()
        self.assertEqual(loaded.width, EditorSettings().width)
        self.assertEqual(loaded.font_name, "Courier")

    def test_save_into_missing_directory(self):
        store = SettingsStore(self.temp_dir / "nested" / "dir")
        self.assertTrue(store.save(EditorSettings(width=50)))
        self.assertEqual(SettingsStore(self.temp_dir / "nested" / "dir").load().width, 50)


class TestValidateSetting(unittest.TestCase):

    def test_width(self):
        self.assertTrue(validate_setting('width', 65))
        self.assertFalse(validate_setting('width', 0))
        self.assertFalse(validate_setting('width', True))
        self.assertFalse(validate_setting('width', "65"))

    def test_font(self):
        self.assertTrue(validate_setting('font_name', "Helvetica"))
        self.assertFalse(validate_setting('font_name', ""))
        self.assertTrue(validate_setting('font_size', 10.5))
        self.assertFalse(validate_setting('font_size', -1))

    def test_other(self):
        self.assertTrue(validate_setting('pref_rows', 0))
        self.assertFalse(validate_setting('pref_rows', -1))
        self.assertFalse(validate_setting('write_enters', 1))
        self.assertTrue(validate_setting('something_new', object()))
