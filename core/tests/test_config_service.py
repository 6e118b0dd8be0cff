"""
core/tests/test_config_service.py

Layer precedence and type casting of ConfigService.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from core.config.config_service import ConfigService


class TestConfigService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        # isolate from the developer's own user config
        self._env = mock.patch.dict(
            os.environ, {"XDG_CONFIG_HOME": str(self.home), "APPDATA": str(self.home)}
        )
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def _user_ini(self, text: str) -> None:
        folder = self.home / ("WordDates" if os.name == "nt" else "word_dates")
        folder.mkdir(parents=True, exist_ok=True)
        (folder / "config.ini").write_text(text, encoding="utf-8")

    def test_embedded_defaults(self) -> None:
        svc = ConfigService()
        self.assertEqual(svc.writer.temp_suffix, ".tmp")
        self.assertFalse(svc.writer.keep_temp_on_failure)
        self.assertEqual(svc.synthesizer.application, "Microsoft Office Word")
        self.assertEqual(svc.meta_source("Writer", "temp_suffix")["layer"], "code")

    def test_environment_overlay(self) -> None:
        with mock.patch.dict(os.environ, {"WORDDATES_WRITER__KEEP_TEMP_ON_FAILURE": "yes"}):
            svc = ConfigService()
        self.assertTrue(svc.writer.keep_temp_on_failure)
        self.assertEqual(svc.meta_source("Writer", "keep_temp_on_failure")["layer"], "env")

    def test_user_config_wins(self) -> None:
        self._user_ini("[Synthesizer]\napplication = LibreOffice\n")
        with mock.patch.dict(os.environ, {"WORDDATES_SYNTHESIZER__APPLICATION": "EnvOffice"}):
            svc = ConfigService()
        self.assertEqual(svc.synthesizer.application, "LibreOffice")
        self.assertEqual(svc.meta_source("Synthesizer", "application")["layer"], "user")

    def test_get_with_cast(self) -> None:
        svc = ConfigService()
        self.assertIs(svc.get("Writer", "keep_temp_on_failure", cast=bool), False)
        self.assertEqual(svc.get("Writer", "temp_suffix"), ".tmp")
        self.assertIsNone(svc.get("Writer", "missing"))
        self.assertIsNone(svc.get("Unknown", "key"))


if __name__ == "__main__":
    unittest.main()
