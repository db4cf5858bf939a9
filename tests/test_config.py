import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from moviebook.config import API_KEY_ENV, Config, get_config, get_shared_dir, reset_config, save_config


class TestConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        env = {"XDG_CONFIG_HOME": str(self.home / "config"), "XDG_DATA_HOME": str(self.home / "data")}
        self._env = mock.patch.dict(os.environ, env)
        self._env.start()
        os.environ.pop(API_KEY_ENV, None)
        reset_config()

    def tearDown(self) -> None:
        reset_config()
        self._env.stop()
        self._tmp.cleanup()

    def test_defaults(self) -> None:
        config = get_config()
        self.assertEqual(config.api_key, "")
        self.assertEqual(config.language, "en-US")
        self.assertEqual(config.currency, "EUR")
        self.assertEqual(config.default_sorting, "last_added")
        self.assertEqual(config.effective_region, "US")

    def test_save_and_reload(self) -> None:
        save_config(Config(api_key="abc", language="it-IT", region="ch", log_requests=True))
        reset_config()

        config = get_config()
        self.assertEqual(config.api_key, "abc")
        self.assertEqual(config.effective_region, "CH")
        self.assertTrue(config.log_requests)

    def test_unknown_keys_are_ignored(self) -> None:
        path = self.home / "config" / "moviebook" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"currency": "USD", "proxy_url": "x"}))

        self.assertEqual(get_config().currency, "USD")

    def test_invalid_file_falls_back_to_defaults(self) -> None:
        path = self.home / "config" / "moviebook" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{")

        with self.assertLogs("moviebook.config", level="WARNING"):
            self.assertEqual(get_config(), Config())

    def test_api_key_from_environment(self) -> None:
        save_config(Config(api_key="file-key"))
        reset_config()
        with mock.patch.dict(os.environ, {API_KEY_ENV: "env-key"}):
            self.assertEqual(get_config().effective_api_key, "env-key")
            self.assertEqual(get_config().api_key, "file-key")

    def test_environment_key_is_not_saved(self) -> None:
        with mock.patch.dict(os.environ, {API_KEY_ENV: "env-key"}):
            config = get_config()
            config.language = "fr-FR"
            save_config(config)

        path = self.home / "config" / "moviebook" / "config.json"
        saved = json.loads(path.read_text())
        self.assertEqual(saved["api_key"], "")
        self.assertEqual(saved["language"], "fr-FR")

    def test_shared_dir(self) -> None:
        self.assertEqual(get_shared_dir(), self.home / "data" / "moviebook" / "shared")


if __name__ == "__main__":
    unittest.main()
