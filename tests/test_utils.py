import os
import unittest
from unittest import mock

from streamlit.errors import StreamlitSecretNotFoundError

import utils


def secrets_raising(error):
    secrets = mock.MagicMock()
    secrets.__contains__.side_effect = error
    return secrets


class GetSettingTests(unittest.TestCase):
    def test_missing_secrets_file_falls_back_to_environment(self) -> None:
        secrets = secrets_raising(StreamlitSecretNotFoundError("No secrets found"))
        with mock.patch.object(utils.st, "secrets", secrets), \
                mock.patch.dict(os.environ, {"DB_HOST": "db.example.supabase.co"}):
            self.assertEqual(utils.get_setting("DB_HOST"), "db.example.supabase.co")
            self.assertEqual(utils.get_setting("DB_PORT", "5432"), "5432")

    def test_secrets_win_over_environment(self) -> None:
        with mock.patch.object(utils.st, "secrets", {"DB_HOST": "from-secrets"}), \
                mock.patch.dict(os.environ, {"DB_HOST": "from-env"}):
            self.assertEqual(utils.get_setting("DB_HOST"), "from-secrets")

    def test_other_secrets_errors_propagate(self) -> None:
        secrets = secrets_raising(ValueError("Invalid TOML"))
        with mock.patch.object(utils.st, "secrets", secrets):
            with self.assertRaises(ValueError):
                utils.get_setting("DB_HOST")

    def test_missing_db_settings_named(self) -> None:
        with mock.patch.object(utils, "get_setting", return_value=None):
            with self.assertRaises(RuntimeError) as ctx:
                utils.db_connection()
        self.assertIn("DB_HOST", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
