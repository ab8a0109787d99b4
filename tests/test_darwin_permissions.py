"""Tests for the macOS Input Monitoring hint."""

import os
import unittest
from unittest.mock import patch

from tests.pynput_utils import require_pynput

require_pynput()

# pylint: disable=wrong-import-position
from keyseq.platforms.darwin import MacKeySource


class MacPermissionPromptTests(unittest.TestCase):
    """The hint differs between terminals and daemons."""

    def setUp(self):
        MacKeySource._prompted = False  # pylint: disable=protected-access

    def tearDown(self):
        MacKeySource._prompted = False  # pylint: disable=protected-access

    def test_interactive_sessions_open_settings(self):
        with patch.dict(os.environ, {}, clear=False), \
                patch("keyseq.platforms.darwin._warn") as warn_mock, \
                patch("keyseq.platforms.darwin.subprocess.Popen") as popen_mock, \
                patch("keyseq.platforms.darwin._running_interactively", return_value=True):
            os.environ.pop("KEYSEQ_SKIP_MAC_PROMPT", None)
            MacKeySource()._prompt_permissions()  # pylint: disable=protected-access

        popen_mock.assert_called_once()
        warn_mock.assert_called_once()
        self.assertIn("Input Monitoring", warn_mock.call_args.args[0])

    def test_daemon_mode_warns_without_opening_settings(self):
        with patch.dict(os.environ, {}, clear=False), \
                patch("keyseq.platforms.darwin._warn") as warn_mock, \
                patch("keyseq.platforms.darwin.subprocess.Popen") as popen_mock, \
                patch("keyseq.platforms.darwin._running_interactively", return_value=False):
            os.environ.pop("KEYSEQ_SKIP_MAC_PROMPT", None)
            MacKeySource()._prompt_permissions()  # pylint: disable=protected-access

        popen_mock.assert_not_called()
        warn_mock.assert_called_once()

    def test_prompts_only_once(self):
        with patch.dict(os.environ, {}, clear=False), \
                patch("keyseq.platforms.darwin._warn") as warn_mock, \
                patch("keyseq.platforms.darwin._running_interactively", return_value=False):
            os.environ.pop("KEYSEQ_SKIP_MAC_PROMPT", None)
            MacKeySource()._prompt_permissions()  # pylint: disable=protected-access
            MacKeySource()._prompt_permissions()  # pylint: disable=protected-access
        self.assertEqual(warn_mock.call_count, 1)

    def test_failed_start_prompts_and_reraises(self):
        source = MacKeySource()
        with patch("pynput.keyboard.Listener", side_effect=OSError("denied")), \
                patch.object(MacKeySource, "_prompt_permissions") as prompt_mock:
            self.assertRaises(OSError, source.start, lambda event: False)
        prompt_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
