import io
import logging
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from orgclone import cli
from orgclone.application.picker_service import PickResult, PickStatus
from orgclone.infrastructure.cloner import CloneError
from orgclone.infrastructure.github_client import ClientInitializationError, GitHubAPIError
from orgclone.infrastructure.selector import SelectorError


@patch('orgclone.cli.configure_logging')
@patch('orgclone.cli.GitHubRESTClient')
@patch('orgclone.cli.RepositoryPickerService')
class TestMain(unittest.TestCase):

    def run_main(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main()
        return code, out.getvalue()

    def test_prints_path(self, mock_service, mock_client, mock_logging):
        mock_service.return_value.pick.return_value = PickResult(
            PickStatus.CLONED, path="/home/alice/ghq/github.com/acme/widgets"
        )

        code, out = self.run_main()

        self.assertEqual(code, 0)
        self.assertEqual(out, "/home/alice/ghq/github.com/acme/widgets\n")

    def test_nothing_selected(self, mock_service, mock_client, mock_logging):
        mock_service.return_value.pick.return_value = PickResult(PickStatus.NO_SELECTION)

        code, out = self.run_main()

        self.assertEqual(code, 0)
        self.assertEqual(out, cli.NOTHING_SELECTED_MESSAGE + "\n")

    def test_no_match_is_silent(self, mock_service, mock_client, mock_logging):
        mock_service.return_value.pick.return_value = PickResult(PickStatus.NO_MATCH)

        code, out = self.run_main()

        self.assertEqual(code, 0)
        self.assertEqual(out, "")

    def test_client_init_failure(self, mock_service, mock_client, mock_logging):
        mock_client.side_effect = ClientInitializationError("no token")

        with self.assertLogs('orgclone.cli', level='ERROR'):
            code, out = self.run_main()

        self.assertEqual(code, 1)
        mock_service.assert_not_called()

    def test_fatal_errors_exit_non_zero(self, mock_service, mock_client, mock_logging):
        for error in (GitHubAPIError("401"), SelectorError("no peco"), CloneError("failed", "out")):
            mock_service.return_value.pick.side_effect = error

            with self.assertLogs('orgclone.cli', level='ERROR'):
                code, out = self.run_main()

            self.assertEqual(code, 1)
            self.assertEqual(out, "")

    def test_clone_failure_reports_clone_output(self, mock_service, mock_client, mock_logging):
        mock_service.return_value.pick.side_effect = CloneError(
            "Failed to clone github.com:acme/widgets", output="fatal: repository not found"
        )

        with self.assertLogs('orgclone.cli', level='ERROR') as logs:
            code, out = self.run_main()

        self.assertEqual(code, 1)
        self.assertIn("fatal: repository not found", "\n".join(logs.output))


@patch('orgclone.cli.logging.basicConfig')
class TestConfigureLogging(unittest.TestCase):

    def test_unknown_level_falls_back_to_warning(self, mock_basic_config):
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose"}):
            cli.configure_logging()

        self.assertEqual(mock_basic_config.call_args[1]["level"], logging.WARNING)

    def test_level_name_is_case_insensitive(self, mock_basic_config):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            cli.configure_logging()

        self.assertEqual(mock_basic_config.call_args[1]["level"], logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
