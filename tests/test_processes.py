import subprocess
import unittest
from unittest.mock import MagicMock, patch

from orgclone.infrastructure.cloner import CloneError, GhqCloner
from orgclone.infrastructure.selector import PecoSelector, SelectorError


def completed(returncode=0, stdout=""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    return result


@patch('orgclone.infrastructure.selector.subprocess.run')
class TestPecoSelector(unittest.TestCase):

    def test_returns_stripped_selection(self, mock_run):
        mock_run.return_value = completed(stdout="  github.com/acme/widgets\n")

        selected = PecoSelector().select(["  github.com/acme/widgets", "✓ github.com/acme/gadgets"])

        self.assertEqual(selected, "github.com/acme/widgets")
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["peco"])
        self.assertEqual(kwargs["input"], "  github.com/acme/widgets\n✓ github.com/acme/gadgets")

    def test_empty_output_is_no_selection(self, mock_run):
        mock_run.return_value = completed(stdout="\n")
        self.assertIsNone(PecoSelector().select(["a"]))

    def test_non_zero_exit_is_no_selection(self, mock_run):
        mock_run.return_value = completed(returncode=1)
        self.assertIsNone(PecoSelector().select(["a"]))

    def test_missing_binary(self, mock_run):
        mock_run.side_effect = FileNotFoundError("peco")
        with self.assertRaises(SelectorError):
            PecoSelector().select(["a"])


@patch('orgclone.infrastructure.cloner.subprocess.run')
class TestGhqCloner(unittest.TestCase):

    def test_clone(self, mock_run):
        mock_run.return_value = completed(stdout="clone done")

        output = GhqCloner().clone("github.com:acme/widgets")

        self.assertEqual(output, "clone done")
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["ghq", "get", "github.com:acme/widgets"])
        self.assertIs(kwargs["stderr"], subprocess.STDOUT)

    def test_failure_carries_output(self, mock_run):
        mock_run.return_value = completed(returncode=1, stdout="fatal: repository not found")

        with self.assertRaises(CloneError) as ctx:
            GhqCloner().clone("github.com:acme/widgets")

        self.assertEqual(ctx.exception.output, "fatal: repository not found")
        self.assertIn("fatal: repository not found", str(ctx.exception))

    def test_missing_binary(self, mock_run):
        mock_run.side_effect = FileNotFoundError("ghq")
        with self.assertRaises(CloneError):
            GhqCloner().clone("github.com:acme/widgets")


if __name__ == '__main__':
    unittest.main()
