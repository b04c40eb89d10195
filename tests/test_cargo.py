import json
import subprocess
import unittest
from unittest.mock import mock_open, patch

from cargo_review.cargo import CargoError, get_audit, get_package_name, run_cargo

AUDIT_OUTPUT = {
    "lockfile": {"dependency-count": 3},
    "vulnerabilities": {
        "found": True,
        "count": 1,
        "list": [
            {
                "advisory": {"id": "RUSTSEC-2024-0001", "package": "vuln", "title": "T", "description": "D"},
                "package": {"name": "vuln", "version": "1.0.0"},
            }
        ],
    },
}


def completed(cmd, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


class TestCargoCommands(unittest.TestCase):

    @patch("cargo_review.cargo.subprocess.run")
    def test_audit_tolerates_failure_status(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 1, json.dumps(AUDIT_OUTPUT))

        audit = get_audit(["--deny", "warnings"])

        self.assertEqual(mock_run.call_args.args[0], ["cargo", "audit", "--json", "--deny", "warnings"])
        self.assertTrue(audit.found)
        self.assertEqual(audit.vulnerabilities[0].package.name, "vuln")

    @patch("cargo_review.cargo.subprocess.run")
    def test_audit_unparsable_output(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 1, "error: not a cargo project")

        with self.assertRaises(CargoError):
            get_audit()

    @patch("cargo_review.cargo.subprocess.run")
    def test_failed_command(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 101, stderr="boom")

        with self.assertRaises(CargoError):
            run_cargo(["fetch"])

    @patch("cargo_review.cargo.subprocess.run")
    def test_missing_cargo(self, mock_run):
        mock_run.side_effect = FileNotFoundError("cargo")

        with self.assertRaises(CargoError):
            run_cargo(["fetch"])

    @patch("cargo_review.cargo.subprocess.run")
    def test_package_name_from_read_manifest(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 0, json.dumps({"name": "app"}))

        self.assertEqual(get_package_name(), "app")

    @patch("cargo_review.cargo.subprocess.run")
    def test_package_name_falls_back_to_manifest(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 101, stderr="unknown command")

        with patch("builtins.open", mock_open(read_data=b'[package]\nname = "app"\n')):
            self.assertEqual(get_package_name(), "app")

    @patch("cargo_review.cargo.subprocess.run")
    def test_virtual_manifest_has_no_name(self, mock_run):
        mock_run.side_effect = lambda cmd, **kwargs: completed(cmd, 101)

        with patch("builtins.open", mock_open(read_data=b'[workspace]\nmembers = ["a"]\n')):
            with self.assertRaises(CargoError):
                get_package_name()
