"""Tests for the CLI phases and entry point."""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cvparse import cli, cli_execute, cli_gather
from cvparse.cli_config import UserConfig
from cvparse.logging_utils import VERBOSITY_NORMAL
from cvparse.shared import NOT_FOUND, PARSE_FAILURE_MESSAGE, CvRecord, ParseFailure


@pytest.fixture
def cv_folder(tmp_path: Path, sample_cv_text: str, make_docx) -> Path:
    folder = tmp_path / "cvs"
    folder.mkdir()
    (folder / "jane.txt").write_text(sample_cv_text, encoding="utf-8")
    (folder / "broken.docx").write_bytes(b"not a zip")
    (folder / "notes.md").write_text("# not a CV", encoding="utf-8")
    (folder / "~$jane.docx").write_bytes(b"lock file")
    nested = folder / "2024"
    nested.mkdir()
    docx = make_docx("john.docx", ["John Smith", "", "Skills", "Python"])
    docx.rename(nested / "john.docx")
    return folder


class TestGather:
    def test_defaults(self, monkeypatch):
        """Only a source given: every option takes its default."""
        monkeypatch.delenv("CVPARSE_HTTP_TIMEOUT", raising=False)
        config = cli_gather.gather_user_requirements(["cv.pdf"])
        assert config.sources == ["cv.pdf"]
        assert config.target_dir is None
        assert config.parallel == 1
        assert config.strict_sections is False
        assert config.timeout == 15.0
        assert config.debug is False

    def test_all_options(self):
        """Every command-line option reaches UserConfig."""
        config = cli_gather.gather_user_requirements([
            "a.pdf", "https://example.com/b.docx",
            "--target", "out",
            "--parallel", "4",
            "--strict-sections",
            "--timeout", "2.5",
            "--verbosity", "1",
            "--debug",
            "--log-file", "logs/run.log",
        ])
        assert config.sources == ["a.pdf", "https://example.com/b.docx"]
        assert config.target_dir == Path("out")
        assert config.parallel == 4
        assert config.strict_sections is True
        assert config.timeout == 2.5
        assert config.verbosity == VERBOSITY_NORMAL
        assert config.debug is True
        assert config.log_file == "logs/run.log"

    def test_timeout_from_environment(self, monkeypatch):
        """CVPARSE_HTTP_TIMEOUT sets the default --timeout."""
        monkeypatch.setenv("CVPARSE_HTTP_TIMEOUT", "9")
        assert cli_gather.gather_user_requirements(["cv.pdf"]).timeout == 9.0

    def test_sources_are_required(self):
        """At least one source is required."""
        with pytest.raises(ValueError, match="SOURCE"):
            cli_gather.gather_user_requirements([])

    def test_parallel_must_be_positive(self):
        """--parallel below 1 is rejected."""
        with pytest.raises(ValueError, match="--parallel"):
            cli_gather.gather_user_requirements(["cv.pdf", "--parallel", "0"])

    def test_timeout_must_be_positive(self):
        """A non-positive --timeout is rejected."""
        with pytest.raises(ValueError, match="--timeout"):
            cli_gather.gather_user_requirements(["cv.pdf", "--timeout", "0"])

    def test_list_extractors(self, capsys):
        """--list extractors prints the registry and exits."""
        with pytest.raises(SystemExit) as exc:
            cli_gather.gather_user_requirements(["--list", "extractors"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert "Available Extractors" in out
        assert "docx" in out
        assert "pdf" in out


class TestCollectInputs:
    def test_directory_is_scanned_recursively(self, cv_folder):
        """Folders are searched recursively for supported formats."""
        found = cli_execute.scan_directory_for_documents(cv_folder)
        assert [p.name for p in found] == ["john.docx", "broken.docx", "jane.txt"]

    def test_missing_directory_raises(self, tmp_path):
        """A missing folder raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            cli_execute.scan_directory_for_documents(tmp_path / "missing")

    def test_file_is_not_a_directory(self, tmp_path):
        """A file passed as folder raises ValueError."""
        f = tmp_path / "cv.txt"
        f.write_text("x")
        with pytest.raises(ValueError):
            cli_execute.scan_directory_for_documents(f)

    def test_urls_and_files_pass_through(self, cv_folder):
        """URLs and file paths are kept as given."""
        inputs = cli_execute.collect_inputs(["https://example.com/cv.pdf", "missing.pdf"])
        assert inputs == ["https://example.com/cv.pdf", "missing.pdf"]


class TestEnvelope:
    def test_success_envelope(self):
        """Records are wrapped with the success message."""
        envelope = cli_execute.build_envelope("cv.pdf", CvRecord(name="Jane Doe"))
        assert envelope["message"] == "CV parsed successfully"
        assert envelope["source"] == "cv.pdf"
        assert envelope["parsedData"]["name"] == "Jane Doe"
        assert envelope["parsedData"]["email"] == NOT_FOUND

    def test_failure_envelope(self):
        """Failures are wrapped with the failure message."""
        envelope = cli_execute.build_envelope("cv.pdf", ParseFailure())
        assert envelope["message"] == "CV parsing failed"
        assert envelope["parsedData"] == {"error": PARSE_FAILURE_MESSAGE}

    def test_output_path_for_url(self, tmp_path):
        """Output names for URLs come from the last path segment."""
        path = cli_execute.output_path_for("https://example.com/u/jane_cv.pdf?dl=1", tmp_path)
        assert path == tmp_path / "jane_cv.json"


class TestExecute:
    def test_folder_with_one_failure(self, cv_folder, tmp_path):
        """A folder run writes one JSON per document and reports the failure."""
        out = tmp_path / "out"
        rc = cli_execute.execute(UserConfig(sources=[str(cv_folder)], target_dir=out, parallel=2))

        assert rc == 1
        jane = json.loads((out / "jane.json").read_text(encoding="utf-8"))
        assert jane["parsedData"] == {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "phone": NOT_FOUND,
            "experience": "Engineer at Acme",
            "skills": "Go, Rust",
        }
        john = json.loads((out / "john.json").read_text(encoding="utf-8"))
        assert john["parsedData"]["name"] == "John Smith"
        assert john["parsedData"]["skills"] == "Python"
        broken = json.loads((out / "broken.json").read_text(encoding="utf-8"))
        assert broken["parsedData"] == {"error": PARSE_FAILURE_MESSAGE}
        assert not (out / "notes.json").exists()

    def test_single_file_to_stdout(self, tmp_path, sample_cv_text, capsys):
        """Without --target the envelope goes to stdout."""
        cv = tmp_path / "jane.txt"
        cv.write_text(sample_cv_text, encoding="utf-8")

        rc = cli_execute.execute(UserConfig(sources=[str(cv)]))

        assert rc == 0
        envelope = json.loads(capsys.readouterr().out)
        assert envelope["message"] == "CV parsed successfully"
        assert envelope["parsedData"]["experience"] == "Engineer at Acme"

    def test_strict_sections_reach_the_parser(self, tmp_path, capsys):
        """--strict-sections changes section scanning."""
        cv = tmp_path / "cv.txt"
        cv.write_text("Experience\nDev at X\nSkills\nGo", encoding="utf-8")

        cli_execute.execute(UserConfig(sources=[str(cv)], strict_sections=True))

        envelope = json.loads(capsys.readouterr().out)
        assert envelope["parsedData"]["experience"] == "Dev at X"

    def test_empty_folder_fails(self, tmp_path):
        """A folder without documents is an error."""
        empty = tmp_path / "empty"
        empty.mkdir()
        assert cli_execute.execute(UserConfig(sources=[str(empty)])) == 1


class TestMain:
    def test_main_success(self, tmp_path, sample_cv_text, capsys):
        """main() returns 0 for a parseable CV."""
        cv = tmp_path / "jane.txt"
        cv.write_text(sample_cv_text, encoding="utf-8")
        assert cli.main([str(cv)]) == 0
        assert "Jane Doe" in capsys.readouterr().out

    def test_main_without_sources_returns_error(self):
        """main() returns 1 when no source is given."""
        assert cli.main([]) == 1

    def test_main_creates_log_file_directory(self, tmp_path, sample_cv_text):
        """main() creates the parent folders of --log-file."""
        cv = tmp_path / "jane.txt"
        cv.write_text(sample_cv_text, encoding="utf-8")
        log_file = tmp_path / "logs" / "nested" / "run.log"
        try:
            rc = cli.main([str(cv), "--target", str(tmp_path / "out"), "--log-file", str(log_file)])
        finally:
            for handler in list(logging.root.handlers):
                if isinstance(handler, logging.FileHandler):
                    logging.root.removeHandler(handler)
                    handler.close()
        assert rc == 0
        assert log_file.parent.exists()

    @patch("cvparse.cli.execute")
    def test_main_unexpected_error_returns_one(self, mock_execute, tmp_path):
        """Unexpected errors make main() return 1."""
        mock_execute.side_effect = RuntimeError("boom")
        assert cli.main(["cv.pdf", "--debug"]) == 1

    @patch("cvparse.cli.execute")
    @patch("cvparse.cli.gather_user_requirements")
    def test_main_passes_config_through(self, mock_gather, mock_execute):
        """main() hands the gathered config to execute()."""
        config = MagicMock()
        config.log_file = None
        config.debug = False
        config.verbosity = 0
        mock_gather.return_value = config
        mock_execute.return_value = 0

        assert cli.main(["cv.pdf"]) == 0
        mock_execute.assert_called_once_with(config)
