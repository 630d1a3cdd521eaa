# ABOUTME: Unit tests for the citecheck check command.
# ABOUTME: Tests argument handling, structured-mode wiring, output, and exit codes.

from dataclasses import replace
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from citecheck.cli import cli
from citecheck.metadata.types import Candidate, ExpectedMetadata
from citecheck.scoring.result import Issue, IssueKind, MatchResult


def _found(candidate: Candidate, *issues: Issue, **changes: object) -> MatchResult:
    result = MatchResult.from_candidate(
        candidate,
        title_score=100,
        author_score=100,
        journal_score=100,
        confidence=92,
        issues=list(issues),
    )
    return replace(result, **changes)  # type: ignore[arg-type]


class TestCheckCommand:
    """Tests for the citecheck check CLI command."""

    def test_check_help(self) -> None:
        """Check command has help text listing the structured fields."""
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "--help"])
        assert result.exit_code == 0
        assert "--title" in result.output
        assert "--year" in result.output

    def test_check_requires_query_or_title(self) -> None:
        """Check without a query or --title is a usage error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 2
        assert "--title" in result.output

    def test_check_found(self, deep_learning_candidate: Candidate) -> None:
        """A found citation prints its fields and citations and exits 0."""
        with patch("citecheck.cli.commands.check_cmd._create_verifier") as mock_verifier_fn:
            mock_verifier = MagicMock()
            mock_verifier.verify.return_value = _found(deep_learning_candidate)
            mock_verifier_fn.return_value = mock_verifier

            runner = CliRunner()
            result = runner.invoke(cli, ["check", "LeCun 2015 Deep learning Nature"])

        assert result.exit_code == 0
        assert "verified" in result.output
        assert "Deep learning" in result.output
        assert "92%" in result.output
        assert "@article{LeCun2015Deep," in result.output
        mock_verifier.verify.assert_called_once_with("LeCun 2015 Deep learning Nature", None)

    def test_check_not_found_exits_1(self) -> None:
        """A citation found nowhere exits 1 with the reason."""
        with patch("citecheck.cli.commands.check_cmd._create_verifier") as mock_verifier_fn:
            mock_verifier = MagicMock()
            mock_verifier.verify.return_value = MatchResult.not_found(
                Issue(IssueKind.SOURCE, "Not found in any source")
            )
            mock_verifier_fn.return_value = mock_verifier

            runner = CliRunner()
            result = runner.invoke(cli, ["check", "A paper that does not exist (2031)"])

        assert result.exit_code == 1
        assert "not found" in result.output
        assert "Not found in any source" in result.output

    def test_check_structured_fields(self, deep_learning_candidate: Candidate) -> None:
        """--title switches to structured mode; query defaults to title plus author."""
        with patch("citecheck.cli.commands.check_cmd._create_verifier") as mock_verifier_fn:
            mock_verifier = MagicMock()
            mock_verifier.verify.return_value = _found(deep_learning_candidate)
            mock_verifier_fn.return_value = mock_verifier

            runner = CliRunner()
            result = runner.invoke(
                cli,
                ["check", "--title", "Deep learning", "--author", "LeCun, Yann", "--year", "2015"],
            )

        assert result.exit_code == 0
        mock_verifier.verify.assert_called_once_with(
            "Deep learning LeCun, Yann",
            ExpectedMetadata(title="Deep learning", author="LeCun, Yann", year=2015),
        )

    def test_check_prefers_corrected_citation(self, deep_learning_candidate: Candidate) -> None:
        """A corrected citation from a fallback source replaces the primary one."""
        corrected = _found(
            deep_learning_candidate,
            Issue(IssueKind.VERSION, "Semantic Scholar lists the 2014 version", informational=True),
            corrected_bibtex="@article{LeCun2014Deep,\n  year = {2014}\n}",
            fallback_source="semantic_scholar",
        )
        with patch("citecheck.cli.commands.check_cmd._create_verifier") as mock_verifier_fn:
            mock_verifier = MagicMock()
            mock_verifier.verify.return_value = corrected
            mock_verifier_fn.return_value = mock_verifier

            runner = CliRunner()
            result = runner.invoke(cli, ["check", "LeCun 2014 Deep learning"])

        assert result.exit_code == 0
        assert "@article{LeCun2014Deep," in result.output
        assert "@article{LeCun2015Deep," not in result.output
        assert "Citation taken from Semantic Scholar." in result.output

    def test_network_options_reach_settings(self, deep_learning_candidate: Candidate) -> None:
        """Global options and env vars land in the Settings passed to the factory."""
        with patch("citecheck.cli.commands.check_cmd._create_verifier") as mock_verifier_fn:
            mock_verifier = MagicMock()
            mock_verifier.verify.return_value = _found(deep_learning_candidate)
            mock_verifier_fn.return_value = mock_verifier

            runner = CliRunner()
            result = runner.invoke(
                cli,
                ["--timeout", "5", "--retries", "2", "check", "Deep learning"],
                env={"CITECHECK_MAILTO": "me@example.org", "SEMANTIC_SCHOLAR_API_KEY": "k"},
            )

        assert result.exit_code == 0
        settings = mock_verifier_fn.call_args.args[0]
        assert settings.timeout == 5.0
        assert settings.max_retries == 2
        assert settings.mailto == "me@example.org"
        assert settings.semantic_scholar_api_key == "k"
