"""
Unit tests for the feedline demo CLI.
"""

from typer.testing import CliRunner

from feedline.cli import app

runner = CliRunner()


def test_iterate():
    """iterate describes every number of the range."""
    result = runner.invoke(app, ["iterate", "--count", "4"])
    assert result.exit_code == 0, result.output
    assert "0 can be divided by 3" in result.output
    assert "2 cannot be divided by 3" in result.output
    assert "3 can be divided by 3" in result.output


def test_count_redirects_rejections():
    """count prints numbers and routes rejected ones to the redirect."""
    result = runner.invoke(
        app,
        ["count", "--interval-ms", "20", "--duration", "0.15", "--reject-every", "2"],
    )
    assert result.exit_code == 0, result.output
    assert "rejected 0" in result.output
    assert "count 1" in result.output


def test_silo_releases_batches():
    """silo prints released batches."""
    result = runner.invoke(
        app,
        ["silo", "--fill-ms", "10", "--release-ms", "50", "--duration", "0.2"],
    )
    assert result.exit_code == 0, result.output
    assert "silo [0" in result.output
