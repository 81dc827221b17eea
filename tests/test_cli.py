"""
Tests for the command-line entry point.
"""

from pathlib import Path

from click.testing import CliRunner
import pytest

from fakes import FakeDescriber, write_image

from ai_image_rename import cli


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")
    monkeypatch.setattr(
        cli, "OpenRouterDescriptionClient", lambda api_key, model: FakeDescriber()
    )
    return CliRunner()


def _invoke(runner, tmp_path, *args, input=None):
    return runner.invoke(
        cli.main,
        ["--config", str(tmp_path / "missing.yaml"), *args],
        input=input,
    )


def test_missing_api_key(runner, tmp_path, monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY")
    image = write_image(tmp_path, "a.jpg", "red car")

    result = _invoke(runner, tmp_path, str(image))

    assert result.exit_code == 1
    assert "OPENROUTER_API_KEY" in result.output
    assert image.exists()


def test_no_files(runner, tmp_path):
    result = _invoke(runner, tmp_path)

    assert result.exit_code == 0
    assert "No image files provided" in result.output


def test_no_valid_files(runner, tmp_path):
    gif = write_image(tmp_path, "anim.gif", "red car")

    result = _invoke(runner, tmp_path, str(gif), str(tmp_path / "none.jpg"))

    assert result.exit_code == 0
    assert "No valid image files" in result.output
    assert gif.exists()


def test_rename_batch(runner, tmp_path):
    first = write_image(tmp_path, "a.jpg", "red car")
    second = write_image(tmp_path, "b.png", "fail: timeout")
    third = write_image(tmp_path, "c.gif", "ignored")

    result = _invoke(
        runner,
        tmp_path,
        "--format",
        "kebab",
        "--concurrency",
        "2",
        str(first),
        str(second),
        str(third),
    )

    assert result.exit_code == 0, result.output
    assert "Found 2 valid image(s)" in result.output
    assert "a.jpg -> red-car.jpg" in result.output
    assert "Summary: 1 renamed, 0 skipped, 1 errors." in result.output
    assert (tmp_path / "red-car.jpg").exists()
    assert second.exists()
    assert third.exists()


def test_interactive_prompts(runner, tmp_path):
    image = write_image(tmp_path, "a.webp", "quiet harbor")

    result = _invoke(runner, tmp_path, str(image), input="pascal\n1\n")

    assert result.exit_code == 0, result.output
    assert Path(tmp_path / "QuietHarbor.webp").exists()


def test_invalid_concurrency(runner, tmp_path):
    image = write_image(tmp_path, "a.jpg", "red car")

    result = _invoke(runner, tmp_path, "-j", "0", str(image))

    assert result.exit_code == 2
    assert image.exists()
