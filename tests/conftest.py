"""
Pytest configuration and fixtures for openskill tests.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from openskill.config.loader import clear_config_cache
from openskill.providers.manager import clear_provider_manager
from openskill.skills.manager import SkillManager, clear_skill_manager
from openskill.skills.models import Skill
from openskill.skills.store import SkillStore

API_KEY_VARS = ("GROQ_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run every test in an empty project with its own OPENSKILL_HOME.

    Provider API keys and OPENSKILL_* variables from the real environment
    are removed, and the config, skill and provider singletons are reset.
    """
    for key in list(os.environ):
        if key.startswith("OPENSKILL_"):
            monkeypatch.delenv(key)
    for key in API_KEY_VARS:
        monkeypatch.delenv(key, raising=False)

    home = temp_dir / "home"
    project = temp_dir / "project"
    home.mkdir()
    project.mkdir()

    monkeypatch.setenv("OPENSKILL_HOME", str(home))
    monkeypatch.chdir(project)

    clear_config_cache()
    clear_skill_manager()
    clear_provider_manager()

    yield project

    clear_config_cache()
    clear_skill_manager()
    clear_provider_manager()


@pytest.fixture
def skills_dir(isolated_env: Path) -> Path:
    """The default skills directory of the isolated project."""
    return isolated_env / ".claude" / "skills"


@pytest.fixture
def store(skills_dir: Path) -> SkillStore:
    """Provide an empty skill store."""
    return SkillStore(skills_dir)


@pytest.fixture
def manager(skills_dir: Path) -> SkillManager:
    """Provide a skill manager over an empty store."""
    return SkillManager(skills_dir)


@pytest.fixture
def sample_skill() -> Skill:
    """Provide a typical skill."""
    return Skill(
        name="Code Review",
        description="Reviews code for bugs and style issues",
        rules=[
            "Check for null pointer dereferences",
            "Flag functions longer than 50 lines",
        ],
        tags=["quality", "Review"],
        group="backend",
    )


@pytest.fixture
def full_skill() -> Skill:
    """Provide a skill with every optional field set."""
    return Skill.model_validate(
        {
            "name": "deploy-check",
            "description": "Checks a service before it is deployed",
            "rules": ["Run the smoke tests before approving"],
            "extends": "base-check",
            "includes": ["lint", "security-review"],
            "tags": ["ops"],
            "group": "release",
            "template": "testing",
            "variables": {"env": "staging"},
            "author": "ops-team",
            "version": "1.2.0",
            "output_format": "markdown",
            "context": {"files": ["deploy.yaml"], "commands": ["git status"]},
            "hooks": {"pre": ["make lint"], "post": []},
            "chain": ["lint", "test"],
        }
    )


@pytest.fixture
def sample_skill_md() -> str:
    """Provide a SKILL.md document."""
    return """---
name: Code Review
description: Reviews code for bugs and style issues
tags:
- quality
---

# Code Review

Reviews code for bugs and style issues

## Rules

- Check for null pointer dereferences
- Flag functions longer than 50 lines

## Notes

- Not a rule
"""


class FakeProvider:
    """TextGenerator returning canned responses and recording prompts."""

    def __init__(self, *responses: str, name: str = "fake"):
        self._responses = list(responses)
        self._name = name
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._responses.pop(0)


@pytest.fixture
def fake_provider_factory():
    """Build FakeProvider instances."""
    return FakeProvider
