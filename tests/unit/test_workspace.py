"""
Unit tests for project workspaces.
"""

import pytest
import yaml

from openskill.skills import Skill, Workspace, WorkspaceError, WorkspaceStore


@pytest.fixture
def workspace_store(isolated_env) -> WorkspaceStore:
    """A workspace store for the isolated project."""
    return WorkspaceStore()


# =============================================================================
# Model
# =============================================================================


class TestWorkspace:
    """Tests for the Workspace model."""

    def test_add_and_remove_skills(self):
        """Skills are matched by normalized name."""
        workspace = Workspace()

        assert workspace.add_skill("Code Review")
        assert not workspace.add_skill("code-review")
        assert workspace.has_skill("CODE REVIEW")
        assert workspace.skills == ["Code Review"]

        assert workspace.remove_skill("code-review")
        assert not workspace.remove_skill("code-review")
        assert workspace.skills == []

    def test_overrides_keyed_by_normalized_name(self):
        """Overrides set under any spelling apply to the skill."""
        workspace = Workspace()
        workspace.set_override("Code Review", "max_issues", "10")

        assert workspace.overrides == {"code-review": {"max_issues": "10"}}
        assert workspace.overrides_for("code-review") == {"max_issues": "10"}
        assert workspace.overrides_for("other") == {}

    def test_resolve_variables(self, full_skill):
        """Overrides win over the skill's own variables."""
        workspace = Workspace()
        workspace.set_override("deploy-check", "env", "production")
        workspace.set_override("deploy-check", "region", "eu")

        assert workspace.resolve_variables(full_skill) == {"env": "production", "region": "eu"}
        assert full_skill.variables == {"env": "staging"}
        assert Workspace().resolve_variables(Skill(name="plain")) == {}

    def test_scalar_override_values(self):
        """YAML numbers and nulls in overrides are read as text."""
        workspace = Workspace.model_validate({"overrides": {"code-review": {"max_issues": 10, "strict": None}}})
        assert workspace.overrides == {"code-review": {"max_issues": "10", "strict": ""}}


# =============================================================================
# Store
# =============================================================================


class TestWorkspaceStore:
    """Tests for WorkspaceStore."""

    def test_default_path(self, workspace_store, isolated_env):
        """The workspace lives in .claude under the working directory."""
        assert workspace_store.path == isolated_env / ".claude" / "workspace.yaml"

    def test_load_missing(self, workspace_store):
        """A project without a workspace file has no workspace."""
        assert not workspace_store.exists()
        assert workspace_store.load() is None

    def test_require_missing(self, workspace_store):
        """Requiring a workspace that does not exist is an error."""
        with pytest.raises(WorkspaceError, match="workspace init"):
            workspace_store.require()

    def test_init(self, workspace_store):
        """Init writes an empty named workspace."""
        workspace = workspace_store.init("my-service")

        assert workspace.name == "my-service"
        assert workspace.description == "Workspace for my-service"
        assert workspace_store.load() == workspace
        assert yaml.safe_load(workspace_store.path.read_text()) == {
            "name": "my-service",
            "description": "Workspace for my-service",
        }

    def test_init_twice(self, workspace_store):
        """An existing workspace is never replaced."""
        workspace_store.init("first")
        with pytest.raises(WorkspaceError, match="already exists: first"):
            workspace_store.init("second")
        assert workspace_store.load().name == "first"

    def test_save_and_load(self, workspace_store):
        """Skills, groups and overrides survive a save."""
        workspace = Workspace(name="default", skills=["code-review"], groups=["backend"])
        workspace.set_override("code-review", "max_issues", "10")
        workspace_store.save(workspace)

        assert workspace_store.load() == workspace

    def test_empty_file(self, workspace_store):
        """An empty file is the default workspace."""
        workspace_store.path.parent.mkdir(parents=True)
        workspace_store.path.write_text("")
        assert workspace_store.load() == Workspace()

    @pytest.mark.parametrize(
        "content",
        [
            "name: [unclosed\n",
            "- a\n- b\n",
            "skills:\n  key: value\n",
        ],
    )
    def test_invalid_file(self, workspace_store, content):
        """Unparseable or wrongly shaped files raise WorkspaceError."""
        workspace_store.path.parent.mkdir(parents=True)
        workspace_store.path.write_text(content)

        with pytest.raises(WorkspaceError) as exc_info:
            workspace_store.load()
        assert exc_info.value.path == workspace_store.path
