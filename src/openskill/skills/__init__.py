"""
OpenSkill Skills System.

A skill is a named set of behavioral rules for an AI assistant, stored
as a SKILL.md document (YAML metadata plus markdown) in its own
directory under the skills directory.

Usage:
    from openskill.skills import get_skill_manager

    manager = get_skill_manager()

    # Load a skill by name
    skill = manager.get_skill("code-review")

    # Snapshot, edit, and roll back
    skill.rules.append("Flag unused imports")
    manager.update_skill("code-review", skill)
    manager.rollback("code-review", 1)
"""

# Models
from openskill.skills.models import (
    ContextConfig,
    HooksConfig,
    ListResult,
    Skill,
    SkillLoadFailure,
    SkillTemplate,
    SkillVersion,
)

# Exceptions
from openskill.skills.exceptions import (
    InvalidSkillNameError,
    MalformedDocumentError,
    MalformedMetadataError,
    MalformedPayloadError,
    SkillError,
    SkillExistsError,
    SkillNotFoundError,
    TemplateNotFoundError,
    UnsupportedFormatError,
    VersionNotFoundError,
    WorkspaceError,
)

# Codec
from openskill.skills.naming import normalize_name
from openskill.skills.parser import decode_skill, encode_skill

# Storage
from openskill.skills.history import DiffLine, VersionHistory, line_diff
from openskill.skills.store import SkillStore

# Exchange
from openskill.skills.exchange import FORMATS, detect_format, export_skill, import_skill

# Validation and templates
from openskill.skills.templates import BUILTIN_TEMPLATES, get_template, list_templates
from openskill.skills.validation import ValidationResult, validate_skill

# Manager
from openskill.skills.manager import (
    SkillManager,
    clear_skill_manager,
    get_skill_manager,
)

# Workspaces
from openskill.skills.workspace import Workspace, WorkspaceStore

__all__ = [
    # Models
    "ContextConfig",
    "HooksConfig",
    "ListResult",
    "Skill",
    "SkillLoadFailure",
    "SkillTemplate",
    "SkillVersion",
    # Exceptions
    "InvalidSkillNameError",
    "MalformedDocumentError",
    "MalformedMetadataError",
    "MalformedPayloadError",
    "SkillError",
    "SkillExistsError",
    "SkillNotFoundError",
    "TemplateNotFoundError",
    "UnsupportedFormatError",
    "VersionNotFoundError",
    "WorkspaceError",
    # Codec
    "decode_skill",
    "encode_skill",
    "normalize_name",
    # Storage
    "DiffLine",
    "SkillStore",
    "VersionHistory",
    "line_diff",
    # Exchange
    "FORMATS",
    "detect_format",
    "export_skill",
    "import_skill",
    # Validation and templates
    "BUILTIN_TEMPLATES",
    "ValidationResult",
    "get_template",
    "list_templates",
    "validate_skill",
    # Manager
    "SkillManager",
    "clear_skill_manager",
    "get_skill_manager",
    # Workspaces
    "Workspace",
    "WorkspaceStore",
]
