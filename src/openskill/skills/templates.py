"""
Built-in skill templates.

`openskill template use <template> [name]` copies one of these into the
store, recording the template name on the new skill.
"""

from openskill.skills.models import Skill, SkillTemplate


def _template(name: str, summary: str, category: str, description: str, tags: list[str], rules: list[str]) -> SkillTemplate:
    return SkillTemplate(
        name=name,
        description=summary,
        category=category,
        skill=Skill(name=name, description=description, tags=tags, rules=rules),
    )


BUILTIN_TEMPLATES: list[SkillTemplate] = [
    _template(
        "code-review",
        "Review code for quality, bugs, and best practices",
        "development",
        "Reviews code for quality issues, potential bugs, security vulnerabilities, and adherence "
        "to best practices. Provides actionable feedback with specific line references.",
        ["code", "review", "quality"],
        [
            "Always cite specific line numbers when referencing code issues",
            "Categorize issues by severity: critical, warning, suggestion",
            "Check for common security vulnerabilities (SQL injection, XSS, etc.)",
            "Verify error handling is comprehensive and appropriate",
            "Ensure code follows the project's established patterns and conventions",
            "Look for performance issues like N+1 queries, unnecessary loops",
            "Check for proper resource cleanup (file handles, connections)",
            "Verify tests cover the critical paths of new code",
        ],
    ),
    _template(
        "commit-message",
        "Generate conventional commit messages",
        "git",
        "Generates clear, conventional commit messages following the Conventional Commits "
        "specification. Analyzes staged changes to determine the appropriate type and scope.",
        ["git", "commit", "automation"],
        [
            "Use conventional commit format: type(scope): description",
            "Valid types: feat, fix, docs, style, refactor, test, chore, perf, ci",
            "Keep the subject line under 72 characters",
            "Use imperative mood in the subject (Add, not Added)",
            "Include a body for complex changes explaining the why",
            "Reference issue numbers when applicable",
            "Group related changes into a single commit",
            "Never include generated files or dependencies in the diff analysis",
        ],
    ),
    _template(
        "documentation",
        "Write clear technical documentation",
        "docs",
        "Creates clear, comprehensive technical documentation. Explains concepts at the "
        "appropriate level for the target audience and includes practical examples.",
        ["docs", "writing", "technical"],
        [
            "Start with a clear one-sentence summary of what this documents",
            "Include a quick-start example within the first 3 sections",
            "Use consistent heading hierarchy (h2 for sections, h3 for subsections)",
            "Provide code examples for every API or function documented",
            "Include both success and error cases in examples",
            "Link to related documentation rather than duplicating content",
            "Use tables for comparing options or listing parameters",
            "End with a troubleshooting or FAQ section for complex topics",
        ],
    ),
    _template(
        "testing",
        "Write comprehensive test suites",
        "development",
        "Designs and implements comprehensive test suites. Covers unit tests, integration tests, "
        "and edge cases with clear assertions and good test isolation.",
        ["testing", "quality", "automation"],
        [
            "Follow Arrange-Act-Assert (AAA) pattern in all tests",
            "Name tests descriptively: should_[expected]_when_[condition]",
            "Test one behavior per test function",
            "Use test fixtures for shared setup, avoid test interdependence",
            "Include edge cases: empty inputs, nulls, boundaries, errors",
            "Mock external dependencies, don't make real network calls",
            "Verify both positive and negative test cases",
            "Aim for behavior coverage, not just line coverage",
        ],
    ),
    _template(
        "debugging",
        "Systematic debugging and root cause analysis",
        "development",
        "Systematic approach to debugging issues. Uses scientific method to isolate problems, "
        "identify root causes, and verify fixes don't introduce regressions.",
        ["debugging", "troubleshooting", "analysis"],
        [
            "Reproduce the issue before attempting any fix",
            "Gather evidence: logs, stack traces, error messages",
            "Form a hypothesis about the root cause before making changes",
            "Isolate variables by testing one change at a time",
            "Check for recent changes that correlate with issue onset",
            "Verify the fix actually resolves the issue, don't assume",
            "Document the root cause and fix for future reference",
            "Consider if similar issues exist elsewhere in the codebase",
        ],
    ),
    _template(
        "api-design",
        "Design RESTful APIs following best practices",
        "architecture",
        "Designs RESTful APIs with consistent patterns, proper HTTP semantics, clear error "
        "handling, and good developer experience.",
        ["api", "rest", "design"],
        [
            "Use nouns for resources, verbs come from HTTP methods",
            "Return appropriate HTTP status codes (201 for create, 204 for delete)",
            "Use consistent error response format with code, message, and details",
            "Version APIs in the URL path (/v1/, /v2/)",
            "Support pagination for list endpoints with limit/offset or cursor",
            "Use JSON:API or similar spec for response envelope structure",
            "Document all endpoints with request/response examples",
            "Implement proper CORS headers for browser clients",
        ],
    ),
    _template(
        "security-review",
        "Review code for security vulnerabilities",
        "security",
        "Audits code for security vulnerabilities following OWASP guidelines. Identifies injection "
        "flaws, authentication issues, data exposure, and other common security problems.",
        ["security", "audit", "owasp"],
        [
            "Check all user input is validated and sanitized",
            "Verify SQL queries use parameterized statements",
            "Ensure authentication tokens are not logged or exposed",
            "Check for proper authorization on all endpoints",
            "Verify sensitive data is encrypted at rest and in transit",
            "Look for hardcoded secrets, keys, or credentials",
            "Check dependencies for known vulnerabilities",
            "Verify proper HTTPS/TLS configuration",
        ],
    ),
    _template(
        "refactoring",
        "Improve code structure without changing behavior",
        "development",
        "Improves code structure, readability, and maintainability while preserving existing "
        "behavior. Uses established refactoring patterns and ensures tests pass.",
        ["refactoring", "clean-code", "maintenance"],
        [
            "Ensure comprehensive tests exist before refactoring",
            "Make one refactoring change at a time, verify tests pass",
            "Extract methods when functions exceed 20-30 lines",
            "Replace magic numbers with named constants",
            "Apply DRY only when duplication is true duplication",
            "Prefer composition over inheritance for flexibility",
            "Keep the refactoring scope focused, avoid feature creep",
            "Document the rationale for significant structural changes",
        ],
    ),
]


def list_templates() -> list[SkillTemplate]:
    """Get all built-in templates."""
    return list(BUILTIN_TEMPLATES)


def get_template(name: str) -> SkillTemplate | None:
    """Find a built-in template by name (case-insensitive)."""
    wanted = name.lower()
    for template in BUILTIN_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    return None
