"""
Skill name normalization.

Every skill is stored and looked up under a normalized identifier so that
"Code Review", "code review" and "code-review" all refer to the same skill.
"""


def normalize_name(name: str) -> str:
    """Map a display name to its storage identifier.

    Lowercases the name and replaces every space with a hyphen.
    No other characters are altered.

    Args:
        name: Human-provided skill name.

    Returns:
        The normalized identifier.

    Examples:
        >>> normalize_name("Code Review")
        'code-review'
        >>> normalize_name(normalize_name("Code Review"))
        'code-review'
    """
    return name.lower().replace(" ", "-")
