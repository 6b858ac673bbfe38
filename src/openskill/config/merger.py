"""
Dictionary helpers shared by the config loader and `openskill config`.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Return ``base`` updated with ``override``, recursing into nested dicts.

    Lists and scalars in ``override`` replace what is in ``base``; a None
    value drops the key. Neither input is modified.

        >>> deep_merge({"providers": {"default": "groq", "timeout": 60}}, {"providers": {"default": "ollama"}})
        {'providers': {'default': 'ollama', 'timeout': 60}}
    """
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            merged.pop(key, None)
            continue
        current = merged.get(key)
        merged[key] = deep_merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def get_nested_value(config: dict[str, Any], key_path: str) -> Any:
    """Look up a dotted key such as ``providers.default``. Missing keys give None."""
    node: Any = config
    for part in key_path.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """Set a dotted key in place, replacing non-dict intermediates. Returns ``config``."""
    *parents, leaf = key_path.split(".")
    node = config
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value
    return config
