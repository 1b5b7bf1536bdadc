"""Auto-detect the serialization of a descriptor file."""

from pathlib import Path

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def detect_format(file_path: Path) -> str:
    """Detect whether a descriptor file is JSON or YAML.

    Returns: 'json' or 'yaml'.
    """
    suffix = file_path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in YAML_SUFFIXES:
        return "yaml"

    # No telling suffix: JSON documents start with an object or array
    text = file_path.read_text(encoding="utf-8").lstrip()
    if text.startswith(("{", "[")):
        return "json"
    return "yaml"
