"""Scene configuration loading.

Reads a JSON scene file and validates it against SceneConfiguration. File
system, JSON syntax and schema problems all surface as ConfigError with an
``error_type`` the CLI and API can report.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from configurator.application.config.schemas import SceneConfiguration


class ConfigError(Exception):
    """Raised when a scene configuration cannot be loaded.

    Attributes:
        message: Primary error message.
        error_type: ``file_not_found``, ``file_read_error``, ``json_parse``
            or ``validation``.
        path: The scene file, when loading from disk.
        details: Per-problem details (JSON position or schema paths).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location as a JSON path.

    Examples:
        >>> _format_json_path(("cabinets", 0, "dimensions", "width"))
        'cabinets[0].dimensions.width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Scene validation failed:"]
    for detail in details:
        if detail.get("value") is not None and not isinstance(detail["value"], dict):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {detail['value']!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_config_from_dict(data: dict[str, Any], path: Path | None = None) -> SceneConfiguration:
    """Validate an already-parsed scene.

    Raises:
        ConfigError: With ``error_type="validation"`` on schema problems.
    """
    try:
        return SceneConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> SceneConfiguration:
    """Load and validate a scene file.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or does
            not match the schema.

    Example:
        >>> try:
        ...     config = load_config(Path("kitchen.json"))
        ... except ConfigError as e:
        ...     print(e.error_type, e)
    """
    if not path.exists():
        raise ConfigError(
            message=f"Scene file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            message=f"Error reading scene file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in scene file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Scene file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
        )
    return load_config_from_dict(data, path=path)


def save_config(config: SceneConfiguration, path: Path) -> None:
    """Write a scene configuration as indented JSON."""
    path.write_text(json.dumps(config.to_json_dict(), indent=2) + "\n", encoding="utf-8")
