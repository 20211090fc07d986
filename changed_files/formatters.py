from __future__ import annotations

import json

from changed_files.errors import DataShapeError
from changed_files.models import FileGroups, OutputFormat


DELIMITERS = {
    OutputFormat.SPACE_DELIMITED: " ",
    # Commas inside filenames are not escaped.
    OutputFormat.CSV: ",",
}

LOG_LABELS = {
    "all": "All",
    "added": "Added",
    "modified": "Modified",
    "removed": "Removed",
    "renamed": "Renamed",
    "added_modified": "Added or modified or renamed",
}


def validate_paths(paths: list[str], output_format: OutputFormat) -> None:
    if output_format is not OutputFormat.SPACE_DELIMITED:
        return
    for path in paths:
        if " " in path:
            raise DataShapeError(
                f"One of your files includes a space: '{path}'. "
                "Consider using a different output format or removing spaces from your filenames."
            )


def render(paths: list[str], output_format: OutputFormat) -> str:
    if output_format is OutputFormat.JSON:
        # Compact and unescaped, byte-for-byte what JSON.stringify writes.
        return json.dumps(paths, separators=(",", ":"), ensure_ascii=False)
    return DELIMITERS[output_format].join(paths)


def build_outputs(groups: FileGroups, output_format: OutputFormat) -> dict[str, str]:
    validate_paths(groups.all, output_format)
    outputs = {name: render(paths, output_format) for name, paths in groups.as_dict().items()}
    # Kept for workflows written against the old output name.
    outputs["deleted"] = outputs["removed"]
    return outputs
