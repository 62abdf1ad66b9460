# linkmap/report/json_report.py

"""
JSON export of a link tree.

The file holds the entrypoint and the tree as nested objects, sorted the
same way as the text rendering; leaves are empty objects.
"""
import json
from pathlib import Path

from linkmap.tree import LinkTree


def render_json(entrypoint: str, tree: LinkTree, output_path: Path | str, indent: int | None = 2) -> Path:
    """
    Write *tree* as JSON to *output_path* and return the path written.

    Example:
    ```python
    from linkmap.report.json_report import render_json
    path = render_json("https://example.com/", tree, "reports/links.json")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "entrypoint": entrypoint,
        "links": tree.count(),
        "tree": tree.to_dict(),
    }

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=indent)

    return output
