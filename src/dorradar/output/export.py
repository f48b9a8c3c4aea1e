"""Radar graph export."""

import csv
import json
from pathlib import Path

CSV_FIELDS = ["source", "source_name", "target", "target_name", "strength"]


def export_json(data: dict, output_file: str, pretty: bool = True) -> str:
    """Write graph JSON to ``output_file`` and return its path."""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2 if pretty else None)

    return str(output_path)


def export_csv(data: dict, output_file: str) -> str:
    """
    Export the connections of a graph to CSV, with node names resolved.

    Args:
        data: Graph dict with ``nodes`` and ``connections``
        output_file: Output file path

    Returns:
        Path to output file
    """
    names = {node["id"]: node["name"] for node in data.get("nodes", [])}

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for conn in data.get("connections", []):
            writer.writerow(
                {
                    "source": conn["source"],
                    "source_name": names.get(conn["source"], ""),
                    "target": conn["target"],
                    "target_name": names.get(conn["target"], ""),
                    "strength": conn["strength"],
                }
            )

    return str(output_path)


def export_graph(data: dict, output_file: str) -> str:
    """Export by file suffix: ``.csv`` for CSV, JSON otherwise."""
    if Path(output_file).suffix.lower() == ".csv":
        return export_csv(data, output_file)
    return export_json(data, output_file)
