"""
Report Writers
Writes a parsed rider to a JSON record and a CSV checklist.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Union

from .aggregator import build_checklist
from .rider_models import StructuredRider

logger = logging.getLogger(__name__)

CHECKLIST_COLUMNS = [
    'Item',
    'Quantity',
    'Unit',
    'Brand',
    'Category',
    'Room',
    'Notes',
    'Must Have',
]


def write_json_report(rider: StructuredRider, output_dir: Union[str, Path], stem: str) -> str:
    """
    Save the full structured rider as JSON.

    Args:
        rider: Parsed rider
        output_dir: Output directory (created if missing)
        stem: Base filename (without extension)

    Returns:
        Path to generated JSON file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    json_path = output_path / f"{stem}_rider.json"

    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(rider.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info(f"JSON report saved: {json_path}")
    return str(json_path)


def write_csv_checklist(rider: StructuredRider, output_dir: Union[str, Path], stem: str) -> str:
    """
    Save the deduplicated checklist view as CSV.

    Args:
        rider: Parsed rider
        output_dir: Output directory (created if missing)
        stem: Base filename (without extension)

    Returns:
        Path to generated CSV file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    csv_path = output_path / f"{stem}_checklist.csv"

    checklist = build_checklist(rider)

    with open(csv_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CHECKLIST_COLUMNS)
        writer.writeheader()

        for item in checklist:
            room = rider.get_room(item.room)
            writer.writerow({
                'Item': item.name,
                'Quantity': item.quantity,
                'Unit': item.unit,
                'Brand': item.brand or '',
                'Category': item.category,
                'Room': room.name if room else (item.room or ''),
                'Notes': item.notes or '',
                'Must Have': 'Yes' if item.must_have else 'No',
            })

    logger.info(f"CSV checklist saved: {csv_path} ({len(checklist)} items)")
    return str(csv_path)
