"""
Utility functions for JSON output of vehicle records.
"""

import json
from typing import List, Optional
from datetime import datetime
from pathlib import Path

from .models import Vehicle

SOURCE = "carfolio-scraper"


def _detect_format(output_path: str) -> str:
    ext = Path(output_path).suffix.lower()
    if ext == '.jsonl':
        return 'jsonl'
    return 'json'


def save_to_json(vehicles: List[Vehicle], output_path: str = "vehicles.json", pretty: bool = True) -> None:
    """
    Save vehicles to a JSON file.

    Args:
        vehicles: List of Vehicle objects to save
        output_path: Path to output JSON file (default: "vehicles.json")
        pretty: Whether to pretty-print the JSON (default: True)
    """
    data = {
        "metadata": {
            "timestamp": datetime.now().isoformat(),
            "total_vehicles": len(vehicles),
            "source": SOURCE
        },
        "vehicles": [vehicle.to_dict() for vehicle in vehicles]
    }

    with open(output_path, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(data, f, indent=2, ensure_ascii=False)
        else:
            json.dump(data, f, ensure_ascii=False)


def save_to_jsonl(vehicles: List[Vehicle], output_path: str = "vehicles.jsonl") -> None:
    """Save vehicles as JSON Lines, one vehicle per line."""
    with open(output_path, 'w', encoding='utf-8') as f:
        for vehicle in vehicles:
            f.write(json.dumps(vehicle.to_dict(), ensure_ascii=False) + '\n')


def save_to_file(vehicles: List[Vehicle], output_path: str, format: Optional[str] = None) -> None:
    """
    Save vehicles to a file, detecting the format from the extension unless given.

    Args:
        vehicles: List of Vehicle objects to save
        output_path: Path to output file
        format: Optional format override ('json' or 'jsonl')
    """
    format = (format or _detect_format(output_path)).lower()
    if format == 'jsonl':
        save_to_jsonl(vehicles, output_path)
    else:
        save_to_json(vehicles, output_path, pretty=True)


class StreamingOutputWriter:
    """
    Writes vehicles as they are scraped so a crash loses nothing already parsed.

    JSON Lines output is appended line by line. JSON output is rewritten in full
    on every append so the file is always a complete document.
    """

    def __init__(self, output_path: str, format: Optional[str] = None, append: bool = False):
        """
        Initialize streaming output writer.

        Args:
            output_path: Path to output file
            format: Output format ('json', 'jsonl', or None for auto-detect)
            append: Whether to append to an existing JSON Lines file (default: False)
        """
        self.output_path = Path(output_path)
        self.format = (format or _detect_format(output_path)).lower()
        self.vehicles: List[Vehicle] = []

        if self.format == 'jsonl':
            if not (append and self.output_path.exists()):
                self.output_path.write_text('', encoding='utf-8')
        else:
            save_to_json([], str(self.output_path))

    def append_vehicle(self, vehicle: Vehicle):
        """Append one vehicle to the output file."""
        self.vehicles.append(vehicle)
        if self.format == 'jsonl':
            with open(self.output_path, 'a', encoding='utf-8') as f:
                f.write(json.dumps(vehicle.to_dict(), ensure_ascii=False) + '\n')
        else:
            save_to_json(self.vehicles, str(self.output_path))

    def get_count(self) -> int:
        """
        Get current count of saved vehicles.

        Returns:
            Number of vehicles in the output file
        """
        if not self.output_path.exists():
            return 0
        with open(self.output_path, 'r', encoding='utf-8') as f:
            if self.format == 'jsonl':
                return sum(1 for line in f if line.strip())
            return len(json.load(f).get('vehicles', []))
