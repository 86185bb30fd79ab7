"""Export the trip estimate record JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path

from trip_carbon.schemas import CURRENT_SCHEMA_VERSION, TripEstimateRecord


def main() -> None:
    """Write the JSON Schema for :class:`TripEstimateRecord` to the repository root."""

    schema = TripEstimateRecord.model_json_schema()
    output_path = Path(__file__).resolve().parent.parent / (
        f"trip_estimate_schema_v{CURRENT_SCHEMA_VERSION}.json"
    )
    output_path.write_text(json.dumps(schema, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
