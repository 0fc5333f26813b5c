"""CLI for replaying scripted elevator calls defined in JSON scenario files."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from simulation.scenario import build_simulation, run_scenario


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write per-tick fleet snapshots as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    arrivals = []
    simulation.on_event("arrival", arrivals.append)
    snapshots = run_scenario(simulation, config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": simulation.current_time,
        "arrivals": arrivals,
        "final_state": simulation.building.snapshot(),
        "states_over_time": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print(f"Stops served: {len(arrivals)}")
    print("Final state:")
    for elevator in results["final_state"]:
        print(
            f"  elevator {elevator['id']}: floor {elevator['currentFloor']} "
            f"{elevator['status']}/{elevator['direction']} targets={elevator['targetFloors']}"
        )
    if args.output:
        print(f"Saved snapshots to {args.output}")


if __name__ == "__main__":
    main()
