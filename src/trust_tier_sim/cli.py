"""Command-line entry point for the adversarial trust simulator.

Examples:
    trust-tier-sim --list
    trust-tier-sim --scenario sybil_attack --seed 42 --rounds 100
    trust-tier-sim --all --workers 4 --format csv
    trust-tier-sim --scenario-file scenarios/flash_sybils.json
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from trust_tier_sim.core.errors import InvalidProfile, UnknownScenario
from trust_tier_sim.schemas.defaults import DEFAULT_SIMULATION_SEED
from trust_tier_sim.services.config_manager import load_scenario_file
from trust_tier_sim.services.scenarios import get_scenario, list_scenarios
from trust_tier_sim.services.simulation import results_frame, run_suite

EXIT_OK = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_UNKNOWN_SCENARIO = 2
EXIT_INVALID_PROFILE = 3


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="trust-tier-sim",
        description="Run adversarial scenarios against the reputation and staking engine.",
    )
    p.add_argument("--scenario", action="append", default=[],
                   help="Catalog scenario to run (repeatable)")
    p.add_argument("--scenario-file", action="append", default=[],
                   help="Custom scenario JSON file (repeatable)")
    p.add_argument("--all", action="store_true", help="Run every catalog scenario")
    p.add_argument("--seed", type=int, default=DEFAULT_SIMULATION_SEED)
    p.add_argument("--rounds", type=int, default=None,
                   help="Override each scenario's round count")
    p.add_argument("--workers", type=int, default=1,
                   help="Worker processes for multi-scenario runs")
    p.add_argument("--format", choices=("json", "csv"), default="json")
    p.add_argument("--list", action="store_true", help="List catalog scenarios and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def _list_catalog() -> None:
    for name in list_scenarios():
        scenario = get_scenario(name)
        print(f"  {name:<20} {scenario.agent_count:>5} agents  {scenario.description}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        _list_catalog()
        return EXIT_OK

    if args.rounds is not None and args.rounds <= 0:
        parser.error("--rounds must be positive")

    try:
        scenarios = list_scenarios() if args.all else []
        scenarios += [get_scenario(name) for name in args.scenario]
        scenarios += [load_scenario_file(path) for path in args.scenario_file]
        if not scenarios:
            parser.error("pass --scenario, --scenario-file or --all")

        results = run_suite(
            scenarios, seed=args.seed, rounds=args.rounds, workers=args.workers
        )
    except UnknownScenario as e:
        print(f"Unknown scenario: {e.name}. Try --list.", file=sys.stderr)
        return EXIT_UNKNOWN_SCENARIO
    except (InvalidProfile, ValidationError) as e:
        print(f"Invalid scenario: {e}", file=sys.stderr)
        return EXIT_INVALID_PROFILE
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FILE_NOT_FOUND

    if args.format == "csv":
        sys.stdout.write(results_frame(results).to_csv(index=False))
    else:
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
