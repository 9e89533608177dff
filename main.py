#!/usr/bin/python3

import argparse
import json
import logging
import os
import re
import sys

from thermaliq import load_csv
from thermaliq import results
from thermaliq.config import load_config, EngineConfig
from thermaliq.inputs import resolve_inputs
from thermaliq.optimize import sweep_setbacks
from thermaliq.rebates import calculate_rebate_eligibility
from thermaliq.room_scan import process_room_scan
from thermaliq.scenarios import SCENARIOS
from thermaliq.strategy import analyze, build_energy_model


def read_json(filename):
    """JSON with C-style // comments allowed for user annotations."""
    with open(filename, 'r') as f:
        content = re.sub(r'//.*', '', f.read())
    return json.loads(content)


def export_debug_output(filename, result, sweep):
    import datetime

    debug_data = {
        "generated_at": datetime.datetime.now().isoformat(),
        "analysis": result.to_dict(),
        "candidates": sweep.to_dict(orient='records'),
    }
    with open(filename, 'w') as f:
        json.dump(debug_data, f, indent=2)
    print(f"Debug output saved to: {filename}")


def run_batch(csv_file, config, output=None):
    names, rows = load_csv.load_scenarios(csv_file)
    analyses = []
    kept_names = []
    for name, row in zip(names, rows):
        try:
            analyses.append(analyze(resolve_inputs(row), config))
            kept_names.append(name)
        except ValueError as e:
            print(f"Skipping {name}: {e}")

    summary = results.summarize(analyses, kept_names)
    print(summary.to_string(index=False))
    if output:
        summary.to_csv(output, index=False)
        print(f"\nSummary saved to: {output}")
    return 0


def run_main(args_list=None):
    parser = argparse.ArgumentParser(
        description="HVAC Setback Advisor",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument("inputs_json", nargs='?', help="Path to building/absence inputs JSON")

    group = parser.add_mutually_exclusive_group()
    group.add_argument("-s", "--scenario", choices=sorted(SCENARIOS),
                       help="Run a built-in reference scenario instead of an inputs file.")
    group.add_argument("--csv", metavar="CSV_FILE",
                       help="Batch mode: analyze one building per CSV row and print a summary.")

    parser.add_argument("--room-scan", metavar="SCAN_JSON",
                        help="Room scan payload; its floor area, height, windows and doors\n"
                             "override the form values.")
    parser.add_argument("--config", metavar="CONFIG_JSON",
                        help="Calibration overrides (break-even multiplier, savings margin, ...).")
    parser.add_argument("--equipment", nargs='*', default=None,
                        help="Equipment being considered, for rebate eligibility\n"
                             "(heat_pump, central_ac, furnace, heat_pump_water_heater, weatherization).")
    parser.add_argument("--meets-efficiency", choices=['yes', 'no', 'not_sure'],
                        help="Whether the equipment meets ENERGY STAR / program criteria.")

    # Output Options
    parser.add_argument("--sweep", action="store_true", help="Print every candidate setback the optimizer tried.")
    parser.add_argument("--plot", action="store_true", help="Plot the temperature trajectory and candidate energies.")
    parser.add_argument("-o", "--output", help="Batch mode: save the summary CSV here.")
    parser.add_argument("--debug-output", metavar="JSON_FILE",
                        help="Export the full analysis and candidate table to JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    # --- CUSTOM HELP DISPLAY ---
    if args_list is None and len(sys.argv) == 1:
        parser.print_help()
        print("\nUsage Examples:")
        print("  1. Analyze a building:")
        print("     python main.py my_house.json")
        print("\n  2. Built-in workday scenario with plots:")
        print("     python main.py -s typical_workday --plot")
        print("\n  3. Use room scan geometry and check rebates:")
        print("     python main.py my_house.json --room-scan scan.json --equipment heat_pump")
        print("\n  4. Batch analysis:")
        print("     python main.py --csv buildings.csv -o summary.csv")
        return 1

    args = parser.parse_args(args_list)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(name)s | %(levelname)s | %(message)s")

    try:
        config = load_config(args.config) if args.config else EngineConfig()
    except ValueError as e:
        print(f"Error loading config: {e}")
        return 1

    if args.csv:
        if not os.path.exists(args.csv):
            print(f"Error: CSV file '{args.csv}' not found.")
            return 1
        return run_batch(args.csv, config, output=args.output)

    # 1. Load Inputs
    if args.scenario:
        raw_inputs = dict(SCENARIOS[args.scenario])
    elif args.inputs_json:
        if not os.path.exists(args.inputs_json):
            print(f"Error: Inputs file '{args.inputs_json}' not found.")
            return 1
        raw_inputs = read_json(args.inputs_json)
    else:
        print("Error: You must provide an inputs JSON file, --scenario or --csv.")
        return 1

    scan = None
    if args.room_scan:
        if not os.path.exists(args.room_scan):
            print(f"Error: Room scan file '{args.room_scan}' not found.")
            return 1
        scan, quality = process_room_scan(read_json(args.room_scan))
        print(f"Room scan data quality: {quality}")

    # 2. Analyze
    try:
        inputs = resolve_inputs(raw_inputs, scan=scan)
        result = analyze(inputs, config)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    # 3. Rebates (independent of the physics)
    rebates = None
    if args.equipment is not None:
        rebates = calculate_rebate_eligibility(inputs.zip_code, args.equipment, args.meets_efficiency)

    results.print_report(result, rebates=rebates)

    model = None
    sweep = None
    if args.sweep or args.debug_output:
        model = build_energy_model(inputs, config)
        sweep = sweep_setbacks(model, inputs.desired_temp, inputs.outdoor_temp, inputs.absence_duration)

    if args.sweep:
        print(sweep.to_string(index=False, float_format=lambda x: f"{x:.2f}"))

    if args.debug_output:
        export_debug_output(args.debug_output, result, sweep)

    if args.plot:
        results.plot_results(result, model or build_energy_model(inputs, config))

    return 0


if __name__ == "__main__":
    sys.exit(run_main())
