"""CLI entry point: ``python -m pressbrake --bend 50,90,3.5,Up --bend 250,90,3.5``"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config.defaults import (
    BEND_LIMITS,
    DEFAULT_JOB_NAME,
    DEFAULT_SHEET_ID,
    SHEET_LIMITS,
    build_default_material_catalog,
    build_default_tooling_catalog,
)
from .config.settings import AppSettings
from .core.controller import JobController, RadiusWarning
from .core.errors import PressBrakeError, ValidationError
from .core.executor import JobExecutor
from .core.press_brake import PressBrake
from .core.profile import compute_profile
from .core.tooling import ToolingCatalog
from .logging_config import setup_logging


def _build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pressbrake",
        description="Plan and execute a sheet-metal bend job on a simulated press brake.",
    )
    p.add_argument("--job-name", default=DEFAULT_JOB_NAME,
                   help=f"Job name (default: {DEFAULT_JOB_NAME})")
    p.add_argument("--sheet-id", default=DEFAULT_SHEET_ID,
                   help=f"Sheet identifier (default: {DEFAULT_SHEET_ID})")

    # Sheet (kept as text; the engine parses and range-checks them)
    p.add_argument("--length", default=str(settings.sheet_length),
                   help=f"Flat sheet length in mm (default: {settings.sheet_length})")
    p.add_argument("--width", default=str(settings.sheet_width),
                   help=f"Sheet width in mm (default: {settings.sheet_width})")
    p.add_argument("--thickness", default=str(settings.sheet_thickness),
                   help=f"Sheet thickness in mm (default: {settings.sheet_thickness})")
    p.add_argument("--material", default=settings.default_material,
                   help=f"Material name (default: {settings.default_material})")

    # Tooling
    p.add_argument("--punch", default=settings.default_punch or None,
                   help="Punch name (default: catalog default)")
    p.add_argument("--die", default=settings.default_die or None,
                   help="Die name (default: catalog default)")
    p.add_argument("--tooling-file", type=Path,
                   default=Path(settings.tooling_file) if settings.tooling_file else None,
                   help="JSON tooling catalog (default: built-in tools)")

    # Bends
    p.add_argument("--bend", action="append", default=[], metavar="POS,ANGLE,RADIUS[,DIR]",
                   help="Add a bend step; DIR is Up (default) or Down. Repeatable.")
    p.add_argument("--accept-warnings", action="store_true",
                   help="Keep bends whose radius is below the recommended minimum")

    # Info
    p.add_argument("--list-materials", action="store_true",
                   help="List available materials and exit")
    p.add_argument("--list-tooling", action="store_true",
                   help="List available punches and dies and exit")

    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return p


def _split_bend(text: str) -> tuple[str, str, str, str]:
    parts = [s.strip() for s in text.split(",")]
    if len(parts) == 3:
        parts.append("Up")
    if len(parts) != 4:
        raise ValidationError(
            f"invalid bend {text!r}: expected POS,ANGLE,RADIUS[,DIR]"
        )
    return parts[0], parts[1], parts[2], parts[3]


def main(argv: list[str] | None = None) -> int:
    try:
        settings = AppSettings.load()
    except (OSError, PressBrakeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    args = _build_parser(settings).parse_args(argv)

    setup_logging("DEBUG" if args.verbose else settings.log_level,
                  json_output=args.json_logs)

    materials = build_default_material_catalog()
    try:
        if args.tooling_file is not None:
            tooling = ToolingCatalog.from_json(args.tooling_file)
        else:
            tooling = build_default_tooling_catalog()
    except (OSError, PressBrakeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.list_materials:
        for m in materials:
            print(f"{m.name}: min bend radius factor {m.min_bend_radius_factor}")
        return 0
    if args.list_tooling:
        print("Punches: " + ", ".join(tooling.punch_names()))
        print("Dies:    " + ", ".join(tooling.die_names()))
        return 0

    controller = JobController(materials, BEND_LIMITS, SHEET_LIMITS)
    press = PressBrake(settings.machine_name, tooling,
                       tooling.default_punch(), tooling.default_die())

    try:
        job = controller.new_job(args.job_name, args.sheet_id, args.length,
                                 args.width, args.thickness, args.material)
        sheet = job.sheet
        print(f"Sheet: {sheet.length:.1f} x {sheet.width:.1f} x {sheet.thickness:.1f}mm "
              f"{sheet.material.name} (min bend radius {sheet.min_bend_radius:.2f}mm)")

        if args.punch:
            press.select_punch(args.punch)
        if args.die:
            press.select_die(args.die)
        print(f"Tooling: {press.tooling_status()}")

        for text in args.bend:
            pos, angle, radius, direction = _split_bend(text)
            try:
                step = controller.add_step(pos, angle, radius, direction)
            except RadiusWarning as warning:
                if not args.accept_warnings:
                    controller.discard(warning.proposal)
                    print(f"  Warning: {warning}; bend skipped "
                          f"(use --accept-warnings to keep it)")
                    continue
                step = controller.commit(warning.proposal)
                print(f"  Warning: {warning}; added anyway")
            print(f"  Added {step.describe()}")

        if not job.step_count:
            print("Error: no bend steps to execute", file=sys.stderr)
            return 1

        with JobExecutor(press, exporter=compute_profile) as executor:
            result = executor.run(job)
    except PressBrakeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    profile = result.artifact
    print(f"Job '{result.job_name}' processed: {len(result.sheet.current_bends)} bends "
          f"(parts bent this session: {result.parts_bent})")
    print(f"Profile extents: {profile.width:.2f} x {profile.height:.2f}mm")
    return 0


if __name__ == "__main__":
    sys.exit(main())
