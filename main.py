"""Main entry point for the questionnaire workbook codec"""

import asyncio
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from orchestrator import Orchestrator
from core.enums import LookupKind
from core.exceptions import WorkbookCodecError
from core.interfaces import MiddlewareDependencies
from core.models import ApplicationInfo
from ui.progress import ConsoleProgress
from utils.logging_utils import configure_logging
from config import settings

FETCHER_FIELDS = {
    LookupKind.INSTITUTIONS: "get_institutions",
    LookupKind.PROGRAMS: "get_programs",
    LookupKind.FUNDING_AGENCIES: "get_funding_agencies",
    LookupKind.FILE_TYPES: "get_file_types",
    LookupKind.CANCER_TYPES: "get_cancer_types",
    LookupKind.SPECIES: "get_species",
}


def read_json(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_dependencies(
    lookups: Dict[str, Any],
    application: Optional[ApplicationInfo] = None,
) -> MiddlewareDependencies:
    """Turn a ``kind -> list`` mapping into lookup fetchers"""
    fetchers = {}
    for kind, name in FETCHER_FIELDS.items():
        if kind.value in lookups:
            items = lookups[kind.value]
            fetchers[name] = lambda items=items: items
    return MiddlewareDependencies(application=application, dev_tier=settings.DEV_TIER, **fetchers)


def split_application(payload: Dict[str, Any]):
    """Application JSON may wrap the questionnaire in ``questionnaireData``"""
    if "questionnaireData" not in payload:
        return payload, None
    data = payload["questionnaireData"]
    if isinstance(data, str):
        data = json.loads(data)
    return data, ApplicationInfo.model_validate(payload)


def run_export(args) -> int:
    data, application = split_application(read_json(args.data))
    orchestrator = Orchestrator(
        dependencies=build_dependencies(read_json(args.lookups), application),
        progress=ConsoleProgress(),
    )
    buffer = asyncio.run(orchestrator.export(data))

    output = args.output or settings.get_output_path() / "questionnaire.xlsx"
    Path(output).parent.mkdir(parents=True, exist_ok=True)
    Path(output).write_bytes(buffer)
    print(f"  Workbook: {output}")
    return 0


def run_import(args) -> int:
    if not args.workbook.exists():
        print(f"Error: File not found: {args.workbook}")
        return 1

    orchestrator = Orchestrator(
        dependencies=build_dependencies(read_json(args.lookups)),
        progress=ConsoleProgress() if args.output else None,
    )
    data = asyncio.run(orchestrator.parse(args.workbook.read_bytes()))
    text = data.model_dump_json(by_alias=True, indent=2)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"  Data: {args.output}")
    else:
        print(text)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Questionnaire workbook codec - export to and import from xlsx"
    )
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL, help="Logging level")
    parser.add_argument("--log-file", type=str, default=settings.LOG_FILE, help="Rotating log file")
    commands = parser.add_subparsers(dest="command", required=True)

    export = commands.add_parser("export", help="Render questionnaire JSON into a workbook")
    export.add_argument("--data", type=Path, help="Application or questionnaire JSON")
    export.add_argument("--lookups", type=Path, help="Lookup lists JSON, keyed by kind")
    export.add_argument("-o", "--output", type=Path, help="Output workbook path")
    export.set_defaults(handler=run_export)

    parse = commands.add_parser("import", help="Parse a workbook back into questionnaire JSON")
    parse.add_argument("workbook", type=Path, help="Workbook to import")
    parse.add_argument("--lookups", type=Path, help="Lookup lists JSON, keyed by kind")
    parse.add_argument("-o", "--output", type=Path, help="Output JSON path")
    parse.set_defaults(handler=run_import)

    args = parser.parse_args()
    configure_logging(args.log_level, args.log_file)

    try:
        return args.handler(args)
    except (WorkbookCodecError, ValidationError, OSError, json.JSONDecodeError) as e:
        print(f"\n✗ {args.command.capitalize()} failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    exit(main())
