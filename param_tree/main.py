import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from param_tree.cleaner import clean_parameters
from param_tree.config import Settings, load_settings
from param_tree.errors import ConfigError, InputFileError, ParameterTreeError
from param_tree.examples import ExampleGenerator
from param_tree.openapi_builder import build_openapi_spec
from param_tree.schema_validator import ExampleValidator, format_violations_for_report
from param_tree.serializers import FORMATS, render

logger = logging.getLogger(__name__)

PARAMETER_SECTIONS = ("body_parameters", "query_parameters", "parameters")


def load_document(path: str) -> Dict[str, Any]:
    """Loads a YAML or JSON file holding parameters or endpoints."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise InputFileError(f"Cannot read {path}: {e}")
    except yaml.YAMLError as e:
        raise InputFileError(f"Cannot parse {path}: {e}")

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise InputFileError(f"{path} must contain a mapping, got {type(document).__name__}")
    return document


def _checked_parameters(parameters: Any, where: str) -> Dict[str, Any]:
    if parameters is None:
        return {}
    if not isinstance(parameters, dict):
        raise InputFileError(f"{where} must be a mapping of parameters, got {type(parameters).__name__}")

    for path, descriptor in parameters.items():
        if descriptor is not None and not isinstance(descriptor, dict):
            raise InputFileError(
                f"{where}: parameter {path!r} must be a mapping, got {type(descriptor).__name__}"
            )
    return parameters


def parameter_section(document: Dict[str, Any]) -> Dict[str, Any]:
    for section in PARAMETER_SECTIONS:
        if section in document:
            return _checked_parameters(document[section], section)
    return _checked_parameters(document, "parameters")


def endpoint_list(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    endpoints = document.get("endpoints") or []
    if not isinstance(endpoints, list):
        raise InputFileError(f"endpoints must be a list, got {type(endpoints).__name__}")

    for index, endpoint in enumerate(endpoints):
        if not isinstance(endpoint, dict) or "path" not in endpoint:
            raise InputFileError(f"endpoints[{index}] must be a mapping with a 'path'")
        for section in ("body_parameters", "query_parameters"):
            _checked_parameters(endpoint.get(section), f"endpoints[{index}].{section}")
    return endpoints


def write_output(content: str, output: Optional[str]):
    if not output:
        print(content)
        return

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(content)
    print(f"💾 Written to {output}", file=sys.stderr)


# =========================
# Commands
# =========================

def run_clean(args: argparse.Namespace, settings: Settings) -> int:
    print(f"🔍 Reading parameters from {args.file}", file=sys.stderr)
    parameters = parameter_section(load_document(args.file))

    seed = args.seed if args.seed is not None else settings.example_seed
    strict = args.strict or settings.strict
    cleaned = clean_parameters(parameters, ExampleGenerator(seed), strict=strict)

    write_output(render(cleaned, args.format or settings.output_format), args.output)
    return 0


def run_openapi(args: argparse.Namespace, settings: Settings) -> int:
    print(f"🔍 Reading endpoints from {args.file}")
    endpoints = endpoint_list(load_document(args.file))
    print(f"✅ Found {len(endpoints)} endpoint(s)")

    print("🛠 Building OpenAPI spec...")
    seed = args.seed if args.seed is not None else settings.example_seed
    spec = build_openapi_spec(endpoints, title=args.title, version=args.version, generator=ExampleGenerator(seed))

    output = args.output or os.path.join(settings.output_dir, "openapi.yaml")
    print(f"💾 Writing to {output}")
    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        yaml.safe_dump(spec, f, sort_keys=False, allow_unicode=True)
    return 0


def run_validate(args: argparse.Namespace, settings: Settings) -> int:
    parameters = parameter_section(load_document(args.file))
    result = ExampleValidator(parameters).validate()
    print(format_violations_for_report(result.violations))
    return 0 if result.is_valid else 1


# =========================
# Entry point
# =========================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="param-tree",
        description="Build example payloads and OpenAPI sections from flat parameter descriptions",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    clean_cmd = commands.add_parser("clean", help="Print the nested example payload for a parameter file")
    clean_cmd.add_argument("file", help="YAML or JSON file with the parameters")
    clean_cmd.add_argument("--format", choices=FORMATS, help="Output format (default from PARAM_TREE_OUTPUT_FORMAT)")
    clean_cmd.add_argument("--seed", type=int, help="Seed for generated examples")
    clean_cmd.add_argument("--strict", action="store_true", help="Reject paths that contradict their parent's type")
    clean_cmd.add_argument("--output", help="Write to this file instead of stdout")
    clean_cmd.set_defaults(handler=run_clean)

    openapi_cmd = commands.add_parser("openapi", help="Write an OpenAPI document for a list of endpoints")
    openapi_cmd.add_argument("file", help="YAML or JSON file with an 'endpoints' list")
    openapi_cmd.add_argument("--title", default="Generated API")
    openapi_cmd.add_argument("--version", default="1.0.0")
    openapi_cmd.add_argument("--seed", type=int, help="Seed for generated examples")
    openapi_cmd.add_argument("--output", help="Output path (default: <output dir>/openapi.yaml)")
    openapi_cmd.set_defaults(handler=run_openapi)

    validate_cmd = commands.add_parser("validate", help="Check examples against their declared types")
    validate_cmd.add_argument("file", help="YAML or JSON file with the parameters")
    validate_cmd.set_defaults(handler=run_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return args.handler(args, settings)
    except (InputFileError, ParameterTreeError, ValidationError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"❌ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
