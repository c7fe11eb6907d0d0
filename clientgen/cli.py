"""
Command line entry point.

Usage:
    clientgen generate javascript api/transfer.raml --api-name transfer --out ./build
    clientgen generate php api/transfer.raml --api-name transfer --vendor-prefix acme

Settings not given on the command line come from ``clientgen.toml`` (or the
``[tool.clientgen]`` table of ``pyproject.toml``) and ``CLIENTGEN_*``
environment variables.
"""

import argparse
from pathlib import Path
from typing import List, Optional
import sys

from . import __version__
from .config import LANGUAGES, load_config
from .errors import ClientGenError
from .generator import CodeGenerator
from .observability import configure_logging


def generate_command(args: argparse.Namespace) -> int:
    """
    Execute the generate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    try:
        config = load_config(Path(args.config) if args.config else None).with_overrides(
            language=args.language,
            api_name=args.api_name,
            client_name=args.client_name,
            output_dir=Path(args.out) if args.out else None,
            vendor_prefix=args.vendor_prefix,
            package_name=args.package_name,
            base_url=args.base_url,
            version=args.package_version,
            log_level=args.log_level.upper() if args.log_level else None,
            on_unrecognized="error" if args.strict else None,
        )
        configure_logging(config.log_level)

        print(f"Generating {config.language} client: {config.api_name}")
        print()
        print("Step 1/3: Loading specification...")
        print(f"   Source: {args.spec}")
        generator = CodeGenerator(config)
        print("Step 2/3: Building type definitions and rendering...")
        result = generator.generate(args.spec)
        print(f"   ✓ {len(result.definitions)} types, {len(result.actions)} actions")
        print("Step 3/3: Complete!")
        print()
        print(f"   Location: {config.target_dir}")
        print(f"   Files written: {len(result.written)}")
        print(f"   Build hash: {result.build_hash[:12]}")
    except ClientGenError as exc:
        print(f"   ✗ {exc.format()}", file=sys.stderr)
        return 1
    return 0


def add_generate_command(subparsers) -> None:
    """
    Add the generate subcommand.

    Args:
        subparsers: Argparse subparsers object
    """
    parser = subparsers.add_parser(
        "generate",
        help="Generate a client library from a RAML specification",
    )
    parser.add_argument("language", choices=LANGUAGES, help="Target language")
    parser.add_argument("spec", help="Path or URL of the RAML document")
    parser.add_argument("--api-name", help="Name of the API (output subdirectory and package name)")
    parser.add_argument("--client-name", help="Client grouping name (default: document title)")
    parser.add_argument("--out", "-o", help="Output directory (default: ./build)")
    parser.add_argument("--vendor-prefix", help="Vendor prefix for packages and namespaces")
    parser.add_argument("--package-name", help="Explicit package name of the generated library")
    parser.add_argument("--base-url", help="Default API base URL (default: the document baseUri)")
    parser.add_argument("--package-version", help="Version of the generated package (default: 1.0.0)")
    parser.add_argument("--config", help="Path to a clientgen.toml or pyproject.toml")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a declaration is not accepted by any builder",
    )
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    parser.set_defaults(func=generate_command)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clientgen",
        description="Generate client libraries from RAML specifications",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_generate_command(parser.add_subparsers(dest="command"))
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
