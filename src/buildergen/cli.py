"""Command-line interface for buildergen."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from common import Settings, build_formatter, configure_logging
from .errors import BuilderGenError
from .generator import BuilderGenerator, Generator
from .host import DescriptorCodeModel
from .naming import DefaultNamingPolicy
from .options import GenerationOptions
from .synthesizer import synthesize


def create_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Generate Java builder-pattern boilerplate")
    parser.add_argument(
        "--env-file",
        action="append",
        default=None,
        help="Path to a .env file to read before executing commands. Can be provided multiple times.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Print the generated builder members")
    generate_parser.add_argument("descriptor", help="YAML/JSON descriptor with the type name and fields")
    _add_option_flags(generate_parser)
    generate_parser.set_defaults(handler=_handle_generate)

    apply_parser = subparsers.add_parser(
        "apply",
        help="Replace the builder in the descriptor's source unit",
    )
    apply_parser.add_argument("descriptor", help="YAML/JSON descriptor with the type, fields and source")
    _add_option_flags(apply_parser)
    apply_parser.add_argument(
        "--format",
        dest="format_source",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the configured external formatter on the result",
    )
    apply_parser.add_argument("--output", help="Write the new unit here instead of the descriptor's source")
    apply_parser.set_defaults(handler=_handle_apply)

    options_parser = subparsers.add_parser("options", help="Show the effective generation options")
    _add_option_flags(options_parser)
    options_parser.set_defaults(handler=_handle_options)

    return parser


def _add_option_flags(parser: argparse.ArgumentParser) -> None:
    flags = (
        ("--builder-constructor", "create_builder_constructor", "Let build() populate a new instance directly"),
        ("--with-methods", "create_static_with_methods", "Emit static with() factories"),
        ("--copy-constructor", "create_copy_constructor", "Emit the builder copy constructor"),
        ("--builder-getters", "create_builder_getters", "Emit getters on the builder"),
        ("--class-getters", "create_class_getters", "Emit getters on the enclosing type"),
        ("--class-setters", "create_class_setters", "Emit setters on the enclosing type"),
    )
    for flag, dest, help_text in flags:
        parser.add_argument(
            flag,
            dest=dest,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=help_text,
        )


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Entry point for handling CLI execution."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    settings = Settings.from_env(env_files=args.env_file)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.error("No handler configured for the provided command")
    return handler(args, settings)


def _options_from(args: argparse.Namespace, settings: Settings) -> GenerationOptions:
    return GenerationOptions.from_settings(
        settings,
        create_builder_constructor=args.create_builder_constructor,
        create_static_with_methods=args.create_static_with_methods,
        create_copy_constructor=args.create_copy_constructor,
        create_builder_getters=args.create_builder_getters,
        create_class_getters=args.create_class_getters,
        create_class_setters=args.create_class_setters,
        format_source=getattr(args, "format_source", None),
    )


def _handle_generate(args: argparse.Namespace, settings: Settings) -> int:
    """Print synthesized members without touching any source."""
    try:
        model = DescriptorCodeModel.from_file(args.descriptor)
    except BuilderGenError as exc:
        print(f"Error: {exc}")
        return 1
    text = synthesize(
        model.get_enclosing_type_name(),
        model.get_fields(),
        _options_from(args, settings),
        DefaultNamingPolicy(prefixes=settings.field_prefixes),
    )
    print(text, end="")
    return 0


def _handle_apply(args: argparse.Namespace, settings: Settings) -> int:
    """Regenerate the builder inside the descriptor's source unit."""
    try:
        model = DescriptorCodeModel.from_file(args.descriptor)
    except BuilderGenError as exc:
        print(f"Error: {exc}")
        return 1
    if args.output:
        model.source_path = Path(args.output)

    generator: Generator = BuilderGenerator(
        _options_from(args, settings),
        naming=DefaultNamingPolicy(prefixes=settings.field_prefixes),
        formatter=build_formatter(settings),
    )
    outcome = generator.generate(model)
    if not outcome.ok:
        print(f"Error: {outcome.error}")
        return 1

    if model.source_path is None:
        print(outcome.contents, end="")
    else:
        note = " (formatted)" if outcome.formatted else ""
        print(f"Builder for {model.get_enclosing_type_name()} written to {model.source_path}{note}.")
    return 0


def _handle_options(args: argparse.Namespace, settings: Settings) -> int:
    options = _options_from(args, settings)
    for key, value in options.as_dict().items():
        print(f"{key}: {'yes' if value else 'no'}")
    print(f"field_prefixes: {', '.join(settings.field_prefixes) or '(none)'}")
    return 0
