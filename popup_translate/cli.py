"""CLI for popup-translate - translation with phonetics from the terminal."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from . import __version__
from .config import build_core_config, config_from_env
from .controller import TranslationController
from .i18n import I18nDiagnostics, i18n
from .locales import available_ui_languages, register_default_locales
from .phonetics import PhoneticService
from .translation.exceptions import InvalidTranslationRequest, TranslationError
from .translation.lang_codes import get_display_names
from .translation.metadata import DEFAULT_TRANSLATOR_ID, TranslatorMetadata
from .translation.transport import HttpTransport

__all__ = ["DiagnosticReport", "diagnose", "main"]

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticReport:
    """Diagnostic payload for the info command."""

    version: str
    default_service: str
    available_services: List[str]
    configured_api_keys: List[str]
    endpoints: Dict[str, str]
    ui_languages: List[str]
    i18n: I18nDiagnostics

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2)


def setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """Configure logging for CLI output.

    Args:
        verbose: If True, enable DEBUG level logging
        level: Level name used when not verbose
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _ensure_locales() -> None:
    if not i18n.languages():
        register_default_locales(i18n)


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the core config from environment variables plus explicit overrides."""
    raw = config_from_env()
    for section, values in (overrides or {}).items():
        raw.setdefault(section, {}).update(values)
    return build_core_config(raw)


def diagnose(config: Optional[Dict[str, Any]] = None) -> DiagnosticReport:
    """Programmatic entry point for diagnostics."""
    _ensure_locales()
    config = config or load_config()
    api_keys = config.get("api_keys", {})

    return DiagnosticReport(
        version=__version__,
        default_service=config["translation"]["service"],
        available_services=TranslatorMetadata.list_translator_ids(),
        configured_api_keys=sorted(name for name, value in api_keys.items() if value),
        endpoints=dict(config["endpoints"]),
        ui_languages=available_ui_languages(),
        i18n=i18n.diagnostics(),
    )


# =============================================================================
# Subcommand: info
# =============================================================================

def cmd_info(args: argparse.Namespace) -> int:
    """Show configuration diagnostics."""
    try:
        report = diagnose()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.as_json:
        print(report.to_json())
        return 0

    print("popup-translate diagnostics:")
    print(f"  Version: {report.version}")
    print(f"  Default service: {report.default_service}")
    print(f"  Services: {', '.join(report.available_services)}")
    if report.configured_api_keys:
        print(f"  API keys: {', '.join(report.configured_api_keys)}")
    else:
        print("  API keys: none configured")
    print(f"  OpenAI-compatible endpoint: {report.endpoints.get('openai')}")
    print(f"  UI languages: {', '.join(report.i18n.languages)}")

    translator = report.i18n.translator
    if translator.registered:
        extras = f" extras={','.join(translator.extras)}" if translator.extras else ""
        name = translator.name or "translator"
        print(f"  String translator: {name}{extras}")
    else:
        print("  String translator: not registered (built-in tables only)")

    return 0


# =============================================================================
# Subcommand: services
# =============================================================================

def cmd_services(args: argparse.Namespace) -> int:
    """List available translation services."""
    translators = TranslatorMetadata.get_all()
    if not translators:
        print("No translation services found.")
        return 0

    for tid, info in translators.items():
        key = " (API key required)" if info.requires_api_key else ""
        default = " [default]" if tid == DEFAULT_TRANSLATOR_ID else ""
        print(f"{tid}: {info.display_name}{key}{default}")

    return 0


# =============================================================================
# Subcommand: languages
# =============================================================================

def cmd_languages(args: argparse.Namespace) -> int:
    """List selectable languages."""
    try:
        names = get_display_names(args.ui_language)
    except (ValueError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("auto: Auto Detect (source only)")
    for code, name in names.items():
        print(f"{code}: {name}")
    return 0


# =============================================================================
# Subcommand: translate
# =============================================================================

def _format_result(result, ui_language: str) -> List[str]:
    lines = [f"{i18n.translate('labels.translation', language=ui_language)}: {result.translation}"]
    if result.src_phonetic:
        label = i18n.translate("labels.source_phonetic", language=ui_language)
        lines.append(f"{label}: /{result.src_phonetic}/")
    if result.target_phonetic:
        label = i18n.translate("labels.target_phonetic", language=ui_language)
        lines.append(f"{label}: /{result.target_phonetic}/")
    if result.detected_lang:
        label = i18n.translate("labels.detected_language", language=ui_language)
        lines.append(f"{label}: {result.detected_lang}")
    if result.service_id:
        label = i18n.translate("labels.service", language=ui_language)
        lines.append(f"{label}: {result.service_id}")
    return lines


async def _run_translate(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    ui_language = args.ui_language or config["translation"]["ui_language"]
    async with TranslationController(config, i18n=i18n) as controller:
        try:
            result = await controller.translate_text(
                args.text,
                source_lang=args.source,
                target_lang=args.target,
                service_id=args.service,
                ui_language=ui_language,
            )
        except (TranslationError, InvalidTranslationRequest) as e:
            print(f"Error: {controller.describe_error(e, ui_language)}", file=sys.stderr)
            return 1

    if args.as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return 0

    if result.fallback_notice:
        print(result.fallback_notice, file=sys.stderr)
    for line in _format_result(result, ui_language):
        print(line)
    return 0


def cmd_translate(args: argparse.Namespace) -> int:
    """Translate text with the selected service."""
    _ensure_locales()
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.verbose, config["logging"]["level"])
    return asyncio.run(_run_translate(args, config))


# =============================================================================
# Subcommand: phonetic
# =============================================================================

async def _run_phonetic(text: str, config: Dict[str, Any]) -> str:
    async with HttpTransport(timeout=config["network"]["timeout"]) as transport:
        service = PhoneticService(transport, endpoint=config["endpoints"]["dictionary"])
        return await service.get_phonetic(text, "en")


def cmd_phonetic(args: argparse.Namespace) -> int:
    """Look up the English phonetic transcription of a word or short phrase."""
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.verbose, config["logging"]["level"])
    phonetic = asyncio.run(_run_phonetic(args.text, config))
    if not phonetic:
        print("No phonetic transcription found.", file=sys.stderr)
        return 1
    print(f"/{phonetic}/")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="popup-translate",
        description="popup-translate - translation with phonetic transcription",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser("info", help="Show configuration diagnostics")
    info_parser.add_argument(
        "--as-json",
        action="store_true",
        help="Emit diagnostics as JSON",
    )
    info_parser.set_defaults(func=cmd_info)

    services_parser = subparsers.add_parser("services", help="List translation services")
    services_parser.set_defaults(func=cmd_services)

    languages_parser = subparsers.add_parser("languages", help="List selectable languages")
    languages_parser.add_argument(
        "--ui-language",
        default="en",
        help="Language used for the names (default: en)",
    )
    languages_parser.set_defaults(func=cmd_languages)

    # translate command
    translate_parser = subparsers.add_parser("translate", help="Translate text")
    translate_parser.add_argument("text", help="Text to translate")
    translate_parser.add_argument(
        "--service",
        help="Translation service ID (e.g., google, gemini, openai, mymemory)",
    )
    translate_parser.add_argument(
        "--source",
        help="Source language code or 'auto' (default: auto)",
    )
    translate_parser.add_argument(
        "--target",
        help="Target language code (default: vi)",
    )
    translate_parser.add_argument(
        "--ui-language",
        help="Language for notices and error messages (default: en)",
    )
    translate_parser.add_argument(
        "--as-json",
        action="store_true",
        help="Emit the result as JSON",
    )
    translate_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    translate_parser.set_defaults(func=cmd_translate)

    phonetic_parser = subparsers.add_parser("phonetic", help="Look up English phonetics")
    phonetic_parser.add_argument("text", help="Word or short phrase (up to 10 words)")
    phonetic_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    phonetic_parser.set_defaults(func=cmd_phonetic)

    args = parser.parse_args(argv)

    # No command specified - show help
    if args.command is None:
        parser.print_help()
        return 0

    # Execute the command
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
