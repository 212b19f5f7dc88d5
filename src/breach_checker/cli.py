"""
Command-line interface for the breach checker.

This module provides the main CLI entry point with commands for:
- check: Check a single password against the breach index
- interactive: Prompt loop that keeps checking passwords
- digest: Show the SHA-1 digest and the prefix that would be sent
- self-test: Validate configuration and endpoint connectivity
- config: Configuration management
"""

import argparse
import asyncio
import getpass
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import httpx

from . import __version__
from .audit_logger import AuditLogger
from .config import LoggingConfig, RangeApiConfig, SystemConfig
from .digest_engine import hash_password, split_digest
from .enums import LookupStatus
from .exceptions import ConfigurationError
from .i18n import SUPPORTED_LANGUAGES, get_message
from .orchestrator import LookupOrchestrator
from .outcome_state import OutcomeState, PasswordChanged, ShowPassword, Submit, drive
from .presenter import render_digest, render_outcome, render_state
from .range_client import RangeClient
from .self_test import SelfTest, run_self_test

DEFAULT_CONFIG_PATH = Path.home() / ".breach_checker" / "config.json"

# Exit codes for 'check'
EXIT_SAFE = 0
EXIT_EXPOSED = 1  # breached, failed or no password
EXIT_NOT_CHECKED = 2  # simulation mode without a match in the offline sample


def create_default_config(
    simulation_mode: bool = False,
    language: str = "en",
) -> SystemConfig:
    """
    Create a default system configuration.

    Args:
        simulation_mode: Enable simulation mode (no real network requests)
        language: Output language ('en' or 'de')
    """
    return SystemConfig(
        range_api=RangeApiConfig(),
        logging=LoggingConfig(level="info", output_format="text"),
        language=language,
        simulation_mode=simulation_mode,
        startup_self_test=False,
    )


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig, or None if the file does not exist

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            code="load_error",
            message=f"Could not load config from {config_path}: {e}",
            details={"path": str(config_path)},
        )

    try:
        defaults = RangeApiConfig()
        range_data = data.get("range_api", {})
        range_api = RangeApiConfig(
            base_url=range_data.get("base_url", defaults.base_url),
            timeout_seconds=float(range_data.get("timeout_seconds", defaults.timeout_seconds)),
            user_agent=range_data.get("user_agent", defaults.user_agent),
            add_padding=bool(range_data.get("add_padding", False)),
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", "info"),
            output_format=logging_data.get("output_format", "text"),
        )

        return SystemConfig(
            range_api=range_api,
            logging=logging_config,
            language=data.get("language", "en"),
            simulation_mode=bool(data.get("simulation_mode", False)),
            startup_self_test=bool(data.get("startup_self_test", False)),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ConfigurationError(
            code="invalid_config",
            message=f"Invalid config in {config_path}: {e}",
            details={"path": str(config_path)},
        )


def save_config_to_file(config: SystemConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "range_api": {
                "base_url": config.range_api.base_url,
                "timeout_seconds": config.range_api.timeout_seconds,
                "user_agent": config.range_api.user_agent,
                "add_padding": config.range_api.add_padding,
            },
            "logging": {
                "level": config.logging.level,
                "output_format": config.logging.output_format,
            },
            "language": config.language,
            "simulation_mode": config.simulation_mode,
            "startup_self_test": config.startup_self_test,
        }

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def resolve_config(args: argparse.Namespace) -> Optional[SystemConfig]:
    """
    Build the effective configuration from a config file and CLI flags.

    Returns:
        SystemConfig, or None if an explicitly given config file is unusable
    """
    config = None
    if getattr(args, "config", None):
        try:
            config = load_config_from_file(Path(args.config))
        except ConfigurationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return None
        if config is None:
            print(f"Error: Could not load config from {args.config}", file=sys.stderr)
            return None

    if config is None:
        config = create_default_config(language=args.language or "en")
    elif args.language:
        config = replace(config, language=args.language)

    if getattr(args, "dry_run", False):
        config = replace(config, simulation_mode=True)

    return config


def read_password(language: str, from_stdin: bool = False) -> str:
    """Read a password without echoing it, or one line from stdin."""
    if from_stdin:
        return sys.stdin.readline().rstrip("\r\n")
    return getpass.getpass(get_message("cli.password_prompt", language))


def create_logger(config: SystemConfig, verbose: bool) -> Optional[AuditLogger]:
    if not verbose:
        return None
    return AuditLogger.from_config(config.logging)


async def _startup_self_test(config: SystemConfig, verbose: bool) -> bool:
    if not config.startup_self_test:
        return True
    result = await run_self_test(config=config, print_output=verbose, language=config.language)
    if not result.success:
        print(get_message("selftest.failed", config.language), file=sys.stderr)
    return result.success


async def check_password(
    password: str,
    config: SystemConfig,
    verbose: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """
    Check a single password.

    Args:
        password: The password to check
        config: Effective system configuration
        verbose: Emit audit log entries to stderr
        transport: Optional httpx transport for the range client

    Returns:
        EXIT_SAFE when not found in any breach, EXIT_EXPOSED when breached
        or failed, EXIT_NOT_CHECKED when a simulated lookup found no match
    """
    language = config.language

    if not password:
        print(get_message("cli.empty_password", language), file=sys.stderr)
        return EXIT_EXPOSED

    if not await _startup_self_test(config, verbose):
        return EXIT_EXPOSED

    if config.simulation_mode:
        print(get_message("simulation.enabled", language))

    logger = create_logger(config, verbose)
    state = OutcomeState(logger=logger)
    state.update(PasswordChanged(password))

    print(render_digest(state.current_digest, language))

    async with RangeClient(
        config.range_api,
        simulation_mode=config.simulation_mode,
        transport=transport,
    ) as client:
        orchestrator = LookupOrchestrator(transport=client, logger=logger)
        print(get_message("outcome.searching", language))
        outcome = await drive(state, orchestrator, Submit())

    print(render_outcome(outcome, language, simulated=config.simulation_mode))

    if outcome.status != LookupStatus.RESOLVED or outcome.result.is_breached:
        return EXIT_EXPOSED
    if config.simulation_mode:
        return EXIT_NOT_CHECKED
    return EXIT_SAFE


async def interactive_session(
    config: SystemConfig,
    verbose: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """
    Run the prompt loop.

    Each entered password replaces the previous one and is submitted right
    away; an empty line ends the session.
    """
    language = config.language
    simulated = config.simulation_mode

    if not await _startup_self_test(config, verbose):
        return EXIT_EXPOSED

    if config.simulation_mode:
        print(get_message("simulation.enabled", language))

    print(get_message("app.title", language))
    print(get_message("cli.interactive_help", language))

    logger = create_logger(config, verbose)
    state = OutcomeState(logger=logger)

    async with RangeClient(
        config.range_api,
        simulation_mode=simulated,
        transport=transport,
    ) as client:
        orchestrator = LookupOrchestrator(transport=client, logger=logger)

        while True:
            try:
                line = await asyncio.to_thread(
                    getpass.getpass, get_message("cli.password_prompt", language)
                )
            except (EOFError, KeyboardInterrupt):
                break

            if not line:
                break

            if line in (":show", ":hide"):
                state.update(ShowPassword(line == ":show"))
                print("\n".join(render_state(state, language, simulated)))
                continue

            state.update(PasswordChanged(line))
            print(render_digest(state.current_digest, language))
            print(get_message("outcome.searching", language))
            await drive(state, orchestrator, Submit())
            print("\n".join(render_state(state, language, simulated)))

    return EXIT_SAFE


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    password = read_password(config.language, from_stdin=args.stdin)

    return asyncio.run(check_password(
        password=password,
        config=config,
        verbose=args.verbose,
    ))


def cmd_interactive(args: argparse.Namespace) -> int:
    """Handle the 'interactive' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    return asyncio.run(interactive_session(config=config, verbose=args.verbose))


def cmd_digest(args: argparse.Namespace) -> int:
    """Handle the 'digest' command."""
    language = args.language or "en"
    digest = hash_password(read_password(language, from_stdin=args.stdin))
    if not digest:
        print(get_message("cli.empty_password", language), file=sys.stderr)
        return 1

    print(render_digest(digest, language))
    print(get_message("digest.prefix_label", language, prefix=split_digest(digest).prefix))
    return 0


def cmd_self_test(args: argparse.Namespace) -> int:
    """Handle the 'self-test' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    result = asyncio.run(run_self_test(
        config=config,
        print_output=True,
        language=config.language,
    ))

    return 0 if result.success else 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        config = create_default_config(language=args.language or "en")
        if save_config_to_file(config, config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    try:
        config = load_config_from_file(config_path)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if config is None:
        print(f"No configuration found at: {config_path}")
        print("Use 'config init' to create a default configuration.")
        return 1

    if args.action == "show":
        print(f"Configuration from: {config_path}")
        print(f"  Range endpoint: {config.range_api.base_url}")
        print(f"  Timeout: {config.range_api.timeout_seconds}s")
        print(f"  Padding: {config.range_api.add_padding}")
        print(f"  Language: {config.language}")
        print(f"  Simulation mode: {config.simulation_mode}")
        print(f"  Log level: {config.logging.level}")
        return 0

    if args.action == "validate":
        validation = SelfTest(config).validate_config()
        for warning in validation.warnings:
            print(f"Warning: {warning}")
        if not validation.valid:
            print(f"Configuration at {config_path} is invalid:", file=sys.stderr)
            for error in validation.errors:
                print(f"  - {error}", file=sys.stderr)
            return 1
        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Output language (default: en)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="breach-checker",
        description="Check passwords against a breach corpus using k-anonymity range queries",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'check' command
    check_parser = subparsers.add_parser(
        "check",
        help="Check a single password",
    )
    check_parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read the password from the first line of stdin instead of prompting",
    )
    check_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulation mode - offline sample data, no network requests",
    )
    _add_common_arguments(check_parser)
    check_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    check_parser.set_defaults(func=cmd_check)

    # 'interactive' command
    interactive_parser = subparsers.add_parser(
        "interactive",
        help="Check passwords in a prompt loop",
    )
    interactive_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulation mode - offline sample data, no network requests",
    )
    _add_common_arguments(interactive_parser)
    interactive_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    interactive_parser.set_defaults(func=cmd_interactive)

    # 'digest' command
    digest_parser = subparsers.add_parser(
        "digest",
        help="Show the SHA-1 digest of a password and the prefix that is sent",
    )
    digest_parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read the password from the first line of stdin instead of prompting",
    )
    digest_parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Output language (default: en)",
    )
    digest_parser.set_defaults(func=cmd_digest)

    # 'self-test' command
    self_test_parser = subparsers.add_parser(
        "self-test",
        help="Validate configuration and verify endpoint connectivity",
    )
    _add_common_arguments(self_test_parser)
    self_test_parser.set_defaults(func=cmd_self_test)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Default language for new configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
