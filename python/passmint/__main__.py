"""
CLI interface for Passmint.
"""

import getpass
import json
import sys
import threading
import time
from dataclasses import replace
from typing import Optional

import click

from .config import (
    DEFAULT_COUNT,
    DEFAULT_LENGTH,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    MAX_COUNT,
    MAX_LENGTH,
    MIN_COUNT,
    MIN_LENGTH,
    configure_logging,
    get_settings,
)
from .exceptions import PassmintException
from .utils.password_generator import GenerationOptions, PasswordGenerator
from .utils.validation import ValidationRequirements, validate_password

CLIPBOARD_CLEAR_SECONDS = 60


def copy_to_clipboard(value: str) -> bool:
    """Copy a value to the clipboard and clear it again after a delay."""
    try:
        import pyperclip
        pyperclip.copy(value)
    except ImportError:
        click.echo("pyperclip not installed. Install with: pip install pyperclip", err=True)
        return False
    except Exception as e:
        click.echo(f"Could not copy to clipboard: {e}", err=True)
        return False

    def clear_clipboard() -> None:
        time.sleep(CLIPBOARD_CLEAR_SECONDS)
        try:
            pyperclip.copy("")
        except Exception:
            pass  # Don't interrupt the user if clearing fails

    clear_thread = threading.Thread(target=clear_clipboard, daemon=True)
    clear_thread.start()
    return True


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Passmint - secure password generation and strength validation."""
    settings = get_settings()
    if verbose:
        settings = replace(settings, log_level="DEBUG")
    configure_logging(settings.log_level, stream=sys.stderr)
    ctx.obj = settings


@cli.command()
@click.option("--length", "-l", default=DEFAULT_LENGTH, type=click.IntRange(MIN_LENGTH, MAX_LENGTH),
              help=f"Password length ({MIN_LENGTH}-{MAX_LENGTH}, default: {DEFAULT_LENGTH})")
@click.option("--count", "-n", default=DEFAULT_COUNT, type=click.IntRange(MIN_COUNT, MAX_COUNT),
              help=f"Number of passwords ({MIN_COUNT}-{MAX_COUNT}, default: {DEFAULT_COUNT})")
@click.option("--no-uppercase", is_flag=True, help="Exclude uppercase letters")
@click.option("--no-lowercase", is_flag=True, help="Exclude lowercase letters")
@click.option("--no-digits", is_flag=True, help="Exclude digits")
@click.option("--symbols", is_flag=True, help="Include symbol characters")
@click.option("--exclude-ambiguous", is_flag=True, help="Exclude ambiguous characters (I, l, 1, O, 0, o)")
@click.option("--exclude", default="", help="Characters that must never appear")
@click.option("--no-require-each", is_flag=True,
              help="Don't force one character from every enabled category")
@click.option("--copy", "-c", is_flag=True, help="Copy the first password to the clipboard")
def generate(length: int, count: int, no_uppercase: bool, no_lowercase: bool, no_digits: bool,
             symbols: bool, exclude_ambiguous: bool, exclude: str, no_require_each: bool,
             copy: bool) -> None:
    """Generate one or more secure passwords."""
    try:
        options = GenerationOptions.from_flags(
            use_uppercase=not no_uppercase,
            use_lowercase=not no_lowercase,
            use_digits=not no_digits,
            use_symbols=symbols,
            exclude=exclude,
            exclude_ambiguous=exclude_ambiguous,
            require_each=not no_require_each,
        )
        generator = PasswordGenerator(length=length, options=options)
        passwords = generator.generate_many(count)
    except PassmintException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"🔐 Generated {length}-character password using: {generator.get_charset_info()}",
               err=True)

    for password in passwords:
        click.echo(password)

    if copy and copy_to_clipboard(passwords[0]):
        click.echo(f"🔐 Password copied to clipboard (cleared in {CLIPBOARD_CLEAR_SECONDS}s).", err=True)


@cli.command()
@click.argument("password", required=False)
@click.option("--stdin", is_flag=True, help="Read password from stdin")
@click.option("--min-length", default=DEFAULT_MIN_LENGTH, type=int,
              help=f"Minimum length (default: {DEFAULT_MIN_LENGTH})")
@click.option("--max-length", default=DEFAULT_MAX_LENGTH, type=int,
              help=f"Maximum length (default: {DEFAULT_MAX_LENGTH})")
@click.option("--require-uppercase", is_flag=True, help="Require an uppercase letter")
@click.option("--require-lowercase", is_flag=True, help="Require a lowercase letter")
@click.option("--require-numbers", is_flag=True, help="Require a digit")
@click.option("--require-symbols", is_flag=True, help="Require a symbol")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
def validate(password: Optional[str], stdin: bool, min_length: int, max_length: int,
             require_uppercase: bool, require_lowercase: bool, require_numbers: bool,
             require_symbols: bool, as_json: bool) -> None:
    """Check a password against strength requirements."""
    if stdin and password:
        click.echo("Error: Cannot use --stdin with a provided password", err=True)
        sys.exit(1)

    if stdin:
        password = sys.stdin.read().rstrip("\n")
    elif password is None:
        password = getpass.getpass("Password to check: ")

    requirements = ValidationRequirements(
        min_length=min_length,
        max_length=max_length,
        require_uppercase=require_uppercase,
        require_lowercase=require_lowercase,
        require_numbers=require_numbers,
        require_symbols=require_symbols,
    )
    report = validate_password(password, requirements)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        for check in report.checks:
            mark = "✅" if check.passed else "❌"
            click.echo(f"{mark} {check.message}")
        click.echo(f"Score: {report.score} ({report.strength})")

    if not report.valid:
        sys.exit(1)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: PASSMINT_HOST or 127.0.0.1)")
@click.option("--port", default=None, type=int, help="Port (default: PASSMINT_PORT or 8000)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_obj
def serve(settings, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP JSON API."""
    import uvicorn

    uvicorn.run(
        "passmint.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
