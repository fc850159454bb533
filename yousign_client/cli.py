"""
Yousign CLI - Command Line Interface for the Yousign e-signature API.

This module provides the main CLI entry point and commands for:
- Configuration management
- Users
- Procedures and their members
- Files and signature placements
"""

import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from . import __version__, __prog_name__
from .config import ConfigManager, get_config_manager
from .api import YousignClient
from .exceptions import YousignError, NotFoundError
from .models import FileObject, FileRecord, Member, Procedure, User
from .validators import FILE_TYPES, extract_uuid
from .utils import (
    setup_logging,
    print_success,
    print_error,
    print_info,
    print_json,
    print_table,
    truncate_string,
    confirm_action,
    encode_file,
    decode_content,
    load_json_file,
    OutputFormat,
)

logger = logging.getLogger(__name__)


# ============================================================================
# CLI Context and Common Options
# ============================================================================

class YousignContext:
    """CLI context object for sharing state between commands."""

    def __init__(self):
        self.config_manager: ConfigManager = None  # type: ignore[assignment]


pass_context = click.make_pass_decorator(YousignContext, ensure=True)


def common_options(f):
    """Common options for all commands."""
    f = click.option(
        '-v', '--verbose',
        is_flag=True,
        help='Enable verbose output'
    )(f)
    f = click.option(
        '-q', '--quiet',
        is_flag=True,
        help='Suppress non-essential output'
    )(f)
    f = click.option(
        '-f', '--format',
        'output_format',
        type=click.Choice(['table', 'json']),
        default='table',
        help='Output format'
    )(f)
    return f


def require_config(f):
    """Decorator to require an API key."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(YousignContext)
        config = ctx.config_manager.get()

        if not config.is_configured():
            print_error(
                "Yousign CLI is not configured.",
                f"Run '{__prog_name__} configure --api-key KEY' or set YOUSIGN_API_KEY."
            )
            sys.exit(1)

        return click_ctx.invoke(f, *args, **kwargs)

    return wrapper


def open_client(ctx: YousignContext) -> YousignClient:
    """Build an API client from the stored configuration."""
    return YousignClient(ctx.config_manager.get().to_session())


def _bare_id(value: str) -> str:
    """Accept either a UUID or a server id such as '/users/<uuid>'."""
    return extract_uuid(value) or value


def _view(view_cls: type, result: Any) -> Any:
    """Build a display view, exiting cleanly on an empty or malformed response."""
    try:
        return view_cls.from_dict(result)
    except ValueError:
        print_error(f"Unexpected empty or malformed {view_cls.__name__} response from the API.")
        sys.exit(1)


def _load_json_option(path: Optional[Path], expected: type, label: str) -> Any:
    if path is None:
        return None
    try:
        data = load_json_file(path)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)
    if not isinstance(data, expected):
        print_error(f"{label} file must contain a JSON {expected.__name__}.")
        sys.exit(1)
    return data


def _echo_fields(title: str, fields: List[List[str]]) -> None:
    click.echo(click.style(title, bold=True))
    width = max(len(label) for label, _ in fields) + 1
    for label, value in fields:
        click.echo(f"  {(label + ':').ljust(width)} {value if value not in (None, '') else 'N/A'}")


# ============================================================================
# Main CLI Group
# ============================================================================

@click.group()
@click.version_option(version=__version__, prog_name=__prog_name__)
@click.option(
    '--config-dir',
    type=click.Path(path_type=Path),
    envvar='YOUSIGN_CONFIG_DIR',
    help='Custom configuration directory'
)
@click.pass_context
def cli(ctx, config_dir: Optional[Path]):
    """
    Yousign CLI - manage e-signature procedures from the command line.

    \b
    Quick Start:
      1. Configure your key:  yousign configure --api-key KEY --testing
      2. Upload a document:   yousign files upload contract.pdf
      3. Create a procedure:  yousign procedures create "Contract"

    \b
    Environment Variables:
      YOUSIGN_API_KEY      - API key
      YOUSIGN_IS_TESTING   - Use the staging API (true/false)
      YOUSIGN_CONFIG_DIR   - Custom configuration directory
    """
    ctx.ensure_object(YousignContext)
    ctx.obj.config_manager = get_config_manager(config_dir)


# ============================================================================
# Configuration Commands
# ============================================================================

@cli.command('configure')
@click.option('--api-key', '-k', help='Yousign API key')
@click.option('--testing/--production', 'is_testing', default=None, help='Use the staging or production API')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Write client logs to this file')
@click.option('--show', is_flag=True, help='Show current configuration')
@pass_context
def configure(
    ctx: YousignContext,
    api_key: Optional[str],
    is_testing: Optional[bool],
    log_file: Optional[str],
    show: bool
):
    """
    Configure Yousign CLI settings.

    \b
    Examples:
      yousign configure --api-key KEY --testing
      yousign configure --production
      yousign configure --show
    """
    config_manager = ctx.config_manager

    if show:
        config = config_manager.get()
        key = config.api_key
        click.echo("\nCurrent Configuration:")
        click.echo(f"  API Key:      {key[:4] + '*' * 10 if key else '(not configured)'}")
        click.echo(f"  Environment:  {'staging' if config.is_testing else 'production'}")
        click.echo(f"  Log File:     {config.log_file or '(stderr)'}")
        click.echo(f"  Config Path:  {config_manager.get_config_path()}")
        return

    # Interactive configuration if no options provided
    if not any([api_key, is_testing is not None, log_file]):
        click.echo("Interactive configuration setup:")

        current = config_manager.get()

        api_key = click.prompt("API key", default=current.api_key or None, hide_input=True)
        is_testing = click.confirm("Use the staging API?", default=current.is_testing)

    updates: Dict[str, Any] = {}
    if api_key:
        updates['api_key'] = api_key
    if is_testing is not None:
        updates['is_testing'] = is_testing
    if log_file:
        updates['log_file'] = log_file

    if updates:
        config_manager.update(**updates)
        print_success("Configuration saved successfully.")
    else:
        print_info("No changes made.")


@cli.command('config-clear')
@click.confirmation_option(prompt='Are you sure you want to clear all configuration?')
@pass_context
def config_clear(ctx: YousignContext):
    """Clear all stored configuration."""
    ctx.config_manager.clear()
    print_success("Configuration cleared.")


# ============================================================================
# User Commands
# ============================================================================

@cli.group('users')
def users():
    """User management commands."""
    pass


@users.command('list')
@common_options
@pass_context
@require_config
def user_list(ctx: YousignContext, verbose: bool, quiet: bool, output_format: str):
    """List the account's users."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.get_users() or []

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
                return

            if not result:
                click.echo("No users found.")
                return

            headers = ['ID', 'Name', 'Email', 'Phone', 'Status']
            rows = []
            for item in result:
                user = _view(User, item)
                rows.append([
                    user.uuid or user.id,
                    truncate_string(f"{user.firstname} {user.lastname}".strip(), 30),
                    truncate_string(user.email, 30),
                    user.phone,
                    user.status,
                ])
            print_table(headers, rows)

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@users.command('get')
@common_options
@click.argument('user_id')
@pass_context
@require_config
def user_get(ctx: YousignContext, verbose: bool, quiet: bool, output_format: str, user_id: str):
    """Get user details."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.get_user(_bare_id(user_id))

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
                return

            user = _view(User, result)
            _echo_fields(f"User: {user.firstname} {user.lastname}", [
                ['ID', user.id],
                ['Email', user.email],
                ['Phone', user.phone],
                ['Title', user.title],
                ['Status', user.status],
                ['Permission', user.permission],
                ['Deleted', 'Yes' if user.deleted else 'No'],
            ])

    except NotFoundError:
        print_error(f"User not found: {user_id}")
        sys.exit(1)
    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@users.command('create')
@common_options
@click.option('--firstname', required=True, help='First name')
@click.option('--lastname', required=True, help='Last name')
@click.option('--email', '-e', required=True, help='Email address')
@click.option('--phone', required=True, help='Phone number, e.g. +33612345678')
@pass_context
@require_config
def user_create(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    firstname: str,
    lastname: str,
    email: str,
    phone: str
):
    """Create a user."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.post_user(firstname, lastname, email, phone)

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
            else:
                print_success(f"User created: {_view(User, result).id}")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@users.command('delete')
@click.argument('user_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
@pass_context
@require_config
def user_delete(ctx: YousignContext, user_id: str, yes: bool):
    """Delete a user."""
    if not yes and not confirm_action(f"Delete user {user_id}?"):
        print_info("Cancelled.")
        return

    try:
        with open_client(ctx) as client:
            client.delete_user(_bare_id(user_id))
            print_success(f"User {user_id} deleted.")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


# ============================================================================
# Procedure Commands
# ============================================================================

@cli.group('procedures')
def procedures():
    """Signature procedure commands."""
    pass


def _show_procedure(result: Any, output_format: str) -> None:
    if OutputFormat(output_format) == OutputFormat.JSON:
        print_json(result)
        return

    procedure = _view(Procedure, result)
    _echo_fields(f"Procedure: {procedure.name}", [
        ['ID', procedure.id],
        ['Description', procedure.description],
        ['Status', procedure.status],
        ['Members', str(len(procedure.members))],
        ['Files', str(len(procedure.files))],
        ['Created', procedure.created_at or ''],
    ])


@procedures.command('create')
@common_options
@click.argument('name')
@click.option('--description', '-d', default='', help='Procedure description')
@click.option('--start/--no-start', default=False, help='Start the procedure now (requires --members-file)')
@click.option('--members-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='JSON list of members')
@click.option('--config-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='JSON procedure configuration')
@pass_context
@require_config
def procedure_create(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    name: str,
    description: str,
    start: bool,
    members_file: Optional[Path],
    config_file: Optional[Path]
):
    """
    Create a procedure.

    \b
    Examples:
      yousign procedures create "Contract"
      yousign procedures create "Contract" --start --members-file members.json
    """
    setup_logging(verbose, quiet)
    members = _load_json_option(members_file, list, "Members")
    config = _load_json_option(config_file, dict, "Config")

    try:
        with open_client(ctx) as client:
            result = client.post_procedure(name, description, start, members, config)
            _show_procedure(result, output_format)

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@procedures.command('get')
@common_options
@click.argument('procedure_id')
@pass_context
@require_config
def procedure_get(ctx: YousignContext, verbose: bool, quiet: bool, output_format: str, procedure_id: str):
    """Get procedure details."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            _show_procedure(client.get_procedure(_bare_id(procedure_id)), output_format)

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@procedures.command('update')
@common_options
@click.argument('procedure_id')
@click.option('--name', help='New name')
@click.option('--description', '-d', help='New description')
@click.option('--start/--no-start', default=None, help='Start the procedure')
@click.option('--members-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='JSON list of members')
@click.option('--config-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='JSON procedure configuration')
@pass_context
@require_config
def procedure_update(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    procedure_id: str,
    name: Optional[str],
    description: Optional[str],
    start: Optional[bool],
    members_file: Optional[Path],
    config_file: Optional[Path]
):
    """Update a procedure. Only the given options are sent."""
    setup_logging(verbose, quiet)
    members = _load_json_option(members_file, list, "Members")
    config = _load_json_option(config_file, dict, "Config")

    if all(v is None for v in (name, description, start, members, config)):
        print_error("No update options provided.")
        sys.exit(1)

    try:
        with open_client(ctx) as client:
            result = client.put_procedure(
                _bare_id(procedure_id),
                name=name,
                description=description,
                start=start,
                members=members,
                config=config
            )
            _show_procedure(result, output_format)

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@procedures.command('delete')
@click.argument('procedure_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
@pass_context
@require_config
def procedure_delete(ctx: YousignContext, procedure_id: str, yes: bool):
    """Delete a procedure."""
    if not yes and not confirm_action(f"Delete procedure {procedure_id}?"):
        print_info("Cancelled.")
        return

    try:
        with open_client(ctx) as client:
            client.delete_procedure(_bare_id(procedure_id))
            print_success(f"Procedure {procedure_id} deleted.")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


# ============================================================================
# Member Commands
# ============================================================================

@cli.group('members')
def members():
    """Procedure member commands."""
    pass


@members.command('list')
@common_options
@click.argument('procedure')
@pass_context
@require_config
def member_list(ctx: YousignContext, verbose: bool, quiet: bool, output_format: str, procedure: str):
    """List the members of a procedure."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.get_members(procedure) or []

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
                return

            if not result:
                click.echo("No members found.")
                return

            headers = ['ID', 'Name', 'Email', 'Phone', 'Status']
            rows = []
            for item in result:
                member = _view(Member, item)
                rows.append([
                    member.uuid or member.id,
                    truncate_string(f"{member.firstname} {member.lastname}".strip(), 30),
                    truncate_string(member.email, 30),
                    member.phone,
                    member.status,
                ])
            print_table(headers, rows)

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@members.command('create')
@common_options
@click.option('--firstname', required=True, help='First name')
@click.option('--lastname', required=True, help='Last name')
@click.option('--email', '-e', required=True, help='Email address')
@click.option('--phone', required=True, help='Phone number, e.g. +33612345678')
@click.option('--procedure', '-p', required=True, help='Procedure id')
@pass_context
@require_config
def member_create(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    firstname: str,
    lastname: str,
    email: str,
    phone: str,
    procedure: str
):
    """Add a member to a procedure."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.post_member(firstname, lastname, email, phone, procedure)

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
            else:
                print_success(f"Member created: {_view(Member, result).id}")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@members.command('delete')
@click.argument('member_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
@pass_context
@require_config
def member_delete(ctx: YousignContext, member_id: str, yes: bool):
    """Delete a member."""
    if not yes and not confirm_action(f"Delete member {member_id}?"):
        print_info("Cancelled.")
        return

    try:
        with open_client(ctx) as client:
            client.delete_member(_bare_id(member_id))
            print_success(f"Member {member_id} deleted.")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


# ============================================================================
# File Commands
# ============================================================================

@cli.group('files')
def files():
    """File and signature placement commands."""
    pass


@files.command('upload')
@common_options
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--name', '-n', help='File name (defaults to the local file name)')
@click.option('--type', '-t', 'file_type', type=click.Choice(FILE_TYPES), default='signable', help='File type')
@click.option('--procedure', '-p', help='Procedure id (required for attachments)')
@pass_context
@require_config
def file_upload(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    path: Path,
    name: Optional[str],
    file_type: str,
    procedure: Optional[str]
):
    """
    Upload a PDF file.

    \b
    Examples:
      yousign files upload contract.pdf
      yousign files upload annex.pdf --type attachment --procedure /procedures/UUID
    """
    setup_logging(verbose, quiet)

    try:
        content = encode_file(path)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)

    try:
        with open_client(ctx) as client:
            result = client.post_file(name or path.name, content, file_type, procedure)

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
            else:
                print_success(f"File uploaded: {_view(FileRecord, result).id}")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@files.command('get')
@common_options
@click.argument('file_id')
@pass_context
@require_config
def file_get(ctx: YousignContext, verbose: bool, quiet: bool, output_format: str, file_id: str):
    """Get file details."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.get_file(_bare_id(file_id))

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
                return

            record = _view(FileRecord, result)
            _echo_fields(f"File: {record.name}", [
                ['ID', record.id],
                ['Type', record.type],
                ['Content Type', record.content_type],
                ['Procedure', record.procedure or ''],
                ['Created', record.created_at or ''],
            ])

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@files.command('download')
@click.argument('file_id')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), required=True, help='Output file path')
@pass_context
@require_config
def file_download(ctx: YousignContext, file_id: str, output: Path):
    """Download a file's content."""
    try:
        with open_client(ctx) as client:
            content = decode_content(client.get_file_contents(_bare_id(file_id)))
    except YousignError as e:
        print_error(str(e))
        sys.exit(1)
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    print_success(f"Saved {len(content)} bytes to {output}")


@files.command('add-signature')
@common_options
@click.argument('file')
@click.argument('member')
@click.option('--page', type=int, default=1, help='Page number')
@click.option('--position', required=True, help='Rectangle "llx,lly,urx,ury"')
@click.option('--reason', default='Signed by Yousign', help='Signature reason')
@click.option('--mention', default='', help='First annotation line')
@click.option('--mention2', default='', help='Second annotation line')
@pass_context
@require_config
def file_add_signature(
    ctx: YousignContext,
    verbose: bool,
    quiet: bool,
    output_format: str,
    file: str,
    member: str,
    page: int,
    position: str,
    reason: str,
    mention: str,
    mention2: str
):
    """Place a member's signature field on a file."""
    setup_logging(verbose, quiet)

    try:
        with open_client(ctx) as client:
            result = client.post_file_object(file, member, page, position, reason, mention, mention2)

            if OutputFormat(output_format) == OutputFormat.JSON:
                print_json(result)
            else:
                print_success(f"Signature field created: {_view(FileObject, result).id}")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


@files.command('delete-object')
@click.argument('file_object_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
@pass_context
@require_config
def file_delete_object(ctx: YousignContext, file_object_id: str, yes: bool):
    """Delete a signature field."""
    if not yes and not confirm_action(f"Delete file object {file_object_id}?"):
        print_info("Cancelled.")
        return

    try:
        with open_client(ctx) as client:
            client.delete_file_object(_bare_id(file_object_id))
            print_success(f"File object {file_object_id} deleted.")

    except YousignError as e:
        print_error(str(e))
        sys.exit(1)


# ============================================================================
# Entry Point
# ============================================================================

def main():
    """Main entry point for the CLI."""
    try:
        cli(auto_envvar_prefix='YOUSIGN')
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
