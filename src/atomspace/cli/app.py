# src/atomspace/cli/app.py
"""Command-line interface for AtomSpace.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
"""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from atomspace import __version__
from atomspace.commands import (
    add,
    config_cmd,
    delete,
    list_cmd,
    query,
    share,
    status,
    transfer,
    values,
)
from atomspace.commands.base import AtomInfo, AtomListResult, AtomResult, ConfirmRequest
from atomspace.config import ConfigError, get_atomspace_config, load_env_file

app = typer.Typer(
    name="atomspace",
    help="AtomSpace - per-owner hypergraph knowledge bases.",
    no_args_is_help=True,
)
triple_app = typer.Typer(help="Record and query subject-predicate-object facts")
app.add_typer(triple_app, name="triple")
console = Console()
err_console = Console(stderr=True)


def config_callback(ctx: typer.Context, value: str | None) -> str | None:
    """Re-read the log level from a config file named with --config."""
    if value:
        verbose = bool(ctx.obj and ctx.obj.get("verbose"))
        configure_logging(verbose, value)
    return value


# Options shared by every command that touches a knowledge base
OWNER_OPTION = typer.Option(
    None,
    "--owner",
    "-o",
    help="Owner id (default: from settings)",
)
DATA_DIR_OPTION = typer.Option(
    None,
    "--data-dir",
    "-d",
    help="Data directory (default: from settings)",
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config file",
    callback=config_callback,
)
PLAIN_OPTION = typer.Option(
    False,
    "--plain",
    help="Plain output (no colors/formatting)",
)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"atomspace {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, config_path: str | None = None) -> None:
    """Route library logging through Rich at the configured level.

    Called once with the discovered config file, and again when a command
    names one with --config.
    """
    level = "DEBUG"
    if not verbose:
        config = get_atomspace_config(config_path=config_path)
        level = "WARNING" if isinstance(config, ConfigError) else config.settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging.",
    ),
) -> None:
    """AtomSpace - per-owner hypergraph knowledge bases."""
    ctx.obj = {"verbose": verbose}
    load_env_file()
    configure_logging(verbose)


# Rendering helpers


def _fail(error: str | None, plain: bool) -> NoReturn:
    if plain:
        console.print(f"Error: {error}")
    else:
        console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _parse_value(raw: str | None) -> Any:
    """Parse a --value argument as JSON, falling back to the raw string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _tv(atom: AtomInfo) -> str:
    return f"<{atom.strength:.2f}, {atom.confidence:.2f}>"


def _render_atom(atom: AtomInfo, plain: bool, title: str = "Atom") -> None:
    if plain:
        console.print(f"{atom.id} {atom.rendered} tv={_tv(atom)} av=<{atom.sti}, {atom.lti}>")
        if atom.value is not None:
            console.print(f"  value: {json.dumps(atom.value, default=str)}")
        return

    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("id", atom.id)
    table.add_row("owner", atom.owner_id)
    table.add_row("type", f"{atom.type_name} ({atom.atom_type})")
    if atom.name is not None:
        table.add_row("name", atom.name)
    if atom.outgoing:
        table.add_row("outgoing", "\n".join(atom.outgoing))
    if atom.value is not None:
        table.add_row("value", json.dumps(atom.value, default=str))
    table.add_row("truth value", _tv(atom))
    table.add_row("attention", f"sti={atom.sti} lti={atom.lti}")
    table.add_row("structure", atom.rendered)
    console.print(table)


def _render_atom_result(result: AtomResult, plain: bool, verb: str) -> None:
    if not result.success or result.atom is None:
        _fail(result.error, plain)

    if plain:
        console.print(f"{verb} {result.atom.id}")
    else:
        console.print(f"[green]{verb} {result.atom.type_name}[/green] [dim]{result.atom.id}[/dim]")
    _render_atom(result.atom, plain)


def _render_atom_list(result: AtomListResult, plain: bool, title: str, empty: str) -> None:
    if not result.success:
        _fail(result.error, plain)

    if not result.atoms:
        if plain:
            console.print(empty)
        else:
            console.print(f"[dim]{empty}[/dim]")
        return

    if plain:
        console.print(f"{title} ({len(result.atoms)}):")
        for atom in result.atoms:
            console.print(f"  {atom.id} {atom.rendered} {_tv(atom)}")
        return

    table = Table(title=f"{title} ({len(result.atoms)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Type", style="cyan")
    table.add_column("Atom")
    table.add_column("TV", justify="right", style="green")
    for atom in result.atoms:
        table.add_row(atom.id, atom.type_name, atom.rendered, _tv(atom))
    console.print(table)


# Atoms


@app.command(name="add-node")
def add_node_cmd(
    type_name: str = typer.Argument(..., help="Node type, e.g. ConceptNode"),
    name: str = typer.Argument(..., help="Node name"),
    value: str = typer.Option(
        None,
        "--value",
        help="Payload as JSON (plain strings are stored as text)",
    ),
    strength: float = typer.Option(None, "--strength", help="Truth value strength [0-1]"),
    confidence: float = typer.Option(None, "--confidence", help="Truth value confidence [0-1]"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Find or create a node."""
    result = add.add_node(
        type_name,
        name,
        value=_parse_value(value),
        strength=strength,
        confidence=confidence,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    _render_atom_result(result, plain, "Node")


@app.command(name="add-link")
def add_link_cmd(
    type_name: str = typer.Argument(..., help="Link type, e.g. InheritanceLink"),
    outgoing: list[str] = typer.Argument(..., help="Ids of the atoms the link points at, in order"),
    strength: float = typer.Option(None, "--strength", help="Truth value strength [0-1]"),
    confidence: float = typer.Option(None, "--confidence", help="Truth value confidence [0-1]"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Find or create a link over existing atoms."""
    result = add.add_link(
        type_name,
        outgoing,
        strength=strength,
        confidence=confidence,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    _render_atom_result(result, plain, "Link")


@app.command(name="get")
def get_cmd(
    atom_id: str = typer.Argument(..., help="Atom id"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show one atom and the links pointing at it."""
    result = query.get(atom_id, owner=owner, data_dir=data_dir, config_path=config_file)
    if not result.success or result.atom is None:
        _fail(result.error, plain)

    _render_atom(result.atom, plain)
    if result.incoming:
        _render_atom_list(
            AtomListResult(success=True, atoms=result.incoming),
            plain,
            title="Incoming",
            empty="",
        )


@app.command(name="list")
def list_cmd_handler(
    type_name: str = typer.Option(None, "--type", "-t", help="Only list this atom type"),
    limit: int = typer.Option(None, "--limit", "-n", help="Page size (default: from settings)"),
    offset: int = typer.Option(0, "--offset", help="Number of atoms to skip"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List atoms in creation order."""
    result = list_cmd.list_atoms(
        type_name=type_name,
        limit=limit,
        offset=offset,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    _render_atom_list(result, plain, title="Atoms", empty="No atoms found.")


@app.command(name="query")
def query_cmd(
    atom_type: str = typer.Option(None, "--atom-type", help="node or link"),
    type_name: str = typer.Option(None, "--type", "-t", help="Exact type name"),
    name: str = typer.Option(None, "--name", help="Exact name (or regex with --regex)"),
    regex: bool = typer.Option(False, "--regex", "-r", help="Treat --name as a regular expression"),
    save: bool = typer.Option(False, "--save", help="Save the pattern for later --run"),
    run: str = typer.Option(None, "--run", help="Run a saved query by id"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Match atoms by kind, type and name."""
    result = query.query(
        atom_type=atom_type,
        type_name=type_name,
        name=name,
        regex=regex,
        save=save,
        run=run,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    _render_atom_list(result, plain, title="Matches", empty="No atoms matched.")
    if result.saved_query_id and save:
        if plain:
            console.print(f"Saved query {result.saved_query_id}")
        else:
            console.print(f"[green]Saved query[/green] [dim]{result.saved_query_id}[/dim]")


@app.command(name="delete")
def delete_cmd(
    atom_id: str = typer.Argument(..., help="Atom id"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete without asking"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Delete an atom with its edges and shares."""

    def ask(request: ConfirmRequest) -> bool:
        console.print(request.message)
        if request.details:
            console.print(request.details if plain else f"[yellow]{request.details}[/yellow]")
        return typer.confirm("Continue?")

    result = delete.delete(
        atom_id,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else ask,
    )

    if result.error == "Cancelled.":
        console.print("Cancelled.")
        raise typer.Exit(0)
    if not result.success:
        _fail(result.error, plain)

    links = f" ({result.links_affected} links updated)" if result.links_affected else ""
    if plain:
        console.print(f"Deleted {atom_id}{links}")
    else:
        console.print(f"[green]Deleted {atom_id}[/green]{links}")


@app.command(name="set-tv")
def set_tv_cmd(
    atom_id: str = typer.Argument(..., help="Atom id"),
    strength: float = typer.Argument(..., help="Strength [0-1]"),
    confidence: float = typer.Argument(..., help="Confidence [0-1]"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Set an atom's truth value."""
    result = values.set_tv(
        atom_id, strength, confidence, owner=owner, data_dir=data_dir, config_path=config_file
    )
    _render_atom_result(result, plain, "Updated")


@app.command(name="set-av")
def set_av_cmd(
    atom_id: str = typer.Argument(..., help="Atom id"),
    sti: float = typer.Argument(..., help="Short-term importance"),
    lti: float = typer.Argument(..., help="Long-term importance"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Set an atom's attention value."""
    result = values.set_av(
        atom_id, sti, lti, owner=owner, data_dir=data_dir, config_path=config_file
    )
    _render_atom_result(result, plain, "Updated")


# Triples


@triple_app.command(name="add")
def triple_add_cmd(
    subject: str = typer.Argument(..., help="Subject concept"),
    predicate: str = typer.Argument(..., help="Predicate"),
    obj: str = typer.Argument(..., metavar="OBJECT", help="Object concept"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Record a fact as an EvaluationLink."""
    result = add.add_triple(
        subject, predicate, obj, owner=owner, data_dir=data_dir, config_path=config_file
    )
    if not result.success:
        _fail(result.error, plain)

    if plain:
        console.print(f"Added ({subject}, {predicate}, {obj}) {result.link_id}")
    else:
        console.print(
            f"[green]Added[/green] ({subject}, {predicate}, {obj}) [dim]{result.link_id}[/dim]"
        )


@triple_app.command(name="query")
def triple_query_cmd(
    subject: str = typer.Argument(..., help="Subject concept"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List every fact about a subject."""
    result = query.query_subject(subject, owner=owner, data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error, plain)

    if not result.triples:
        if plain:
            console.print(f"No facts about {subject}.")
        else:
            console.print(f"[dim]No facts about {subject}.[/dim]")
        raise typer.Exit(0)

    if plain:
        for triple in result.triples:
            console.print(f"{triple.subject}\t{triple.predicate}\t{triple.object}")
        return

    table = Table(title=f"Facts about {subject} ({len(result.triples)})")
    table.add_column("Subject", style="cyan")
    table.add_column("Predicate", style="yellow")
    table.add_column("Object", style="green")
    for triple in result.triples:
        table.add_row(triple.subject, triple.predicate, triple.object)
    console.print(table)


# Status


@app.command(name="status")
def status_cmd(
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Show knowledge base statistics."""
    result = status.status(owner=owner, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error, plain)

    if result.total_atoms == 0 and result.shared_in == 0:
        if plain:
            console.print(f"No atoms for owner {result.owner}.")
        else:
            console.print(
                f"[dim]No atoms for owner {result.owner}. Run 'atomspace add-node' first.[/dim]"
            )
        raise typer.Exit(0)

    if plain:
        console.print("Knowledge Base Status:")
        console.print(f"  Owner: {result.owner}")
        console.print(f"  Database: {result.db_path}")
        console.print(f"  Atoms: {result.total_atoms}")
        console.print(f"  Nodes: {result.node_count}")
        console.print(f"  Links: {result.link_count}")
        console.print(f"  Shared out: {result.shared_out}")
        console.print(f"  Shared in: {result.shared_in}")
        for type_name, count in result.type_distribution:
            console.print(f"  {type_name}: {count}")
        return

    table = Table(title="Knowledge Base Status")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Owner", result.owner)
    table.add_row("Database", result.db_path)
    table.add_row("Atoms", str(result.total_atoms))
    table.add_row("Nodes", str(result.node_count))
    table.add_row("Links", str(result.link_count))
    table.add_row("Shared out", str(result.shared_out))
    table.add_row("Shared in", str(result.shared_in))
    console.print(table)

    if result.type_distribution:
        console.print()
        type_table = Table(title="Atoms by Type")
        type_table.add_column("Type", style="cyan")
        type_table.add_column("Count", justify="right", style="green")
        for type_name, count in result.type_distribution:
            type_table.add_row(type_name, str(count))
        console.print(type_table)


# Sharing


@app.command(name="share")
def share_cmd(
    atom_id: str = typer.Argument(..., help="Atom id"),
    target_owner: str = typer.Argument(..., help="Owner receiving the share"),
    share_type: str = typer.Option("read", "--type", "-t", help="read, write or copy"),
    public: bool = typer.Option(False, "--public", help="Also list the atom publicly"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Share an atom with another owner."""
    result = share.share(
        atom_id,
        target_owner,
        share_type=share_type,
        public=public,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    if not result.success or result.share is None:
        _fail(result.error, plain)

    visibility = " (public)" if result.share.is_public else ""
    if plain:
        console.print(
            f"Shared {atom_id} with {target_owner} as {result.share.share_type}{visibility}: "
            f"{result.share.id}"
        )
    else:
        console.print(
            f"[green]Shared {atom_id} with {target_owner} as {result.share.share_type}"
            f"{visibility}[/green] [dim]{result.share.id}[/dim]"
        )


@app.command(name="shared")
def shared_cmd(
    source_owner: str = typer.Option(None, "--from", help="Only atoms shared by this owner"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List atoms other owners shared with you."""
    result = share.shared(
        source_owner=source_owner, owner=owner, data_dir=data_dir, config_path=config_file
    )
    _render_atom_list(result, plain, title="Shared With Me", empty="Nothing shared with you.")


@app.command(name="public")
def public_cmd(
    limit: int = typer.Option(100, "--limit", "-n", help="Maximum atoms to list"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """List publicly shared atoms from every owner."""
    result = share.public(limit=limit, owner=owner, data_dir=data_dir, config_path=config_file)
    _render_atom_list(result, plain, title="Public Atoms", empty="No public atoms.")


@app.command(name="copy")
def copy_cmd(
    share_id: str = typer.Argument(..., help="Id of a copy share"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Duplicate a copy-shared atom into the receiving owner's knowledge base."""
    result = share.copy(share_id, owner=owner, data_dir=data_dir, config_path=config_file)
    if not result.success or result.copy is None:
        _fail(result.error, plain)

    if plain:
        console.print(f"Copied to {result.copy.owner_id}: {result.copy.id}")
    else:
        console.print(
            f"[green]Copied to {result.copy.owner_id}[/green] [dim]{result.copy.id}[/dim]"
        )
    _render_atom(result.copy, plain, title="Copy")


# Export / import


@app.command(name="export")
def export_cmd(
    output: str = typer.Option(
        None,
        "--output",
        "-O",
        help="File to write (default: print to stdout)",
    ),
    compact: bool = typer.Option(False, "--compact", help="Write JSON without indentation"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Export all of an owner's atoms as JSON."""
    result = transfer.export(
        output=output,
        indent=None if compact else 2,
        owner=owner,
        data_dir=data_dir,
        config_path=config_file,
    )
    if not result.success:
        _fail(result.error, plain)

    if result.data is not None:
        # Raw payload, unstyled so it can be redirected
        typer.echo(result.data)
        return

    if plain:
        console.print(f"Exported {result.atom_count} atoms to {result.output}")
    else:
        console.print(f"[green]Exported {result.atom_count} atoms to {result.output}[/green]")


@app.command(name="import")
def import_cmd(
    source: str = typer.Argument(..., help="JSON file produced by export"),
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
    plain: bool = PLAIN_OPTION,
) -> None:
    """Import an export into an owner's knowledge base with fresh ids."""
    result = transfer.import_(source, owner=owner, data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error, plain)

    if plain:
        console.print(f"Imported {result.imported} atoms into {result.owner}")
    else:
        console.print(f"[green]Imported {result.imported} atoms into {result.owner}[/green]")


# Config


@app.command(name="config")
def config_cmd_handler(
    owner: str = OWNER_OPTION,
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Show the resolved owner, data directory and settings."""
    result = config_cmd.config(owner=owner, data_dir=data_dir, config_path=config_file)
    if not result.success:
        _fail(result.error, plain=False)

    table = Table(title="AtomSpace Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")
    table.add_row("owner", result.owner, "")
    table.add_row("data_dir", result.data_dir, "", end_section=True)
    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)
    console.print(table)

    source = result.config_path or "none (env vars and defaults only)"
    console.print(f"\n[dim]Config file: {source}[/dim]")
    console.print("[dim]Flags override env vars, which override yaml, then defaults.[/dim]")


if __name__ == "__main__":
    app()
