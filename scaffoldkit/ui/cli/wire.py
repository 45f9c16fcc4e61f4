"""
CLI commands for domain wiring.

Thin wrappers over ``scaffoldkit.core.services.scaffold_ops``.

Usage::

    scaffoldkit wire domain product --group authenticated
    scaffoldkit wire domain order --belongs-to user --with-crud-views
    scaffoldkit wire di product order --dry-run
"""

from __future__ import annotations

import click

from scaffoldkit.core.models.wiring import Relationship, RelationshipType, RouteGroup
from scaffoldkit.ui.cli.common import echo_result, load_cli_config, resolve_project_root


@click.group()
def wire() -> None:
    """Wire domains into main.go, the database and the layout."""


@wire.command("domain")
@click.argument("name")
@click.option(
    "--group",
    "route_group",
    type=click.Choice([g.value for g in RouteGroup], case_sensitive=False),
    default=None,
    help="Route group (default: from scaffold.yml).",
)
@click.option("--belongs-to", multiple=True, help="Related model this domain belongs to.")
@click.option("--has-one", multiple=True, help="Related model this domain has one of.")
@click.option("--has-many", multiple=True, help="Related model this domain has many of.")
@click.option("--many-to-many", multiple=True, help="Related model, as MODEL or MODEL:join_table.")
@click.option("--with-crud-views", is_flag=True, help="Pass belongs-to services to the controller.")
@click.option("--dry-run", is_flag=True, help="Report the files that would change.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def domain(
    ctx: click.Context,
    name: str,
    route_group: str | None,
    belongs_to: tuple[str, ...],
    has_one: tuple[str, ...],
    has_many: tuple[str, ...],
    many_to_many: tuple[str, ...],
    with_crud_views: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Wire domain NAME: DI, route, model registration, nav item, inverse relationships."""
    from scaffoldkit.core.services.scaffold_ops import wire_domain

    relationships = [
        Relationship(type=RelationshipType.BELONGS_TO, model=m) for m in belongs_to
    ] + [
        Relationship(type=RelationshipType.HAS_ONE, model=m) for m in has_one
    ] + [
        Relationship(type=RelationshipType.HAS_MANY, model=m) for m in has_many
    ]
    for spec in many_to_many:
        model, _, join_table = spec.partition(":")
        relationships.append(Relationship(
            type=RelationshipType.MANY_TO_MANY, model=model, join_table=join_table,
        ))

    result = wire_domain(
        resolve_project_root(ctx),
        name,
        config=load_cli_config(ctx),
        route_group=route_group,
        relationships=relationships,
        with_crud_views=with_crud_views,
        dry_run=dry_run,
    )
    echo_result(result, as_json)


@wire.command("di")
@click.argument("names", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Only check that main.go has the required markers.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def di(ctx: click.Context, names: tuple[str, ...], dry_run: bool, as_json: bool) -> None:
    """Add DI wiring (imports, repo, service, controller, route) for existing domains."""
    from scaffoldkit.core.services.scaffold_ops import update_di_wiring

    result = update_di_wiring(
        resolve_project_root(ctx),
        list(names),
        config=load_cli_config(ctx),
        dry_run=dry_run,
    )
    echo_result(result, as_json)
