"""
Domain wiring composer — build one-line fragments and route them to markers.

The formatters are pure: they take already-derived names and return the
exact text to inject.  The ``inject_*`` functions derive those names from
a domain name, format the fragment, and inject it into the right marker
pair of a ``SourceDocument``:

    MODELS        &models.Product{},
    REPOS         productRepo := productrepo.NewRepository(db)
    SERVICES      productService := productsvc.NewService(productRepo)
    CONTROLLERS   productController := productctrl.NewController(productService)
    ROUTES:*      router.Route("/products", productController.RegisterRoutes)
    RELATIONSHIPS Orders []Order `gorm:"foreignKey:UserID" json:"orders,omitempty"`
    NAV_ITEMS*    @navItem("/products", "folder", "Products", false)

Dedup is textual: callers must format a given fragment identically
across calls for re-injection to be recognised as a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from scaffoldkit.core.errors import MarkerNotFound
from scaffoldkit.core.models.wiring import Relationship, RelationshipType, RouteGroup
from scaffoldkit.core.services import naming
from scaffoldkit.core.services.import_patcher import inject_import
from scaffoldkit.core.services.markers import DEFAULT_MARKER_PREFIX, MarkerPair, Section
from scaffoldkit.core.services.source_document import SourceDocument

logger = logging.getLogger(__name__)

DEFAULT_NAV_ICON = "folder"
DEFAULT_ROUTER_VAR = "router"
GROUP_ROUTER_VAR = "r"

_ROUTE_SECTIONS = {
    RouteGroup.PUBLIC: Section.ROUTES_PUBLIC,
    RouteGroup.AUTHENTICATED: Section.ROUTES_AUTHENTICATED,
    RouteGroup.ADMIN: Section.ROUTES_ADMIN,
}


# ── Fragment formatters ─────────────────────────────────────────


def model_fragment(model_name: str) -> str:
    return f"&models.{model_name}{{}},"


def repo_fragment(var: str, alias: str, handle: str = "db") -> str:
    return f"{var} := {alias}.NewRepository({handle})"


def service_fragment(var: str, alias: str, repo_var: str) -> str:
    return f"{var} := {alias}.NewService({repo_var})"


def controller_fragment(
    var: str,
    alias: str,
    service_var: str,
    related_service_vars: Iterable[str] = (),
) -> str:
    args = ", ".join([service_var, *related_service_vars])
    return f"{var} := {alias}.NewController({args})"


def route_fragment(router_var: str, url_path: str, controller_var: str) -> str:
    return f'{router_var}.Route("{url_path}", {controller_var}.RegisterRoutes)'


def nav_item_fragment(url_path: str, icon: str, label: str) -> str:
    return f'@navItem("{url_path}", "{icon}", "{label}", false)'


def router_var_for(group: RouteGroup) -> str:
    """Inside authenticated/admin groups the router is the closure's ``r``."""
    return DEFAULT_ROUTER_VAR if group is RouteGroup.PUBLIC else GROUP_ROUTER_VAR


def route_markers(group: RouteGroup, prefix: str = DEFAULT_MARKER_PREFIX) -> MarkerPair:
    return MarkerPair.for_section(_ROUTE_SECTIONS[group], prefix)


def nav_markers(group: RouteGroup, prefix: str = DEFAULT_MARKER_PREFIX) -> MarkerPair:
    section = Section.NAV_ITEMS_ADMIN if group is RouteGroup.ADMIN else Section.NAV_ITEMS
    return MarkerPair.for_section(section, prefix)


def inverse_relationship_field(domain: str, relationship: Relationship) -> str:
    """Field to add to the *related* model for a relationship declared on ``domain``.

    belongs_to  → has_many on the other side
    has_one     → belongs_to (FK + pointer) on the other side
    has_many    → belongs_to (FK + pointer) on the other side
    many_to_many → many_to_many back, sharing the join table
    """
    model = naming.to_model_name(domain)
    model_snake = naming.to_snake_case(model)

    if relationship.type is RelationshipType.BELONGS_TO:
        field_name = naming.pluralize(model)
        foreign_key = naming.to_model_name(relationship.model) + "ID"
        return (
            f"{field_name} []{model} "
            f'`gorm:"foreignKey:{foreign_key}" json:"{naming.to_snake_case(field_name)},omitempty"`'
        )

    if relationship.type in (RelationshipType.HAS_ONE, RelationshipType.HAS_MANY):
        return (
            f'{model}ID uint `json:"{model_snake}_id,omitempty"`\n'
            f'{model} *{model} `gorm:"foreignKey:{model}ID" json:"{model_snake},omitempty"`'
        )

    field_name = naming.pluralize(model)
    join_table = relationship.join_table or default_join_table(domain, relationship.model)
    return (
        f"{field_name} []{model} "
        f'`gorm:"many2many:{join_table}" json:"{naming.to_snake_case(field_name)},omitempty"`'
    )


def default_join_table(domain: str, other: str) -> str:
    """Alphabetical ``<plural>_<plural>`` join table name."""
    names = sorted([
        naming.pluralize(naming.to_snake_case(domain)),
        naming.pluralize(naming.to_snake_case(other)),
    ])
    return "_".join(names)


# ── Routing into documents ──────────────────────────────────────


def inject_model(doc: SourceDocument, domain: str, prefix: str = DEFAULT_MARKER_PREFIX) -> bool:
    pair = MarkerPair.for_section(Section.MODELS, prefix)
    return doc.inject_section(pair, model_fragment(naming.to_model_name(domain)))


def inject_repo(
    doc: SourceDocument,
    domain: str,
    handle: str = "db",
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    code = repo_fragment(naming.repo_var(domain), naming.repo_alias(domain), handle)
    return doc.inject_section(MarkerPair.for_section(Section.REPOS, prefix), code)


def inject_service(doc: SourceDocument, domain: str, prefix: str = DEFAULT_MARKER_PREFIX) -> bool:
    code = service_fragment(
        naming.service_var(domain), naming.service_alias(domain), naming.repo_var(domain)
    )
    return doc.inject_section(MarkerPair.for_section(Section.SERVICES, prefix), code)


def inject_controller(
    doc: SourceDocument,
    domain: str,
    related_domains: Iterable[str] = (),
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    """Controller instantiation; each related domain adds its service as an argument."""
    code = controller_fragment(
        naming.controller_var(domain),
        naming.controller_alias(domain),
        naming.service_var(domain),
        [naming.service_var(d) for d in related_domains],
    )
    return doc.inject_section(MarkerPair.for_section(Section.CONTROLLERS, prefix), code)


def inject_route(
    doc: SourceDocument,
    domain: str,
    group: RouteGroup | str = RouteGroup.PUBLIC,
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    """Register the domain's routes in its group, or in the generic ROUTES section.

    The generic fallback always uses the top-level ``router`` variable.
    """
    group = RouteGroup.parse(group)
    url_path = naming.to_url_path(domain)
    ctrl = naming.controller_var(domain)

    pair = route_markers(group, prefix)
    if doc.has_pair(pair):
        return doc.inject_section(pair, route_fragment(router_var_for(group), url_path, ctrl))

    logger.debug("No %s route markers, falling back to %s:ROUTES", group, prefix)
    generic = MarkerPair.for_section(Section.ROUTES, prefix)
    return doc.inject_section(generic, route_fragment(DEFAULT_ROUTER_VAR, url_path, ctrl))


def inject_relationship(
    doc: SourceDocument,
    field_code: str,
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    return doc.inject_section(MarkerPair.for_section(Section.RELATIONSHIPS, prefix), field_code)


def inject_nav_item(
    doc: SourceDocument,
    domain: str,
    group: RouteGroup | str = RouteGroup.AUTHENTICATED,
    icon: str = "",
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> bool:
    """Add a sidebar entry; layouts must declare the chosen nav section."""
    group = RouteGroup.parse(group)
    pair = nav_markers(group, prefix)
    for name, kind in ((pair.start, "start"), (pair.end, "end")):
        if not doc.has_marker(name):
            raise MarkerNotFound(name, f"navigation {kind}")

    label = naming.pluralize(naming.to_label(domain))
    code = nav_item_fragment(naming.to_url_path(domain), icon or DEFAULT_NAV_ICON, label)
    return doc.inject_section(pair, code)


def wire_imports(
    doc: SourceDocument,
    module_path: str,
    domain: str,
    prefix: str = DEFAULT_MARKER_PREFIX,
) -> list[str]:
    """Add aliased repository/service/controller imports; return the new ones."""
    pkg = naming.to_package_name(domain)
    wanted = [
        (f"{module_path}/internal/repository/{pkg}", naming.repo_alias(domain)),
        (f"{module_path}/internal/services/{pkg}", naming.service_alias(domain)),
        (f"{module_path}/internal/web/{pkg}", naming.controller_alias(domain)),
    ]
    return [path for path, alias in wanted if inject_import(doc, path, alias, prefix)]
