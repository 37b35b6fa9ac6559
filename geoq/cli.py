"""geoq command line interface.

Every streaming command reads newline-delimited entities from STDIN and
writes one result per line to STDOUT. Diagnostics go to STDERR through
``logging``; a fatal ``GeoqError`` is reported as
``Application error: <error>`` with exit status 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import click

from geoq import __version__, text
from geoq.commands import geohash as gh_commands
from geoq.commands import json_munge, measure, output, transform
from geoq.commands._common import collect_geometries
from geoq.commands.map import build_url
from geoq.commands.shp import read_shapefile
from geoq.commands.whereami import locate
from geoq.core.config import GeoqConfig
from geoq.core.exceptions import ConversionError, GeoqError, UnknownCommandError
from geoq.models.entity import Entity
from geoq.pipeline import EntityStream, Predicate, QuerySet, filter_entities

logger = logging.getLogger("geoq.cli")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_FILTER_QUERY_FILE = "geoq.filter.query_file"
_FILTER_NEGATE = "geoq.filter.negate"


# ---------------------------------------------------------------------------
# Command classes
# ---------------------------------------------------------------------------


class GeoqGroup(click.Group):
    """Command group that reports unknown subcommands as ``UnknownCommandError``."""

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        name = args[0] if args else ""
        if self.get_command(ctx, name) is None and not ctx.resilient_parsing:
            msg = f"No such command {name!r} under {ctx.command_path!r}"
            raise UnknownCommandError(msg)
        return super().resolve_command(ctx, args)


class GeoqCLI(GeoqGroup):
    """Root group: turns any ``GeoqError`` into the one-line report and exit 1."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except GeoqError as exc:
            logger.debug("Fatal error: %s", exc.to_error_dict())
            click.echo(f"Application error: {exc!r}", err=True)
            ctx.exit(1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def configure_logging(level: str) -> None:
    """Send geoq diagnostics to STDERR at ``level``."""
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)
    logging.getLogger("geoq").setLevel(level)


def _stdin_entities() -> EntityStream:
    return EntityStream(sys.stdin)


def _emit(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


def _raise_conversion(entity: Entity, exc: ConversionError) -> None:
    raise exc


def _filter_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--query-file",
        "-q",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="File of query entities, one per line.",
    )(func)
    return click.option(
        "--negate",
        "-n",
        is_flag=True,
        default=False,
        help="Select entities that do NOT match.",
    )(func)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@click.group(cls=GeoqCLI, help=text.MAIN_HELP)
@click.version_option(__version__, prog_name="geoq")
@click.pass_context
def cli(ctx: click.Context) -> None:
    config = GeoqConfig.from_env()
    configure_logging(config.log_level)
    logger.debug("Loaded configuration %s", config)
    ctx.obj = config


@cli.command(help="Output entities as Well-Known Text.")
@click.pass_obj
def wkt(config: GeoqConfig) -> None:
    _emit(output.wkt(_stdin_entities(), strict=config.strict))


@cli.command(help="Information about reading inputs with geoq.")
def read() -> None:
    click.echo(text.READ_TEXT)


# ---------------------------------------------------------------------------
# GeoJSON
# ---------------------------------------------------------------------------


@cli.group(cls=GeoqGroup, help="Output entities as GeoJSON.")
def gj() -> None:
    pass


@gj.command("geom", help="Output entities as GeoJSON geometries.")
@click.pass_obj
def gj_geom(config: GeoqConfig) -> None:
    _emit(output.geojson_geometry(_stdin_entities(), strict=config.strict))


@gj.command("f", help="Output entities as GeoJSON Features.")
@click.pass_obj
def gj_feature(config: GeoqConfig) -> None:
    _emit(output.geojson_feature(_stdin_entities(), strict=config.strict))


@gj.command("fc", help="Collect all entities into one GeoJSON FeatureCollection.")
@click.pass_obj
def gj_feature_collection(config: GeoqConfig) -> None:
    click.echo(output.geojson_feature_collection(_stdin_entities(), strict=config.strict))


# ---------------------------------------------------------------------------
# Geohash
# ---------------------------------------------------------------------------


@cli.group(cls=GeoqGroup, help="Work with geohashes.")
def gh() -> None:
    pass


@gh.command("point", help="Geohash at LEVEL for each point entity.")
@click.argument("level", type=int)
@click.pass_obj
def gh_point(config: GeoqConfig, level: int) -> None:
    _emit(gh_commands.point(_stdin_entities(), level, strict=config.strict))


@gh.command("covering", help="Geohashes at LEVEL covering each entity.")
@click.argument("level", type=int)
@click.option("--original", "-o", is_flag=True, help="Print each entity before its covering.")
@click.pass_obj
def gh_covering(config: GeoqConfig, level: int, original: bool) -> None:
    lines = gh_commands.covering(_stdin_entities(), level, original=original, strict=config.strict)
    _emit(lines)


@gh.command("children", help="The 32 children of each geohash.")
@click.pass_obj
def gh_children(config: GeoqConfig) -> None:
    _emit(gh_commands.children(_stdin_entities(), strict=config.strict))


@gh.command("roots", help="The 32 single-character geohashes.")
def gh_roots() -> None:
    _emit(gh_commands.roots())


@gh.command("encode-long", help="Convert base 10 integer geohashes to base 32.")
@click.pass_obj
def gh_encode_long(config: GeoqConfig) -> None:
    _emit(gh_commands.encode_long(_stdin_entities(), strict=config.strict))


@gh.command("neighbors", help="The 3x3 grid of geohashes around each geohash.")
@click.option("--exclude", "-e", is_flag=True, help="Leave out the geohash itself.")
@click.pass_obj
def gh_neighbors(config: GeoqConfig, exclude: bool) -> None:
    _emit(gh_commands.neighbors(_stdin_entities(), exclude=exclude, strict=config.strict))


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


@cli.group("filter", cls=GeoqGroup, help=text.FILTER_HELP)
@_filter_options
@click.pass_context
def filter_(ctx: click.Context, query_file: Path | None, negate: bool) -> None:
    ctx.meta[_FILTER_QUERY_FILE] = query_file
    ctx.meta[_FILTER_NEGATE] = negate


def _run_filter(
    ctx: click.Context,
    predicate: Predicate,
    query: str | None,
    query_file: Path | None,
    negate: bool,
) -> None:
    config: GeoqConfig = ctx.obj
    query_file = query_file or ctx.meta.get(_FILTER_QUERY_FILE)
    negate = negate or ctx.meta.get(_FILTER_NEGATE, False)
    query_set = QuerySet.build(query, query_file, predicate=predicate)
    on_error = _raise_conversion if config.strict else None
    _emit(
        filter_entities(
            _stdin_entities(),
            query_set,
            predicate,
            negate=negate,
            on_error=on_error,
        )
    )


@filter_.command("intersects", help="Select entities intersecting any query.")
@click.argument("query", required=False)
@_filter_options
@click.pass_context
def filter_intersects(
    ctx: click.Context, query: str | None, query_file: Path | None, negate: bool
) -> None:
    _run_filter(ctx, Predicate.INTERSECTS, query, query_file, negate)


@filter_.command("contains", help="Select entities inside any (polygonal) query.")
@click.argument("query", required=False)
@_filter_options
@click.pass_context
def filter_contains(
    ctx: click.Context, query: str | None, query_file: Path | None, negate: bool
) -> None:
    _run_filter(ctx, Predicate.CONTAINS, query, query_file, negate)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


@cli.group("json", cls=GeoqGroup, help="Work with arbitrary JSON.")
def json_() -> None:
    pass


@json_.command("munge", help=text.JSON_MUNGE_HELP)
@click.pass_obj
def json_munge_command(config: GeoqConfig) -> None:
    _emit(json_munge.run(_stdin_entities(), strict=config.strict))


# ---------------------------------------------------------------------------
# Measurement and transformation
# ---------------------------------------------------------------------------


@cli.command(help=text.CENTROID_HELP)
@click.pass_obj
def centroid(config: GeoqConfig) -> None:
    _emit(measure.centroid(_stdin_entities(), strict=config.strict))


@cli.command(help=text.WHEREAMI_HELP)
@click.pass_obj
def whereami(config: GeoqConfig) -> None:
    click.echo(locate(config.whereami_url, timeout_s=config.http_timeout_s))


@cli.group("measure", cls=GeoqGroup, help=text.MEASURE_HELP)
def measure_group() -> None:
    pass


@measure_group.command("distance", help=text.DISTANCE_HELP)
@click.argument("query")
@click.pass_obj
def measure_distance(config: GeoqConfig, query: str) -> None:
    _emit(measure.distance(_stdin_entities(), Entity.classify(query), strict=config.strict))


@measure_group.command("coord-count", help=text.COORD_COUNT_HELP)
@click.option("--geojson", is_flag=True, help="Output Features with a coord_count property.")
@click.pass_obj
def measure_coord_count(config: GeoqConfig, geojson: bool) -> None:
    _emit(measure.coord_count(_stdin_entities(), as_geojson=geojson, strict=config.strict))


@cli.command(help=text.SIMPLIFY_HELP)
@click.argument("epsilon", type=float)
@click.option(
    "--to-coord-count",
    type=int,
    default=None,
    help="Raise EPSILON until each geometry has at most this many coordinates.",
)
@click.pass_obj
def simplify(config: GeoqConfig, epsilon: float, to_coord_count: int | None) -> None:
    _emit(
        transform.simplify(
            _stdin_entities(),
            epsilon,
            to_coord_count=to_coord_count,
            max_iterations=config.max_simplify_iterations,
            strict=config.strict,
        )
    )


@cli.command(help=text.BBOX_HELP)
@click.option("--embed", "-e", is_flag=True, help="Embed the bbox in GeoJSON output.")
@click.option("--all", "-a", "combine", is_flag=True, help="One bbox for all inputs.")
@click.pass_obj
def bbox(config: GeoqConfig, embed: bool, combine: bool) -> None:
    _emit(measure.bbox(_stdin_entities(), embed=embed, combine=combine, strict=config.strict))


@cli.command(help=text.SNIP_HELP)
@click.argument("query")
@click.pass_obj
def snip(config: GeoqConfig, query: str) -> None:
    _emit(transform.snip(_stdin_entities(), Entity.classify(query), strict=config.strict))


@cli.command("map", help=text.MAP_HELP)
@click.pass_obj
def map_(config: GeoqConfig) -> None:
    url = build_url(collect_geometries(_stdin_entities(), strict=config.strict), config.map_url)
    click.echo(url)
    click.launch(url)


@cli.command(help=text.SHP_HELP)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def shp(path: Path) -> None:
    _emit(entity.raw for entity in read_shapefile(path))


def main() -> None:
    """Console-script entry point."""
    cli(prog_name="geoq")
