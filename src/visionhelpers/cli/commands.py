"""
Click command definitions for the visionhelpers CLI.

The CLI never calls the annotation service: `requests` builds the batch a
helper method would send and prints it, which is handy for checking how
paths and URLs get classified.
"""

import json

import click

from visionhelpers import (
    Config,
    FeatureType,
    ValidationError,
    __version__,
)
from visionhelpers.cli import progress
from visionhelpers.cli.handlers import run_with_error_handling
from visionhelpers.cli.utils import batch_to_json
from visionhelpers.core.registry import FeatureMethod, build_feature, get_registry
from visionhelpers.core.request_builder import build_batch
from visionhelpers.logging_config import configure_logging


def resolve_feature(name: str) -> FeatureMethod:
    """
    Resolve a helper method name (face_detection) or feature type (FACE_DETECTION).

    Raises:
        ValidationError: If name matches no registered helper
    """
    reg = get_registry()
    method = reg.get(name.strip().lower())
    if method is not None:
        return method
    try:
        kind = FeatureType[name.strip().upper()]
    except KeyError:
        kind = None
    if kind is not None:
        method = reg.for_kind(kind)
        if method is not None:
            return method
    raise ValidationError(
        f"Unknown feature: {name!r}. Run 'visionhelpers features' to list helper methods.",
        field="feature",
    )


@click.group(
    help=f"""Feature helpers for the batch_annotate_images RPC.

\b
Version: {__version__}
"""
)
@click.version_option(version=__version__, package_name="visionhelpers")
@click.pass_context
def cli(ctx: click.Context) -> None:
    ctx.color = True


@cli.command()
def features() -> None:
    """List helper method names and the feature type each one requests."""
    for method in get_registry():
        click.echo(f"{method.method_name}\t{method.kind.name}")


@cli.command()
@click.argument("feature")
@click.argument("images", nargs=-1, required=True)
@click.option("--max-results", type=int, default=None, help="Cap on results per image.")
@click.option(
    "--truncate",
    is_flag=True,
    help="Replace inline image content with a size placeholder instead of base64.",
)
@click.option(
    "--max-content-bytes",
    type=int,
    default=None,
    envvar="VISIONHELPERS_MAX_CONTENT_BYTES",
    help="Reject inline images larger than this many bytes (0 = unlimited).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity: -v logs payloads, -vv adds per-image classification.",
)
@click.option("--quiet", "-q", is_flag=True, help="Only print the JSON batch and errors.")
@click.option("--debug", is_flag=True, hidden=True, help="Re-raise unexpected errors.")
def requests(
    feature: str,
    images: tuple[str, ...],
    max_results: int | None,
    truncate: bool,
    max_content_bytes: int | None,
    verbose: int,
    quiet: bool,
    debug: bool,
) -> None:
    """Print the batch FEATURE would send for IMAGES, as JSON (nothing is sent).

    \b
    FEATURE is a helper name (face_detection) or a feature type (FACE_DETECTION).
    IMAGES are file paths, http(s):// URLs or gs:// URLs.
    """
    configure_logging(verbose_level=verbose or None, quiet=quiet)

    def do_requests() -> None:
        config = Config.from_env()
        if max_content_bytes is not None:
            config.max_content_bytes = max_content_bytes
        config.validate()

        method = resolve_feature(feature)
        built = build_batch(list(images), build_feature(method.kind, max_results), config=config)
        if not quiet:
            progress.print_batch_summary(built)
        wire = [r.to_wire() for r in built]
        click.echo(json.dumps(batch_to_json(wire, truncate=truncate), indent=2))

    run_with_error_handling(do_requests, quiet=quiet, debug=debug)


def main() -> None:
    """Entry point for the visionhelpers console script."""
    cli()


__all__ = ["cli", "features", "main", "requests", "resolve_feature"]
