"""
Rich output helpers for the CLI.

All output here goes to stderr to keep stdout for machine-readable output.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from visionhelpers.core.types import AnnotateImageRequest

# Console for stderr output (preserves stdout for machine output)
console = Console(stderr=True)


def _describe_image(request: AnnotateImageRequest) -> tuple[str, str]:
    image = request.image
    if image.content is not None:
        return ("content", f"{len(image.content)} bytes")
    assert image.source is not None
    if image.source.gcs_image_uri is not None:
        return ("gcs_image_uri", image.source.gcs_image_uri)
    return ("image_uri", image.source.image_uri or "")


def print_batch_summary(requests: Sequence[AnnotateImageRequest]) -> None:
    """Print one row per request: position, payload kind, and size or URI."""
    table = Table(title=f"{len(requests)} request(s)", title_justify="left")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Image")
    table.add_column("Detail", style="dim")
    table.add_column("Features", style="green")

    for index, request in enumerate(requests):
        kind, detail = _describe_image(request)
        features = ", ".join(
            f.type.name if f.max_results is None else f"{f.type.name} (max {f.max_results})"
            for f in request.features
        )
        table.add_row(str(index), kind, detail, features)

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {message}")
