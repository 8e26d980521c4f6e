"""Command-line interface for bucket-tools.

Commands:
    - clear: Delete every object in a bucket

Connection options can also be supplied through BUCKET_TOOLS_* environment
variables so that secrets stay out of shell history.
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .core.exceptions import AggregateError, BucketToolsError
from .objectstorage import clear_bucket
from .schemas import StoreCredentials

app = typer.Typer(
    name="bucket-tools",
    help="Tools for emptying S3-compatible object storage buckets.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Bucket-Tools: empty S3-compatible buckets.
    """
    pass


@app.command("clear")
def clear_cmd(
    endpoint: Annotated[
        str,
        typer.Option(
            "--endpoint",
            envvar="BUCKET_TOOLS_ENDPOINT",
            help="Object store endpoint URL",
        ),
    ],
    access_key: Annotated[
        str,
        typer.Option(
            "--access-key", envvar="BUCKET_TOOLS_ACCESS_KEY", help="Access key ID"
        ),
    ],
    secret_key: Annotated[
        str,
        typer.Option(
            "--secret-key", envvar="BUCKET_TOOLS_SECRET_KEY", help="Secret access key"
        ),
    ],
    bucket: Annotated[
        str,
        typer.Option("--bucket", envvar="BUCKET_TOOLS_BUCKET", help="Bucket to clear"),
    ],
    region: Annotated[
        str,
        typer.Option("--region", envvar="BUCKET_TOOLS_REGION", help="Bucket region"),
    ],
    path_style: Annotated[
        bool,
        typer.Option(
            "--path-style/--virtual-host",
            help="Use path-style or virtual-host addressing",
        ),
    ] = True,
    concurrency: Annotated[
        Optional[int],
        typer.Option("--concurrency", min=1, help="Maximum deletes in flight"),
    ] = None,
    page_size: Annotated[
        Optional[int],
        typer.Option("--page-size", min=1, max=1000, help="Keys listed per request"),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Stop submitting deletes after N seconds"),
    ] = None,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """
    Delete every object in a bucket.

    Examples:
        bucket-tools clear --endpoint https://s3.example.com \
            --access-key KEY --secret-key SECRET --bucket scratch --region us-geo
        BUCKET_TOOLS_BUCKET=scratch bucket-tools clear --yes --concurrency 64 ...
    """
    try:
        credentials = StoreCredentials(
            access_key=access_key,
            secret_key=secret_key,
            endpoint=endpoint,
            bucket_name=bucket,
            region=region,
            path_style=path_style,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not yes:
        typer.confirm(
            f"Delete every object in '{bucket}' at {endpoint}?", abort=True
        )

    try:
        result = clear_bucket(
            credentials,
            concurrency_limit=concurrency,
            page_size=page_size,
            timeout=timeout,
        )
    except AggregateError as e:
        typer.echo(f"Deleted: {e.result.deleted_count:,}")
        typer.echo(f"Failed: {e.result.failed_count:,}", err=True)
        for failure in e.result.failures:
            typer.echo(f"  {failure.key}: {failure.error}", err=True)
        raise typer.Exit(1)
    except BucketToolsError as e:
        partial = getattr(e, "result", None)
        if partial is not None:
            typer.echo(f"Deleted: {partial.deleted_count:,}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Bucket: {bucket}")
    typer.echo(f"Deleted: {result.deleted_count:,}")


if __name__ == "__main__":
    app()
