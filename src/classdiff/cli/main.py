"""classdiff CLI - compare compilation units across releases."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from classdiff import __version__
from classdiff.config import ClassDiffConfig, ensure_cache_dirs, load_config
from classdiff.core.errors import ClassDiffError, ConfigError, FetchError, ScanAbortedError
from classdiff.core.logging import configure_logging, get_log_file_path, set_run_id
from classdiff.core.progress import pluralize
from classdiff.diff.scanner import scan
from classdiff.index.indexers import BinaryUnitIndexer, SourceUnitIndexer
from classdiff.report.render import render_json, render_transition
from classdiff.sources.artifact import ArtifactRef, parse_artifact
from classdiff.sources.base import ReleaseSource
from classdiff.sources.github import GitMirror, GitTagReleaseSource
from classdiff.sources.maven import MavenReleaseSource, MavenRepository
from classdiff.versions.ordering import filter_versions

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _RunOptions:
    from_version: str | None
    to_version: str | None
    verbose: bool
    full: bool
    as_json: bool


@click.command()
@click.version_option(version=__version__, prog_name="classdiff")
@click.argument("artifact")
@click.argument("from_version", metavar="[FROM]", required=False)
@click.argument("to_version", metavar="[TO]", required=False)
@click.option("-v", "--verbose", is_flag=True, help="Show progress and debug logging")
@click.option("-f", "--full", is_flag=True, help="Show all items without truncation")
@click.option("--json", "as_json", is_flag=True, help="One JSON object per transition")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/classdiff/config.yaml)",
)
def cli(
    artifact: str,
    from_version: str | None,
    to_version: str | None,
    verbose: bool,
    full: bool,
    as_json: bool,
    config_path: Path | None,
) -> None:
    """Compare class files between versions of ARTIFACT.

    ARTIFACT is a Maven coordinate (org.example:my-lib, org.example/my-lib,
    or a Maven Central URL) or a GitHub repository (owner/repo or URL).
    FROM and TO bound the compared range, inclusive.
    """
    set_run_id()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    ref = parse_artifact(artifact)
    log.debug("artifact_parsed", namespace=ref.namespace, name=ref.name, kind=ref.kind)

    try:
        cache_dir = ensure_cache_dirs(config, git=ref.is_github)
    except ConfigError as e:
        raise _fatal(e) from e

    options = _RunOptions(
        from_version=from_version,
        to_version=to_version,
        verbose=verbose,
        full=full,
        as_json=as_json,
    )

    if ref.is_github:
        mirror = GitMirror.for_github(ref, cache_dir, verbose=verbose)
        source_indexer = SourceUnitIndexer(
            source_roots=config.git.source_roots,
            source_suffix=config.git.source_suffix,
            test_segment=config.git.test_segment,
        )
        _run(GitTagReleaseSource(mirror, source_indexer), ref, config, options)
        return

    with MavenRepository(
        config.maven.repository_url,
        cache_dir,
        timeout_sec=config.maven.timeout_sec,
        verbose=verbose,
    ) as repository:
        binary_indexer = BinaryUnitIndexer(
            unit_suffix=config.archive.unit_suffix,
            descriptor_unit=config.archive.descriptor_unit,
        )
        _run(MavenReleaseSource(repository, ref, binary_indexer), ref, config, options)


def _run(
    source: ReleaseSource,
    ref: ArtifactRef,
    config: ClassDiffConfig,
    options: _RunOptions,
) -> None:
    """List, filter and scan releases, echoing each reported transition."""
    noun = source.noun

    def info(message: str = "") -> None:
        # Keep stdout machine-readable in JSON mode
        click.echo(message, err=options.as_json)

    try:
        releases = source.list_releases()
    except FetchError as e:
        raise _fatal(e) from e

    if not releases:
        info(f"No {noun}s found")
        return

    filtered = filter_versions(releases, options.from_version, options.to_version)
    if len(filtered) < 2:
        info(f"Need at least 2 {noun}s")
        info(f"Available {noun}s: {releases[0]} to {releases[-1]}")
        if options.verbose:
            info(f"All {noun}s: {', '.join(releases)}")
        return

    if options.verbose:
        info(f"Total {noun}s: {len(filtered)}")
    info(f"Comparing {pluralize(len(filtered), noun)}")
    info()

    grouped = ref.is_github
    if options.full:
        limit = None
    else:
        limit = config.report.grouped_limit if grouped else config.report.flat_limit

    try:
        for transition in scan(releases, source.load, options.from_version, options.to_version):
            if options.as_json:
                click.echo(render_json(transition))
                continue
            for line in render_transition(
                transition,
                grouped=grouped,
                limit=limit,
                full=options.full,
                markers=config.report.namespace_markers,
            ):
                click.echo(line)
    except ScanAbortedError as e:
        if isinstance(source, MavenReleaseSource):
            _suggest_submodules(source, ref, info)
            return
        raise _fatal(e) from e


def _fatal(error: ClassDiffError) -> click.ClickException:
    """Log the failure and point at the log file, if one is configured."""
    log.error("run_failed", error=error.error_name, details=error.details)
    message = str(error)
    log_file = get_log_file_path()
    if log_file is not None:
        message = f"{message}. See {log_file} for details."
    return click.ClickException(message)


def _suggest_submodules(
    source: MavenReleaseSource,
    ref: ArtifactRef,
    info: Callable[..., None],
) -> None:
    info()
    info("No JAR files found. Checking for sub-modules...")
    modules = source.find_submodules()
    if not modules:
        info()
        info("This is a POM-only project with no sub-modules.")
        info("Try a different artifact.")
        return

    info()
    info(f"Found {pluralize(len(modules), 'sub-module')}:")
    for idx, module in enumerate(modules, start=1):
        info(f"  {idx}. {module}")
    info()
    info("Try one of these:")
    info(f"  classdiff {ref.namespace}/{modules[0]}")


if __name__ == "__main__":
    cli()
