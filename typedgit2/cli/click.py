import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import click

from .. import process
from .._wrappers import native_adaptation
from ..branch import BranchType
from ..exc import UnknownErrorCodeError, classify
from ..refspec import Refspec
from ..repository import Repository
from ..util import report_errors
from ..version import __version__
from .base import setup_logging

log = logging.getLogger(__name__)

repo_path_argument = click.argument("path", type=click.Path(exists=True), default=".")


@contextmanager
def open_repository(path: str) -> Iterator[Repository]:
    with process.init() as handle, handle.open_repository(path) as repo:
        yield repo


@click.group(name="typedgit2")
@click.option("--quiet", "-q", "log_level", flag_value=logging.WARNING, help="Be less talkative")
@click.option("--debug", "log_level", flag_value=logging.DEBUG, help="Enable debugging output")
def cli(log_level: Optional[int]):
    """Inspect git repositories through libgit2"""
    setup_logging(log_level=log_level or logging.INFO)


@cli.command()
@report_errors
def version() -> None:
    """Show versions of this package and of libgit2"""
    log.info("typedgit2 %s", __version__)
    with process.init() as handle:
        major, minor, rev = handle.version()
        log.info("libgit2 %d.%d.%d (%s)", major, minor, rev, native_adaptation.soname)
        log.info("Features: %s", handle.features())


@cli.command(name="classify")
@click.argument("code", type=int)
def classify_code(code: int) -> None:
    """Show the error kind of a libgit2 result code"""
    try:
        kind = classify(code)
    except UnknownErrorCodeError as exc:
        raise click.ClickException(str(exc)) from exc
    log.info("%d: %s", code, kind.name)


@cli.command()
@repo_path_argument
@report_errors
def fetch_heads(path: str) -> None:
    """List the entries of FETCH_HEAD"""

    def show(ref_name: str, remote_url: str, oid, is_merge: bool) -> None:
        marker = "" if is_merge else "not-for-merge"
        log.info("%s\t%s\t%s of %s", oid.hex, marker, ref_name, remote_url)

    with open_repository(path) as repo:
        repo.fetchhead_foreach(show)


@cli.command()
@repo_path_argument
@report_errors
def merge_heads(path: str) -> None:
    """List the commits in MERGE_HEAD"""
    with open_repository(path) as repo:
        repo.mergehead_foreach(lambda oid: log.info("%s", oid.hex))


@cli.command()
@repo_path_argument
@report_errors
def status(path: str) -> None:
    """Show the status of files which aren’t current"""

    def show(file_path: str, file_status) -> None:
        log.info("%s: %s", file_path, ", ".join(file_status))

    with open_repository(path) as repo:
        repo.status_foreach(show)


@cli.command()
@repo_path_argument
@click.option(
    "--remote/--local", "remote", default=False, help="List remote-tracking or local branches"
)
@report_errors
def branches(path: str, remote: bool) -> None:
    """List branches"""
    branch_type = BranchType.REMOTE if remote else BranchType.LOCAL
    with open_repository(path) as repo, repo.iterate_branches(branch_type) as iterator:
        for ref, _ in iterator:
            with ref:
                log.info("%s", ref.shorthand)


@cli.command()
@click.argument("refspec")
@click.option("--push", is_flag=True, help="Parse as a push refspec")
@click.option("--transform", "names", multiple=True, help="Reference name to transform")
@report_errors
def refspec(refspec: str, push: bool, names: tuple[str, ...]) -> None:
    """Parse a refspec and show its parts"""
    with process.init(), Refspec.parse(refspec, is_fetch=not push) as parsed:
        log.info("source: %s", parsed.source)
        log.info("destination: %s", parsed.destination)
        log.info("direction: %s", parsed.direction.name)
        log.info("force: %s", parsed.is_force_update)
        for name in names:
            if parsed.src_matches(name):
                log.info("%s -> %s", name, parsed.transform(name))
            else:
                log.info("%s doesn’t match", name)
