"""
Repository bootstrap commands for repokit.

init:     create a project's git directory (shared or standalone)
attach:   link a git directory into an existing objects repository
complete: fill in any missing part of an existing git directory
"""

from pathlib import Path
from typing import Optional

import click

from ..cli_utils import add_common_options, output_result, report_errors
from ..config import configure_logging, load_config
from ..domain import Project, Repository
from ..infra import GitClient
from ..services import ProjectService, RepositoryBootstrapper


@click.command('init')
@click.argument('git_dir', type=click.Path())
@click.option('--name', help='Project name (default: git dir name)')
@click.option('--remote-name', help='Remote name (default: general.remote_name)')
@click.option('--remote-url', default='', help="Remote URL; '.git' is appended when missing")
@click.option('--objects-dir', type=click.Path(), help='Shared objects repository to link into')
@click.option('--no-share', is_flag=True, help='Ignore objects.directory from the configuration')
@click.option('--reference', default='', help='Repository whose objects are borrowed via alternates')
@click.option('--bare', is_flag=True, help='Keep core.bare (no worktree)')
@add_common_options('json', 'pretty', 'debug')
@report_errors
def init_handler(
    git_dir: str,
    name: Optional[str],
    remote_name: Optional[str],
    remote_url: str,
    objects_dir: Optional[str],
    no_share: bool,
    reference: str,
    bare: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Create a project's git directory.

    With an objects repository (--objects-dir, or objects.directory in the
    configuration), the objects repository is created or completed, gets
    the hooks, and the project git dir is linked into it.

    \b
    Examples:
        repokit init ~/work/foo/.git --remote-url https://example.com/foo
        repokit init ~/work/foo/.git --objects-dir /srv/objects/foo.git
    """
    config = load_config()
    configure_logging(config, debug)

    git_path = Path(git_dir)
    if not objects_dir and not no_share and config.get('objects', {}).get('share', True):
        shared_root = config.get('objects', {}).get('directory') or ''
        if shared_root:
            project_name = name or _default_name(git_path)
            objects_dir = str(Path(shared_root).expanduser() / f"{project_name}.git")

    project = Project(
        name=name or _default_name(git_path),
        git_dir=git_path,
        remote_name=remote_name or config.get('general', {}).get('remote_name', 'origin'),
        remote_url=remote_url,
        objects_git_dir=objects_dir,
        reference_dir=reference,
        is_bare=bare,
    )

    result = ProjectService(config=config).git_init(project)
    output_result(result.to_dict(), pretty, title=f"Initialized {project.name}")


@click.command('attach')
@click.argument('git_dir', type=click.Path())
@click.argument('source_dir', type=click.Path())
@click.option('--name', help='Repository name (default: git dir name)')
@click.option('--remote-name', default='origin', help='Remote name (default: origin)')
@click.option('--remote-url', default='', help="Remote URL; '.git' is appended when missing")
@add_common_options('json', 'pretty', 'debug')
@report_errors
def attach_handler(
    git_dir: str,
    source_dir: str,
    name: Optional[str],
    remote_name: str,
    remote_url: str,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Link GIT_DIR into the objects repository at SOURCE_DIR.

    \b
    Examples:
        repokit attach ~/work/foo/.git /srv/objects/foo.git --remote-url https://example.com/foo
    """
    config = load_config()
    configure_logging(config, debug)

    repo = Repository(git_dir=Path(git_dir), name=name or _default_name(Path(git_dir)))
    source = Repository(git_dir=Path(source_dir), is_bare=True)

    bootstrapper = RepositoryBootstrapper(git=GitClient.from_config(config))
    result = bootstrapper.init_by_link(repo, remote_name, remote_url, source)
    output_result(result.to_dict(), pretty, title=f"Attached {repo.name}")


@click.command('complete')
@click.argument('git_dir', type=click.Path())
@click.option('--name', help='Repository name used in the description file')
@click.option('--bare', is_flag=True, help='Keep core.bare (no worktree)')
@add_common_options('json', 'pretty', 'debug')
@report_errors
def complete_handler(
    git_dir: str,
    name: Optional[str],
    bare: bool,
    output_json: bool,
    pretty: bool,
    debug: bool,
):
    """
    Create any missing directory or file of an existing git directory.

    Existing entries are left untouched.
    """
    config = load_config()
    configure_logging(config, debug)

    repo = Repository(git_dir=Path(git_dir), name=name or "", is_bare=bare)
    bootstrapper = RepositoryBootstrapper(git=GitClient.from_config(config))
    created = bootstrapper.init_missing(repo)
    output_result({'git_dir': str(repo.git_dir), 'created': created}, pretty,
                  title=f"Completed {repo.name}")


def _default_name(git_dir: Path) -> str:
    """'foo/.git' -> 'foo', 'foo.git' -> 'foo'."""
    if git_dir.name == '.git':
        return git_dir.absolute().parent.name
    return git_dir.name[:-4] if git_dir.name.endswith('.git') else git_dir.name
