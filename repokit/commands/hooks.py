"""
Hook commands for repokit.
"""

from pathlib import Path

import click

from ..cli_utils import add_common_options, output_result, report_errors
from ..config import configure_logging, load_config
from ..domain import Repository
from ..services import HookInstaller


@click.group('hooks')
def hooks_cmd():
    """Manage hook links.

    Hooks are symlinks to the scripts in hooks.directory, so editing the
    central scripts updates every repository at once.

    \b
    Examples:
        repokit hooks list
        repokit hooks install /srv/objects/foo.git
    """
    pass


@hooks_cmd.command('install')
@click.argument('git_dir', type=click.Path())
@click.option('--hooks-dir', type=click.Path(), help='Hook source directory (default: hooks.directory)')
@add_common_options('json', 'pretty', 'debug')
@report_errors
def install_handler(git_dir, hooks_dir, output_json, pretty, debug):
    """Symlink the registered hooks into GIT_DIR/hooks."""
    config = load_config()
    configure_logging(config, debug)

    installer = HookInstaller(config=config, hooks_dir=Path(hooks_dir) if hooks_dir else None)
    created = installer.install(Repository(git_dir=Path(git_dir)))
    output_result({
        'git_dir': git_dir,
        'hooks_dir': str(installer.resolve_hooks_dir()),
        'linked': [link.name for link in created],
    }, pretty, title="Hooks installed")


@hooks_cmd.command('list')
@add_common_options('json', 'pretty')
@report_errors
def list_handler(output_json, pretty):
    """Show the registered hook names and their source directory."""
    config = load_config()
    installer = HookInstaller(config=config)
    output_result({
        'hooks_dir': config.get('hooks', {}).get('directory', ''),
        'hooks': installer.hook_names(),
    }, pretty, title="Hooks")
