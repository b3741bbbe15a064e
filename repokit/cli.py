#!/usr/bin/env python3

import click

from repokit.commands.init import init_handler, attach_handler, complete_handler
from repokit.commands.hooks import hooks_cmd
from repokit.commands.config import config_cmd


@click.group()
@click.version_option(package_name="repokit")
def cli():
    """repokit - Bootstrap git directories for multi-repository checkouts.

    Creates project git directories, optionally sharing one object store
    per upstream through symlinks, and links central hook scripts.
    """
    pass


# Core commands (flat, top-level)
cli.add_command(init_handler, name='init')
cli.add_command(attach_handler, name='attach')
cli.add_command(complete_handler, name='complete')

# Command groups
cli.add_command(hooks_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
