"""
Main CLI group for the unsubscribe link extractor.
"""

import click

from .. import __version__
from ..config import Config, load_config_from_env_file
from ..extraction.logging import configure_unsubscribe_logging
from .commands.extract import extract, check_blacklist


@click.group()
@click.version_option(version=__version__, prog_name='Unsubscribe Links')
@click.option('--log-level', default=None, help='Log level for the unsubscribe loggers')
@click.option('--env-file', default='.env', show_default=True, help='dotenv file to load')
def cli(log_level, env_file):
    """
    Unsubscribe Links - find unsubscribe actions in email messages.

    Reads the List-Unsubscribe header and the HTML body of each message
    and lists the email and browser actions that unsubscribe from it.
    """
    load_config_from_env_file(env_file)
    configure_unsubscribe_logging(level=log_level or Config.LOG_LEVEL,
                                  format=Config.LOG_FORMAT)


cli.add_command(extract, name='extract')
cli.add_command(check_blacklist, name='check-blacklist')


if __name__ == '__main__':
    cli()
