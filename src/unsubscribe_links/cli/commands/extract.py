"""
Extraction commands.

Runs the unsubscribe extraction pipeline over .eml files and inspects
the blacklist rule set.
"""

import json
from dataclasses import replace

import click

from ...config import SettingsError, load_blacklist, load_pipeline_config
from ...extraction import ExtractionPipeline, BlacklistFilter, dedupe_links
from ...extraction.constants import BLACKLIST_EMAILS, BLACKLIST_BROWSER
from ...extraction.exceptions import BlacklistConfigError
from ...extraction.fetchers import message_from_eml_file
from ..utils import print_result


@click.command('extract')
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--blacklist', 'blacklist_path', type=click.Path(exists=True, dir_okay=False),
              help='Blacklist rule file (JSON)')
@click.option('--category', help='Account category tag of the messages, e.g. "Sent Mail"')
@click.option('--draft', is_flag=True, help='Treat the messages as drafts')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
@click.option('--dedupe', is_flag=True, help='Drop repeated links from the results')
def extract(files, blacklist_path, category, draft, as_json, dedupe):
    """
    Find unsubscribe actions in one or more .eml files.

    Example:
        unsubscribe-links extract newsletter.eml
        unsubscribe-links extract --json --category "Sent Mail" *.eml
    """
    try:
        config = load_pipeline_config(blacklist_path)
    except BlacklistConfigError as e:
        click.secho(f"✗ Error loading blacklist: {e}", fg='red', err=True)
        raise click.Abort()
    except SettingsError as e:
        click.secho(f"✗ Error in settings: {e}", fg='red', err=True)
        raise click.Abort()

    pipeline = ExtractionPipeline(config)
    output = []

    for path in files:
        message = message_from_eml_file(path, category=category, is_draft=draft)
        result = pipeline.extract(message)
        if dedupe and result.has_links:
            result = replace(result, links=tuple(dedupe_links(result.links)))

        if as_json:
            output.append({'file': path, **result.to_dict()})
        else:
            print_result(path, result)

    if as_json:
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@click.command('check-blacklist')
@click.argument('value')
@click.option('--purpose', type=click.Choice([BLACKLIST_EMAILS, BLACKLIST_BROWSER]),
              default=BLACKLIST_EMAILS, show_default=True, help='Which rule list to test')
@click.option('--blacklist', 'blacklist_path', type=click.Path(exists=True, dir_okay=False),
              help='Blacklist rule file (JSON)')
def check_blacklist(value, purpose, blacklist_path):
    """
    Show which blacklist rule, if any, matches VALUE.

    Example:
        unsubscribe-links check-blacklist legal@example.com
        unsubscribe-links check-blacklist --purpose browser https://www.linkedin.com/x
    """
    try:
        rules = load_blacklist(blacklist_path)
    except BlacklistConfigError as e:
        click.secho(f"✗ Error loading blacklist: {e}", fg='red', err=True)
        raise click.Abort()

    matched = BlacklistFilter(rules.for_purpose(purpose), purpose).first_match(value)
    if matched is None:
        click.secho(f"✓ {value} is not on the {purpose} blacklist", fg='green')
    else:
        click.secho(f"✗ {value} matches {purpose} rule: {matched}", fg='yellow')
