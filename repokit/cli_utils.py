"""
Common CLI utilities for consistent command behavior.
"""

import json
import sys
from functools import wraps
from typing import Any, Dict

import click

from .exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception


def report_errors(func):
    """
    Decorator that turns repokit errors into JSON/text output and exit codes.

    The wrapped command must accept an ``output_json`` keyword.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        output_json = kwargs.get('output_json', False)
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("Interrupted by user", file=sys.stderr)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            _print_error(e, output_json, {'exit_code': e.exit_code})
            sys.exit(e.exit_code)
        except OSError as e:
            _print_error(e, output_json, {})
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def _print_error(exc: Exception, output_json: bool, extra: Dict[str, Any]) -> None:
    if output_json:
        error_obj = {"error": str(exc), "type": type(exc).__name__}
        error_obj.update(extra)
        hook_name = getattr(exc, 'hook_name', None)
        if hook_name:
            error_obj['hook'] = hook_name
        print(json.dumps(error_obj, ensure_ascii=False), flush=True)
    else:
        print(f"Error: {exc}", file=sys.stderr)


def output_result(result: Dict[str, Any], pretty: bool = False, title: str = "") -> None:
    """
    Print a result dict as one JSON line, or as a rich table with --pretty.
    """
    if not pretty:
        print(json.dumps(result, ensure_ascii=False), flush=True)
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=title or None, show_header=False)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in result.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False)
        table.add_row(str(key), "" if value is None else str(value))
    Console().print(table)


common_options = {
    'json': click.option('--json', 'output_json', is_flag=True, help='Output as JSONL (default)'),
    'pretty': click.option('--pretty', is_flag=True, help='Display with rich formatting'),
    'debug': click.option('--debug', is_flag=True, help='Enable debug logging'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('json', 'debug')
        def my_command(output_json, debug):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
