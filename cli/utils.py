import click
from datetime import date
from functools import wraps
from typing import Any, Callable, Iterable, Optional
from pydantic import ValidationError

from lms.exceptions import IntegrityViolationError, InvalidInputError, NotFoundError
from lms.utils import validators

def echo_header(title: str) -> None:
    click.echo("\n" + click.style(f"=== {title} ===", fg='blue', bold=True))

def echo_success(message: str) -> None:
    click.echo(click.style(message, fg='green'))

def echo_info(message: str) -> None:
    click.echo(click.style(message, fg='cyan'))

def echo_warning(message: str) -> None:
    click.echo(click.style(message, fg='yellow'))

def echo_error(message: str) -> None:
    click.echo(click.style(message, fg='red'), err=True)

def echo_items(items: Iterable[Any], empty_message: str) -> None:
    """Print one item per line, or ``empty_message`` if there are none"""
    items = list(items)
    if not items:
        echo_warning(empty_message)
        return
    for item in items:
        click.echo(str(item))

def format_validation_error(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        message = detail['msg'].removeprefix('Value error, ')
        location = '.'.join(str(part) for part in detail['loc'] if part not in ('value',))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)

def report_errors(func: Callable) -> Callable:
    """Report library and validation errors instead of letting them end the session"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (NotFoundError, InvalidInputError, IntegrityViolationError) as e:
            echo_error(str(e))
        except ValidationError as e:
            echo_error(format_validation_error(e))
        return None
    return wrapper

def validated(predicate: Callable[[str], bool], message: str,
              convert: Optional[Callable[[str], Any]] = None) -> Callable[[str], Any]:
    """Build a click ``value_proc`` that re-prompts while ``predicate`` fails"""
    def value_proc(value: str):
        if not predicate(value):
            raise click.BadParameter(message)
        return convert(value) if convert else value.strip()
    return value_proc

def prompt_text(label: str, predicate: Callable[[str], bool] = validators.is_not_blank,
                message: str = "Value must not be blank", **kwargs) -> str:
    return click.prompt(label, value_proc=validated(predicate, message), **kwargs)

def prompt_id(label: str) -> int:
    return click.prompt(
        label,
        value_proc=validated(validators.is_valid_id, "Please enter a positive whole number",
                             validators.parse_positive_int)
    )

def prompt_date(label: str, predicate: Optional[Callable[[Any], bool]] = None,
                message: str = "Please enter a date as YYYY-MM-DD") -> date:
    def is_valid(value: str) -> bool:
        parsed = validators.parse_iso_date(value)
        return parsed is not None and (predicate is None or predicate(parsed))
    return click.prompt(label, value_proc=validated(is_valid, message, validators.parse_iso_date))

def prompt_choice(count: int, label: str = "Enter your choice") -> int:
    return click.prompt(label, type=click.IntRange(1, count))

def choose_from(items: list, label: str) -> Optional[Any]:
    """Number ``items``, ask for one and return it (None if the list is empty)"""
    if not items:
        return None
    for index, item in enumerate(items, 1):
        click.echo(f"{index}. {item}")
    return items[prompt_choice(len(items), label) - 1]
