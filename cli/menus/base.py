# cli/menus/base.py
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import click

from cli.utils import echo_header, echo_info, prompt_choice

class MenuAction(Enum):
    """What the caller of a menu should do next"""
    STAY = "stay"
    BACK = "back"
    LOGOUT = "logout"
    EXIT = "exit"

@dataclass
class MenuItem:
    label: str
    handler: Callable[[], Optional[MenuAction]]

def back() -> MenuAction:
    return MenuAction.BACK

def logout() -> MenuAction:
    echo_info("You have been logged out.")
    return MenuAction.LOGOUT

def exit_program() -> MenuAction:
    echo_info("Exiting the program. Goodbye!")
    return MenuAction.EXIT

def submenu(action: MenuAction) -> MenuAction:
    """Leaving a sub-menu with BACK keeps the parent menu open"""
    return MenuAction.STAY if action == MenuAction.BACK else action

def run_menu(title: str, items: List[MenuItem]) -> MenuAction:
    """Show a numbered menu until a handler returns something other than STAY.

    Handlers returning ``None`` count as STAY.
    """
    while True:
        echo_header(title)
        for index, item in enumerate(items, 1):
            click.echo(f"{index}. {item.label}")
        choice = prompt_choice(len(items))
        action = items[choice - 1].handler() or MenuAction.STAY
        if action != MenuAction.STAY:
            return action
