from enum import IntEnum

from inventory_lib import InventoryError


class MenuChoice(IntEnum):
    """Actions offered by the start menu, keyed by the number the user types"""
    EXIT = 0
    ADD_VEHICLE = 1
    LIST_VEHICLES = 2
    VEHICLE_DETAIL = 3
    UPDATE_VEHICLE = 4
    REMOVE_VEHICLE = 5
    SAVE_TO_FILE = 6
    LOAD_FROM_FILE = 7


MENU_LABELS = {
    MenuChoice.ADD_VEHICLE: 'Add vehicles',
    MenuChoice.LIST_VEHICLES: 'List vehicles',
    MenuChoice.VEHICLE_DETAIL: 'Get vehicle details',
    MenuChoice.UPDATE_VEHICLE: 'Update vehicles',
    MenuChoice.REMOVE_VEHICLE: 'Remove vehicles',
    MenuChoice.SAVE_TO_FILE: 'Save vehicles to file',
    MenuChoice.LOAD_FROM_FILE: 'Load vehicles from file',
    MenuChoice.EXIT: 'Exit',
}

MENU_WIDTH = 80


class InvalidChoiceError(InventoryError):
    """Menu input that does not name one of the actions"""


def print_line(char, width=MENU_WIDTH, output=print):
    output(char * width)


def print_start_menu(output=print):
    print_line('*', output=output)
    output("What do you want to do today?")
    print_line('-', output=output)
    for choice, label in MENU_LABELS.items():
        output(f"{choice.value} - {label}")
    print_line('-', output=output)


def parse_choice(text):
    """Map raw input to a MenuChoice, rejecting anything outside the menu"""
    text = (text or '').strip()
    if not text:
        raise InvalidChoiceError("Input cannot be empty")
    try:
        value = int(text)
    except ValueError:
        raise InvalidChoiceError("Invalid input. Please enter a number")
    try:
        return MenuChoice(value)
    except ValueError:
        raise InvalidChoiceError(f"{value} is not on the menu. Please try again")


def get_choice(input_func=input, output=print):
    """Prompt until the user enters a valid menu number"""
    while True:
        try:
            return parse_choice(input_func("Please enter your selection: "))
        except InvalidChoiceError as e:
            output(str(e))
