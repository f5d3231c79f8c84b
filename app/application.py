"""
Console Application - Runs the menu loop and wires each action to the inventory library
"""

import logging
import os

from inventory_lib import VehicleRegistry, VehicleFileStore, InventoryError, ParseError

from .forms import VehicleForm, VehicleUpdateForm, VehicleIdForm, bind_form, first_error
from .menu import MenuChoice, print_line, print_start_menu, get_choice

# Inventory Configuration
DEFAULT_DATA_FILE = os.environ.get('VEHICLE_DATA_FILE', 'vehicles.csv')

TABLE_HEADER = f"{'ID':>4}  {'Year':<4}  {'Make':<15} {'Model':<15} {'Price':>14}  Transmission"


def format_price(price):
    return f"${price:,.2f}"


def format_row(vehicle):
    return (f"{vehicle.id:>4}  {vehicle.year:<4}  {vehicle.make:<15.15} {vehicle.model:<15.15} "
            f"{format_price(vehicle.price):>14}  {vehicle.transmission_label()}")


class Application:
    """Coordinates user interaction with the registry and the file store"""

    def __init__(self, registry=None, store=None, data_file=DEFAULT_DATA_FILE,
                 input_func=input, output=print):
        self.registry = registry if registry is not None else VehicleRegistry()
        self.store = store if store is not None else VehicleFileStore()
        self.data_file = data_file
        self.input = input_func
        self.output = output
        self.handlers = {
            MenuChoice.ADD_VEHICLE: self.handle_add_vehicle,
            MenuChoice.LIST_VEHICLES: self.handle_list_vehicles,
            MenuChoice.VEHICLE_DETAIL: self.handle_vehicle_detail,
            MenuChoice.UPDATE_VEHICLE: self.handle_update_vehicle,
            MenuChoice.REMOVE_VEHICLE: self.handle_remove_vehicle,
            MenuChoice.SAVE_TO_FILE: self.handle_save_to_file,
            MenuChoice.LOAD_FROM_FILE: self.handle_load_from_file,
        }

    def run(self):
        self.output("Welcome to the Vehicle Management System")
        while True:
            print_start_menu(output=self.output)
            try:
                choice = get_choice(self.input, self.output)
            except EOFError:
                choice = MenuChoice.EXIT
            if choice == MenuChoice.EXIT:
                self.output("Thank you for using the Vehicle Management System.")
                return
            self.dispatch(choice)

    def dispatch(self, choice):
        """Run one action; errors are reported and control returns to the menu"""
        try:
            self.handlers[choice]()
        except InventoryError as e:
            logging.warning(f"{choice.name} failed: {e}")
            self.output(f"Error: {e}")
        except EOFError:
            self.output("Input closed, action cancelled.")

    def ask(self, prompt):
        return self.input(f"{prompt}: ")

    def ask_fields(self, form_class, hints=None):
        hints = hints or {}
        answers = {}
        for field in form_class():
            hint = f" [{hints[field.name]}]" if field.name in hints else ''
            answers[field.name] = self.ask(f"{field.label.text}{hint}")
        return bind_form(form_class, answers)

    def ask_vehicle_id(self):
        form = bind_form(VehicleIdForm, {'vehicle_id': self.ask('Vehicle ID')})
        if not form.validate():
            self.output(first_error(form))
            return None
        return form.vehicle_id.data

    def ask_path(self):
        answer = self.ask(f"File path [{self.data_file}]").strip()
        return answer or self.data_file

    def handle_add_vehicle(self):
        form = self.ask_fields(VehicleForm)
        if not form.validate():
            self.output(first_error(form))
            return
        vehicle_id = self.registry.add_vehicle(**form.to_kwargs())
        self.output(f"Vehicle added with ID {vehicle_id}.")

    def handle_list_vehicles(self):
        vehicles = self.registry.list_vehicles()
        if not vehicles:
            self.output("No vehicles in inventory.")
            return
        self.output(TABLE_HEADER)
        print_line('-', output=self.output)
        for vehicle in vehicles:
            self.output(format_row(vehicle))
        self.output(f"{len(vehicles)} vehicle(s)")

    def handle_vehicle_detail(self):
        vehicle_id = self.ask_vehicle_id()
        if vehicle_id is None:
            return
        vehicle = self.registry.get_vehicle(vehicle_id)
        self.output(f"ID:           {vehicle.id}")
        self.output(f"Year:         {vehicle.year}")
        self.output(f"Make:         {vehicle.make}")
        self.output(f"Model:        {vehicle.model}")
        self.output(f"Price:        {format_price(vehicle.price)}")
        self.output(f"Transmission: {vehicle.transmission_label()}")

    def handle_update_vehicle(self):
        vehicle_id = self.ask_vehicle_id()
        if vehicle_id is None:
            return
        current = self.registry.get_vehicle(vehicle_id)
        self.output("Press Enter to keep the current value.")
        form = self.ask_fields(VehicleUpdateForm, hints={
            'year': current.year,
            'make': current.make,
            'model': current.model,
            'price': current.price,
            'is_automatic': current.transmission_label(),
        })
        if not form.validate():
            self.output(first_error(form))
            return
        changes = form.changes()
        if not changes:
            self.output("Nothing to update.")
            return
        self.registry.update_vehicle(vehicle_id, **changes)
        self.output(f"Vehicle {vehicle_id} updated.")

    def handle_remove_vehicle(self):
        vehicle_id = self.ask_vehicle_id()
        if vehicle_id is None:
            return
        self.registry.remove_vehicle(vehicle_id)
        self.output(f"Vehicle {vehicle_id} removed.")

    def handle_save_to_file(self):
        path = self.ask_path()
        vehicles = self.registry.list_vehicles()
        self.store.save(vehicles, path)
        self.output(f"Saved {len(vehicles)} vehicle(s) to {path}.")

    def handle_load_from_file(self):
        """Replace the inventory with the file contents; a bad line aborts the load"""
        path = self.ask_path()
        try:
            vehicles = self.store.load(path)
        except ParseError as e:
            logging.warning(f"Load of {path} aborted: {e}")
            self.output(f"Load aborted, {path} {e}. Inventory unchanged.")
            return
        self.registry.replace_all(vehicles)
        self.output(f"Loaded {len(vehicles)} vehicle(s) from {path}.")
