#!/usr/bin/env python3
"""
Main entry point for the warehouse inventory tracker.
Runs a single command against the local store, or an interactive session
with the `shell` command.
"""

import sys
import shlex
import logging
import argparse
from pathlib import Path

# Add the project root directory to Python path
sys.path.append(str(Path(__file__).parent))

from inventory_tracker.dashboard import InventoryDashboard, Notifier
from inventory_tracker.db.local_storage import LocalStorage
from inventory_tracker.db.repository import ItemRepository
from inventory_tracker.exceptions import PersistenceError
from inventory_tracker.query import ASCENDING, DESCENDING, SORT_KEYS, SortState
from inventory_tracker.utils import config

logger = logging.getLogger(__name__)

FORM_FIELDS = [
    ("sku", "SKU"),
    ("item_name", "Item name"),
    ("quantity_counted", "Quantity counted"),
    ("unit_of_measure", "Unit of measure"),
    ("location_in_warehouse", "Location in warehouse"),
    ("category", "Category"),
    ("custom_category", "Custom category"),
    ("condition_notes", "Condition notes"),
    ("last_count_date", "Last count date (YYYY-MM-DD)"),
    ("reorder_level", "Reorder level"),
    ("supplier", "Supplier"),
    ("image_url", "Image URL"),
]

# Setup logging
def setup_logging(level=None):
    """Configure logging with timestamp and level"""
    handlers = [logging.StreamHandler()]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(__name__)

def add_item_arguments(parser, require_name=False):
    """Add one option per form field to a subcommand parser."""
    for field, label in FORM_FIELDS:
        option = '--' + field.replace('_', '-')
        parser.add_argument(option, dest=field, required=require_name and field == 'item_name', help=label)

def form_values(args):
    """Collect the form fields given on the command line."""
    values = {field: getattr(args, field) for field, _ in FORM_FIELDS if getattr(args, field, None) is not None}
    # A newly chosen category replaces any custom override already on the form
    if 'category' in values and 'custom_category' not in values:
        values['custom_category'] = ''
    return values

def build_parser():
    parser = argparse.ArgumentParser(prog='inventory-tracker', description='Warehouse inventory tracker')
    parser.add_argument('--data-dir', default=None, help='Directory holding the local store')
    parser.add_argument('--strict', action='store_true', help='Use the strict form validation policy')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command')

    list_parser = subparsers.add_parser('list', help='List inventory items')
    list_parser.add_argument('--search', '-s', default='', help='Filter by item name, SKU, or category')
    list_parser.add_argument('--sort', choices=list(SORT_KEYS), default='item_name', help='Sort column')
    list_parser.add_argument('--desc', action='store_true', help='Sort descending')

    subparsers.add_parser('stats', help='Show inventory statistics')
    subparsers.add_parser('low-stock', help='List items at or below their reorder level')

    add_parser = subparsers.add_parser('add', help='Add an inventory item')
    add_item_arguments(add_parser, require_name=True)

    edit_parser = subparsers.add_parser('edit', help='Edit an inventory item')
    edit_parser.add_argument('id', help='Item id')
    add_item_arguments(edit_parser)

    delete_parser = subparsers.add_parser('delete', help='Delete an inventory item')
    delete_parser.add_argument('id', help='Item id')
    delete_parser.add_argument('--yes', '-y', action='store_true', help='Skip the confirmation prompt')

    subparsers.add_parser('shell', help='Start an interactive session')
    return parser

def print_notifications(dashboard):
    for notification in dashboard.notifier.drain():
        print(str(notification))

def print_form_errors(errors):
    for field, message in errors.items():
        print(f"  {field}: {message}")

def confirm(prompt):
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in ('y', 'yes')

def run_submit(dashboard, values):
    """Submit the open form and report the result. Returns an exit code."""
    item = dashboard.submit_form(values)
    if item is None and dashboard.form is not None and dashboard.form.errors:
        print("Please correct the following fields:")
        print_form_errors(dashboard.form.errors)
        dashboard.close_form()
        return 1
    print_notifications(dashboard)
    if item is None:
        return 1
    print(dashboard.render_table([item]))
    return 0

def run_delete(dashboard, item_id, assume_yes=False):
    item = dashboard.request_delete(item_id)
    if item is None:
        print(f"Item {item_id} not found")
        return 1
    if not assume_yes and not confirm(f"Delete {item.item_name}? This action cannot be undone."):
        dashboard.cancel_delete()
        print("Delete cancelled")
        return 0
    dashboard.confirm_delete()
    print_notifications(dashboard)
    return 0

def run_command(dashboard, args):
    """Run one parsed command against the dashboard and return an exit code."""
    if args.command == 'list':
        dashboard.search(args.search)
        dashboard.sort = SortState(args.sort, DESCENDING if args.desc else ASCENDING)
        print(dashboard.render_table())
        return 0

    if args.command == 'stats':
        print(dashboard.render_summary())
        return 0

    if args.command == 'low-stock':
        print(dashboard.render_table(dashboard.low_stock_items()))
        return 0

    if args.command == 'add':
        dashboard.open_add_form()
        return run_submit(dashboard, form_values(args))

    if args.command == 'edit':
        if dashboard.open_edit_form(args.id) is None:
            print_notifications(dashboard)
            return 1
        return run_submit(dashboard, form_values(args))

    if args.command == 'delete':
        return run_delete(dashboard, args.id, assume_yes=args.yes)

    if args.command == 'shell':
        return run_shell(dashboard)

    return 1

def prompt_form(dashboard):
    """Fill the open form interactively; an empty answer keeps the current value."""
    values = {}
    for field, label in FORM_FIELDS:
        current = dashboard.form.values.get(field, '')
        answer = input(f"{label} [{current}]: ")
        if answer.strip():
            values[field] = answer.strip()
    # A newly chosen category replaces any custom override already on the form
    if 'category' in values and 'custom_category' not in values:
        values['custom_category'] = ''
    return values

SHELL_HELP = """Commands:
  list                 show the inventory table
  search TERM          filter by item name, SKU, or category (no term clears)
  sort FIELD           sort by a column; repeat to flip direction
  stats                show totals and low stock alerts
  add                  add an item
  edit ID              edit an item
  delete ID            delete an item
  logout               end the session"""

def run_shell(dashboard):
    """Interactive session; ends on logout, EOF or Ctrl-C."""
    print(dashboard.render_summary())
    print(SHELL_HELP)

    while not dashboard.logged_out:
        try:
            line = input("inventory> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            dashboard.logout()
            break

        if not line:
            continue
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"Could not parse command: {e}")
            continue
        command, rest = parts[0].lower(), parts[1:]

        try:
            if command == 'list':
                print(dashboard.render_table())
            elif command == 'search':
                dashboard.search(' '.join(rest))
                print(dashboard.render_table())
            elif command == 'sort' and rest:
                dashboard.sort_by(rest[0])
                print(dashboard.render_table())
            elif command == 'stats':
                print(dashboard.render_summary())
            elif command == 'add':
                dashboard.open_add_form()
                run_submit(dashboard, prompt_form(dashboard))
            elif command == 'edit' and rest:
                if dashboard.open_edit_form(rest[0]) is not None:
                    run_submit(dashboard, prompt_form(dashboard))
                print_notifications(dashboard)
            elif command == 'delete' and rest:
                run_delete(dashboard, rest[0])
            elif command in ('logout', 'quit', 'exit'):
                dashboard.logout()
            else:
                print(SHELL_HELP)
        except ValueError as e:
            print(str(e))
        except KeyboardInterrupt:
            print()
            dashboard.close_form()
            dashboard.cancel_delete()

    print("Logged out")
    return 0

def main(argv=None):
    """Main function that runs the inventory tracker"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(logging.DEBUG if args.debug else None)

    try:
        config.validate_config()
    except EnvironmentError as e:
        logger.error(str(e))
        return 1

    policy = 'strict' if args.strict else config.VALIDATION_POLICY

    try:
        storage = LocalStorage(directory=args.data_dir)
    except PersistenceError as e:
        logger.error(f"Unable to open the local store: {str(e)}")
        return 1

    dashboard = InventoryDashboard(ItemRepository(storage), Notifier(), policy=policy)
    if not dashboard.load():
        print_notifications(dashboard)
    return run_command(dashboard, args)

if __name__ == "__main__":
    sys.exit(main())
