"""Entry point for dictee CLI client."""

import argparse
import sys

from cli.api_client import DicteeAPIClient
from cli.console import ConsoleUI, FlashNarrator
from core.config import DEFAULT_FLASH_SECONDS


def main():
    parser = argparse.ArgumentParser(description='Dictee - Dutch dictation practice')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument('--list', dest='list_name', help='Word list to practice (default: first list)')
    parser.add_argument('--lists', action='store_true', help='Show the available word lists and exit')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--count', type=int, help='Questions per round (default: length of the list)')
    mode.add_argument(
        '--until-correct',
        action='store_true',
        help='Keep asking until every word was typed correctly once'
    )
    parser.add_argument(
        '--flash-seconds',
        type=float,
        default=DEFAULT_FLASH_SECONDS,
        help=f'How long a dictated word stays visible (default: {DEFAULT_FLASH_SECONDS})'
    )
    args = parser.parse_args()

    client = DicteeAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client, FlashNarrator(args.flash_seconds))

    try:
        if args.lists:
            ui.print_lists(client.get_lists()['lists'])
            return
        ui.run(args.list_name, args.count, args.until_correct)
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
