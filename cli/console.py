"""Console UI for dictee application."""

import sys
import time

from core.alignment import render_feedback
from core.config import DEFAULT_FLASH_SECONDS
from core.interfaces import NarrationSink
from core.models import CharacterJudgment
from cli.api_client import DicteeAPIClient, error_detail


class FlashNarrator(NarrationSink):
    """Stands in for speech in a terminal: shows the text briefly, then wipes the line."""

    def __init__(self, seconds: float = DEFAULT_FLASH_SECONDS, stream=None, sleep=time.sleep):
        self.seconds = seconds
        self.stream = stream or sys.stdout
        self.sleep = sleep

    def speak(self, text: str) -> None:
        line = f'  ~ {text} ~'
        self.stream.write(line)
        self.stream.flush()
        self.sleep(self.seconds)
        self.stream.write('\r' + ' ' * len(line) + '\r')
        self.stream.flush()


def format_alignment(alignment: list[dict]) -> str:
    return render_feedback([CharacterJudgment.from_dict(j) for j in alignment])


class ConsoleUI:
    """Console user interface for dictee application."""

    def __init__(self, client: DicteeAPIClient, narrator: NarrationSink | None = None):
        self.client = client
        self.narrator = narrator or FlashNarrator()

    def print_lists(self, lists: list[str]):
        print('Word lists:')
        for name in lists:
            print(f'  - {name}')

    def print_result(self, result: dict):
        """Print the letter-by-letter verdict of one attempt."""
        print('-' * 40)
        if result['correct']:
            print(f"Correct: {result['item']}")
        else:
            print(f"Your answer:  {result['attempt']}")
            print(f"Correct word: {result['item']}")
            print(f"Letters:      {format_alignment(result['alignment'])}")
            print('  (x) missing  {x} extra  [typed>expected] wrong letter')
        print('-' * 40)

    def print_progress(self, status: dict):
        if status['until_all_correct']:
            question = f"{status['question_number']} ({status['remaining_count']} still to get right)"
        else:
            question = f"{status['question_number']} / {status['questions_per_round']}"
        print(f"Round {status['round_number']} | Question {question} | "
              f"Score {status['total_correct']} / {status['total_asked']} ({status['accuracy']}%)")

    def print_round_end(self, status: dict):
        """Print the round summary and the mistakes made in it."""
        asked = status['asked_count'] if status['until_all_correct'] else status['questions_per_round']
        print('\n' + '=' * 50)
        print(f"Round {status['round_number']} done! You got {status['correct_count']} of {asked} right.")
        if status.get('gif_url'):
            print(f"Celebrate: {status['gif_url']}")
        if status['mistakes']:
            print('\nMistakes:')
            for entry in status['mistakes']:
                print(f"  {entry['item']:<20} you typed: {entry['attempt'] or '(nothing)':<20} "
                      f"{format_alignment(entry['alignment'])}")
        print('=' * 50 + '\n')

    def run(self, list_name: str | None = None, question_count: int | None = None,
            until_all_correct: bool = False):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to dictee server ({health['service']})")
        except Exception as e:
            print(f"Error: Cannot connect to server at {self.client.base_url} ({e})")
            print("Make sure the server is running: python run_server.py")
            return

        try:
            status = self.client.start_round(list_name, question_count, until_all_correct)
        except Exception as e:
            print(f"Error starting round: {error_detail(e)}")
            return

        print(f"\nDictation: {status['list_name']}")
        print('Listen, type the word and press enter.')
        print('Commands: empty line or "replay" to hear it again, "status" for progress, "exit" to quit\n')

        while True:
            item = status['current_item']
            if item is None:
                self.print_round_end(status)
                if input('Next round? [Y/n] ').strip().lower() in ('n', 'no', 'exit'):
                    self.client.reset()
                    print('Goodbye!')
                    return
                try:
                    status = self.client.next_round()
                except Exception as e:
                    print(f"Error starting next round: {error_detail(e)}")
                    return
                continue

            self.print_progress(status)
            self.narrator.speak(item)

            attempt = None
            while attempt is None:
                user_input = input('==> ')
                command = user_input.strip().lower()
                if command == 'exit':
                    self.client.reset()
                    print('Goodbye!')
                    return
                elif command in ('', 'replay'):
                    try:
                        self.narrator.speak(self.client.replay()['current_item'])
                    except Exception as e:
                        print(f"Error replaying word: {error_detail(e)}")
                elif command == 'status':
                    self.print_progress(self.client.get_status())
                else:
                    attempt = user_input

            try:
                result = self.client.submit(attempt)
                self.print_result(result)
                status = self.client.get_status()
            except Exception as e:
                print(f"Error submitting answer: {error_detail(e)}")
                status = self.client.get_status()
