"""Console helpers shared by the deployer and the command line."""
import contextlib
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.status import Status

# logs and spinners go to stderr, command results to stdout
CONSOLE = Console(stderr=True)
OUTPUT = Console()


def print_exception(message: str, console: Console = CONSOLE):
    """Prints an error message followed by the traceback of the exception
    being handled.

    Arguments:
        message: error message to print.
        console: console used to print the message.
    """
    console.print(f"[bold red]ERROR[/] [red]{escape(message)}[/]")
    console.print_exception()


def print_info(message: str, console: Console = CONSOLE):
    """Prints an informational message.

    Arguments:
        message: informational message to print.
        console: console used to print the message.
    """
    console.print(escape(message))


def log(message: str, console: Console = CONSOLE):
    """Prints a message with contextual information (i.e. timestamp).

    Arguments:
        message: message to log.
        console: console used to log the message.
    """
    console.log(escape(message))


# messages of the open `print_waiting` contexts, outermost first
_WAITING: List[str] = []
_SPINNER: Optional[Status] = None


@contextlib.contextmanager
def print_waiting(message: str, sep: str = " → ", console: Console = CONSOLE):
    """Shows a spinner until the context is exited.

    Nested contexts concatenate their messages using the given separator
    and reuse the spinner opened by the outermost one.

    Arguments:
        message: message to show while the context is running.
        sep: separator between the messages of nested contexts.
        console: console showing the spinner, only used by the outermost
            context.
    """
    global _SPINNER  # pylint: disable=global-statement

    _WAITING.append(message)

    try:
        if _SPINNER is None:
            with console.status(escape(message)) as spinner:
                _SPINNER = spinner

                try:
                    yield

                finally:
                    _SPINNER = None

        else:
            _SPINNER.update(escape(sep.join(_WAITING)))
            yield

    finally:
        _WAITING.pop()

        if _SPINNER is not None:
            _SPINNER.update(escape(sep.join(_WAITING)))
