import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

# Column width of the description in a status line
STATUS_WIDTH = 64

# File log (diagnostics). The CLI attaches a file handler; library users get silence.
sys_logger = logging.getLogger("syskit")
sys_logger.addHandler(logging.NullHandler())


def setup_file_logging(log_file: Optional[str], level: int = logging.INFO) -> None:
    """Attaches a file handler to the 'syskit' logger."""
    if not log_file:
        return

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    sys_logger.addHandler(handler)
    sys_logger.setLevel(level)


class StatusLogger:
    """
    Console side of the status-reporting convention.

    Every line is built as a rich Text so that the brackets in
    "[+] ... [OK]" are never read as markup.
    """

    def __init__(self):
        self.custom_theme = Theme({
            "success": "bold green",
            "error": "bold red",
            "warning": "bold yellow",
            "info": "dim white"
        })
        self.console = Console(theme=self.custom_theme, highlight=False)

        # When False only fatal errors reach the console
        self.enabled = True

    @staticmethod
    def format_status(message: str, success: bool) -> str:
        """Plain-text status line, e.g. '[+] checking directory:   /tmp ... [OK]'."""
        status = "OK" if success else "fail"
        return f"[+] {message:<{STATUS_WIDTH}} [{status}]"

    def status(self, message: str, success: bool):
        if not self.enabled:
            return
        line = Text(self.format_status(message, success))
        # Colour the word between the trailing brackets
        status_start = line.plain.rindex("[") + 1
        line.stylize("success" if success else "error", status_start, len(line) - 1)
        self.console.print(line, soft_wrap=True)

    def padded(self, message: str):
        if not self.enabled:
            return
        self.console.print(Text(f"[+] {message:<{STATUS_WIDTH}} "), soft_wrap=True)

    def header(self, message: str):
        """Blank line followed by a section title (e.g. 'install git')."""
        if not self.enabled:
            return
        self.console.print(Text(f"\n{message}"), soft_wrap=True)

    def detail(self, message: str):
        if not self.enabled:
            return
        self.console.print(Text(f"    {message}", style="info"), soft_wrap=True)

    def error(self, message: str):
        # Always printed, even in quiet mode
        self.console.print(Text(message, style="error"), soft_wrap=True)


logger = StatusLogger()
