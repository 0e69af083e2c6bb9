#!/usr/bin/env python3
"""Trigger Firefly image operations from the terminal (Firefly Forge).

Usage:
  python scripts/firefly_forge.py text-to-image --prompt "a lighthouse at dusk"
  python scripts/firefly_forge.py match --image-id <id> --prompt "..."
  python scripts/firefly_forge.py expand --image-id <id> --prompt "..."
  python scripts/firefly_forge.py fill --mask-id <id> --image-id <id> --prompt "..."
  python scripts/firefly_forge.py upload --file photo.png
  python scripts/firefly_forge.py --interactive

Notes:
- Loads .env from the nearest parent directory.
- FIREFLY_API_KEY and FIREFLY_TOKEN_SERVICE_URL are required.
- --html writes the result board as a Bootstrap page.
"""

from __future__ import annotations

import argparse
import getpass
import os
import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import set_key

from firefly_image_api.api import run_operation
from firefly_image_api.client.dispatcher import RequestDispatcher
from firefly_image_api.core.config import (
    ENV_API_KEY,
    ENV_TOKEN_SERVICE_URL,
    FireflyConfig,
    find_dotenv_path,
    load_dotenv_file,
)
from firefly_image_api.core.contracts import FormState, UploadFile
from firefly_image_api.core.logs import setup_logging
from firefly_image_api.core.payloads import OPERATIONS
from firefly_image_api.render.board import ResultBoard
from firefly_image_api.render.cards import show_alert
from firefly_image_api.render.controls import ControlState, TriggerControl
from firefly_image_api.render.html import write_page
from firefly_image_api.render.text import format_board

OPERATION_CHOICES = list(OPERATIONS.keys())
BUTTON_LABEL = "Generate"

_REQUIRED_FIELDS = {
    "text-to-image": ("prompt",),
    "match": ("image_id", "prompt"),
    "expand": ("image_id", "prompt"),
    "fill": ("mask_id", "image_id", "prompt"),
    "upload": ("file",),
}
_FIELD_PROMPTS = {
    "prompt": "Prompt",
    "image_id": "Image ID",
    "mask_id": "Mask ID",
    "file": "File path",
}


def _supports_color() -> bool:
    return sys.stdout.isatty()


def _style(text: str, code: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"\033[{code}m{text}\033[0m"


@dataclass
class _RawMode:
    fd: int
    original: list

    def __enter__(self) -> "_RawMode":
        import tty

        tty.setraw(self.fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        import termios

        termios.tcsetattr(self.fd, termios.TCSADRAIN, self.original)


def _read_key() -> str:
    ch = sys.stdin.read(1)
    if ch in {"\x03", ""}:
        raise KeyboardInterrupt
    if ch != "\x1b":
        return ch
    seq = ""
    for _ in range(5):
        nxt = sys.stdin.read(1)
        if nxt == "":
            break
        seq += nxt
        if nxt.isalpha() or nxt == "~":
            break
    if seq.endswith("D"):
        return "LEFT"
    if seq.endswith("C"):
        return "RIGHT"
    return "ESC"


def _format_choices_line(choices: list[str], idx: int, color: bool) -> str:
    parts = []
    for pos, choice in enumerate(choices):
        if pos == idx:
            parts.append(_style(f"[{choice}]", "1;36", color))
        else:
            parts.append(f" {choice} ")
    return "  " + " ".join(parts)


def _select_from_list(label: str, choices: list[str], default_index: int = 0) -> str:
    import termios

    idx = default_index
    print(f"{label} (left/right, enter to confirm):")
    fd = sys.stdin.fileno()
    with _RawMode(fd, termios.tcgetattr(fd)):
        while True:
            sys.stdout.write("\r\033[2K" + _format_choices_line(choices, idx, _supports_color()))
            sys.stdout.flush()
            key = _read_key()
            if key in {"LEFT", "h", "H", "a", "A"}:
                idx = (idx - 1) % len(choices)
            elif key in {"RIGHT", "l", "L", "d", "D"}:
                idx = (idx + 1) % len(choices)
            elif key in {"\r", "\n"}:
                sys.stdout.write("\r\n")
                return choices[idx]
            elif key in {"q", "Q"}:
                sys.stdout.write("\r\n")
                return choices[default_index]


class _Spinner:
    def __init__(self, message: str, interval: float = 0.1) -> None:
        self.message = message
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if not sys.stdout.isatty():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=1.0)
        self._thread = None
        sys.stdout.write("\r" + " " * (len(self.message) + 4) + "\r")
        sys.stdout.flush()

    def _run(self) -> None:
        frames = ["|", "/", "-", "\\"]
        index = 0
        while not self._stop.is_set():
            frame = frames[index % len(frames)]
            sys.stdout.write(f"\r{self.message} {frame}")
            sys.stdout.flush()
            time.sleep(self.interval)
            index += 1


def _bind_spinner(control: TriggerControl) -> _Spinner:
    spinner = _Spinner(control.label)

    def _on_change(state: ControlState, source: TriggerControl) -> None:
        if state == "busy":
            spinner.message = source.label
            spinner.start()
        else:
            spinner.stop()

    control.add_listener(_on_change)
    return spinner


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _write_env_key(dotenv_path: Path, key: str, value: str) -> None:
    dotenv_path.parent.mkdir(parents=True, exist_ok=True)
    dotenv_path.touch(exist_ok=True)
    set_key(dotenv_path, key, value)
    try:
        os.chmod(dotenv_path, 0o600)
    except OSError:
        pass


def _prompt_for_key(key: str, dotenv_path: Optional[Path], secret: bool) -> bool:
    choice = input(f"Set {key} now? [y/N]: ").strip().lower()
    if choice not in {"y", "yes"}:
        return False
    reader = getpass.getpass if secret else input
    value = reader(f"Enter {key}: ").strip()
    if not value:
        return False
    if dotenv_path is None:
        dotenv_path = _repo_root() / ".env"
    save = input(f"Save to {dotenv_path}? [Y/n]: ").strip().lower()
    if save in {"", "y", "yes"}:
        _write_env_key(dotenv_path, key, value)
        print(f"Saved {key} to {dotenv_path}.")
    os.environ[key] = value
    return True


def _ensure_settings(dotenv_path: Optional[Path]) -> None:
    for key in (ENV_API_KEY, ENV_TOKEN_SERVICE_URL):
        if (os.getenv(key) or "").strip():
            continue
        if sys.stdin.isatty() and _prompt_for_key(key, dotenv_path, secret=key == ENV_API_KEY):
            continue
        raise RuntimeError(f"{key} is required for Firefly.")


def _open_path(path: Path) -> None:
    try:
        if sys.platform == "darwin":
            subprocess.run(["open", str(path)], check=False)
        elif hasattr(os, "startfile"):
            os.startfile(str(path))  # type: ignore[attr-defined]
        else:
            subprocess.run(["xdg-open", str(path)], check=False)
    except OSError as exc:
        print(f"Could not open {path}: {exc}")


def _build_form(args: argparse.Namespace) -> FormState:
    upload = None
    if getattr(args, "file", None):
        upload = UploadFile.from_path(args.file)
    return FormState(
        prompt=getattr(args, "prompt", None),
        image_id=getattr(args, "image_id", None),
        mask_id=getattr(args, "mask_id", None),
        file=upload,
    )


def _interactive_args() -> argparse.Namespace:
    print("Firefly Forge")
    print("Trigger Firefly image operations and inspect the returned cards.")
    operation = _select_from_list("Operation", OPERATION_CHOICES, 0)
    values = {field: None for field in _FIELD_PROMPTS}
    for field in _REQUIRED_FIELDS[operation]:
        values[field] = input(f"{_FIELD_PROMPTS[field]}: ").strip() or None
    html = input("Write HTML page to (blank to skip): ").strip() or None
    return argparse.Namespace(
        operation=operation,
        html=html,
        open=False,
        no_color=False,
        log_level="WARNING",
        interactive=True,
        **values,
    )


def _run_operation(args: argparse.Namespace) -> int:
    dotenv_path = load_dotenv_file(Path(__file__).parent)
    _ensure_settings(dotenv_path or find_dotenv_path(_repo_root()))
    config = FireflyConfig.from_env()
    color = _supports_color() and not args.no_color
    setup_logging(args.log_level, color=color)

    board = ResultBoard()
    control = TriggerControl(BUTTON_LABEL)
    _bind_spinner(control)
    dispatcher = RequestDispatcher(config, board)

    operation = OPERATIONS[args.operation]
    print(f"{operation.label}: {operation.endpoint}")
    outcome = None
    try:
        form = _build_form(args)
    except OSError as exc:
        show_alert(board, f"{operation.label} ERROR: cannot read {args.file} ({exc})", "danger")
    else:
        outcome = run_operation(
            args.operation,
            form,
            dispatcher=dispatcher,
            board=board,
            control=control,
        )

    for line in format_board(board, color=color):
        print(line)
    if args.html:
        page = write_page(Path(args.html), board, title=f"Firefly Forge - {operation.label.title()}")
        print(page)
        if args.open:
            _open_path(page)
    return 0 if outcome is not None and outcome.ok and board.results else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Firefly Forge: trigger Firefly image operations.")
    parser.add_argument("--interactive", action="store_true", help="Pick the operation interactively.")
    parser.add_argument("--html", default=None, help="Write the result board to this HTML file.")
    parser.add_argument("--open", action="store_true", help="Open the HTML page after writing it.")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    subparsers = parser.add_subparsers(dest="operation")

    for name, operation in OPERATIONS.items():
        sub = subparsers.add_parser(name, help=f"{operation.label.title()} ({operation.endpoint})")
        fields = _REQUIRED_FIELDS[name]
        if "prompt" in fields:
            sub.add_argument("--prompt", default=None, help="Prompt text")
        if "image_id" in fields:
            sub.add_argument("--image-id", default=None, help="Asset ID of the source image")
        if "mask_id" in fields:
            sub.add_argument("--mask-id", default=None, help="Asset ID of the uploaded mask")
        if "file" in fields:
            sub.add_argument("--file", default=None, help="Image file to upload")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.interactive or args.operation is None:
        if not sys.stdin.isatty():
            parser.print_help()
            return 1
        try:
            args = _interactive_args()
        except KeyboardInterrupt:
            print("\nCancelled.")
            return 1
    return _run_operation(args)


if __name__ == "__main__":
    raise SystemExit(main())
