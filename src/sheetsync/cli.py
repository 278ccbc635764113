# sheetsync/cli.py
"""Command-line front end of sheetsync.

Applies one property-panel style edit to a configuration file and writes the file
back with the minimal patch, keeping its encoding and line separators:

    sheetsync FILE show
    sheetsync FILE set-property INPUT NAME [PARAMETER ...]
    sheetsync FILE remove-property INPUT NAME
    sheetsync FILE set-type INPUT TYPE
    sheetsync FILE set-sprite-id INPUT SPRITE ID
    sheetsync FILE clear-input INPUT
    sheetsync FILE remove-input INPUT

INPUT and SPRITE are zero-based indices in document order. TYPE is one of sprite,
atlas, grid, grid-vertical, grid-cells or grid-cells-vertical.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from sheetsync.core.Config import INPUT_TYPES, Config
from sheetsync.core.DocumentSync import DocumentSync
from sheetsync.core.Subjects import SPRITE, Input, Sprite
from sheetsync.core.TextDocument import TextDocument
from sheetsync.utils.logging_config import setup_logging
from sheetsync.utils.utils import load_config, read_text_file, write_text_file

logger = logging.getLogger("sheetsync")

USAGE = __doc__.split("\n\n")[2] if __doc__ else ""


def _input(model: Config, index: str) -> Input:
    try:
        return model.inputs[int(index)]
    except (ValueError, IndexError):
        raise IndexError(f"no input with index {index!r} ({len(model.inputs)} inputs)") from None


def _sprite(input_: Input, index: str) -> Sprite:
    try:
        return input_.sprites[int(index)]
    except (ValueError, IndexError):
        raise IndexError(f"no sprite with index {index!r} ({len(input_.sprites)} sprites)") from None


def _require(args: list[str], count: int) -> None:
    if len(args) < count:
        raise ValueError(f"expected at least {count} arguments, got {len(args)}")


def show(model: Config, args: list[str]) -> None:
    for sheet in model.sheets:
        name = " ".join(model.get_subject_parameters(sheet)) or "(default)"
        print(f"sheet {name} [line {sheet.line_no + 1}]")
    for i, input_ in enumerate(model.inputs):
        filename = model.get_subject_parameter(input_, 0)
        print(f"input {i}: {filename} [line {input_.line_no + 1}] type={model.input_type(input_)}")
        for j, sprite in enumerate(input_.sprites):
            print(f"  sprite {j}: {model.get_sprite_id(sprite)} [line {sprite.line_no + 1}]")


def set_property(model: Config, args: list[str]) -> None:
    _require(args, 2)
    model.set_property(_input(model, args[0]), args[1], args[2:])


def remove_property(model: Config, args: list[str]) -> None:
    _require(args, 2)
    model.remove_property(_input(model, args[0]), args[1])


def set_type(model: Config, args: list[str]) -> None:
    _require(args, 2)
    input_ = _input(model, args[0])
    if args[1] != SPRITE and args[1] not in INPUT_TYPES:
        raise ValueError(f"unknown input type {args[1]!r}, expected one of {', '.join((SPRITE,) + INPUT_TYPES)}")
    model.replace_input_type(input_, args[1])


def set_sprite_id(model: Config, args: list[str]) -> None:
    _require(args, 3)
    input_ = _input(model, args[0])
    model.replace_sprite_id(_sprite(input_, args[1]), args[2])


def clear_input(model: Config, args: list[str]) -> None:
    _require(args, 1)
    model.clear_subject(_input(model, args[0]))


def remove_input(model: Config, args: list[str]) -> None:
    _require(args, 1)
    model.remove_subject(_input(model, args[0]))


COMMANDS: dict[str, Callable[[Config, list[str]], None]] = {
    "show": show,
    "set-property": set_property,
    "remove-property": remove_property,
    "set-type": set_type,
    "set-sprite-id": set_sprite_id,
    "clear-input": clear_input,
    "remove-input": remove_input,
}


def run(argv: list[str], config: dict[str, Any]) -> int:
    """Runs one command. Returns the process exit code."""
    if len(argv) < 3 or argv[2] not in COMMANDS:
        print(f"Usage:\n{USAGE}", file=sys.stderr)
        return 2
    path, command, args = argv[1], argv[2], argv[3:]

    try:
        text, encoding = read_text_file(path)
    except OSError as e:
        logger.error(f"Could not read '{path}': {e}")
        print(f"Error: could not read '{path}': {e}", file=sys.stderr)
        return 1

    document = TextDocument(text, filename=path, encoding=encoding)
    sync = DocumentSync(document, config)
    if sync.model is None:
        print(f"Error: {sync.error_message}", file=sys.stderr)
        return 1

    try:
        with sync.edit() as model:
            COMMANDS[command](model, args)
    except (IndexError, ValueError) as e:
        print(f"Error: {command}: {e}", file=sys.stderr)
        return 2

    if sync.commit():
        write_text_file(path, document.text, encoding)
        print(f"Updated '{path}'.")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point of the installed ``sheetsync`` command.

    Loads ``~/.config/sheetsync/.env``, the configuration and logging before
    running the command, in the same order as the ``main.py`` start-up script.
    """
    load_dotenv(dotenv_path=Path.home() / ".config" / "sheetsync" / ".env")
    config = load_config()
    setup_logging(config)
    return run(["sheetsync"] + (sys.argv[1:] if argv is None else argv), config)
