import json
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import constants as cs
from . import exceptions as ex
from .config import AppConfig, settings
from .models import TextDocument, WorkspaceFolders
from .parsers.java.class_facts import extract_class_name
from .parsers.java.member_facts import extract_member_facts
from .services.assistant import ExpressionAssistant
from .types_defs import CompletionItem, Position
from .utils.path_utils import read_source_text, relative_to_workspace

console = Console()

app = typer.Typer(
    name=cs.CLI_APP_NAME,
    help=cs.CLI_APP_HELP,
    no_args_is_help=True,
    add_completion=False,
)


def style(text: str, color: cs.Color) -> str:
    return f"[bold {color}]{text}[/bold {color}]"


def _fail(message: str) -> typer.Exit:
    console.print(style(message, cs.Color.RED))
    return typer.Exit(1)


def _print_json(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=cs.JSON_INDENT) + "\n")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help=cs.CLI_HELP_VERBOSE),
) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=cs.LOG_LEVEL_DEBUG if verbose else cs.LOG_LEVEL_WARNING,
        format=cs.LOG_FORMAT,
    )


def _config_for(source_root: str | None) -> AppConfig:
    try:
        return settings.with_overrides(source_root=source_root)
    except ex.ConfigurationError as e:
        raise _fail(ex.CLI_ERR_CONFIG.format(error=e)) from e


def _workspace_root(workspace: Path | None) -> Path:
    root = (workspace or Path.cwd()).resolve()
    if not root.is_dir():
        raise _fail(ex.WORKSPACE_NOT_FOUND.format(path=root))
    return root


def _open_document(file: Path, line: int) -> TextDocument:
    if (text := read_source_text(file)) is None:
        raise _fail(ex.FILE_NOT_FOUND.format(path=file))
    document = TextDocument.from_path(file.resolve(), text)
    if not 0 <= line < document.line_count:
        raise _fail(
            ex.POSITION_OUT_OF_RANGE.format(
                line=line, path=file, count=document.line_count
            )
        )
    return document


def _assistant_for(root: Path, source_root: str | None) -> ExpressionAssistant:
    return ExpressionAssistant(_config_for(source_root), WorkspaceFolders([root]))


def _item_to_json(item: CompletionItem) -> dict[str, object]:
    start, end = item[cs.KEY_REPLACE_RANGE]
    return {
        **item,
        cs.KEY_REPLACE_RANGE: {
            "start": start._asdict(),
            "end": end._asdict(),
        },
    }


@app.command(help=cs.CLI_CMD_BEANS)
def beans(
    workspace: Path = typer.Argument(
        Path("."), help=cs.CLI_HELP_WORKSPACE_ROOT, show_default=False
    ),
    source_root: str | None = typer.Option(
        None, "--source-root", help=cs.CLI_HELP_SOURCE_ROOT
    ),
    as_json: bool = typer.Option(False, "--json", help=cs.CLI_HELP_JSON),
) -> None:
    root = _workspace_root(workspace)
    assistant = _assistant_for(root, source_root)
    entries = sorted(
        (entry for group in assistant.beans.get(root).values() for entry in group),
        key=lambda entry: (entry.bean_name.lower(), entry.file_path),
    )

    if as_json:
        _print_json(
            [
                {
                    cs.KEY_BEAN: entry.bean_name,
                    cs.KEY_CLASS_NAME: entry.class_name,
                    cs.KEY_FILE_PATH: entry.file_path,
                }
                for entry in entries
            ]
        )
        return

    if not entries:
        console.print(style(cs.CLI_MSG_NO_BEANS.format(root=root), cs.Color.YELLOW))
        return

    table = Table(
        title=style(cs.CLI_TITLE_BEANS.format(count=len(entries)), cs.Color.GREEN)
    )
    table.add_column(cs.CLI_COL_BEAN, style=cs.Color.CYAN)
    table.add_column(cs.CLI_COL_CLASS, style=cs.Color.MAGENTA)
    table.add_column(cs.CLI_COL_FILE)
    for entry in entries:
        table.add_row(
            entry.bean_name,
            entry.class_name,
            relative_to_workspace(entry.file_path, root),
        )
    console.print(table)


@app.command(help=cs.CLI_CMD_MEMBERS)
def members(
    file: Path = typer.Argument(..., help=cs.CLI_HELP_JAVA_FILE),
    as_json: bool = typer.Option(False, "--json", help=cs.CLI_HELP_JSON),
) -> None:
    if (text := read_source_text(file)) is None:
        raise _fail(ex.FILE_NOT_FOUND.format(path=file))
    facts = extract_member_facts(text)

    if as_json:
        _print_json(
            [
                {
                    cs.KEY_LABEL: fact.label,
                    cs.KEY_KIND: fact.kind,
                    cs.KEY_INSERT_TEXT: fact.insert_text,
                    cs.KEY_DETAIL: fact.detail,
                    cs.KEY_LINE: fact.line,
                }
                for fact in facts
            ]
        )
        return

    if not facts:
        console.print(style(cs.CLI_MSG_NO_MEMBERS.format(path=file), cs.Color.YELLOW))
        return

    class_name = extract_class_name(text) or file.stem
    table = Table(
        title=style(
            cs.CLI_TITLE_MEMBERS.format(class_name=class_name, count=len(facts)),
            cs.Color.GREEN,
        )
    )
    table.add_column(cs.CLI_COL_LABEL, style=cs.Color.CYAN)
    table.add_column(cs.CLI_COL_KIND, style=cs.Color.MAGENTA)
    table.add_column(cs.CLI_COL_TYPE)
    table.add_column(cs.CLI_COL_LINE, justify="right")
    for fact in facts:
        table.add_row(
            fact.label,
            fact.kind,
            fact.type_text or cs.DETAIL_UNKNOWN_TYPE,
            str(fact.line),
        )
    console.print(table)


@app.command(help=cs.CLI_CMD_HOVER)
def hover(
    file: Path = typer.Argument(..., help=cs.CLI_HELP_FILE),
    line: int = typer.Option(..., "--line", "-l", min=0, help=cs.CLI_HELP_LINE),
    character: int = typer.Option(
        ..., "--character", "-c", min=0, help=cs.CLI_HELP_CHARACTER
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", "-w", help=cs.CLI_HELP_WORKSPACE
    ),
    source_root: str | None = typer.Option(
        None, "--source-root", help=cs.CLI_HELP_SOURCE_ROOT
    ),
    as_json: bool = typer.Option(False, "--json", help=cs.CLI_HELP_JSON),
) -> None:
    root = _workspace_root(workspace)
    document = _open_document(file, line)
    assistant = _assistant_for(root, source_root)

    target = assistant.resolve_hover_target(document, Position(line, character))
    if target is None:
        raise _fail(cs.CLI_MSG_NO_RESULT.format(line=line, character=character))

    if as_json:
        _print_json(target)
        return

    table = Table(
        title=style(
            cs.CLI_TITLE_HOVER.format(bean=target["bean"], member=target["member"]),
            cs.Color.GREEN,
        )
    )
    table.add_column(cs.CLI_COL_FIELD, style=cs.Color.CYAN)
    table.add_column(cs.CLI_COL_VALUE, style=cs.Color.MAGENTA)
    for label, key in cs.CLI_HOVER_FIELDS:
        value = target[key]
        if key == cs.KEY_FILE_PATH:
            value = relative_to_workspace(str(value), root)
        table.add_row(label, cs.DETAIL_UNKNOWN_TYPE if value is None else str(value))
    console.print(table)


@app.command(help=cs.CLI_CMD_DEFINITION)
def definition(
    file: Path = typer.Argument(..., help=cs.CLI_HELP_FILE),
    line: int = typer.Option(..., "--line", "-l", min=0, help=cs.CLI_HELP_LINE),
    character: int = typer.Option(
        ..., "--character", "-c", min=0, help=cs.CLI_HELP_CHARACTER
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", "-w", help=cs.CLI_HELP_WORKSPACE
    ),
    source_root: str | None = typer.Option(
        None, "--source-root", help=cs.CLI_HELP_SOURCE_ROOT
    ),
    as_json: bool = typer.Option(False, "--json", help=cs.CLI_HELP_JSON),
) -> None:
    root = _workspace_root(workspace)
    document = _open_document(file, line)
    assistant = _assistant_for(root, source_root)

    target = assistant.resolve_definition_target(document, Position(line, character))
    if target is None:
        raise _fail(cs.CLI_MSG_NO_RESULT.format(line=line, character=character))

    if as_json:
        _print_json(target)
        return

    console.print(
        cs.CLI_MSG_DEFINITION.format(
            path=relative_to_workspace(target["file_path"], root), line=target["line"]
        )
    )


@app.command(help=cs.CLI_CMD_COMPLETE)
def complete(
    file: Path = typer.Argument(..., help=cs.CLI_HELP_FILE),
    line: int = typer.Option(..., "--line", "-l", min=0, help=cs.CLI_HELP_LINE),
    character: int = typer.Option(
        ..., "--character", "-c", min=0, help=cs.CLI_HELP_CHARACTER
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", "-w", help=cs.CLI_HELP_WORKSPACE
    ),
    source_root: str | None = typer.Option(
        None, "--source-root", help=cs.CLI_HELP_SOURCE_ROOT
    ),
    as_json: bool = typer.Option(False, "--json", help=cs.CLI_HELP_JSON),
) -> None:
    root = _workspace_root(workspace)
    document = _open_document(file, line)
    assistant = _assistant_for(root, source_root)

    items = assistant.get_completion_items(document, Position(line, character))
    if items is None:
        raise _fail(cs.CLI_MSG_NO_RESULT.format(line=line, character=character))

    if as_json:
        _print_json([_item_to_json(item) for item in items])
        return

    table = Table(
        title=style(cs.CLI_TITLE_COMPLETIONS.format(count=len(items)), cs.Color.GREEN)
    )
    table.add_column(cs.CLI_COL_LABEL, style=cs.Color.CYAN)
    table.add_column(cs.CLI_COL_KIND, style=cs.Color.MAGENTA)
    table.add_column(cs.CLI_COL_INSERT)
    table.add_column(cs.CLI_COL_DETAIL)
    for item in items:
        table.add_row(item["label"], item["kind"], item["insert_text"], item["detail"])
    console.print(table)


if __name__ == "__main__":
    app()
