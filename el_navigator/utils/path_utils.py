import os
from pathlib import Path

from loguru import logger

from .. import constants as cs
from .. import logs as ls


def collect_source_files(root: Path, extension: str = cs.JAVA_EXT) -> list[Path]:
    if not root.is_dir():
        logger.debug(ls.SOURCE_ROOT_MISSING.format(path=root))
        return []

    suffix = extension.lower()
    files: list[Path] = []

    def on_error(error: OSError) -> None:
        logger.debug(ls.SOURCE_WALK_FAILED.format(path=error.filename, error=error))

    for current, dirs, names in os.walk(root, onerror=on_error):
        dirs.sort()
        files.extend(
            Path(current) / name
            for name in sorted(names)
            if name.lower().endswith(suffix)
        )
    return files


def read_source_text(path: Path) -> str | None:
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.debug(ls.SOURCE_READ_FAILED.format(path=path, error=e))
        return None
    try:
        return raw.decode(cs.ENCODING_UTF8)
    except UnicodeDecodeError:
        logger.debug(
            ls.SOURCE_DECODE_FALLBACK.format(path=path, encoding=cs.ENCODING_FALLBACK)
        )
        return raw.decode(cs.ENCODING_FALLBACK)


def file_mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError as e:
        logger.debug(ls.SOURCE_STAT_FAILED.format(path=path, error=e))
        return None


def is_ignored_path(path: Path) -> bool:
    if any(path.name.endswith(suffix) for suffix in cs.IGNORE_SUFFIXES):
        return True
    return not cs.IGNORE_PATTERNS.isdisjoint(path.parts)


def relative_to_workspace(path: Path | str, workspace_root: Path) -> str:
    path = Path(path)
    try:
        return path.relative_to(workspace_root).as_posix()
    except ValueError:
        return str(path)
