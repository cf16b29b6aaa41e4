"""JSON cache of collected test definitions under the XDG data directory."""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .config import data_dir
from .models import PythonTestClass, SuiteDecl

logger = logging.getLogger(__name__)

CC_DB = "cc.json"
PY_DB = "py.json"

_ADAPTERS: dict[str, TypeAdapter] = {
    CC_DB: TypeAdapter(list[SuiteDecl]),
    PY_DB: TypeAdapter(list[PythonTestClass]),
}


class CacheError(Exception):
    pass


def db_path(file_name: str) -> Path:
    return data_dir() / file_name


def cache_exists(file_name: str) -> bool:
    return db_path(file_name).exists()


def store_definitions(file_name: str, definitions: list) -> Path:
    path = db_path(file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_ADAPTERS[file_name].dump_json(definitions, indent=2))
    logger.debug(f"stored {len(definitions)} definitions in {path}")
    return path


def load_definitions(file_name: str) -> list:
    path = db_path(file_name)
    try:
        return _ADAPTERS[file_name].validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        raise CacheError(f"unreadable test cache {path}, delete it to rescan: {e}") from e
