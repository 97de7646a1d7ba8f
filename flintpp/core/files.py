"""
File category detection by extension.
"""

import os
from enum import Enum
from typing import Dict


class FileCategory(Enum):
    """Categories of files the checker knows how to lint."""
    HEADER = "header"
    INL_HEADER = "inl_header"
    SOURCE_C = "source_c"
    SOURCE_CPP = "source_cpp"
    UNKNOWN = "unknown"


EXTENSION_TO_CATEGORY: Dict[str, FileCategory] = {
    ".h": FileCategory.HEADER,
    ".hh": FileCategory.HEADER,
    ".hpp": FileCategory.HEADER,
    ".hxx": FileCategory.HEADER,
    ".inl": FileCategory.INL_HEADER,
    ".c": FileCategory.SOURCE_C,
    ".cc": FileCategory.SOURCE_CPP,
    ".cpp": FileCategory.SOURCE_CPP,
    ".cxx": FileCategory.SOURCE_CPP,
    ".c++": FileCategory.SOURCE_CPP,
}


def get_file_name(path: str) -> str:
    """Return the last component of a path."""
    return os.path.basename(path.replace("\\", "/"))


def get_file_name_base(path: str) -> str:
    """Return the file name without its final extension."""
    return os.path.splitext(get_file_name(path))[0]


def get_file_category(path: str) -> FileCategory:
    """Detect the category of a file from its name."""
    name = get_file_name(path).lower()
    if name.endswith("-inl.h"):
        return FileCategory.INL_HEADER
    ext = os.path.splitext(name)[1]
    return EXTENSION_TO_CATEGORY.get(ext, FileCategory.UNKNOWN)


def is_header(path: str) -> bool:
    return get_file_category(path) in (FileCategory.HEADER, FileCategory.INL_HEADER)


def is_source(path: str) -> bool:
    return get_file_category(path) in (FileCategory.SOURCE_C, FileCategory.SOURCE_CPP)
