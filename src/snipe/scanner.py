"""Tag scanner: skip to the next construct this tool understands.

CMake files hold far more than the handful of calls we model, so the
scanner drops everything up to the next recognized keyword:

    set(                      -> Tag.SET
    foreach(                  -> Tag.FOREACH
    endforeach()              -> Tag.ENDFOREACH
    rp_test(                  -> Tag.RP_TEST
    get_filename_component(   -> Tag.GET_FILENAME_COMPONENT

Each keyword may carry one space before its parenthesis (``set (``).
"""

import re
from enum import Enum


class Tag(Enum):
    SET = "set"
    FOREACH = "foreach"
    ENDFOREACH = "endforeach"
    RP_TEST = "rp_test"
    GET_FILENAME_COMPONENT = "get_filename_component"
    EOF = "eof"


# A keyword must not be the tail of a longer identifier (``unset(``).
TAG_PATTERN = re.compile(
    r"(?<![A-Za-z0-9_])"
    r"(?:(?P<call>set|foreach|rp_test|get_filename_component) ?\("
    r"|(?P<end>endforeach) ?\(\))"
)


def skip_to_next_tag(text: str) -> tuple[str, Tag]:
    """Return the text after the next keyword and which keyword it was.

    Returns ``("", Tag.EOF)`` once no keyword is left.
    """
    m = TAG_PATTERN.search(text)
    if m is None:
        return "", Tag.EOF
    keyword = m.group("call") or m.group("end")
    return text[m.end():], Tag(keyword)
