# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

"""
common: Defines common utility functions and components.

"""

import re
from typing import Iterable, List, Optional

from knack.log import get_logger

logger = get_logger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_\-\.]")


def to_safe_filename(value: str, extension: Optional[str] = None) -> str:
    """
    Replaces characters that are not portable in file names, such as ':' and '/' of model ids.
    """
    result = _UNSAFE_FILENAME_RE.sub("_", value).strip(".")
    if extension:
        result = f"{result}.{extension}"
    return result


def dedupe(values: Optional[Iterable[str]]) -> List[str]:
    result = []
    for value in values or []:
        if value and value not in result:
            result.append(value)
    return result


def should_continue_prompt(confirm_yes: Optional[bool] = None, context: str = "Deletion") -> bool:
    from rich.prompt import Confirm

    if not confirm_yes and not Confirm.ask("Continue?"):
        logger.warning(f"{context} cancelled.")
        return False

    return True
