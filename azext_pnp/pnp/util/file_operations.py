# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import json
import os
from pathlib import PurePath
from typing import Optional, Tuple, Union

from azure.cli.core.azclierror import FileOperationError
from knack.log import get_logger

from .common import to_safe_filename

logger = get_logger(__name__)


def dump_model_to_file(
    model_id: str,
    content: Union[str, dict],
    output_dir: Optional[str] = None,
    replace: bool = True,
) -> str:
    """
    Writes a model document as pretty printed json into <output_dir>/<safe model id>.json.
    """
    output_dir = normalize_dir(output_dir)
    file_path = os.path.join(output_dir, to_safe_filename(model_id, extension="json"))
    if os.path.exists(file_path):
        if not replace:
            raise FileOperationError(f"File {file_path} already exists.")
        logger.warning(f"The file {file_path} will be overwritten.")

    if isinstance(content, str):
        try:
            content = json.loads(content)
        except ValueError:
            logger.debug("Model %s content is not json, writing as is.", model_id)
    if not isinstance(content, str):
        content = json.dumps(content, indent=2)

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)

    return file_path


def normalize_dir(dir_path: Optional[str] = None) -> PurePath:
    if not dir_path:
        dir_path = "."
    if "~" in dir_path:
        dir_path = os.path.expanduser(dir_path)
    dir_path = os.path.abspath(dir_path)
    dir_pure_path = PurePath(dir_path)
    if not os.path.exists(str(dir_pure_path)):
        os.makedirs(dir_pure_path, exist_ok=True)

    return dir_pure_path


def read_file_content(file_path: str) -> str:
    from pathlib import Path

    logger.debug("Processing %s", file_path)
    pure_path = Path(os.path.abspath(os.path.expanduser(file_path)))

    if not pure_path.exists():
        raise FileOperationError(f"{file_path} does not exist.")

    if not pure_path.is_file():
        raise FileOperationError(f"{file_path} is not a file.")

    # Try with 'utf-8-sig' first, so that BOM in WinOS won't cause trouble.
    for encoding in ["utf-8-sig", "utf-8"]:
        try:
            logger.debug("Reading %s as %s", file_path, encoding)
            return pure_path.read_text(encoding=encoding)
        except (UnicodeError, UnicodeDecodeError):
            pass

    raise FileOperationError(f"Failed to decode file {file_path}.")


def read_model_file(file_path: str) -> Tuple[str, dict]:
    """
    Reads a model file, returning the raw json text and the parsed document.
    """
    content = read_file_content(file_path)
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise FileOperationError(f"File contents for {file_path} are not valid json. {e}")
    if not isinstance(document, dict):
        raise FileOperationError(f"File contents for {file_path} must be a json object.")
    return content, document
