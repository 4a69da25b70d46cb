# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

from .common import (
    dedupe,
    should_continue_prompt,
    to_safe_filename,
)
from .file_operations import (
    dump_model_to_file,
    normalize_dir,
    read_file_content,
    read_model_file,
)

__all__ = [
    "dedupe",
    "dump_model_to_file",
    "normalize_dir",
    "read_file_content",
    "read_model_file",
    "should_continue_prompt",
    "to_safe_filename",
]
