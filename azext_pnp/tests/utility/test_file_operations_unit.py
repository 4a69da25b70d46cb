# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------

import json
import os
from pathlib import Path

import pytest
from azure.cli.core.azclierror import FileOperationError

from ..generators import generate_model, generate_random_string


class TestCliInit(object):
    def test_package_init(self):
        from azext_pnp.constants import EXTENSION_ROOT

        tests_root = "tests"
        directory_structure = {}

        def _validate_directory(path):
            for entry in os.scandir(path):
                if entry.is_dir(follow_symlinks=False) and all(
                    [not entry.name.startswith("__"), tests_root not in entry.path]
                ):
                    directory_structure[entry.path] = None
                    _validate_directory(entry.path)
                else:
                    if entry.path.endswith("__init__.py"):
                        directory_structure[os.path.dirname(entry.path)] = entry.path

        _validate_directory(EXTENSION_ROOT)

        invalid_directories = []
        for directory in directory_structure:
            if directory_structure[directory] is None:
                invalid_directories.append("Directory: '{}' missing __init__.py".format(directory))

        if invalid_directories:
            pytest.fail(", ".join(invalid_directories))


class TestFileHeaders(object):
    def test_file_headers(self):
        from azext_pnp.constants import EXTENSION_ROOT

        header = """# coding=utf-8
# ----------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License file in the project root for license information.
# ----------------------------------------------------------------------------------------------"""

        files_missing_header = []

        def _validate_directory(path):
            for entry in os.scandir(path):
                if entry.is_dir(follow_symlinks=False):
                    _validate_directory(entry.path)
                elif entry.is_file() and entry.path.endswith(".py"):
                    with open(entry.path, "rt", encoding="utf-8") as f:
                        contents = f.read()
                    if contents and not contents.startswith(header):
                        files_missing_header.append(entry.path)

        _validate_directory(EXTENSION_ROOT)
        if files_missing_header:
            pytest.fail(
                "The following files are missing an encoding and license header, or it is improperly formatted:\n"
                "{}".format("\n".join(files_missing_header))
            )


@pytest.mark.parametrize("dir_path", [None, generate_random_string(), os.path.join("~", generate_random_string())])
def test_normalize_dir(dir_path):
    from azext_pnp.pnp.util import normalize_dir

    pure_dir_path = normalize_dir(dir_path)
    assert str(pure_dir_path) == os.path.abspath(os.path.expanduser(dir_path or "."))
    assert os.path.exists(str(pure_dir_path))

    if dir_path:
        os.rmdir(os.path.abspath(os.path.expanduser(dir_path)))


@pytest.mark.parametrize("as_string", [True, False])
def test_dump_model_to_file(tmp_path, as_string):
    from azext_pnp.pnp.util import dump_model_to_file

    model = generate_model(model_id="urn:contoso:Thermostat:1")
    output_dir = os.path.join(str(tmp_path), "models")
    file_path = dump_model_to_file(
        model_id=model["@id"], content=json.dumps(model) if as_string else model, output_dir=output_dir
    )

    assert file_path == os.path.join(output_dir, "urn_contoso_Thermostat_1.json")
    content = Path(file_path).read_text(encoding="utf-8")
    assert json.loads(content) == model
    assert content.startswith("{\n  ")

    dump_model_to_file(model_id=model["@id"], content="not json", output_dir=output_dir)
    assert Path(file_path).read_text(encoding="utf-8") == "not json"

    with pytest.raises(FileOperationError, match="already exists"):
        dump_model_to_file(model_id=model["@id"], content=model, output_dir=output_dir, replace=False)


@pytest.mark.parametrize("encoding", ["utf-8", "utf-8-sig"])
def test_read_model_file(tmp_path, encoding):
    from azext_pnp.pnp.util import read_model_file

    model = generate_model()
    file_path = tmp_path / f"{generate_random_string(8)}.json"
    file_path.write_text(json.dumps(model), encoding=encoding)

    content, document = read_model_file(str(file_path))
    assert document == model
    assert json.loads(content) == model


@pytest.mark.parametrize(
    "content, error",
    [
        ("{not json", "not valid json"),
        ("[1, 2]", "must be a json object"),
    ],
)
def test_read_model_file_errors(tmp_path, content, error):
    from azext_pnp.pnp.util import read_model_file

    file_path = tmp_path / "model.json"
    file_path.write_text(content, encoding="utf-8")

    with pytest.raises(FileOperationError, match=error):
        read_model_file(str(file_path))

    with pytest.raises(FileOperationError, match="does not exist"):
        read_model_file(str(tmp_path / "missing.json"))

    with pytest.raises(FileOperationError, match="is not a file"):
        read_model_file(str(tmp_path))
