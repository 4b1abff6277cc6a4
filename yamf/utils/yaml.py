# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from pathlib import Path
from typing import Any, Optional, TypeVar, Union

import yaml
from pydantic import BaseModel

from yamf.utils.dict import deep_merge

_EXTENDS_KEY = 'extends'

T = TypeVar('T', bound=BaseModel)


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Read a yaml file that must hold a mapping, an empty file is an empty dict."""
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{filepath}' is not a file")

    with path.open('r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str], custom_root: Optional[Path] = None) -> dict[str, Any]:
    """
    Same as `dict_from_yaml()` but a file can name another one in its 'extends' key, the contents of the extended
    file are deep merged under the ones of the extending file. Chains of extensions are followed, cycles are an error.

    The 'extends' path is relative to the extending file, or to `custom_root` when there's no such file there.
    The 'extends' key itself is not present in the returned dict.
    """
    chain: list[dict[str, Any]] = []
    seen: set[Path] = set()
    path: Optional[Path] = Path(filepath)

    while path is not None:
        resolved = path.resolve()
        if resolved in seen:
            raise ValueError('Cannot parse yaml with recursive extensions.')
        seen.add(resolved)

        contents = dict_from_yaml(filepath=path)
        extends = contents.pop(_EXTENDS_KEY, None)
        chain.append(contents)
        path = _find_extended(path, str(extends), custom_root) if extends else None

    merged: dict[str, Any] = {}
    for contents in reversed(chain):
        merged = deep_merge(merged, contents)
    return merged


def _find_extended(extending: Path, name: str, custom_root: Optional[Path]) -> Path:
    candidate = extending.parent / name
    if not candidate.is_file() and custom_root is not None:
        return custom_root / name
    return candidate


def model_from_extended_yaml(model: type[T], *, filepath: str, custom_root: Optional[Path] = None) -> T:
    """Validate the contents of an extended yaml file with a pydantic model."""
    return model.model_validate(dict_from_extended_yaml(filepath=filepath, custom_root=custom_root))
