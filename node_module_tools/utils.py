# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0
import sys
import typing as t

from pydantic import BaseModel as _BaseModel
from pydantic import ConfigDict, ValidationError

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self  # noqa


def dict_drop_none(d: t.Dict[str, t.Any]) -> t.Dict[str, t.Any]:
    """Drop None values from a dict, recursively"""
    res = {}
    for k, v in d.items():
        if v is None:
            continue

        if isinstance(v, dict):
            res[k] = dict_drop_none(v)
        else:
            res[k] = v

    return res


def polish_validation_error(err: ValidationError) -> str:
    """Single line per error, "loc: message" """
    lines = []
    for e in err.errors():
        loc = ':'.join(str(part) for part in e['loc'])
        lines.append(f'{loc}: {e["msg"]}' if loc else e['msg'])

    return '\n'.join(lines)


class BaseModel(_BaseModel):
    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
        populate_by_name=True,
    )

    @classmethod
    def fromdict(cls, d: t.Dict[str, t.Any]) -> Self:
        return cls.model_validate(dict_drop_none(d))
