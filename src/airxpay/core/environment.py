"""
Utilities for building the environment used to configure the SDK.

Values come from ``os.environ`` (or a caller-supplied base mapping), an
optional ``.env`` file, and explicit overrides. The result is a plain
mapping that :class:`airxpay.core.config.SDKConfig` knows how to read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

ENV_PREFIX = "AIRXPAY_"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Load variables from ``path`` into ``environ`` without clobbering existing keys.

    Returns the merged mapping.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class SDKEnvironment:
    """
    A resolved set of variables used to configure the SDK.
    """

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def sdk_variables(self) -> Dict[str, str]:
        """Only the ``AIRXPAY_*`` entries, handy for diagnostics."""
        return {
            key: value
            for key, value in self.variables.items()
            if key.startswith(ENV_PREFIX)
        }


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> SDKEnvironment:
    """
    Assemble an :class:`SDKEnvironment` from multiple sources.

    ``base`` defaults to :data:`os.environ`. Pass ``env_file=None`` to skip
    file loading. ``overrides`` always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return SDKEnvironment(variables=merged)
