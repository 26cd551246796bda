"""Configuration of code generation runs, one per input .proto file."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, Union

from .errors import (
    InputFileError,
    NoProtoError,
    OutputAndOutputDirError,
    OutputDirectoryError,
    OutputMultipleInputsError,
)

PathLike = Union[str, "os.PathLike[str]"]

GENERATED_SUFFIX = ".rs"
DEFAULT_INCLUDE_PATH = Path(".")


def _no_rpc_generator(_service: Any, _out: Any) -> None:
    """Default RPC generator: produce nothing."""
    return None


@dataclass(frozen=True)
class Options:
    """Switches shared by every generated file."""

    single_module: bool = False
    no_output: bool = False
    error_cycle: bool = False
    headers: bool = True
    dont_use_cow: bool = False
    custom_struct_derive: tuple[str, ...] = ()
    custom_repr: Optional[str] = None
    owned: bool = False
    nostd: bool = False
    hashbrown: bool = False
    gen_info: bool = False
    add_deprecated_fields: bool = False
    generate_getters: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "custom_struct_derive", tuple(self.custom_struct_derive)
        )


@dataclass(frozen=True)
class Config:
    """Everything needed to generate code for one input file."""

    in_file: Path
    out_file: Path
    import_search_path: tuple[Path, ...]
    options: Options = field(default_factory=Options)
    custom_rpc_generator: Callable[[Any, Any], None] = _no_rpc_generator
    custom_includes: tuple[str, ...] = ()

    def with_options(self, **changes: Any) -> "Config":
        """Return a copy with some options changed."""
        return replace(self, options=replace(self.options, **changes))


def _resolve_output(
    in_files: list[Path], output: Optional[Path], output_dir: Optional[Path]
) -> Optional[Path]:
    if output is not None and output_dir is not None:
        raise OutputAndOutputDirError()
    if output is not None:
        if len(in_files) > 1:
            raise OutputMultipleInputsError()
        return output
    if output_dir is not None:
        if not output_dir.is_dir():
            raise OutputDirectoryError(output_dir)
        return output_dir
    return None


def build_configs(
    in_files: Iterable[PathLike],
    output: Optional[PathLike] = None,
    output_dir: Optional[PathLike] = None,
    include_paths: Iterable[PathLike] = (),
    options: Optional[Options] = None,
) -> list[Config]:
    """Check the inputs and outputs and return one :class:`Config` per input file."""
    files = [Path(f) for f in in_files]
    includes = [Path(p) for p in include_paths]
    out = Path(output) if output is not None else None
    out_dir = Path(output_dir) if output_dir is not None else None
    opts = options if options is not None else Options()

    if not files:
        raise NoProtoError()
    for f in files:
        if not f.exists():
            raise InputFileError(f)

    out_target = _resolve_output(files, out, out_dir)

    if DEFAULT_INCLUDE_PATH not in includes:
        includes.append(DEFAULT_INCLUDE_PATH)
    search_path = tuple(includes)

    configs = []
    for in_file in files:
        out_file = in_file.with_suffix(GENERATED_SUFFIX)
        if out_target is not None:
            out_file = (
                out_target / out_file.name if out_target.is_dir() else out_target
            )
        configs.append(
            Config(
                in_file=in_file,
                out_file=out_file,
                import_search_path=search_path,
                options=opts,
            )
        )
    return configs