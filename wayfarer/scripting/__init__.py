"""Lua scripting: include closure, compilation of embedded fragments, execution."""

from .compiler import (  # noqa: F401
    OBJECT_PATTERN,
    SCRIPT_PATTERN,
    compile_source,
    generate_source_script,
)
from .executor import execute_script, run_script  # noqa: F401
from .includes import collect_include_closure  # noqa: F401
