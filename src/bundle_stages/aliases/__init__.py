"""Specifier aliasing, externals and dependency reporting."""

from .defaults import STANDINS_DIR, default_alias_table, installed_package_path, standin_path
from .deps import DependencyLog, package_name
from .externals import DEFAULT_EXTRA_EXTERNALS, NODE_BUILTINS, is_builtin, is_external
from .table import AliasEntry, AliasTable

__all__ = [
    "AliasEntry",
    "AliasTable",
    "DEFAULT_EXTRA_EXTERNALS",
    "DependencyLog",
    "NODE_BUILTINS",
    "STANDINS_DIR",
    "default_alias_table",
    "installed_package_path",
    "is_builtin",
    "is_external",
    "package_name",
    "standin_path",
]
