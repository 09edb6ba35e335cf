"""Built-in catalog of standard library functions exposed as commands."""

from __future__ import annotations

import fnmatch
import functools
import glob
import os.path
import shlex

from busypy.registry import Registry, function, package

OS_PATH = package(
    ("os", "path"),
    function(os.path.abspath, "abspath", "path str", "str", repeats=True),
    function(os.path.basename, "basename", "p str", "str"),
    function(os.path.commonpath, "commonpath", "paths []str", "str, error"),
    function(os.path.commonprefix, "commonprefix", "m []str", "str"),
    function(os.path.dirname, "dirname", "p str", "str"),
    function(os.path.exists, "exists", "path str", "bool"),
    function(os.path.expanduser, "expanduser", "path str", "str"),
    function(os.path.expandvars, "expandvars", "path str", "str"),
    function(os.path.getsize, "getsize", "filename str", "int, error"),
    function(os.path.isabs, "isabs", "s str", "bool"),
    function(os.path.isdir, "isdir", "s str", "bool"),
    function(os.path.isfile, "isfile", "path str", "bool"),
    function(os.path.islink, "islink", "path str", "bool"),
    function(os.path.join, "join", "a str, p ...str", "str"),
    function(os.path.normcase, "normcase", "s str", "str"),
    function(os.path.normpath, "normpath", "path str", "str"),
    function(
        functools.partial(os.path.realpath, strict=True),
        "realpath",
        "filename str",
        "str, error",
    ),
    function(os.path.relpath, "relpath", "path, start str", "str, error"),
    function(os.path.split, "split", "p str", "head, tail str"),
    function(os.path.splitext, "splitext", "p str", "root, ext str"),
)

FNMATCH = package(
    ("fnmatch",),
    function(fnmatch.filter, "filter", "names []str, pat str", "[]str"),
    function(fnmatch.fnmatch, "fnmatch", "name, pat str", "bool"),
    function(fnmatch.fnmatchcase, "fnmatchcase", "name, pat str", "bool"),
    function(fnmatch.translate, "translate", "pat str", "str"),
)

GLOB = package(
    ("glob",),
    function(glob.escape, "escape", "pathname str", "str"),
    function(glob.glob, "glob", "pathname str", "matches []str, err error"),
)

SHLEX = package(
    ("shlex",),
    function(shlex.join, "join", "split_command []str", "str"),
    function(shlex.quote, "quote", "s str", "str", repeats=True),
    function(shlex.split, "split", "s str", "[]str, error"),
)

CATALOG = Registry((OS_PATH, FNMATCH, GLOB, SHLEX))


def default_registry() -> Registry:
    return CATALOG
