# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Overlay package manager command line tool.

This is the main entry point for the hacker_ostree package, invoked
when running `hacker-ostree` or `python -m hacker_ostree`. It manages
APT packages installed in a writable overlay and triggers OSTree
updates and rollbacks of the base image.
"""

import argparse
import logging
import sys
from functools import partial

import hacker_ostree
from hacker_ostree import errors
from hacker_ostree.config import Config
from hacker_ostree.dirs import OverlayDirs
from hacker_ostree.overlays import OverlayManager
from hacker_ostree.state_manager import InstalledPackagesStore, RepositoryStore
from hacker_ostree.system import SystemManager

_USAGE = """\
Usage: hacker-ostree <COMMAND>

Commands:
  update          Update APT cache
  upgrade         Upgrade all installed packages in overlay
  system-update   Update the system via OSTree pull and deploy
  system-upgrade  Alias for system-update
  install         Install a DEB package to overlay
  remove          Remove a DEB package from overlay
  list            List installed packages
  search          Search for packages in APT repositories
  rollback        Rollback to previous OSTree commit
  resync          Resync overlay with installed packages
  clean           Clean APT cache
  repo list       List repositories
  repo add        Add a repository
  repo remove     Remove a repository by index"""

_COMMANDS = {
    "update",
    "upgrade",
    "system-update",
    "system-upgrade",
    "install",
    "remove",
    "list",
    "search",
    "rollback",
    "resync",
    "clean",
    "repo",
}

_REPO_COMMANDS = {"list", "add", "remove"}

# global options that take a value
_VALUE_OPTIONS = {"--root"}

_INFO_OPTIONS = {"-h", "--help", "--version"}


def main():
    """Run the command-line interface."""
    args = sys.argv[1:]

    # argparse reports help, version and missing option values itself
    if not _INFO_OPTIONS.intersection(args) and not _missing_option_value(args):
        positionals = _positional_args(args)
        if not positionals or positionals[0] not in _COMMANDS:
            print(_USAGE)
            return
        if positionals[0] == "repo" and (
            len(positionals) < 2 or positionals[1] not in _REPO_COMMANDS
        ):
            print("Invalid repo subcommand")
            return

    options = _parse_arguments(args)

    if options.version:
        print(f"hacker-ostree {hacker_ostree.__version__}")
        sys.exit()

    if options.trace:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(level=log_level)

    try:
        _run_command(options)
    except OSError as err:
        msg = err.strerror or str(err)
        if err.filename:
            msg = f"{err.filename}: {msg}"
        print(f"Error: {msg}.", file=sys.stderr)
        sys.exit(1)
    except (errors.StateFileError, errors.InvalidConfiguration) as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(2)
    except errors.HackerOstreeError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(3)
    except ValueError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(4)


def _run_command(options: argparse.Namespace) -> None:
    dirs = OverlayDirs(root=options.root)
    repositories = RepositoryStore(dirs.repos_file)

    if options.command == "repo":
        _do_repo(repositories, options)
        return

    overlay_manager = OverlayManager(
        dirs=dirs,
        repositories=repositories,
        installed_packages=InstalledPackagesStore(dirs.installed_packages_file),
    )
    command = options.command

    if command == "update":
        overlay_manager.update_cache()
    elif command == "upgrade":
        overlay_manager.upgrade()
    elif command in ("system-update", "system-upgrade"):
        config = Config.load(dirs.config_file)
        system_manager = SystemManager(
            overlay_manager=overlay_manager,
            remote=config.ostree_remote,
            ref=config.ostree_ref,
        )
        system_manager.update()
    elif command == "install":
        overlay_manager.install(options.package)
    elif command == "remove":
        overlay_manager.remove(options.package)
    elif command == "list":
        print("Installed packages:")
        for package_name in overlay_manager.list_packages():
            print(f"- {package_name}")
    elif command == "search":
        print(overlay_manager.search(options.query), end="")
    elif command == "rollback":
        SystemManager(overlay_manager=overlay_manager).rollback()
    elif command == "resync":
        SystemManager(overlay_manager=overlay_manager).resync()
    elif command == "clean":
        overlay_manager.clean()


def _do_repo(repositories: RepositoryStore, options: argparse.Namespace) -> None:
    if options.repo_command == "list":
        print("Repositories:")
        for index, repo_line in enumerate(repositories.list_repositories()):
            print(f"{index}: {repo_line}")
    elif options.repo_command == "add":
        repositories.add(options.repo_line)
    elif options.repo_command == "remove":
        repositories.remove(_parse_index(options.index))


def _parse_index(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"invalid repository index {value!r}") from None


def _missing_option_value(args: list[str]) -> bool:
    """Return whether a global option that takes a value is missing it."""
    for index, arg in enumerate(args):
        if arg in _VALUE_OPTIONS:
            if index + 1 == len(args) or args[index + 1].startswith("-"):
                return True

    return False


def _positional_args(args: list[str]) -> list[str]:
    """Return the command line arguments that are not global options."""
    positionals: list[str] = []
    skip_value = False

    for arg in args:
        if skip_value:
            skip_value = False
        elif arg in _VALUE_OPTIONS:
            skip_value = True
        elif not arg.startswith("-"):
            positionals.append(arg)

    return positionals


def _parse_arguments(args: list[str]) -> argparse.Namespace:
    prog = "hacker-ostree"
    description = "Custom package manager for atomic systems with APT overlay."

    parser = argparse.ArgumentParser(prog=prog, description=description, add_help=False)
    parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )
    parser.add_argument(
        "--root",
        metavar="dirname",
        default="/",
        help="Use an alternate filesystem root for state files. Default is '/'.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable debug messages.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Display the hacker-ostree version and exit.",
    )

    help_parser = argparse.ArgumentParser(add_help=False)
    help_parser.add_argument(
        "-h",
        "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )

    subparsers = parser.add_subparsers(dest="command")

    add_subparser = partial(
        subparsers.add_parser, add_help=False, parents=[help_parser]
    )

    add_subparser("update", help="Update APT cache.")
    add_subparser("upgrade", help="Upgrade all installed packages in overlay.")
    add_subparser(
        "system-update", help="Update the system via OSTree pull and deploy."
    )
    add_subparser("system-upgrade", help="Alias for system-update.")

    install_parser = add_subparser("install", help="Install a DEB package to overlay.")
    install_parser.add_argument("package", help="The package to install.")

    remove_parser = add_subparser("remove", help="Remove a DEB package from overlay.")
    remove_parser.add_argument("package", help="The package to remove.")

    add_subparser("list", help="List installed packages.")

    search_parser = add_subparser(
        "search", help="Search for packages in APT repositories."
    )
    search_parser.add_argument("query", help="The search expression.")

    add_subparser("rollback", help="Rollback to previous OSTree commit.")
    add_subparser("resync", help="Resync overlay with installed packages.")
    add_subparser("clean", help="Clean APT cache.")

    repo_parser = add_subparser("repo", help="Manage repositories.")
    repo_subparsers = repo_parser.add_subparsers(dest="repo_command")

    add_repo_subparser = partial(
        repo_subparsers.add_parser, add_help=False, parents=[help_parser]
    )

    add_repo_subparser("list", help="List repositories.")

    repo_add_parser = add_repo_subparser("add", help="Add a repository.")
    repo_add_parser.add_argument(
        "repo_line",
        metavar="line",
        help="The repository line, in sources.list format.",
    )

    repo_remove_parser = add_repo_subparser(
        "remove", help="Remove a repository by index."
    )
    repo_remove_parser.add_argument(
        "index", help="The index of the repository, as shown by 'repo list'."
    )

    return parser.parse_args(args)
