"""Option schema table: command name -> recognised flags.

Pure data.  ``GLOBAL_OPTIONS`` are accepted by the root command and by
every individual command.
"""

from __future__ import annotations

from gemctl.commands._schema import OptionSpec

_GEMFILE = OptionSpec(
    "gemfile", "string", metavar="PATH", help="Use the specified gemfile instead of Gemfile."
)
_INSTALL_PATH = OptionSpec(
    "path", "string", metavar="PATH", help="Install gems into PATH instead of .bundle/gems."
)
_QUIET = OptionSpec("quiet", help="Only output warnings and errors.")
_FULL_INDEX = OptionSpec("full-index", help="Fall back to using the single-file index of all gems.")
_JOBS = OptionSpec(
    "jobs",
    "numeric",
    aliases=("-j",),
    metavar="NUM",
    help="Specify the number of jobs to run in parallel.",
)
_LOCAL = OptionSpec(
    "local", help="Do not attempt to fetch gems remotely and use the gem cache instead."
)
_SOURCE = OptionSpec("source", "array", metavar="SOURCES", help="Use a specific source.")

GLOBAL_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("no-color", help="Disable colorization in output."),
    OptionSpec(
        "retry",
        "numeric",
        aliases=("-r",),
        metavar="NUM",
        help="Number of times to retry failed gem operations.",
    ),
    OptionSpec("verbose", aliases=("-V",), help="Enable verbose output mode."),
)

OPTION_SCHEMAS: dict[str, tuple[OptionSpec, ...]] = {
    "install": (
        OptionSpec(
            "binstubs",
            "string",
            lazy_default="bin",
            metavar="DIR",
            help="Generate bin stubs for bundled gems to ./bin.",
        ),
        OptionSpec("clean", help="Run gemctl clean automatically after install."),
        OptionSpec("deployment", help="Install using defaults tuned for deployment environments."),
        OptionSpec("frozen", help="Do not allow the Gemfile to be changed by this install."),
        _FULL_INDEX,
        _GEMFILE,
        _JOBS,
        _LOCAL,
        OptionSpec("no-cache", help="Don't update the existing gem cache."),
        OptionSpec("force", help="Force reinstalling every gem."),
        OptionSpec("no-prune", help="Don't remove stale gems from the cache."),
        _INSTALL_PATH,
        _QUIET,
        OptionSpec(
            "shebang",
            "string",
            metavar="NAME",
            help="Use a different shebang executable name in generated binstubs.",
        ),
        OptionSpec(
            "standalone",
            "array",
            lazy_default=(),
            metavar="GROUPS",
            help="Make a bundle that can work without the gemctl runtime.",
        ),
        OptionSpec(
            "system",
            help="Install to the default location even if a path was configured before.",
        ),
        OptionSpec(
            "trust-policy",
            "string",
            aliases=("-P",),
            metavar="POLICY",
            help="Gem trust policy (like gem install -P).",
        ),
        OptionSpec(
            "without",
            "array",
            metavar="GROUPS",
            help="Exclude gems that are part of the specified named groups.",
        ),
        OptionSpec(
            "with",
            "array",
            metavar="GROUPS",
            help="Include gems that are part of the specified named groups.",
        ),
    ),
    "update": (
        _FULL_INDEX,
        OptionSpec(
            "group", "array", aliases=("-g",), metavar="GROUPS", help="Update a specific group."
        ),
        _GEMFILE,
        _JOBS,
        _LOCAL,
        _QUIET,
        _SOURCE,
        OptionSpec("force", help="Force reinstalling every gem."),
    ),
    "check": (
        OptionSpec("dry-run", default=False, help="Check without changing anything."),
        _GEMFILE,
        _INSTALL_PATH,
    ),
    "show": (
        OptionSpec("paths", help="List the paths of all gems that are required by your Gemfile."),
        OptionSpec(
            "outdated", help="Show verbose output including whether gems are outdated."
        ),
    ),
    "binstubs": (
        OptionSpec("force", default=False, help="Overwrite existing binstubs if they exist."),
        OptionSpec(
            "path",
            "string",
            lazy_default="bin",
            metavar="DIR",
            help="Binstub destination directory (default bin).",
        ),
        OptionSpec(
            "standalone",
            "array",
            lazy_default=(),
            metavar="GROUPS",
            help="Make binstubs that can work without the gemctl runtime.",
        ),
    ),
    "outdated": (
        _LOCAL,
        OptionSpec("pre", help="Check for newer pre-release gems."),
        _SOURCE,
        OptionSpec("strict", help="Only list newer versions allowed by your Gemfile requirements."),
        OptionSpec("major", help="Only list major newer versions."),
        OptionSpec("minor", help="Only list minor newer versions."),
        OptionSpec("patch", help="Only list patch newer versions."),
        OptionSpec(
            "parseable",
            aliases=("--porcelain",),
            help="Use minimal formatting for more parseable output.",
        ),
    ),
    "exec": (
        OptionSpec(
            "keep-file-descriptors",
            default=False,
            help="Pass all open file descriptors to the command.",
        ),
    ),
    "clean": (
        OptionSpec("dry-run", default=False, help="Only print out changes, do not clean gems."),
        OptionSpec("force", default=False, help="Forces clean even if --path is not set."),
    ),
    "remove": (
        OptionSpec(
            "install", help="Runs 'gemctl install' after removing the gems from the Gemfile."
        ),
    ),
}
