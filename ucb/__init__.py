"""ucb: Unity Cloud Build from the command line."""

import os

from knack import CLI, CLICommandsLoader

__version__ = "0.3.0"

CLI_NAME = "ucb"


class CloudBuildCommandsLoader(CLICommandsLoader):
    """Command loader for the ucb CLI."""

    def load_command_table(self, args):
        from ucb.commands import load_command_table

        load_command_table(self, args)
        return super().load_command_table(args)

    def load_arguments(self, command):
        from ucb._params import load_arguments

        load_arguments(self, command)
        super().load_arguments(command)


class CloudBuildCLI(CLI):
    """knack CLI that reports the package version."""

    def get_cli_version(self):
        return __version__


def get_default_cli() -> CloudBuildCLI:
    """Build the CLI with its config dir at ``~/.ucb`` (``UCB_CONFIG_DIR`` overrides)."""
    from ucb._help import helps  # noqa: F401

    return CloudBuildCLI(
        cli_name=CLI_NAME,
        config_dir=os.path.expanduser(os.path.join("~", ".ucb")),
        config_env_var_prefix=CLI_NAME.upper(),
        commands_loader_cls=CloudBuildCommandsLoader,
    )
