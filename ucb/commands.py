"""Command table registration for ucb."""

from knack.commands import CommandGroup

CUSTOM_OPERATIONS = "ucb.custom#{}"


def load_command_table(self, _):
    """Register all ucb commands."""

    with CommandGroup(self, "cred", CUSTOM_OPERATIONS) as g:
        g.command("get", "ucb_cred_get")
        g.command("list", "ucb_cred_list")
        g.command("update", "ucb_cred_update")
        g.command("upload", "ucb_cred_upload")
        g.command("delete", "ucb_cred_delete")

    with CommandGroup(self, "project", CUSTOM_OPERATIONS) as g:
        g.command("list", "ucb_project_list")

    with CommandGroup(self, "config", CUSTOM_OPERATIONS) as g:
        g.command("show", "ucb_config_show")
        g.command("get", "ucb_config_get")
        g.command("set", "ucb_config_set")
        g.command("edit", "ucb_config_edit")
