"""CLI parameter definitions for ucb."""

from knack.arguments import ArgumentsContext


def load_arguments(self, _):
    """Register CLI parameters for all commands."""

    # --- global fields: every remote command ---
    for scope in ("cred", "project"):
        with ArgumentsContext(self, scope) as c:
            c.argument(
                "api_key",
                options_list=["--api-key"],
                help="Cloud Build API key (32 hex characters). Defaults to 'defaults.apiKey' from config.",
            )
            c.argument(
                "org_id",
                options_list=["--org-id"],
                help="Organization id. Defaults to 'defaults.orgId' from config.",
            )

    # --- ucb cred get ---
    with ArgumentsContext(self, "cred get") as c:
        c.argument(
            "cred_id",
            options_list=["--cred-id"],
            help="Credential id. When omitted, choose from the organization's credentials.",
        )

    # --- ucb cred update / upload ---
    for scope in ("cred update", "cred upload"):
        with ArgumentsContext(self, scope) as c:
            c.argument("label", help="Label shown for the credential in Cloud Build.")
            c.argument("cert_path", options_list=["--cert-path"], help="Path to the .p12 signing certificate.")
            c.argument(
                "profile_path",
                options_list=["--profile-path"],
                help="Path to the .mobileprovision provisioning profile.",
            )
            c.argument("cert_pass", options_list=["--cert-pass"], help="Password of the signing certificate.")

    # --- ucb cred update / delete ---
    for scope in ("cred update", "cred delete"):
        with ArgumentsContext(self, scope) as c:
            c.argument(
                "cert_id",
                options_list=["--cert-id"],
                help="Credential id. When omitted, choose from the organization's credentials.",
            )

    # --- ucb config ---
    with ArgumentsContext(self, "config get") as c:
        c.argument("key", options_list=["--key", "-k"], help="Dot-separated key, e.g. defaults.orgId.")

    with ArgumentsContext(self, "config set") as c:
        c.argument("key", options_list=["--key", "-k"], help="Dot-separated key, e.g. defaults.orgId.")
        c.argument("value", options_list=["--value", "-v"], help="Value to store.")
